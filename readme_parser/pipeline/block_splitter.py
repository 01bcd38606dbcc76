"""Split readme bodies into titled blocks.

Two parsing steps share the same accumulate / flush-on-heading shape:

- Section splitting: "== Description ==" / "## Description" headings divide
  the body into the fixed set of readme sections.
- Sub-list parsing: questions in the FAQ section and versions in the
  Upgrade Notice section divide those sections into items. Items use
  either "= Title =" / "# Title" headings or whole-line "**Title**" bolding.

Both are built on BlockSplitter, configured with a heading predicate and a
key-normalization function.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)

EXPECTED_SECTIONS = (
    "description",
    "installation",
    "faq",
    "changelog",
    "resources",
    "upgrade_notice",
    "other_notes",
)

SECTION_ALIASES = {
    "frequently_asked_questions": "faq",
    "change_log": "changelog",
}

OTHER_NOTES = "other_notes"

_SECTION_TITLE_TRIM_CHARS = "#= \t"
_ITEM_TRIM_CHARS = " \t"


@dataclass
class Block:
    """A run of lines under one heading.

    Attributes:
        key: Normalized heading key, None for lines before the first heading.
        heading: The raw heading line ("" when key is None).
        body: Accumulated content, one "\\n"-terminated entry per line.
    """

    key: str | None
    heading: str = ""
    body: str = ""


class BlockSplitter:
    """Accumulate lines until a heading, flush, repeat.

    Blank lines contribute a bare newline so paragraph breaks survive.
    """

    def __init__(
        self,
        is_heading: Callable[[str], bool],
        normalize_key: Callable[[str, str], str],
    ):
        """Initialize the splitter.

        Args:
            is_heading: Called with a trimmed, non-blank line.
            normalize_key: Called with (line, trimmed) for heading lines and
                returns the block key.
        """
        self.is_heading = is_heading
        self.normalize_key = normalize_key

    def split(self, lines: Iterable[str]) -> list[Block]:
        """Split lines into blocks. The first block holds pre-heading content."""
        blocks: list[Block] = []
        current = Block(key=None)

        for line in lines:
            trimmed = line.strip()
            if not trimmed:
                current.body += "\n"
                continue

            if self.is_heading(trimmed):
                blocks.append(current)
                current = Block(
                    key=self.normalize_key(line, trimmed),
                    heading=line,
                )
                continue

            current.body += line + "\n"

        blocks.append(current)
        return blocks


# =============================================================================
# Sections
# =============================================================================


def is_section_heading(trimmed: str) -> bool:
    """"==" always opens a section; "##" only when not followed by another "#"."""
    if trimmed.startswith("=="):
        return True
    return trimmed.startswith("##") and len(trimmed) > 2 and trimmed[2] != "#"


def section_title(line: str) -> str:
    """Heading text with the surrounding markers removed."""
    return line.strip(_SECTION_TITLE_TRIM_CHARS)


def normalize_section_key(line: str, trimmed: str) -> str:
    """Map a heading line to a section key, applying aliases."""
    key = section_title(line).replace(" ", "_").lower()
    return SECTION_ALIASES.get(key, key)


SECTION_SPLITTER = BlockSplitter(is_section_heading, normalize_section_key)


def split_sections(lines: Iterable[str]) -> dict[str, str]:
    """Split the readme body into raw section text.

    Unknown headings are demoted to <h3> sub-headings inside other_notes.
    Content before the first heading is discarded; repeated sections are
    concatenated. Empty sections are omitted.
    """
    sections = dict.fromkeys(EXPECTED_SECTIONS, "")

    for block in SECTION_SPLITTER.split(lines):
        if block.key is None:
            continue

        key = block.key
        body = block.body
        if key not in sections:
            logger.debug(f"Unknown section {key!r} folded into {OTHER_NOTES}")
            body = f"<h3>{section_title(block.heading)}</h3>\n\n{body}"
            key = OTHER_NOTES

        body = body.strip()
        if not body:
            continue
        if sections[key]:
            sections[key] += "\n\n" + body
        else:
            sections[key] = body

    return {key: text for key, text in sections.items() if text}


# =============================================================================
# Sub-lists (FAQ, Upgrade Notice)
# =============================================================================


class HeadingStyle(StrEnum):
    """How sub-list item titles are marked up."""

    HEADING = "heading"  # "= Title =" or "# Title"
    BOLD = "bold"  # "**Title**"


def detect_heading_style(lines: Iterable[str]) -> HeadingStyle:
    """Use heading style if any line starts with # or =, otherwise bold."""
    for line in lines:
        trimmed = line.strip()
        if trimmed and trimmed[0] in "#=":
            return HeadingStyle.HEADING
    return HeadingStyle.BOLD


def _is_heading_item(trimmed: str) -> bool:
    return trimmed[0] in "#="


def _is_bold_item(trimmed: str) -> bool:
    return trimmed.startswith("**") and trimmed.endswith("**")


def _item_title(line: str, trimmed: str) -> str:
    """Strip the marker character (whatever this title starts with)."""
    return line.strip(trimmed[0] + _ITEM_TRIM_CHARS)


SUB_LIST_SPLITTERS = {
    HeadingStyle.HEADING: BlockSplitter(_is_heading_item, _item_title),
    HeadingStyle.BOLD: BlockSplitter(_is_bold_item, _item_title),
}


def parse_sub_list(text: str) -> dict[str, str]:
    """Parse a FAQ or Upgrade Notice section into title -> body.

    Content before the first title is kept under the "" title. A title
    with no body is dropped unless it is the last one; a repeated title
    overwrites the earlier body.
    """
    lines = text.split("\n")
    style = detect_heading_style(lines)
    logger.debug(f"Sub-list heading style: {style}")

    items: dict[str, str] = {}
    blocks = SUB_LIST_SPLITTERS[style].split(lines)
    for index, block in enumerate(blocks):
        title = block.key or ""
        is_last = index == len(blocks) - 1
        if block.body or (is_last and title):
            items[title] = block.body.strip()

    return items
