"""Parse theme/plugin readme.txt files into structured metadata.

The parse runs in one linear pass over a shared line cursor:

1. Normalize input into lines.
2. Extract the title and header block.
3. Sanitize header values (versions, tags, license, stable tag).
4. Extract the short description (text before the first heading).
5. Split the rest into sections.
6. Assemble: merge other notes, parse FAQ and upgrade notices, render
   Markdown, finalize the short description, filter HTML.

Malformed input never raises. Unusable header values are dropped and
reported through ParsedReadme.warnings.

Example usage:
    parser = ReadmeParser.from_settings()
    readme = parser.parse(path.read_bytes())
    if readme.has_warning(ReadmeWarning.TESTED_HEADER_IGNORED):
        print("Tested up to header ignored")
"""

import logging
from collections.abc import Iterable
from typing import Any

from readme_parser.config import Settings, settings
from readme_parser.pipeline.block_splitter import (
    OTHER_NOTES,
    parse_sub_list,
    split_sections,
)
from readme_parser.pipeline.field_sanitizers import (
    REQUIRES_PHP_RULE,
    REQUIRES_RULE,
    TESTED_RULE,
    sanitize_stable_tag,
    sanitize_version,
    split_contributors,
    split_license,
    split_tags,
)
from readme_parser.pipeline.header_extractor import HeaderBlock, extract_headers
from readme_parser.pipeline.html_filter import (
    MarkdownRenderer,
    filter_html,
    sanitize_text,
    slugify,
)
from readme_parser.pipeline.line_normalizer import LineCursor
from readme_parser.pipeline.short_description import (
    DEFAULT_LENGTH,
    extract_short_description,
    finalize_short_description,
)
from readme_parser.schemas import ParsedReadme, ReadmeWarning

logger = logging.getLogger(__name__)


class ReadmeParser:
    """Readme parser holding configuration and a reusable Markdown renderer.

    The parser keeps no per-document state, so one instance can parse any
    number of documents.
    """

    def __init__(
        self,
        ignore_tags: Iterable[str] = (),
        core_stable_branch: str | None = None,
        short_description_length: int = DEFAULT_LENGTH,
        renderer: MarkdownRenderer | None = None,
    ):
        """Initialize the parser.

        Args:
            ignore_tags: Tags dropped from the Tags header.
            core_stable_branch: Host stable branch used as the upper bound
                for Requires/Tested headers (e.g. "6.4").
            short_description_length: Truncation length for the short
                description.
            renderer: Markdown renderer. A default one is built if omitted.
        """
        self.ignore_tags = frozenset(ignore_tags)
        self.core_stable_branch = core_stable_branch
        self.short_description_length = short_description_length
        self.renderer = renderer or MarkdownRenderer()

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "ReadmeParser":
        """Build a parser from Settings (the module-level settings by default)."""
        if config is None:
            config = settings

        return cls(
            ignore_tags=config.ignore_tags,
            core_stable_branch=config.core_stable_branch,
            short_description_length=config.short_description_length,
            renderer=MarkdownRenderer(extras=config.markdown_extras),
        )

    def parse(self, contents: str | bytes) -> ParsedReadme:
        """Parse a readme.

        Args:
            contents: Readme text or raw file bytes.

        Returns:
            The parsed readme. Never raises for malformed input.
        """
        cursor = LineCursor.from_text(contents)
        warnings: set[ReadmeWarning] = set()

        header_block = extract_headers(cursor)
        fields = self._sanitize_headers(header_block, warnings)

        short_description = extract_short_description(cursor)
        sections = split_sections(cursor.remaining())

        fields.update(self._assemble(sections, short_description))

        logger.debug(
            f"Parsed readme {header_block.name!r}: "
            f"{len(fields['sections'])} sections, {len(warnings)} warnings"
        )
        return ParsedReadme(
            name=header_block.name,
            warnings=frozenset(warnings),
            **fields,
        )

    def _sanitize_headers(
        self, header_block: HeaderBlock, warnings: set[ReadmeWarning]
    ) -> dict[str, Any]:
        """Turn raw header values into ParsedReadme fields."""
        fields: dict[str, Any] = {}

        if tags := header_block.get("tags"):
            fields["tags"] = split_tags(tags, self.ignore_tags)

        for rule in (REQUIRES_RULE, TESTED_RULE, REQUIRES_PHP_RULE):
            if value := header_block.get(rule.field):
                version, warning = sanitize_version(
                    value, rule, self.core_stable_branch
                )
                fields[rule.field] = version
                if warning is not None:
                    warnings.add(warning)

        if contributors := header_block.get("contributors"):
            fields["contributors"] = split_contributors(contributors)

        if stable_tag := header_block.get("stable_tag"):
            fields["stable_tag"] = sanitize_stable_tag(stable_tag)

        fields["donate_link"] = header_block.get("donate_link")
        fields["resources"] = header_block.get("resources")

        license_name = header_block.get("license")
        license_uri = header_block.get("license_uri")
        if license_name:
            license_name, license_uri = split_license(license_name, license_uri)
        fields["license"] = license_name
        fields["license_uri"] = license_uri

        return fields

    def _assemble(
        self, sections: dict[str, str], short_description: str
    ) -> dict[str, Any]:
        """Merge, render and filter sections into final ParsedReadme fields."""
        if not sections.get("description"):
            sections["description"] = short_description

        if other_notes := sections.pop(OTHER_NOTES, ""):
            description = sections["description"]
            sections["description"] = f"{description}\n\n{other_notes}".strip()

        upgrade_notice: dict[str, str] = {}
        if "upgrade_notice" in sections:
            notices = parse_sub_list(sections.pop("upgrade_notice"))
            upgrade_notice = {
                version: sanitize_text(notice) for version, notice in notices.items()
            }

        faq: dict[str, str] = {}
        if "faq" in sections:
            faq = parse_sub_list(sections["faq"])
            sections["faq"] = ""

        render = self.renderer.render
        sections = {key: render(text) for key, text in sections.items()}
        upgrade_notice = {key: render(text) for key, text in upgrade_notice.items()}
        faq = {key: render(text) for key, text in faq.items()}

        short_description = finalize_short_description(
            short_description,
            sections.get("description", ""),
            self.renderer,
            self.short_description_length,
        )

        if faq:
            # Content before the first question is shown ahead of the list
            if "" in faq:
                sections["faq"] = sections.get("faq", "") + faq.pop("")
            if faq:
                sections["faq"] = sections.get("faq", "") + render_faq(faq)

        sections = {key: filter_html(text) for key, text in sections.items()}
        upgrade_notice = {
            key: filter_html(text) for key, text in upgrade_notice.items()
        }
        return {
            "short_description": short_description,
            "sections": {key: text for key, text in sections.items() if text},
            "upgrade_notice": upgrade_notice,
            "faq": {key: filter_html(text) for key, text in faq.items()},
        }


def render_faq(faq: dict[str, str]) -> str:
    """Render questions and rendered answers as a definition list."""
    items = "".join(
        f"<dt id='{slugify(question)}'>{question}</dt>\n<dd>{answer}</dd>\n"
        for question, answer in faq.items()
    )
    return f"\n<dl>\n{items}\n</dl>\n"


def parse_readme(contents: str | bytes, **options: Any) -> ParsedReadme:
    """Parse a readme with a one-off ReadmeParser.

    Args:
        contents: Readme text or raw file bytes.
        **options: Passed to ReadmeParser().
    """
    return ReadmeParser(**options).parse(contents)
