"""Short description extraction and finalization.

The short description is the free text between the header block and the
first section heading. It is finalized only after all sections are known,
since an empty short description falls back to the description section.
"""

import logging

from readme_parser.pipeline.html_filter import (
    MarkdownRenderer,
    sanitize_text,
    strip_tags,
)
from readme_parser.pipeline.line_normalizer import LineCursor

logger = logging.getLogger(__name__)

DEFAULT_LENGTH = 150

ELLIPSIS = " \u2026"

# A sentence ending after this fraction of the limit is preferred over a hard cut
SENTENCE_CUT_RATIO = 0.8


def is_section_boundary(trimmed: str) -> bool:
    """Whether a trimmed line starts a level-2-or-above heading."""
    return trimmed.startswith("==") or trimmed.startswith("##")


def extract_short_description(cursor: LineCursor) -> str:
    """Consume lines up to the first heading and return them as one block.

    The heading line itself is pushed back for the section splitter.
    """
    text = ""
    while (line := cursor.next_line()) is not None:
        trimmed = line.strip()
        if not trimmed:
            text += "\n"
            continue

        if is_section_boundary(trimmed):
            cursor.push_back()
            break

        text += line + "\n"

    return text.strip()


def trim_length(text: str, length: int = DEFAULT_LENGTH) -> str:
    """Truncate text to length characters, preferring a sentence end.

    Truncated text gets an ellipsis, unless a period falls within the last
    20% of the limit, in which case the text is cut just after that period.
    """
    if len(text) <= length:
        return text.strip()

    truncated = text[:length] + ELLIPSIS
    period = truncated.rfind(".")
    if period > SENTENCE_CUT_RATIO * length:
        truncated = truncated[: period + 1]

    return truncated.strip()


def first_non_blank_line(text: str) -> str:
    """Return the first non-blank line of a block, or ""."""
    for line in text.split("\n"):
        if line.strip():
            return line
    return ""


def finalize_short_description(
    text: str,
    description: str,
    renderer: MarkdownRenderer,
    length: int = DEFAULT_LENGTH,
) -> str:
    """Produce the final plain-text short description.

    Args:
        text: The raw short description extracted before the first heading.
        description: The rendered description section, used when text is empty.
        renderer: Markdown renderer.
        length: Maximum length before truncation.
    """
    if not text and description:
        text = first_non_blank_line(description)
        logger.debug("Short description taken from the description section")

    text = sanitize_text(text)
    text = strip_tags(renderer.render(text))
    return trim_length(text, length)
