"""Extract the title and "Key: value" header block from a readme.

A readme starts with a title line followed by a block of headers::

    === My Theme ===
    Contributors: alice, bob
    Tags: blog, two-columns
    Requires at least: 5.0
    Tested up to: 6.4
    Stable tag: 1.2.3

The header block ends at the first non-blank line without a colon, which
is pushed back onto the cursor for the short-description stage.
"""

import logging
import re
from dataclasses import dataclass, field

from readme_parser.pipeline.html_filter import sanitize_text
from readme_parser.pipeline.line_normalizer import LineCursor

logger = logging.getLogger(__name__)

# Header spelling (lower-case) -> canonical field
VALID_HEADERS = {
    "tested": "tested",
    "tested up to": "tested",
    "requires": "requires",
    "requires at least": "requires",
    "requires php": "requires_php",
    "tags": "tags",
    "contributors": "contributors",
    "donate link": "donate_link",
    "stable tag": "stable_tag",
    "license": "license",
    "license uri": "license_uri",
    "resources": "resources",
}

# Title used by the readme template, followed by the real name on the next line
PLACEHOLDER_TITLE = "plugin name"
MAX_PLACEHOLDER_NAME_LENGTH = 50

HEADER_LINE_PATTERN = re.compile(
    r"^(" + "|".join(re.escape(key) for key in VALID_HEADERS) + r")\s*:",
    re.IGNORECASE,
)

_TITLE_TRIM_CHARS = "#= \t\0\x0b"
_KEY_TRIM_CHARS = " \t*-\r\n"


@dataclass
class HeaderBlock:
    """Title and recognized headers from the top of a readme.

    Attributes:
        name: Sanitized title, None if only a placeholder title was found.
        headers: Canonical field name -> raw (trimmed) header value.
    """

    name: str | None
    headers: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str:
        """Return a header value, or "" if it was not declared."""
        return self.headers.get(key, "")


def _is_underline(line: str | None) -> bool:
    """Whether a line is a setext-style ==== / ---- underline."""
    return line is not None and not line.strip("=-")


def extract_title(cursor: LineCursor) -> str | None:
    """Consume the title line(s) and return the sanitized title."""
    line = cursor.first_non_blank()
    name = sanitize_text((line or "").strip(_TITLE_TRIM_CHARS))

    if _is_underline(cursor.peek()):
        cursor.next_line()

    if name.lower() != PLACEHOLDER_TITLE:
        return name

    # "=== Plugin Name ===\nMy Real Name\n..." style templates
    candidate = cursor.first_non_blank()
    if candidate is None:
        logger.debug("Placeholder title with nothing after it")
        return None

    if (
        len(candidate) > MAX_PLACEHOLDER_NAME_LENGTH
        or HEADER_LINE_PATTERN.match(candidate)
    ):
        logger.debug(f"Placeholder title not followed by a name: {candidate!r}")
        cursor.push_back()
        return None

    return sanitize_text(candidate.strip(_TITLE_TRIM_CHARS))


def parse_header_line(line: str) -> tuple[str, str] | None:
    """Split a "Key: value" line into (canonical field, value).

    Returns None for lines whose key is not a recognized header.
    """
    key, _, value = line.strip().partition(":")
    key = key.strip(_KEY_TRIM_CHARS).lower()
    canonical = VALID_HEADERS.get(key)
    if canonical is None:
        return None
    return canonical, value.strip()


def extract_headers(cursor: LineCursor) -> HeaderBlock:
    """Consume the title and header block from the front of the cursor.

    Blank lines inside the block are skipped (headers are sometimes wrapped
    across lines). Lines with unrecognized keys are consumed and dropped.
    """
    block = HeaderBlock(name=extract_title(cursor))

    line = cursor.first_non_blank()
    while line is not None:
        if ":" not in line:
            if line.strip():
                cursor.push_back()
                break
        else:
            parsed = parse_header_line(line)
            if parsed is not None:
                key, value = parsed
                block.headers[key] = value
        line = cursor.next_line()

    logger.debug(f"Found headers: {sorted(block.headers)}")
    return block
