"""Line normalization for readme input.

Converts the raw readme blob into an immutable sequence of logical lines
and provides the single cursor every later parsing stage reads from.

Readmes arrive in whatever encoding the author's editor produced. Valid
UTF-8 is split on every Unicode line break; anything else is split at the
byte level and decoded line by line so a stray invalid byte never aborts
the parse. UTF-16 files (detected by their byte-order mark) are re-decoded
as a whole.
"""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Unicode-aware line breaks: CRLF first so it is consumed as one break
LINE_BREAK_PATTERN = re.compile(r"\r\n|[\n\r\x0b\x0c\x85\u2028\u2029]")

# Byte-level fallback for input that is not valid UTF-8
BYTE_LINE_BREAK_PATTERN = re.compile(rb"\r\n|[\n\r\x0b\x0c\x85]")

UTF8_BOM = "\ufeff"
UTF16_LE_BOM = b"\xff\xfe"


def normalize_lines(contents: str | bytes) -> tuple[str, ...]:
    """Split a readme into logical lines.

    Args:
        contents: The readme as text or raw file bytes.

    Returns:
        Tuple of lines without trailing CR/LF. Empty input yields ("",).
    """
    if isinstance(contents, bytes):
        lines = _split_bytes(contents)
    else:
        lines = LINE_BREAK_PATTERN.split(contents)

    lines = [line.rstrip("\r\n") for line in lines]

    if lines[0].startswith(UTF8_BOM):
        lines[0] = lines[0][len(UTF8_BOM) :]

    return tuple(lines)


def _split_bytes(contents: bytes) -> list[str]:
    """Decode and split raw bytes, degrading instead of raising."""
    if contents.startswith(UTF16_LE_BOM):
        logger.debug("UTF-16 byte-order mark found, re-decoding as UTF-16")
        text = contents.decode("utf-16", errors="replace")
        return LINE_BREAK_PATTERN.split(text)

    try:
        text = contents.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Input is not valid UTF-8, splitting at byte level")
        return [
            line.decode("utf-8", errors="replace")
            for line in BYTE_LINE_BREAK_PATTERN.split(contents)
        ]

    return LINE_BREAK_PATTERN.split(text)


@dataclass
class LineCursor:
    """Read position over an immutable tuple of lines.

    Stages advance the cursor with next_line() and hand an over-read line
    back to the following stage with push_back(). Consumed lines are never
    removed from the underlying tuple.

    Attributes:
        lines: The normalized document lines.
        position: Index of the next line to be returned.
    """

    lines: tuple[str, ...]
    position: int = 0

    @classmethod
    def from_text(cls, contents: str | bytes) -> "LineCursor":
        """Create a cursor over normalized readme contents."""
        return cls(normalize_lines(contents))

    @property
    def exhausted(self) -> bool:
        """Whether every line has been consumed."""
        return self.position >= len(self.lines)

    def next_line(self) -> str | None:
        """Return the next line and advance, or None at the end."""
        if self.exhausted:
            return None
        line = self.lines[self.position]
        self.position += 1
        return line

    def peek(self) -> str | None:
        """Return the next line without advancing."""
        if self.exhausted:
            return None
        return self.lines[self.position]

    def push_back(self) -> None:
        """Un-read the most recently returned line."""
        if self.position > 0:
            self.position -= 1

    def first_non_blank(self) -> str | None:
        """Skip blank lines and return the first non-blank one (or None)."""
        while (line := self.next_line()) is not None:
            if line.strip():
                return line
        return None

    def remaining(self) -> tuple[str, ...]:
        """Return all unconsumed lines and move to the end."""
        rest = self.lines[self.position :]
        self.position = len(self.lines)
        return rest
