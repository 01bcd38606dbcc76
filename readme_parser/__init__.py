"""Parser for theme/plugin readme.txt metadata."""

from readme_parser.parser import ReadmeParser, parse_readme
from readme_parser.schemas import ParsedReadme, ReadmeWarning

__all__ = [
    "ReadmeParser",
    "parse_readme",
    "ParsedReadme",
    "ReadmeWarning",
]
