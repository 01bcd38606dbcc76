"""Parsing stages: line normalization, headers, sections, and HTML filtering."""

from readme_parser.pipeline.block_splitter import (
    BlockSplitter,
    parse_sub_list,
    split_sections,
)
from readme_parser.pipeline.header_extractor import HeaderBlock, extract_headers
from readme_parser.pipeline.line_normalizer import LineCursor, normalize_lines

__all__ = [
    # Input
    "LineCursor",
    "normalize_lines",
    # Headers
    "HeaderBlock",
    "extract_headers",
    # Body
    "BlockSplitter",
    "split_sections",
    "parse_sub_list",
]
