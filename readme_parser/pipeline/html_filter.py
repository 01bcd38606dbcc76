"""HTML helpers: Markdown rendering, tag stripping, balancing and filtering.

Readme content is author-supplied Markdown that may embed arbitrary HTML.
Everything that leaves the parser passes through balance_tags() and then
sanitize_html() with the allow-list below.
"""

import html as html_lib
import logging
import re

import bleach
import markdown2
from lxml import etree
from lxml import html

logger = logging.getLogger(__name__)

ALLOWED_TAGS = frozenset({
    "a",
    "blockquote",
    "br",
    "p",
    "code",
    "pre",
    "em",
    "strong",
    "ul",
    "ol",
    "dl",
    "dt",
    "dd",
    "li",
    "h3",
    "h4",
})

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "rel"],
    "blockquote": ["cite"],
}

DEFAULT_MARKDOWN_EXTRAS = ("fenced-code-blocks", "tables", "footnotes")

# Characters libxml2 refuses to parse (C0 controls other than tab/LF/CR)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

# Elements whose text is code, not prose
_DROPPED_ELEMENTS = ("script", "style")


class MarkdownRenderer:
    """Stateless wrapper around a reusable markdown2 converter.

    Build one per parser and pass it in; convert() resets the converter's
    internal state on every call.
    """

    def __init__(self, extras: list[str] | tuple[str, ...] | None = None):
        """Initialize the renderer.

        Args:
            extras: markdown2 extras to enable. Defaults to fenced code
                blocks, tables and footnotes.
        """
        self.extras = list(extras if extras is not None else DEFAULT_MARKDOWN_EXTRAS)
        self._markdown = markdown2.Markdown(extras=self.extras)

    def render(self, text: str) -> str:
        """Render Markdown to HTML."""
        if not text.strip():
            return ""
        return str(self._markdown.convert(text))


def _clean_for_parser(text: str) -> str:
    return _CONTROL_CHARS.sub("", text)


def _parse_body(markup: str) -> html.HtmlElement:
    """Parse markup as the body of a document.

    Stray <html>, <head> and <body> tags in the markup are ignored by the
    HTML parser, so there is always exactly one body to read from.
    """
    document = html.document_fromstring(f"<html><body>{markup}</body></html>")
    body = document.find("body")
    return body if body is not None else document


def strip_tags(text: str) -> str:
    """Remove all markup, including the contents of script/style elements."""
    text = _clean_for_parser(text)
    if not text.strip():
        return text.strip()

    try:
        root = _parse_body(text)
    except (etree.ParserError, ValueError) as exc:
        logger.debug(f"Could not parse markup for stripping: {exc}")
        return re.sub(r"<[^>]*>", "", text).strip()

    for element in list(root.iter(*_DROPPED_ELEMENTS)):
        element.drop_tree()

    return root.text_content().strip()


def escape(text: str) -> str:
    """Escape &, <, >, and quotes for safe inclusion in HTML."""
    return html_lib.escape(text, quote=True)


def sanitize_text(text: str) -> str:
    """Reduce text to escaped plain text (used for titles and notices)."""
    return escape(strip_tags(text)).strip()


def balance_tags(markup: str) -> str:
    """Close unclosed tags and drop stray closing tags.

    The markup is parsed as an HTML body and serialized back, so the
    result is always well nested.
    """
    markup = _clean_for_parser(markup)
    if not markup.strip():
        return ""

    try:
        root = _parse_body(markup)
    except (etree.ParserError, ValueError) as exc:
        logger.debug(f"Could not balance markup, leaving as-is: {exc}")
        return markup

    parts = [escape(root.text or "")]
    for element in root:
        parts.append(etree.tostring(element, encoding="unicode", method="html"))
    return "".join(parts)


def sanitize_html(
    markup: str,
    allowed_tags: frozenset[str] = ALLOWED_TAGS,
    allowed_attributes: dict[str, list[str]] | None = None,
) -> str:
    """Filter markup down to the allow-listed tags and attributes.

    Disallowed tags are removed but their text is kept; comments are dropped.
    """
    if allowed_attributes is None:
        allowed_attributes = ALLOWED_ATTRIBUTES
    return bleach.clean(
        markup,
        tags=allowed_tags,
        attributes=allowed_attributes,
        strip=True,
        strip_comments=True,
    )


def filter_html(markup: str) -> str:
    """Balance, allow-list filter, and trim a block of rendered HTML."""
    return sanitize_html(balance_tags(markup.strip())).strip()


def slugify(text: str) -> str:
    """Build a URL fragment from a title: lowercase words joined by dashes."""
    value = strip_tags(text).lower()
    value = re.sub(r"&[a-z0-9#]+;", "", value)
    value = re.sub(r"[^\w\s-]", "", value)
    value = re.sub(r"[\s_-]+", "-", value)
    return value.strip("-")
