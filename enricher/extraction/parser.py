"""Main-content extraction from raw HTML.

Non-content nodes are dropped first, then an ordered list of CSS locators is
tried from most to least specific. The first locator whose text clears
``LOCATOR_MIN_LENGTH`` wins; otherwise the whole body is used.
"""

import re

from bs4 import BeautifulSoup, Tag

from enricher.extraction.models import ParsedPage

NON_CONTENT_SELECTOR = ", ".join(
    [
        "script",
        "style",
        "noscript",
        "nav",
        "footer",
        "header",
        "aside",
        ".sidebar",
        ".comments",
        "#comments",
        ".advertisement",
        ".ad",
        ".ads",
        ".social-share",
        ".related-posts",
        ".newsletter",
    ]
)

CONTENT_LOCATORS: tuple[str, ...] = (
    "article .content",
    "article .post-content",
    "article .entry-content",
    ".blog-content",
    ".post-body",
    ".article-body",
    ".entry-content",
    ".post-content",
    "article",
    "main .content",
    "main",
    ".content",
)

LOCATOR_MIN_LENGTH = 200
MAX_TEXT_LENGTH = 8000

_INLINE_WHITESPACE = re.compile(r"[^\S\n]+")
_LINE_PADDING = re.compile(r" ?\n ?")
_BLANK_LINES = re.compile(r"\n{3,}")


def normalize_whitespace(text: str) -> str:
    """Collapse space runs to one space and blank-line runs to one blank line."""
    text = _INLINE_WHITESPACE.sub(" ", text)
    text = _LINE_PADDING.sub("\n", text)
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()


def parse_html(html: str) -> ParsedPage:
    """Return the title and main body text of an HTML document."""
    soup = BeautifulSoup(html, "html.parser")
    title = _resolve_title(soup)

    for node in soup.select(NON_CONTENT_SELECTOR):
        node.extract()

    text = ""
    for locator in CONTENT_LOCATORS:
        matches = soup.select(locator)
        if not matches:
            continue
        text = normalize_whitespace(" ".join(node.get_text() for node in matches))
        if len(text) > LOCATOR_MIN_LENGTH:
            break
    else:
        root = soup.body if soup.body is not None else soup
        text = normalize_whitespace(root.get_text())

    return ParsedPage(title=title, text=text[:MAX_TEXT_LENGTH])


def _resolve_title(soup: BeautifulSoup) -> str:
    heading = soup.find("h1")
    if heading is not None:
        text = heading.get_text(strip=True)
        if text:
            return text
    if soup.title is not None:
        text = soup.title.get_text(strip=True)
        if text:
            return text
    meta = soup.find("meta", attrs={"property": "og:title"})
    if isinstance(meta, Tag):
        content = meta.get("content")
        if isinstance(content, str):
            return content.strip()
    return ""
