"""
Parsed job page.

JobPage is the document the extractor works against: a BeautifulSoup tree
plus the URL it came from. It knows how to resolve CSS selectors safely and
how to compute an element's rendered text (the text a reader would see,
laid out one block per line).
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction
from soupsieve import SelectorSyntaxError

# Elements whose content is never rendered as text
NON_RENDERED_TAGS = {"script", "style", "noscript", "template", "head", "iframe", "svg"}

# Elements that start a new line when rendered
BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "dd", "details", "div", "dl", "dt",
    "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5",
    "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section", "summary",
    "table", "tr", "ul",
}

# Table cells share their row's line, separated by a space
CELL_TAGS = {"td", "th"}

_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)
_LINE_BREAK = object()


def _is_hidden(tag: Tag) -> bool:
    """Check the markup-level signals that keep an element off screen."""
    if tag.has_attr("hidden"):
        return True
    style = (tag.get("style") or "").replace(" ", "").lower()
    return "display:none" in style or "visibility:hidden" in style


def rendered_text(element: Tag) -> str:
    """
    Approximate the visible text of an element.

    Skips scripts, styles and hidden elements, breaks lines at block-level
    elements and <br>, separates table cells with a space, collapses
    whitespace within each line, and drops blank lines.

    Args:
        element: BeautifulSoup tag (or the whole document)

    Returns:
        Rendered text, trimmed ("" if nothing visible)

    Example:
        >>> soup = BeautifulSoup("<div><p>Senior  <b>Dev</b></p><p>Remote</p></div>", "html.parser")
        >>> rendered_text(soup.div)
        'Senior Dev\\nRemote'
    """
    parts = []
    # Explicit stack instead of recursion: real pages nest deeper than the recursion limit
    stack = [element]

    while stack:
        node = stack.pop()

        if node is _LINE_BREAK:
            parts.append("\n")
            continue

        if isinstance(node, NavigableString):
            # Source line breaks are plain whitespace; only blocks and <br> break lines
            if not isinstance(node, _NON_TEXT_STRINGS):
                parts.append(re.sub(r"\s+", " ", str(node)))
            continue

        if not isinstance(node, Tag):
            continue
        if node.name in NON_RENDERED_TAGS or _is_hidden(node):
            continue
        if node.name == "br":
            parts.append("\n")
            continue

        is_block = node.name in BLOCK_TAGS
        if is_block:
            parts.append("\n")
            stack.append(_LINE_BREAK)
        elif node.name in CELL_TAGS:
            parts.append(" ")
        stack.extend(reversed(list(node.children)))

    lines = (re.sub(r"\s+", " ", line).strip() for line in "".join(parts).split("\n"))
    return "\n".join(line for line in lines if line)


@dataclass
class JobPage:
    """
    A parsed web page that may contain a job posting.

    Attributes:
        url: Location the page was loaded from
        soup: Parsed document tree
    """

    url: str
    soup: BeautifulSoup

    @classmethod
    def from_html(cls, html: str, url: str = "") -> "JobPage":
        """Parse raw HTML into a JobPage."""
        return cls(url=url, soup=BeautifulSoup(html, "html.parser"))

    @property
    def hostname(self) -> str:
        return urlparse(self.url).hostname or ""

    @property
    def document_title(self) -> str:
        """Text of the <title> element, or "" if absent."""
        title = self.soup.find("title")
        if title is None:
            return ""
        return re.sub(r"\s+", " ", title.get_text()).strip()

    def select_first(self, selector: str) -> Optional[Tag]:
        """
        Resolve a CSS selector to its first match in document order.

        Invalid selectors resolve to None rather than raising, since
        profiles target markup we don't control.
        """
        try:
            return self.soup.select_one(selector)
        except (SelectorSyntaxError, ValueError, NotImplementedError):
            return None

    def iter_elements(self, *names: str) -> Iterator[Tag]:
        """Yield elements with the given tag names in document order."""
        yield from self.soup.find_all(list(names))
