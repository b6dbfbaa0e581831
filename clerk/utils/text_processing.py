"""
Text processing utilities for cleaning and display.

Used by the intake context to normalize rendered page text and by the
composition context to fit job descriptions into prompts.
"""

import re

from bs4 import BeautifulSoup

ELLIPSIS = "…"
NON_TEXT_TAGS = ["script", "style", "noscript", "template"]


def collapse_whitespace(text: str) -> str:
    """
    Normalize whitespace in multi-line text.

    Collapses runs of spaces/tabs to a single space, trims every line,
    and squeezes three or more consecutive line breaks down to two.

    Args:
        text: Text with arbitrary whitespace

    Returns:
        Text with normalized whitespace, trimmed at both ends

    Example:
        >>> collapse_whitespace("  Senior   Dev \\n\\n\\n\\n  Remote ")
        'Senior Dev\\n\\nRemote'
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t\f\v\u00a0]+", " ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def sanitize_text(markup: str) -> str:
    """
    Strip HTML markup, decode entities and normalize whitespace.

    Lightweight cleanup for description fragments that arrive as markup
    (e.g., copied from a page source). Full documents should go through
    JobPage instead, which renders text from the parsed tree.

    Args:
        markup: HTML fragment or plain text

    Returns:
        Plain text with normalized whitespace. Script and style contents are
        dropped; a bare "<" or ">" in prose is kept as text.
    """
    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup(NON_TEXT_TAGS):
        tag.decompose()
    return collapse_whitespace(soup.get_text(" "))


def truncate_text(text: str, max_length: int = 3000) -> str:
    """
    Truncate text to max_length characters, preferring a word boundary.

    Cuts at the last space if that space falls within the final 20% of the
    allowed length, otherwise cuts hard. An ellipsis marks truncation.

    Args:
        text: Text to truncate
        max_length: Maximum number of characters kept (before the ellipsis)

    Returns:
        Original text if short enough, otherwise truncated text ending in an ellipsis
    """
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > max_length * 0.8:
        truncated = truncated[:last_space]

    return truncated + ELLIPSIS
