"""
Job posting extraction from parsed pages.

Two passes:
1. Selector pass: apply a site's ContentSelectorProfile (ordered description
   and title selectors).
2. Fallback pass: pick the largest plausible content block on the page.

Finding nothing is a normal outcome: extract_posting() returns None and the
caller (usually ExtractionWatcher) decides whether to retry.
"""

from typing import Iterable, Optional, Tuple

from bs4 import Tag

from clerk.contexts.intake.logger import _log_debug
from clerk.contexts.intake.page import JobPage, rendered_text
from clerk.contexts.intake.posting_data_structure import (
    MIN_DESCRIPTION_LENGTH,
    ExtractedJobPosting,
)
from clerk.contexts.intake.profiles import ContentSelectorProfile
from clerk.utils.timestamp import now_exact

# Fallback candidates must be strictly between these rendered lengths.
# Below the floor is navigation chrome; above the ceiling is usually the whole page.
FALLBACK_MIN_LENGTH = 200
FALLBACK_MAX_LENGTH = 15000

FALLBACK_CANDIDATE_TAGS = ("div", "section", "article", "main")
EXCLUDED_TAGS = {"nav", "header", "footer"}
EXCLUDED_ROLES = {"navigation", "banner", "contentinfo"}


def query_first(page: JobPage, selectors: Iterable[str]) -> Optional[Tuple[str, str]]:
    """
    Resolve the first selector whose element has non-blank rendered text.

    Each selector is resolved to its first match only; if that element is
    blank, the next selector is tried.

    Args:
        page: Parsed page
        selectors: CSS selectors in priority order

    Returns:
        (selector, rendered text) of the winning selector, or None
    """
    for selector in selectors:
        element = page.select_first(selector)
        if element is None:
            continue
        text = rendered_text(element)
        if text:
            return selector, text
    return None


def _extract_with_profile(
    page: JobPage, profile: ContentSelectorProfile
) -> Optional[ExtractedJobPosting]:
    """Selector pass. Returns None if no description selector yields enough text."""
    description_match = query_first(page, profile.description_selectors)
    if description_match is None:
        _log_debug(f"{profile.source_name}: no description selector matched")
        return None

    selector, description = description_match
    if len(description) < MIN_DESCRIPTION_LENGTH:
        _log_debug(
            f"{profile.source_name}: '{selector}' matched only {len(description)} chars, ignoring"
        )
        return None

    title_match = query_first(page, profile.title_selectors)
    title = title_match[1] if title_match else page.document_title

    _log_debug(f"{profile.source_name}: description from '{selector}'")
    return ExtractedJobPosting(
        source_name=profile.source_name,
        title=title,
        url=page.url,
        description=description,
        extracted_at=now_exact(),
        used_fallback=False,
    )


def _is_excluded_landmark(element: Tag) -> bool:
    role = (element.get("role") or "").strip().lower()
    return element.name in EXCLUDED_TAGS or role in EXCLUDED_ROLES


def find_largest_content_block(page: JobPage) -> Optional[str]:
    """
    Find the rendered text of the largest plausible content block.

    Candidates are div/section/article/main elements whose rendered text is
    strictly between FALLBACK_MIN_LENGTH and FALLBACK_MAX_LENGTH characters
    and that aren't navigation landmarks. The longest wins; on ties the
    first in document order wins.

    Args:
        page: Parsed page

    Returns:
        Rendered text of the winning block, or None if nothing qualifies
    """
    best_text = None
    best_length = 0

    for element in page.iter_elements(*FALLBACK_CANDIDATE_TAGS):
        if _is_excluded_landmark(element):
            continue
        text = rendered_text(element)
        length = len(text)
        if FALLBACK_MIN_LENGTH < length < FALLBACK_MAX_LENGTH and length > best_length:
            best_text = text
            best_length = length

    return best_text


def extract_posting(
    page: JobPage, profile: Optional[ContentSelectorProfile] = None
) -> Optional[ExtractedJobPosting]:
    """
    Extract a job posting from a page.

    Tries the profile's selectors first (when a profile is given), then
    falls back to the largest content block heuristic.

    Args:
        page: Parsed page
        profile: Selector profile for the page's site, or None for unknown sites

    Returns:
        ExtractedJobPosting, or None if neither pass found a description

    Example:
        page = JobPage.from_html(html, url="https://www.indeed.com/viewjob?jk=abc")
        posting = extract_posting(page, detect_profile(page.url))
    """
    if profile is not None:
        posting = _extract_with_profile(page, profile)
        if posting is not None:
            return posting

    description = find_largest_content_block(page)
    if description is None:
        _log_debug(f"No qualifying content block on {page.url or 'page'}")
        return None

    return ExtractedJobPosting(
        source_name=profile.source_name if profile is not None else page.hostname,
        title=page.document_title,
        url=page.url,
        description=description,
        extracted_at=now_exact(),
        used_fallback=True,
    )
