"""
Section segmentation for plain-text resumes.

Locates heading-delimited blocks (e.g., "Skills:" followed by a list) in text
decoded from PDF/DOCX uploads. Finding nothing is a normal outcome and yields
an empty string.
"""

from functools import lru_cache
from typing import Iterable

from clerk.contexts.resume.section_patterns import SectionLimits, build_section_pattern


@lru_cache(maxsize=128)
def _section_pattern(keyword: str):
    return build_section_pattern(keyword)


def locate_section(text: str, heading_synonyms: Iterable[str]) -> str:
    """
    Extract the text block under the first matching section heading.

    Synonyms are tried in the given order. For each synonym every heading
    occurrence is tried before moving on to the next synonym. A block counts
    only if its trimmed length exceeds SectionLimits.MIN_SECTION_LENGTH.

    Args:
        text: Plain resume text
        heading_synonyms: Heading keywords in priority order (e.g., ["skills", "expertise"])

    Returns:
        Trimmed block truncated to SectionLimits.MAX_SECTION_LENGTH characters,
        or "" if no synonym yields a usable block

    Example:
        >>> locate_section("Summary:\\nSeasoned assistant with 5 years remote.\\n", ["summary"])
        'Seasoned assistant with 5 years remote.'
    """
    for keyword in heading_synonyms:
        for match in _section_pattern(keyword).finditer(text):
            block = match.group(1).strip()
            if len(block) > SectionLimits.MIN_SECTION_LENGTH:
                return block[: SectionLimits.MAX_SECTION_LENGTH]

    return ""
