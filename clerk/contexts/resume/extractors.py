"""
Entity extractors for plain-text resumes.

Each extractor turns a section (or the whole document) into a bounded list of
values. Matches that fail a length threshold are dropped silently; an empty
list is a normal result.

These are lexical heuristics. Only text physically adjacent to a match is
associated with it, so unusual layouts degrade to empty fields rather than
errors.
"""

from typing import Iterable, List

from clerk.contexts.resume.resume_data_structure import ExperienceEntry
from clerk.contexts.resume.section_patterns import (
    ExperiencePatterns,
    SectionLimits,
    has_metric,
    strip_bullet,
)
from clerk.contexts.resume.segmenter import locate_section


def extract_bullets(text: str, heading_synonyms: Iterable[str]) -> List[str]:
    """
    Extract list items under a section heading.

    Args:
        text: Plain resume text
        heading_synonyms: Heading keywords in priority order

    Returns:
        Up to 15 bullet-stripped items, in document order. Items must be
        longer than 1 and shorter than 100 characters.

    Example:
        >>> extract_bullets("Skills:\\n- Email handling\\n• Calendar management\\n", ["skills"])
        ['Email handling', 'Calendar management']
    """
    section = locate_section(text, heading_synonyms)
    if not section:
        return []

    items = []
    for line in section.split("\n"):
        item = strip_bullet(line)
        if SectionLimits.MIN_BULLET_LENGTH < len(item) < SectionLimits.MAX_BULLET_LENGTH:
            items.append(item)

    return items[: SectionLimits.MAX_BULLETS]


def _collect_highlights(following_text: str) -> List[str]:
    """Pick highlight lines from the text right after a job header."""
    window = following_text.split("\n")[: SectionLimits.HIGHLIGHT_WINDOW]

    highlights = []
    for line in window:
        candidate = strip_bullet(line)
        if SectionLimits.MIN_HIGHLIGHT_LENGTH < len(candidate) < SectionLimits.MAX_HIGHLIGHT_LENGTH:
            highlights.append(candidate)

    return highlights[: SectionLimits.MAX_HIGHLIGHTS]


def extract_experience(text: str) -> List[ExperienceEntry]:
    """
    Extract work history entries from the whole resume text.

    Job headers are matched left to right with ExperiencePatterns.JOB_HEADER
    (role, separator, company, boundary, year range). Highlights come from
    the 8 lines that follow each header, so a job's bullets must directly
    follow its header line.

    Args:
        text: Plain resume text

    Returns:
        Up to 5 ExperienceEntry objects in document order
    """
    entries = []

    for match in ExperiencePatterns.JOB_HEADER.finditer(text):
        if len(entries) >= SectionLimits.MAX_EXPERIENCE_ENTRIES:
            break

        entries.append(
            ExperienceEntry(
                role=match.group(1).strip(),
                company=match.group(2).strip(),
                period=match.group(3).strip(),
                highlights=_collect_highlights(text[match.end() :]),
            )
        )

    return entries


def extract_metrics(text: str) -> List[str]:
    """
    Find lines carrying quantified results (percentages, dollar amounts, counts).

    Args:
        text: Plain resume text

    Returns:
        Up to 10 bullet-stripped lines in document order, each longer than 5 characters
    """
    metrics = []

    for line in text.split("\n"):
        if not has_metric(line):
            continue
        cleaned = strip_bullet(line)
        if len(cleaned) > SectionLimits.MIN_METRIC_LENGTH:
            metrics.append(cleaned)

    return metrics[: SectionLimits.MAX_METRICS]
