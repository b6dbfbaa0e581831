"""
Pattern matching for resume section and entity identification.

This module provides heading synonym sets, regex patterns and limits used by
the segmenter and entity extractors.

Pattern classes follow one convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass

# =============================================================================
# HEADING SYNONYMS (priority order: earlier synonyms win)
# =============================================================================


@dataclass(frozen=True)
class HeadingSynonyms:
    """
    Heading keywords for each resume section.

    Order matters: the segmenter tries synonyms left to right and stops at the
    first one that yields a usable block.
    """

    SUMMARY: tuple = ("summary", "about", "profile", "objective", "overview")

    SKILLS: tuple = ("skills", "competencies", "expertise", "core skills")

    TOOLS: tuple = ("tools", "technologies", "software", "platforms", "tech stack")

    ACHIEVEMENTS: tuple = ("achievements", "accomplishments", "highlights", "key results")


# =============================================================================
# SECTION LIMITS
# =============================================================================


@dataclass(frozen=True)
class SectionLimits:
    """Length thresholds and list caps for extracted resume fields."""

    # Section blocks of this length or shorter are treated as absent
    MIN_SECTION_LENGTH: int = 10
    MAX_SECTION_LENGTH: int = 600

    # Bullet items must be strictly between these lengths
    MIN_BULLET_LENGTH: int = 1
    MAX_BULLET_LENGTH: int = 100
    MAX_BULLETS: int = 15

    MAX_EXPERIENCE_ENTRIES: int = 5
    # Lines read after an experience header when looking for highlights
    HIGHLIGHT_WINDOW: int = 8
    MIN_HIGHLIGHT_LENGTH: int = 10
    MAX_HIGHLIGHT_LENGTH: int = 200
    MAX_HIGHLIGHTS: int = 4

    MIN_METRIC_LENGTH: int = 5
    MAX_METRICS: int = 10


# =============================================================================
# SECTION BOUNDARY PATTERNS
# =============================================================================

SEPARATOR_CHARS = r":\-–—"


@dataclass(frozen=True)
class SectionBoundaryPatterns:
    """
    Regex fragments for locating heading-delimited blocks in plain text.

    A heading line holds only a keyword and an optional separator, e.g.
    "Skills:", "SUMMARY", "Tech Stack -". A block ends at the next
    heading-like line: a capitalized line of at most ~30 letters ending in a
    separator (e.g., "Experience:"), or at end of text.
    """

    # Heading line for a given keyword (format with keyword=re.escape(...))
    HEADING_LINE: str = rf"^[ \t]*(?:{{keyword}})[ \t]*[{SEPARATOR_CHARS}]?[ \t]*\n"

    # Any line that looks like the start of another section.
    # Capital first letter is enforced even though the full pattern is
    # compiled case-insensitively.
    NEXT_HEADING: str = rf"^[ \t]*(?-i:[A-Z])[A-Za-z \t]{{2,30}}[{SEPARATOR_CHARS}][ \t]*$"


def build_section_pattern(keyword: str) -> re.Pattern:
    """
    Compile the block-capturing pattern for one heading keyword.

    Group 1 holds the block body (untrimmed).

    Args:
        keyword: Heading synonym (matched literally, case-insensitive)

    Returns:
        Compiled pattern
    """
    heading = SectionBoundaryPatterns.HEADING_LINE.format(keyword=re.escape(keyword))
    return re.compile(
        rf"{heading}(.*?)(?={SectionBoundaryPatterns.NEXT_HEADING}|\Z)",
        re.IGNORECASE | re.MULTILINE | re.DOTALL,
    )


# =============================================================================
# BULLET PATTERNS
# =============================================================================


@dataclass(frozen=True)
class BulletPatterns:
    """
    Leading bullet glyphs stripped from list items.

    Covers ASCII markers (-, *) and common Unicode bullets:
    • (U+2022), ● (U+25CF), ◦ (U+25E6), ▪ (U+25AA), ‣ (U+2023),
    ⁃ (U+2043), ∙ (U+2219), · (U+00B7)
    """

    LEADING_BULLET: re.Pattern = re.compile(r"^[\s•●◦▪‣⁃∙·\-*]+")


def strip_bullet(line: str) -> str:
    """Remove leading bullet glyphs and surrounding whitespace from a line."""
    return BulletPatterns.LEADING_BULLET.sub("", line).strip()


# =============================================================================
# EXPERIENCE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ExperiencePatterns:
    """
    Regex for job header lines such as:

    - "Virtual Assistant at Acme Co | 2020 - Present"
    - "Marketing Lead - Globex (2018 – 2021)"
    - "Support Agent @ Initech | 2019 — current"

    Groups: 1 = role, 2 = company, 3 = period.

    Role and company are case-sensitive (role must start with a capital);
    "present"/"current" are not. Every part must sit on one line, and the
    role must open the line (after optional indentation or a bullet glyph).
    Role and company runs are bounded, so matching stays linear on long
    single-line input.
    Month-name dates ("Jan 2020 - Mar 2022") are not recognized.
    """

    JOB_HEADER: re.Pattern = re.compile(
        r"^[ \t•●◦▪‣⁃∙·*\-]*"
        r"([A-Z][A-Za-z \t&,]{1,59}?)[ \t]+(?:at|[-–—]|@)[ \t]+"
        r"([A-Za-z \t&,.]{1,80}?)[ \t]*[|\-(][ \t]*"
        r"(\d{4}[ \t]*[-–—][ \t]*(?:\d{4}|(?i:present|current)))",
        re.MULTILINE,
    )


# =============================================================================
# METRIC PATTERNS
# =============================================================================

METRIC_UNITS = (
    "users",
    "clients",
    "visitors",
    "leads",
    "revenue",
    "projects",
    "sales",
    "traffic",
    "conversions",
    "subscribers",
    "followers",
)


@dataclass(frozen=True)
class MetricPatterns:
    """
    Regex for lines carrying quantified results.

    Matches a percentage ("35%"), a dollar amount ("$12,000") or a count
    followed by a known unit noun ("1,200+ subscribers").
    """

    QUANTIFIED: re.Pattern = re.compile(
        rf"\d+%|\$[\d,]+|\d[\d,]*\s*\+?\s*(?:{'|'.join(METRIC_UNITS)})",
        re.IGNORECASE,
    )


def has_metric(line: str) -> bool:
    """Check if a line contains a percentage, currency amount or unit count."""
    return MetricPatterns.QUANTIFIED.search(line) is not None
