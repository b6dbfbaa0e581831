"""
Resume structuring orchestrator.

Combines the segmenter and entity extractors into a single StructuredResume.
This module has no knowledge of storage or prompts - it returns the
structured payload that ResumeRecord and the composition context consume.
"""

from clerk.contexts.resume.extractors import extract_bullets, extract_experience, extract_metrics
from clerk.contexts.resume.resume_data_structure import StructuredResume
from clerk.contexts.resume.section_patterns import HeadingSynonyms
from clerk.contexts.resume.segmenter import locate_section


def normalize_line_endings(text: str) -> str:
    """Convert Windows/old-Mac line endings to "\\n"."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def structure_resume(raw_text: str) -> StructuredResume:
    """
    Structure raw resume text into the normalized schema.

    Pure and total: any string (including "") produces a fully shaped
    StructuredResume. Fields that can't be located come back empty.

    Args:
        raw_text: Plain text decoded from a resume upload

    Returns:
        StructuredResume

    Example:
        >>> resume = structure_resume("Jane Cruz\\nVirtual Assistant\\n\\nSkills:\\n- Email handling\\n")
        >>> resume.name, resume.title, resume.skills
        ('Jane Cruz', 'Virtual Assistant', ['Email handling'])
    """
    text = normalize_line_endings(raw_text)
    lines = [line.strip() for line in text.split("\n") if line.strip()]

    return StructuredResume(
        name=lines[0] if lines else "Unknown",
        title=lines[1] if len(lines) > 1 else "",
        summary=locate_section(text, HeadingSynonyms.SUMMARY),
        skills=extract_bullets(text, HeadingSynonyms.SKILLS),
        tools=extract_bullets(text, HeadingSynonyms.TOOLS),
        experience=extract_experience(text),
        achievements=extract_bullets(text, HeadingSynonyms.ACHIEVEMENTS),
        metrics=extract_metrics(text),
    )
