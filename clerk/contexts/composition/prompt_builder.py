"""
Prompt text formatting for cover letter generation.

Turns a StructuredResume and a job description into the user message sent
to a generation provider. Provider selection and the request itself live
outside CLERK.
"""

from typing import List

from clerk.contexts.resume.resume_data_structure import StructuredResume
from clerk.utils.text_processing import sanitize_text, truncate_text

MAX_PROMPT_SKILLS = 8
MAX_PROMPT_TOOLS = 8
MAX_PROMPT_EXPERIENCE = 3
MAX_PROMPT_ACHIEVEMENTS = 5
MAX_JOB_DESCRIPTION_CHARS = 3000

NO_EXPERIENCE_TEXT = "No structured experience available."


def format_experience_block(resume: StructuredResume) -> str:
    """Format up to 3 experience entries as bullet lines."""
    if not resume.experience:
        return NO_EXPERIENCE_TEXT

    lines = []
    for entry in resume.experience[:MAX_PROMPT_EXPERIENCE]:
        lines.append(
            f"• {entry.role} at {entry.company} ({entry.period}): {'; '.join(entry.highlights)}"
        )
    return "\n".join(lines)


def build_resume_section(resume: StructuredResume) -> str:
    """
    Format the resume half of a generation prompt.

    Empty fields are left out rather than printed blank.

    Args:
        resume: Structured resume

    Returns:
        Multi-line resume summary
    """
    parts: List[str] = [f"Name: {resume.name}"]

    if resume.title:
        parts.append(f"Title: {resume.title}")
    if resume.skills:
        parts.append(f"Key Skills: {', '.join(resume.skills[:MAX_PROMPT_SKILLS])}")
    if resume.tools:
        parts.append(f"Tools: {', '.join(resume.tools[:MAX_PROMPT_TOOLS])}")

    parts.append(f"\nRelevant Experience:\n{format_experience_block(resume)}")

    if resume.achievements:
        achievements = "\n".join(f"• {a}" for a in resume.achievements[:MAX_PROMPT_ACHIEVEMENTS])
        parts.append(f"\nKey Achievements:\n{achievements}")

    return "\n".join(parts)


def build_user_message(job_description: str, resume: StructuredResume) -> str:
    """
    Build the full user message for a cover letter request.

    Args:
        job_description: Posting text or pasted markup (cleaned, then
                         truncated to 3000 characters)
        resume: Structured resume

    Returns:
        Prompt text with delimited job and resume sections
    """
    job_text = truncate_text(sanitize_text(job_description), MAX_JOB_DESCRIPTION_CHARS)

    return (
        "Write a cover letter for this job:\n"
        "\n"
        "--- JOB DESCRIPTION ---\n"
        f"{job_text}\n"
        "--- END JOB DESCRIPTION ---\n"
        "\n"
        "--- MY RESUME ---\n"
        f"{build_resume_section(resume)}\n"
        "--- END RESUME ---\n"
        "\n"
        "Use the information above to craft a personalized cover letter."
    )
