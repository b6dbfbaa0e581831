"""
Composition Context

Responsibilities:
- Formats structured resumes and job postings into generation prompts

Owns: Prompt layout
Never: Calls generation providers or extracts content
"""

from clerk.contexts.composition.prompt_builder import build_resume_section, build_user_message

__all__ = ["build_resume_section", "build_user_message"]
