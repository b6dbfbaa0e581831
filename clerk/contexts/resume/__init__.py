"""
Resume Context

Responsibilities:
- Locates heading-delimited sections in decoded resume text
- Extracts bullets, work history and quantified metrics
- Builds the normalized StructuredResume schema
- Wraps uploads in ResumeRecord objects with editable tags

Owns: Resume structuring heuristics, resume record shape
Never: Decodes file formats or persists records
"""

from clerk.contexts.resume.extractors import extract_bullets, extract_experience, extract_metrics
from clerk.contexts.resume.record import NICHE_TAGS, ResumeRecord, create_resume_record
from clerk.contexts.resume.resume_data_structure import ExperienceEntry, StructuredResume
from clerk.contexts.resume.segmenter import locate_section
from clerk.contexts.resume.structurer import structure_resume

__all__ = [
    # Segmentation and extraction
    "locate_section",
    "extract_bullets",
    "extract_experience",
    "extract_metrics",
    # Orchestration
    "structure_resume",
    # Data structures
    "ExperienceEntry",
    "StructuredResume",
    "ResumeRecord",
    "create_resume_record",
    "NICHE_TAGS",
]
