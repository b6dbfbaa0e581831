"""
Resume records.

A ResumeRecord wraps one uploaded resume: its raw text, the structured
payload and user-editable tags. Records are created once per upload and are
immutable afterwards except for their tags. Storing and deleting records is
up to the caller.
"""

import random
import string
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Set

from clerk.contexts.resume.logger import log_structuring_result
from clerk.contexts.resume.resume_data_structure import StructuredResume
from clerk.contexts.resume.structurer import structure_resume
from clerk.utils.timestamp import now_epoch_ms, now_exact

# Predefined niche tags for resume categorization
NICHE_TAGS = (
    "SEO",
    "Lead Generation",
    "Digital Marketing",
    "Content Writing",
    "Copywriting",
    "Social Media",
    "Virtual Assistant",
    "Web Development",
    "Graphic Design",
    "Data Entry",
    "Email Marketing",
    "PPC / Ads",
    "Video Editing",
    "Project Management",
    "E-commerce",
    "Customer Support",
)

ID_SUFFIX_LENGTH = 5
_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_resume_id() -> str:
    """Create a record id like "resume_1731523540572_k3x9a"."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=ID_SUFFIX_LENGTH))
    return f"resume_{now_epoch_ms()}_{suffix}"


def _clean_tags(tags: Iterable[str]) -> Set[str]:
    return {tag.strip() for tag in tags if tag and tag.strip()}


@dataclass
class ResumeRecord:
    """
    One uploaded resume with its structured payload.

    Attributes:
        id: Unique record id ("resume_<epoch ms>_<5 chars>")
        file_name: Original upload file name
        uploaded_at: ISO 8601 creation timestamp
        raw_text: Decoded resume text
        structured: StructuredResume built from raw_text
        tags: Editable category labels (see NICHE_TAGS)
    """

    id: str
    file_name: str
    uploaded_at: str
    raw_text: str
    structured: StructuredResume
    tags: Set[str] = field(default_factory=set)

    def __setattr__(self, name: str, value: Any) -> None:
        # Only tags may change once the record exists
        if name != "tags" and name in self.__dict__:
            raise AttributeError(f"ResumeRecord.{name} is read-only")
        super().__setattr__(name, value)

    def add_tag(self, tag: str) -> None:
        self.tags = self.tags | _clean_tags([tag])

    def remove_tag(self, tag: str) -> None:
        self.tags = self.tags - {tag.strip()}

    def set_tags(self, tags: Iterable[str]) -> None:
        self.tags = _clean_tags(tags)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain dict with tags sorted for stable output."""
        return {
            "id": self.id,
            "file_name": self.file_name,
            "uploaded_at": self.uploaded_at,
            "tags": sorted(self.tags),
            "raw_text": self.raw_text,
            "structured": self.structured.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeRecord":
        return cls(
            id=data["id"],
            file_name=data["file_name"],
            uploaded_at=data["uploaded_at"],
            raw_text=data.get("raw_text", ""),
            structured=StructuredResume.from_dict(data.get("structured", {})),
            tags=_clean_tags(data.get("tags", [])),
        )


def create_resume_record(
    file_name: str, raw_text: str, tags: Optional[Iterable[str]] = None
) -> ResumeRecord:
    """
    Structure a decoded resume and wrap it in a new record.

    Args:
        file_name: Original upload file name (e.g., "jane_cruz.pdf")
        raw_text: Text decoded from the upload
        tags: Optional initial tags

    Returns:
        New ResumeRecord with a fresh id and timestamp
    """
    structured = structure_resume(raw_text)
    log_structuring_result(file_name, structured)

    return ResumeRecord(
        id=generate_resume_id(),
        file_name=file_name,
        uploaded_at=now_exact(),
        raw_text=raw_text,
        structured=structured,
        tags=_clean_tags(tags or []),
    )
