"""
Structured Resume

Defines the normalized resume schema produced by the Resume context.
This structure is the interface between the Resume context (which builds it
from plain text) and its consumers: resume records and prompt composition.

The schema is always fully shaped. A field that couldn't be located is an
empty string or empty list, never None.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class ExperienceEntry:
    """
    One job from a resume's work history.

    Attributes:
        role: Job title (e.g., "Virtual Assistant")
        company: Employer name (e.g., "Acme Co")
        period: Year range as written (e.g., "2020 - Present")
        highlights: Up to 4 lines found right after the job header
    """

    role: str
    company: str
    period: str
    highlights: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "company": self.company,
            "period": self.period,
            "highlights": list(self.highlights),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExperienceEntry":
        return cls(
            role=data.get("role", ""),
            company=data.get("company", ""),
            period=data.get("period", ""),
            highlights=list(data.get("highlights", [])),
        )


@dataclass(frozen=True)
class StructuredResume:
    """
    Normalized resume content.

    Attributes:
        name: First non-blank line of the resume ("Unknown" if the text is empty)
        title: Second non-blank line, usually the headline/current title
        summary: Summary/profile section text (max 600 chars)
        skills: Skill bullets (max 15)
        tools: Tool/technology bullets (max 15)
        experience: Work history entries (max 5)
        achievements: Achievement bullets (max 15)
        metrics: Lines with quantified results (max 10)
    """

    name: str = "Unknown"
    title: str = ""
    summary: str = ""
    skills: List[str] = field(default_factory=list)
    tools: List[str] = field(default_factory=list)
    experience: List[ExperienceEntry] = field(default_factory=list)
    achievements: List[str] = field(default_factory=list)
    metrics: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when nothing beyond the name/title lines was located."""
        return not (
            self.summary
            or self.skills
            or self.tools
            or self.experience
            or self.achievements
            or self.metrics
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain dict (JSON/YAML serializable)."""
        return {
            "name": self.name,
            "title": self.title,
            "summary": self.summary,
            "skills": list(self.skills),
            "tools": list(self.tools),
            "experience": [entry.to_dict() for entry in self.experience],
            "achievements": list(self.achievements),
            "metrics": list(self.metrics),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StructuredResume":
        """
        Rebuild from a dict produced by to_dict().

        Missing keys fall back to the empty defaults so the result is always
        fully shaped.
        """
        return cls(
            name=data.get("name") or "Unknown",
            title=data.get("title", ""),
            summary=data.get("summary", ""),
            skills=list(data.get("skills", [])),
            tools=list(data.get("tools", [])),
            experience=[ExperienceEntry.from_dict(e) for e in data.get("experience", [])],
            achievements=list(data.get("achievements", [])),
            metrics=list(data.get("metrics", [])),
        )
