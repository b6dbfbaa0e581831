"""
Job posting data structure for the Intake context.

ExtractedJobPosting is what the intake context hands to the rest of the
system (message bus, prompt composition). Instances only exist for
successful extractions: a description under MIN_DESCRIPTION_LENGTH
characters is an extraction failure and never becomes a posting.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict

# Descriptions shorter than this are treated as no match
MIN_DESCRIPTION_LENGTH = 50


@dataclass(frozen=True)
class ExtractedJobPosting:
    """
    Job posting text pulled from a web page.

    Attributes:
        source_name: Site name from the matching profile, or the page hostname
        title: Job title (falls back to the document <title>)
        url: Page URL
        description: Rendered description text (at least 50 characters)
        extracted_at: ISO 8601 extraction timestamp
        used_fallback: True if no profile selector matched and the
                       largest-content-block heuristic was used
    """

    source_name: str
    title: str
    url: str
    description: str
    extracted_at: str
    used_fallback: bool = False

    def __post_init__(self):
        if len(self.description) < MIN_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Description too short for a job posting "
                f"({len(self.description)} < {MIN_DESCRIPTION_LENGTH} chars)"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain dict (JSON serializable)."""
        return asdict(self)
