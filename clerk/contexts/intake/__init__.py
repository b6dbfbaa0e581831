"""
Intake Context

Responsibilities:
- Holds the static selector profiles of known job sites
- Parses job pages and computes their rendered text
- Extracts job postings via profile selectors or the largest-block fallback
- Retries extraction and re-extracts on single-page-app navigation

Owns: Posting extraction logic, selector profiles, watcher state
Never: Structures resumes or formats prompts
"""

from clerk.contexts.intake.exceptions import InvalidProfileConfigError, PageFetchError
from clerk.contexts.intake.extractor import extract_posting, find_largest_content_block
from clerk.contexts.intake.fetcher import fetch_page
from clerk.contexts.intake.page import JobPage, rendered_text
from clerk.contexts.intake.posting_data_structure import ExtractedJobPosting
from clerk.contexts.intake.profiles import (
    ContentSelectorProfile,
    ProfileRegistry,
    detect_profile,
    get_profile,
)
from clerk.contexts.intake.watcher import (
    AsyncioScheduler,
    ExtractionWatcher,
    Scheduler,
    WatcherState,
    poll_location,
    wait_until_settled,
)

__all__ = [
    # Pages and extraction
    "JobPage",
    "rendered_text",
    "fetch_page",
    "extract_posting",
    "find_largest_content_block",
    "ExtractedJobPosting",
    # Profiles
    "ContentSelectorProfile",
    "ProfileRegistry",
    "get_profile",
    "detect_profile",
    # Watcher
    "ExtractionWatcher",
    "WatcherState",
    "Scheduler",
    "AsyncioScheduler",
    "poll_location",
    "wait_until_settled",
    # Errors
    "PageFetchError",
    "InvalidProfileConfigError",
]
