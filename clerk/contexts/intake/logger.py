"""
Intake context logger.

Every intake message carries the [intake] prefix. Intake modules log through
the helpers here and never configure sinks themselves; CLIs call
setup_intake_logger() once per run.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from clerk.utils.logger import setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Optional[Path] = None, url: Optional[str] = None) -> Path:
    """
    Configure sinks for an extraction run.

    Args:
        log_dir: Session directory (default: new session under CLERK_LOGS_PATH)
        url: Job page URL, recorded in the provenance header

    Returns:
        Path to the intake log file
    """
    return setup_logger("intake", log_dir=log_dir, extra_provenance={"URL": url} if url else None)


def _log(level: str, message: str) -> None:
    # depth=2 attributes the record to the caller of the _log_* wrapper
    logger.opt(depth=2).log(level, f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    _log("DEBUG", message)


def _log_info(message: str) -> None:
    _log("INFO", message)


def _log_success(message: str) -> None:
    _log("SUCCESS", message)


def _log_warning(message: str) -> None:
    _log("WARNING", message)


def log_posting_captured(posting) -> None:
    """
    Log a successful extraction.

    Args:
        posting: ExtractedJobPosting from extract_posting()
    """
    mode = "auto-detect mode" if posting.used_fallback else "profile match"
    _log_success(f"{posting.source_name} job captured ({mode}): {posting.title}")
    _log_debug(f"  URL: {posting.url}")
    _log_debug(f"  Description: {len(posting.description)} chars")


def log_state_change(url: Optional[str], old_state, new_state) -> None:
    """Log a watcher state transition."""
    _log_debug(f"Watcher {old_state.value} -> {new_state.value} ({url or 'no location'})")
