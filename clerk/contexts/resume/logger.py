"""
Resume context logger.

Every resume message carries the [resume] prefix. The structuring core stays
silent; only record creation and the CLI report what was found.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from clerk.utils.logger import setup_logger

CONTEXT_PREFIX = "[resume]"


def setup_resume_logger(log_dir: Optional[Path] = None, source_file: Optional[Path] = None) -> Path:
    """
    Configure sinks for a structuring run.

    Args:
        log_dir: Session directory (default: new session under CLERK_LOGS_PATH)
        source_file: Resume file being processed, recorded in the provenance header

    Returns:
        Path to the resume log file
    """
    provenance = {"Resume file": str(source_file)} if source_file else None
    return setup_logger("resume", log_dir=log_dir, extra_provenance=provenance)


def _log(level: str, message: str) -> None:
    logger.opt(depth=2).log(level, f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    _log("DEBUG", message)


def _log_info(message: str) -> None:
    _log("INFO", message)


def _log_warning(message: str) -> None:
    _log("WARNING", message)


def log_structuring_result(file_name: str, resume) -> None:
    """
    Summarize what was located in a structured resume.

    Args:
        file_name: Uploaded file name
        resume: StructuredResume from structure_resume()
    """
    _log_info(f"Structured {file_name}: {resume.name}")
    _log_debug(
        f"  skills={len(resume.skills)} tools={len(resume.tools)} "
        f"experience={len(resume.experience)} achievements={len(resume.achievements)} "
        f"metrics={len(resume.metrics)} summary={len(resume.summary)} chars"
    )
    if resume.is_empty:
        _log_warning(f"  No sections located in {file_name} (only name/title lines)")
