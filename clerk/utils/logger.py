"""
Logging setup shared by all CLERK contexts.

Each CLI run gets its own session directory holding one log file per
context. The file sink records everything; the console sink (stderr, so
stdout stays clean for JSON/YAML output) shows CLERK_CONSOLE_LOG_LEVEL and
above. Context wrappers with message prefixes live in
contexts/{context}/logger.py.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from clerk import __version__

load_dotenv()
LOGS_PATH = Path(os.getenv("CLERK_LOGS_PATH", "outs/logs"))
CONSOLE_LOG_LEVEL = os.getenv("CLERK_CONSOLE_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "DEBUG": "<dim>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def session_dir(command_name: str, base_dir: Optional[Path] = None) -> Path:
    """
    Build a timestamped directory path for one CLI run.

    Example:
        >>> session_dir("extract")  # doctest: +SKIP
        PosixPath('outs/logs/extract_20251114_123456')
    """
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return (base_dir or LOGS_PATH) / f"{command_name}_{stamp}"


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    extra_provenance: Optional[Dict[str, str]] = None,
    level_colors: Optional[Dict[str, str]] = None,
) -> Path:
    """
    Route loguru output to a context log file and the console.

    Replaces any previously configured sinks, so calling this once per
    CLI run is enough.

    Args:
        context_name: Context identifier, used as the log file name ("intake", "resume")
        log_dir: Session directory (default: a new session_dir under CLERK_LOGS_PATH)
        extra_provenance: Run details to record in the header (URL, input file, ...)
        level_colors: Console color overrides, e.g. {"INFO": "<cyan>"}

    Returns:
        Path to the context log file
    """
    log_dir = Path(log_dir) if log_dir is not None else session_dir(context_name)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=CONSOLE_LOG_LEVEL, colorize=True)

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: Optional[Dict[str, str]] = None) -> None:
    """Write a header describing how this run was invoked."""
    header = {
        "CLERK": __version__,
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "Python": sys.version.split()[0],
        **(extra_context or {}),
    }

    logger.debug("=" * 80)
    for key, value in header.items():
        logger.debug(f"{key}: {value}")
    logger.debug("=" * 80)
