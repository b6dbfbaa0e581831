"""Custom exceptions for the intake context."""

from pathlib import Path
from typing import Optional


class PageFetchError(Exception):
    """
    Exception raised when a job page can't be downloaded.

    Attributes:
        message: Error description
        url: URL that was requested
        status_code: HTTP status code, if a response was received
    """

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.url = url
        self.status_code = status_code

        parts = [message]
        if url:
            parts.append(f"URL: {url}")
        if status_code is not None:
            parts.append(f"Status: {status_code}")

        super().__init__("\n".join(parts))


class InvalidProfileConfigError(ValueError):
    """
    Exception raised when a selector profile config is malformed.

    Attributes:
        message: Error description
        config_path: Path to the offending YAML file
        source_key: Hostname key of the bad entry, if known
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[Path] = None,
        source_key: Optional[str] = None,
    ):
        self.message = message
        self.config_path = config_path
        self.source_key = source_key

        parts = [message]
        if source_key:
            parts.append(f"Profile: {source_key}")
        if config_path:
            parts.append(f"Config: {config_path}")

        super().__init__("\n".join(parts))
