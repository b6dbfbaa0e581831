"""
Shared utilities for CLERK.

Common functionality used across contexts:
- Logging setup
- Timestamps
- Text cleanup and truncation
- PDF decoding
"""

from clerk.utils.text_processing import collapse_whitespace, sanitize_text, truncate_text
from clerk.utils.timestamp import now_epoch_ms, now_exact

__all__ = [
    "collapse_whitespace",
    "sanitize_text",
    "truncate_text",
    "now_epoch_ms",
    "now_exact",
]
