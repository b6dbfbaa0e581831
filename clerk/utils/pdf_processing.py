"""
PDF text extraction for resume uploads.

Decoding is a boundary concern: the resume context only ever sees plain text.
Undecodable files are rejected here, before structuring.
"""

from pathlib import Path
from typing import Optional

import pdfplumber


class PDFDecodeError(Exception):
    """Raised when a PDF can't be opened or contains no extractable text."""

    def __init__(self, message: str, pdf_path: Optional[Path] = None):
        self.message = message
        self.pdf_path = pdf_path

        parts = [message]
        if pdf_path:
            parts.append(f"File: {pdf_path}")

        super().__init__("\n".join(parts))


def extract_pdf_text(pdf_path: Path) -> str:
    """
    Extract plain text from every page of a PDF.

    Pages are joined with a blank line so section headings on a new page
    still start on their own line.

    Args:
        pdf_path: Path to PDF file

    Returns:
        Decoded text, trimmed

    Raises:
        PDFDecodeError: If the file can't be parsed or has no text layer
    """
    try:
        with pdfplumber.open(pdf_path) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        raise PDFDecodeError(f"Could not read PDF: {e}", pdf_path=pdf_path) from e

    text = "\n\n".join(p.strip() for p in pages if p.strip())
    if not text:
        raise PDFDecodeError("PDF has no extractable text (scanned image?)", pdf_path=pdf_path)

    return text
