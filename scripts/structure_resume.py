#!/usr/bin/env python3
"""
Structure a resume file into the normalized schema.

Accepts plain text (.txt, .md) or PDF. Prints the structured resume as YAML
(default) or JSON; --record wraps it in a full resume record with id,
timestamp and tags.

Usage:
    python scripts/structure_resume.py resumes/jane_cruz.pdf
    python scripts/structure_resume.py resumes/jane_cruz.txt --format json
    python scripts/structure_resume.py resumes/jane_cruz.txt --record --tag "Virtual Assistant"
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf

from clerk.contexts.resume.logger import _log_info, setup_resume_logger
from clerk.contexts.resume.record import NICHE_TAGS, create_resume_record
from clerk.utils.pdf_processing import PDFDecodeError, extract_pdf_text

load_dotenv()

app = typer.Typer(help="Structure a resume into name, skills, experience and metrics.")

TEXT_SUFFIXES = {".txt", ".md", ".text"}


def load_resume_text(path: Path) -> str:
    """Decode a resume file to plain text."""
    if path.suffix.lower() == ".pdf":
        return extract_pdf_text(path)
    return path.read_text(encoding="utf-8", errors="replace")


@app.command()
def main(
    input_file: Path = typer.Argument(..., help="Resume file (.pdf, .txt, .md)"),
    output_format: str = typer.Option("yaml", "--format", "-f", help="Output format: yaml or json"),
    record: bool = typer.Option(False, "--record", help="Output a full resume record"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Tag for the record (repeatable)"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Directory for the session log"),
):
    """Structure a resume and print the result."""
    if output_format not in ("yaml", "json"):
        typer.echo(f"ERROR: Unknown format '{output_format}' (use yaml or json)", err=True)
        raise typer.Exit(1)

    if not input_file.exists():
        typer.echo(f"ERROR: File not found: {input_file}", err=True)
        raise typer.Exit(1)

    if input_file.suffix.lower() not in TEXT_SUFFIXES | {".pdf"}:
        typer.echo(f"ERROR: Unsupported file type: {input_file.suffix}", err=True)
        raise typer.Exit(1)

    setup_resume_logger(log_dir=log_dir, source_file=input_file)

    try:
        raw_text = load_resume_text(input_file)
    except PDFDecodeError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    if not raw_text.strip():
        typer.echo(f"ERROR: No text in {input_file}", err=True)
        raise typer.Exit(1)

    unknown_tags = [t for t in tags or [] if t not in NICHE_TAGS]
    if unknown_tags:
        _log_info(f"Custom tags (not in predefined list): {', '.join(unknown_tags)}")

    resume_record = create_resume_record(input_file.name, raw_text, tags=tags)
    data = resume_record.to_dict() if record else resume_record.structured.to_dict()

    if output_format == "json":
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        typer.echo(OmegaConf.to_yaml(OmegaConf.create(data)))


if __name__ == "__main__":
    app()
