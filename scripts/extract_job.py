#!/usr/bin/env python3
"""
Extract a job posting from a live web page.

Fetches the page, runs the extraction watcher (profile selectors, then the
largest-block fallback, retrying while the page yields nothing) and prints
the posting as JSON.

Usage:
    python scripts/extract_job.py "https://www.indeed.com/viewjob?jk=abc123"
    python scripts/extract_job.py "https://example.com/careers/42" --retries 2 --retry-delay 3
    python scripts/extract_job.py "https://www.upwork.com/jobs/~01" -o job.json
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import requests
import typer
from dotenv import load_dotenv

from clerk.contexts.intake.exceptions import InvalidProfileConfigError, PageFetchError
from clerk.contexts.intake.fetcher import fetch_page
from clerk.contexts.intake.logger import _log_warning, setup_intake_logger
from clerk.contexts.intake.page import JobPage
from clerk.contexts.intake.posting_data_structure import ExtractedJobPosting
from clerk.contexts.intake.profiles import ProfileRegistry
from clerk.contexts.intake.watcher import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY,
    ExtractionWatcher,
    WatcherState,
    wait_until_settled,
)

load_dotenv()

app = typer.Typer(help="Extract a job posting from a web page.")


async def _run_watcher(
    url: str, registry: ProfileRegistry, retries: int, retry_delay: float
) -> Optional[ExtractedJobPosting]:
    captured = []

    with requests.Session() as session:

        # The fetch blocks the loop for up to CLERK_FETCH_TIMEOUT; only
        # wait_until_settled shares it, so no other task is starved.
        def page_provider() -> Optional[JobPage]:
            try:
                return fetch_page(url, session=session)
            except PageFetchError as e:
                _log_warning(str(e).replace("\n", " | "))
                return None

        watcher = ExtractionWatcher(
            page_provider,
            on_posting=captured.append,
            profile_lookup=registry.detect_profile,
            max_retries=retries,
            retry_delay=retry_delay,
            location=url,
        )

        watcher.activate()
        state = await wait_until_settled(watcher)

    if state is WatcherState.SUCCESS:
        return captured[-1]
    return None


@app.command()
def main(
    url: str = typer.Argument(..., help="Job page URL"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write JSON here instead of stdout"
    ),
    retries: int = typer.Option(DEFAULT_MAX_RETRIES, "--retries", help="Retries after a failed attempt"),
    retry_delay: float = typer.Option(
        DEFAULT_RETRY_DELAY, "--retry-delay", help="Seconds between attempts"
    ),
    profiles: Optional[Path] = typer.Option(
        None, "--profiles", help="Selector profile YAML (default: bundled profiles)"
    ),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Directory for the session log"),
):
    """Extract a job posting and print it as JSON."""
    setup_intake_logger(log_dir=log_dir, url=url)
    registry = ProfileRegistry(profiles)

    try:
        # Validate profiles up front; errors inside timer callbacks would not reach us
        registry.profiles
        posting = asyncio.run(_run_watcher(url, registry, retries, retry_delay))
    except InvalidProfileConfigError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    if posting is None:
        typer.echo(f"ERROR: No job posting found at {url}", err=True)
        raise typer.Exit(1)

    payload = json.dumps(posting.to_dict(), indent=2, ensure_ascii=False)
    if output:
        output.write_text(payload + "\n", encoding="utf-8")
        typer.secho(f"✓ Saved: {output}", fg=typer.colors.GREEN, err=True)
    else:
        typer.echo(payload)


if __name__ == "__main__":
    app()
