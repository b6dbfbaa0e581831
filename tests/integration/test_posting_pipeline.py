"""
Integration tests for job posting intake.

Runs saved job pages through the bundled profiles, the extractor and the
watcher on a real asyncio event loop.

Tests cover:
- Known site (Indeed) resolved through its selector profile
- Unknown site resolved through the largest-block fallback
- Retries while the page hasn't rendered its description yet
- Navigation detected by location polling
"""

import asyncio
from pathlib import Path

import pytest

from clerk.contexts.intake.extractor import extract_posting
from clerk.contexts.intake.page import JobPage
from clerk.contexts.intake.profiles import detect_profile
from clerk.contexts.intake.watcher import (
    ExtractionWatcher,
    WatcherState,
    poll_location,
    wait_until_settled,
)

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"

INDEED_URL = "https://www.indeed.com/viewjob?jk=abc123"
CAREERS_URL = "https://careers.brightgoods.example/jobs/va"


def _load_page(name: str, url: str) -> JobPage:
    html = (FIXTURES_PATH / name).read_text(encoding="utf-8")
    return JobPage.from_html(html, url=url)


@pytest.mark.integration
def test_indeed_page_uses_profile():
    page = _load_page("indeed_posting.html", INDEED_URL)

    posting = extract_posting(page, detect_profile(page.url))

    assert posting.source_name == "Indeed"
    assert posting.title == "Data Entry Specialist"
    assert posting.used_fallback is False
    assert posting.description == (
        "Lumen Books is hiring a Data Entry Specialist to keep our catalog accurate.\n"
        "Responsibilities:\n"
        "Enter and verify product data in our inventory system\n"
        "Reconcile weekly sales reports\n"
        "Answer supplier emails within one business day\n"
        "Requirements:\n"
        "2+ years of data entry experience\n"
        "Typing speed of 60 WPM"
    )


@pytest.mark.integration
def test_unknown_site_uses_fallback():
    page = _load_page("careers_page.html", CAREERS_URL)

    posting = extract_posting(page, detect_profile(page.url))

    assert posting.used_fallback is True
    assert posting.source_name == "careers.brightgoods.example"
    assert posting.title == "Virtual Assistant | Bright Goods Careers"

    lines = posting.description.split("\n")
    assert lines[0] == "Virtual Assistant (Part-time, Remote)"
    assert lines[1].startswith("Bright Goods is a small e-commerce team")
    assert lines[1].endswith("support our founders with daily operations.")
    assert "Manage the founders' inboxes and calendars" in lines
    # Site navigation and footer stay out of the description
    assert "Contact" not in posting.description
    assert "All rights reserved" not in posting.description


@pytest.mark.integration
def test_watcher_retries_until_page_renders():
    loading = JobPage.from_html("<html><body><div id='root'></div></body></html>", url=INDEED_URL)
    rendered = _load_page("indeed_posting.html", INDEED_URL)
    pages = [None, loading, rendered]
    captured = []

    def page_provider():
        return pages.pop(0) if len(pages) > 1 else pages[0]

    async def run():
        watcher = ExtractionWatcher(
            page_provider,
            on_posting=captured.append,
            max_retries=5,
            retry_delay=0.01,
            location=INDEED_URL,
        )
        watcher.activate()
        return await asyncio.wait_for(wait_until_settled(watcher, poll_interval=0.005), timeout=5)

    state = asyncio.run(run())

    assert state is WatcherState.SUCCESS
    assert len(captured) == 1
    assert captured[0].title == "Data Entry Specialist"


@pytest.mark.integration
def test_watcher_exhausts_on_empty_page():
    empty = JobPage.from_html("<p>Please enable JavaScript</p>", url=CAREERS_URL)
    captured = []

    async def run():
        watcher = ExtractionWatcher(
            lambda: empty,
            on_posting=captured.append,
            max_retries=2,
            retry_delay=0.01,
            location=CAREERS_URL,
        )
        watcher.activate()
        state = await asyncio.wait_for(wait_until_settled(watcher, poll_interval=0.005), timeout=5)
        return state, watcher.status.attempts

    state, attempts = asyncio.run(run())

    assert state is WatcherState.EXHAUSTED
    assert attempts == 3
    assert captured == []


@pytest.mark.integration
def test_navigation_detected_by_polling():
    pages = {
        INDEED_URL: _load_page("indeed_posting.html", INDEED_URL),
        CAREERS_URL: _load_page("careers_page.html", CAREERS_URL),
    }
    current = {"location": INDEED_URL}
    captured = []

    async def run():
        watcher = ExtractionWatcher(
            lambda: pages[current["location"]],
            on_posting=captured.append,
            retry_delay=0.01,
            navigation_delay=0.01,
            location=INDEED_URL,
        )
        stop = asyncio.Event()
        poller = asyncio.create_task(
            poll_location(watcher, lambda: current["location"], interval=0.005, stop_event=stop)
        )

        watcher.activate()
        current["location"] = CAREERS_URL

        async def second_capture():
            while len(captured) < 2:
                await asyncio.sleep(0.005)

        await asyncio.wait_for(second_capture(), timeout=5)
        stop.set()
        await poller
        return watcher.state

    state = asyncio.run(run())

    assert state is WatcherState.SUCCESS
    assert [p.source_name for p in captured] == ["Indeed", "careers.brightgoods.example"]
    assert captured[1].used_fallback is True
