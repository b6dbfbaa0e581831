"""
Extraction watcher: retries and navigation handling around extract_posting().

Job pages often render their description late (client-side frameworks) and
single-page apps change the job without reloading. The watcher owns one
page context and drives this state machine:

    IDLE -> ATTEMPTING -> SUCCESS                      (terminal)
                       -> RETRYING -> ATTEMPTING ...
                       -> EXHAUSTED                    (terminal)

A location change reported by the host (notify_location) cancels any pending
timer and re-arms the watcher to IDLE, followed by a fresh activation.

All timing goes through a Scheduler so the watcher never blocks. Only one
timer is pending at a time and an attempt always finishes before the next
one is scheduled, so attempts never overlap.
"""

import asyncio
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from dotenv import load_dotenv

from clerk.contexts.intake.extractor import extract_posting
from clerk.contexts.intake.logger import (
    _log_debug,
    _log_info,
    log_posting_captured,
    log_state_change,
)
from clerk.contexts.intake.page import JobPage
from clerk.contexts.intake.posting_data_structure import ExtractedJobPosting
from clerk.contexts.intake.profiles import ContentSelectorProfile, detect_profile

load_dotenv()
DEFAULT_MAX_RETRIES = int(os.getenv("CLERK_WATCHER_RETRIES", "5"))
DEFAULT_RETRY_DELAY = float(os.getenv("CLERK_WATCHER_RETRY_DELAY", "1.5"))
DEFAULT_NAVIGATION_DELAY = float(os.getenv("CLERK_WATCHER_NAVIGATION_DELAY", "2.0"))


class WatcherState(Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    RETRYING = "retrying"
    SUCCESS = "success"
    EXHAUSTED = "exhausted"


TERMINAL_STATES = {WatcherState.SUCCESS, WatcherState.EXHAUSTED}


# =============================================================================
# SCHEDULING
# =============================================================================


class Scheduler(ABC):
    """Runs callbacks after a delay. Returned handles must support cancel()."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        pass


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop (the running loop by default)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


# =============================================================================
# WATCHER
# =============================================================================


@dataclass
class WatcherStatus:
    """
    Mutable state owned by a single watcher.

    Attributes:
        state: Current state machine position
        retries_remaining: Automatic retries left before EXHAUSTED
        last_location: Last location reported by the host
        attempts: Extraction attempts since the last re-arm
        posting: Captured posting once state is SUCCESS
    """

    state: WatcherState = WatcherState.IDLE
    retries_remaining: int = DEFAULT_MAX_RETRIES
    last_location: Optional[str] = None
    attempts: int = 0
    posting: Optional[ExtractedJobPosting] = None


class ExtractionWatcher:
    """
    Drives extraction attempts for one page context.

    Args:
        page_provider: Returns the current document, or None if it isn't available yet
        on_posting: Receives each captured posting
        scheduler: Timer source (default: AsyncioScheduler on the running loop)
        profile_lookup: Maps a page URL to its selector profile (default: bundled profiles)
        max_retries: Retries after the first failed attempt
        retry_delay: Seconds between attempts
        navigation_delay: Seconds to wait after a location change before re-extracting
        location: Initial location of the page context

    Example:
        watcher = ExtractionWatcher(lambda: page, on_posting=bus.publish)
        watcher.activate()
        ...
        watcher.notify_location(new_url)  # called by host on SPA navigation
    """

    def __init__(
        self,
        page_provider: Callable[[], Optional[JobPage]],
        on_posting: Callable[[ExtractedJobPosting], None],
        scheduler: Optional[Scheduler] = None,
        profile_lookup: Callable[[str], Optional[ContentSelectorProfile]] = detect_profile,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        navigation_delay: float = DEFAULT_NAVIGATION_DELAY,
        location: Optional[str] = None,
    ):
        self.page_provider = page_provider
        self.on_posting = on_posting
        self.scheduler = scheduler or AsyncioScheduler()
        self.profile_lookup = profile_lookup
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.navigation_delay = navigation_delay

        self.status = WatcherStatus(retries_remaining=max_retries, last_location=location)
        self._pending = None

    @property
    def state(self) -> WatcherState:
        return self.status.state

    @property
    def is_settled(self) -> bool:
        """True once the watcher reached SUCCESS or EXHAUSTED."""
        return self.status.state in TERMINAL_STATES

    @property
    def has_pending_timer(self) -> bool:
        return self._pending is not None

    def _set_state(self, new_state: WatcherState) -> None:
        log_state_change(self.status.last_location, self.status.state, new_state)
        self.status.state = new_state

    def _schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self._pending = self.scheduler.call_later(delay, callback)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def activate(self) -> WatcherState:
        """
        Start extraction from IDLE.

        Ignored in any other state: a settled watcher only restarts after a
        location change re-arms it.

        Returns:
            State after the first attempt
        """
        if self.status.state is not WatcherState.IDLE:
            _log_debug(f"Activation ignored in state {self.status.state.value}")
            return self.status.state

        # A manual activation supersedes a scheduled post-navigation one
        self._cancel_pending()
        self._attempt()
        return self.status.state

    def _on_timer(self) -> None:
        self._pending = None
        if self.status.state is WatcherState.RETRYING:
            self._attempt()
        elif self.status.state is WatcherState.IDLE:
            self.activate()

    def _attempt(self) -> None:
        self._set_state(WatcherState.ATTEMPTING)
        self.status.attempts += 1

        page = self.page_provider()
        posting = None
        if page is not None:
            posting = extract_posting(page, self.profile_lookup(page.url))

        if posting is not None:
            self.status.posting = posting
            self._set_state(WatcherState.SUCCESS)
            log_posting_captured(posting)
            self.on_posting(posting)
            return

        if self.status.retries_remaining > 0:
            self.status.retries_remaining -= 1
            self._set_state(WatcherState.RETRYING)
            self._schedule(self.retry_delay, self._on_timer)
        else:
            self._set_state(WatcherState.EXHAUSTED)
            _log_info(
                f"No job posting found after {self.status.attempts} attempts "
                f"({self.status.last_location or 'current page'})"
            )

    def notify_location(self, location: str) -> bool:
        """
        Report the page context's current location.

        A location different from the last one means a navigation happened:
        any pending timer is cancelled, the retry budget restored, the
        watcher re-armed to IDLE and a new activation scheduled after
        navigation_delay.

        Args:
            location: Current URL of the page context

        Returns:
            True if the location changed and the watcher was re-armed
        """
        if location == self.status.last_location:
            return False

        _log_debug(f"Navigation: {self.status.last_location} -> {location}")
        self._cancel_pending()
        self.status.last_location = location
        self.status.retries_remaining = self.max_retries
        self.status.attempts = 0
        self.status.posting = None
        self._set_state(WatcherState.IDLE)
        self._schedule(self.navigation_delay, self._on_timer)
        return True

    def stop(self) -> None:
        """Cancel any pending timer. State is left as is."""
        self._cancel_pending()


# =============================================================================
# HOST HELPERS
# =============================================================================


async def poll_location(
    watcher: ExtractionWatcher,
    location_provider: Callable[[], str],
    interval: float = 1.0,
    stop_event: Optional[asyncio.Event] = None,
) -> None:
    """
    Poll a location source and report changes to the watcher.

    Runs until stop_event is set (or forever if no event is given).

    Args:
        watcher: Watcher to notify
        location_provider: Returns the page context's current location
        interval: Seconds between polls
        stop_event: Set to end polling
    """
    while stop_event is None or not stop_event.is_set():
        watcher.notify_location(location_provider())
        await asyncio.sleep(interval)


async def wait_until_settled(watcher: ExtractionWatcher, poll_interval: float = 0.05) -> WatcherState:
    """
    Wait (cooperatively) until the watcher reaches SUCCESS or EXHAUSTED.

    Returns the current state early when no timer is pending, e.g. after
    stop() or before the first activate(): nothing would move it forward.
    """
    while not watcher.is_settled and watcher.has_pending_timer:
        await asyncio.sleep(poll_interval)
    return watcher.state
