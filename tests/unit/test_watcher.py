"""Unit tests for the ExtractionWatcher state machine."""

import asyncio

import pytest

from clerk.contexts.intake.page import JobPage
from clerk.contexts.intake.profiles import ContentSelectorProfile
from clerk.contexts.intake.watcher import (
    ExtractionWatcher,
    Scheduler,
    WatcherState,
    wait_until_settled,
)

URL = "https://jobs.example.com/view/1"
OTHER_URL = "https://jobs.example.com/view/2"

PROFILE = ContentSelectorProfile(source_name="Example Jobs", description_selectors=("#desc",))

EMPTY_PAGE = JobPage.from_html("<p>Loading...</p>", url=URL)
JOB_PAGE = JobPage.from_html(
    '<div id="desc">Answer client emails and schedule meetings. Keep the CRM up to date.</div>',
    url=URL,
)


class FakeHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler(Scheduler):
    """Records timers; tests fire them explicitly."""

    def __init__(self):
        self.handles = []

    def call_later(self, delay, callback):
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def live(self):
        return [h for h in self.handles if not h.cancelled]

    def fire_next(self):
        handle = self.live[0]
        handle.cancelled = True
        handle.callback()
        return handle


class PageSequence:
    """Page provider returning queued pages, repeating the last one."""

    def __init__(self, *pages):
        self.pages = list(pages)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if len(self.pages) > 1:
            return self.pages.pop(0)
        return self.pages[0]


def _watcher(provider, scheduler, captured, **kwargs):
    kwargs.setdefault("max_retries", 5)
    kwargs.setdefault("retry_delay", 1.5)
    kwargs.setdefault("navigation_delay", 2.0)
    return ExtractionWatcher(
        provider,
        on_posting=captured.append,
        scheduler=scheduler,
        profile_lookup=lambda url: PROFILE,
        location=URL,
        **kwargs,
    )


@pytest.mark.unit
def test_success_on_first_attempt():
    scheduler, captured = ManualScheduler(), []
    watcher = _watcher(PageSequence(JOB_PAGE), scheduler, captured)

    assert watcher.state is WatcherState.IDLE
    assert watcher.activate() is WatcherState.SUCCESS

    assert len(captured) == 1
    assert captured[0].source_name == "Example Jobs"
    assert watcher.status.posting is captured[0]
    assert watcher.status.attempts == 1
    assert scheduler.handles == []


@pytest.mark.unit
def test_retry_then_success():
    scheduler, captured = ManualScheduler(), []
    provider = PageSequence(EMPTY_PAGE, None, JOB_PAGE)
    watcher = _watcher(provider, scheduler, captured)

    assert watcher.activate() is WatcherState.RETRYING
    assert watcher.status.retries_remaining == 4
    assert scheduler.live[0].delay == 1.5

    scheduler.fire_next()
    assert watcher.state is WatcherState.RETRYING
    assert watcher.status.retries_remaining == 3

    scheduler.fire_next()
    assert watcher.state is WatcherState.SUCCESS
    assert provider.calls == 3
    assert len(captured) == 1
    assert not watcher.has_pending_timer


@pytest.mark.unit
def test_exhausted_after_budget():
    scheduler, captured = ManualScheduler(), []
    provider = PageSequence(EMPTY_PAGE)
    watcher = _watcher(provider, scheduler, captured, max_retries=2)

    watcher.activate()
    scheduler.fire_next()
    scheduler.fire_next()

    assert watcher.state is WatcherState.EXHAUSTED
    assert watcher.is_settled
    assert provider.calls == 3
    assert captured == []
    assert scheduler.live == []


@pytest.mark.unit
def test_zero_retries_exhausts_immediately():
    scheduler, captured = ManualScheduler(), []
    watcher = _watcher(PageSequence(EMPTY_PAGE), scheduler, captured, max_retries=0)

    assert watcher.activate() is WatcherState.EXHAUSTED
    assert scheduler.handles == []


@pytest.mark.unit
def test_activate_ignored_outside_idle():
    scheduler, captured = ManualScheduler(), []
    provider = PageSequence(EMPTY_PAGE)
    watcher = _watcher(provider, scheduler, captured)

    watcher.activate()
    assert watcher.activate() is WatcherState.RETRYING
    assert provider.calls == 1
    assert len(scheduler.live) == 1


@pytest.mark.unit
def test_navigation_rearms_settled_watcher():
    scheduler, captured = ManualScheduler(), []
    watcher = _watcher(PageSequence(JOB_PAGE), scheduler, captured)
    watcher.activate()
    assert watcher.state is WatcherState.SUCCESS

    assert watcher.notify_location(OTHER_URL) is True
    assert watcher.state is WatcherState.IDLE
    assert watcher.status.last_location == OTHER_URL
    assert watcher.status.posting is None
    assert scheduler.live[0].delay == 2.0

    scheduler.fire_next()
    assert watcher.state is WatcherState.SUCCESS
    assert len(captured) == 2


@pytest.mark.unit
def test_navigation_cancels_pending_retry_and_restores_budget():
    scheduler, captured = ManualScheduler(), []
    watcher = _watcher(PageSequence(EMPTY_PAGE), scheduler, captured, max_retries=3)

    watcher.activate()
    scheduler.fire_next()
    retry_handle = scheduler.live[0]
    assert watcher.status.retries_remaining == 1

    watcher.notify_location(OTHER_URL)

    assert retry_handle.cancelled
    assert len(scheduler.live) == 1
    assert scheduler.live[0].delay == 2.0
    assert watcher.status.retries_remaining == 3
    assert watcher.status.attempts == 0


@pytest.mark.unit
def test_same_location_is_not_navigation():
    scheduler, captured = ManualScheduler(), []
    watcher = _watcher(PageSequence(JOB_PAGE), scheduler, captured)
    watcher.activate()

    assert watcher.notify_location(URL) is False
    assert watcher.state is WatcherState.SUCCESS
    assert scheduler.handles == []


@pytest.mark.unit
def test_manual_activate_supersedes_navigation_timer():
    scheduler, captured = ManualScheduler(), []
    watcher = _watcher(PageSequence(JOB_PAGE), scheduler, captured)

    watcher.notify_location(OTHER_URL)
    navigation_handle = scheduler.live[0]

    watcher.activate()

    assert navigation_handle.cancelled
    assert watcher.state is WatcherState.SUCCESS
    assert len(captured) == 1


@pytest.mark.unit
def test_stop_cancels_timer_and_keeps_state():
    scheduler, captured = ManualScheduler(), []
    watcher = _watcher(PageSequence(EMPTY_PAGE), scheduler, captured)

    watcher.activate()
    watcher.stop()

    assert scheduler.live == []
    assert watcher.state is WatcherState.RETRYING
    assert not watcher.has_pending_timer


@pytest.mark.unit
def test_wait_until_settled_returns_after_stop():
    scheduler, captured = ManualScheduler(), []
    watcher = _watcher(PageSequence(EMPTY_PAGE), scheduler, captured)

    watcher.activate()
    watcher.stop()
    state = asyncio.run(asyncio.wait_for(wait_until_settled(watcher, poll_interval=0.001), timeout=1))

    assert state is WatcherState.RETRYING


@pytest.mark.unit
def test_wait_until_settled_returns_for_idle_watcher():
    watcher = _watcher(PageSequence(EMPTY_PAGE), ManualScheduler(), [])

    state = asyncio.run(asyncio.wait_for(wait_until_settled(watcher, poll_interval=0.001), timeout=1))

    assert state is WatcherState.IDLE
