"""
Shared pytest fixtures for all tests.

The fakes share one ``Timeline`` so tests can assert on the exact
interleaving of reads, edits, intents and waits.
"""
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from action_channel import ActionChannel
from automation_driver import AutomationDriver
from bot_config import DriverConfig
from error_handling import ElementNotFoundError
from models import ClickIntent, Intent, TypeIntent
from page_proxy import FocusedElement, RemotePage
from utils.event_logger import EventLogger


class Timeline:
    """Ordered log of collaborator calls plus a fake millisecond clock."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.now = 0.0

    async def sleep(self, ms: int) -> None:
        self.calls.append(("wait", ms))
        self.now += ms

    def clock(self) -> float:
        return self.now

    def kinds(self) -> List[str]:
        return [c[0] for c in self.calls]

    def count(self, kind: str) -> int:
        return sum(1 for c in self.calls if c[0] == kind)


class FakeFocusedElement(FocusedElement):
    def __init__(self, page: "FakeRemotePage"):
        self.page = page

    async def select_all(self) -> None:
        self.page.timeline.calls.append(("select_all",))
        self.page.selection_active = True

    async def delete_selection(self) -> None:
        self.page.timeline.calls.append(("delete_selection",))
        if self.page.active is not None and self.page.selection_active:
            self.page.values[self.page.active] = ""
        self.page.selection_active = False


class FakeRemotePage(RemotePage):
    """
    In-memory page.

    ``unfocused_polls[selector] = N`` makes the first N focus polls on that
    selector report False; every later poll reports True.
    """

    def __init__(self, timeline: Timeline, values: Optional[Dict[str, str]] = None):
        self.timeline = timeline
        self.values: Dict[str, str] = dict(values or {})
        self.unfocused_polls: Dict[str, int] = {}
        self.active: Optional[str] = None
        self.selection_active = False
        self._focused = FakeFocusedElement(self)

    @property
    def focused(self) -> FocusedElement:
        return self._focused

    async def current_value(self, selector: str) -> str:
        self.timeline.calls.append(("current_value", selector))
        if selector not in self.values:
            raise ElementNotFoundError(f"No element matches {selector}", selector=selector)
        return self.values[selector]

    async def is_selected(self, selector: str) -> bool:
        if selector not in self.values:
            raise ElementNotFoundError(f"No element matches {selector}", selector=selector)
        remaining = self.unfocused_polls.get(selector, 0)
        selected = remaining <= 0
        if not selected:
            self.unfocused_polls[selector] = remaining - 1
        else:
            self.active = selector
        self.timeline.calls.append(("is_selected", selector, selected))
        return selected


class FakeActionChannel(ActionChannel):
    """Logs intents on the timeline and types into the page's active element."""

    def __init__(self, timeline: Timeline, page: FakeRemotePage, apply_typing: bool = True):
        super().__init__()
        self.timeline = timeline
        self.page = page
        self.apply_typing = apply_typing
        self.fail_with: Optional[Exception] = None

    async def _dispatch(self, intent: Intent) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        if isinstance(intent, ClickIntent):
            self.timeline.calls.append(("click", intent.selector))
        elif isinstance(intent, TypeIntent):
            self.timeline.calls.append(("type", intent.text))
            if self.apply_typing and self.page.active is not None:
                self.page.values[self.page.active] += intent.text


@pytest.fixture
def timeline():
    return Timeline()


@pytest.fixture
def fake_page(timeline):
    return FakeRemotePage(timeline)


@pytest.fixture
def fake_channel(timeline, fake_page):
    return FakeActionChannel(timeline, fake_page)


@pytest.fixture
def event_logger():
    return EventLogger(debug_mode=False)


@pytest.fixture
def make_driver(timeline, fake_page, fake_channel, event_logger):
    """Factory for drivers wired to the fakes and the fake clock."""
    def _create(config: Optional[DriverConfig] = None) -> AutomationDriver:
        return AutomationDriver(
            fake_channel,
            fake_page,
            config=config,
            sleep=timeline.sleep,
            clock=timeline.clock,
            event_logger=event_logger,
        )
    return _create


@pytest.fixture
def build_driver(timeline):
    """Factory for a driver with its own page and channel, sharing the timeline."""
    def _create(event_logger: EventLogger, values: Dict[str, str]):
        page = FakeRemotePage(timeline, values)
        channel = FakeActionChannel(timeline, page)
        driver = AutomationDriver(channel, page, sleep=timeline.sleep,
                                  clock=timeline.clock, event_logger=event_logger)
        return driver, page
    return _create
