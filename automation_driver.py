"""
Automation driver: verified click-to-focus and fill-or-replace text entry.

The driver sits between two timelines it cannot synchronise directly: the
intents it submits through the ActionChannel and the page's asynchronous
rendering and focus changes. It bridges them by polling the RemotePage and
by waiting out the settle delays configured in ``TimingConfig``.

Concurrency: one driver may serve many coroutines, but it does no
serialisation of its own. Two operations racing on the same selector will
interleave their clicks and keystrokes; callers that need exclusivity must
hold their own lock (for example one ``asyncio.Lock`` per selector).
"""
from __future__ import annotations

from typing import Optional

from playwright.async_api import Page

from action_channel import ActionChannel, PlaywrightActionChannel
from bot_config import DriverConfig
from error_handling import FillVerificationError, FocusTimeoutError
from models import ClickIntent, TypeIntent
from page_proxy import PlaywrightRemotePage, RemotePage
from utils.event_logger import EventLogger
from utils.timing import ClockFn, SleepFn, monotonic_ms, sleep_ms


class AutomationDriver:
    """
    Sequences verified interactions against one page.

    Holds no per-call state: only the channel, the page proxy, the config
    and the delay/clock primitives.
    """

    def __init__(
        self,
        channel: ActionChannel,
        page: RemotePage,
        config: Optional[DriverConfig] = None,
        sleep: Optional[SleepFn] = None,
        clock: Optional[ClockFn] = None,
        event_logger: Optional[EventLogger] = None,
    ):
        """
        Args:
            channel: Sink for click and type intents
            page: Proxy used to read values and focus, and to edit the focused element
            config: Timing, focus bound and verification settings. Defaults to DriverConfig()
            sleep: Coroutine function suspending for N milliseconds
            clock: Returns a monotonic time in milliseconds
            event_logger: Logger for driver events. Also bound to a channel that has no logger of its own
        """
        self.channel = channel
        self.page = page
        self.config = config or DriverConfig()
        self._sleep = sleep or sleep_ms
        self._clock = clock or monotonic_ms

        if event_logger is None:
            event_logger = EventLogger(debug_mode=self.config.debug_mode)
        self.events = event_logger
        if channel.event_logger is None:
            channel.event_logger = event_logger

        if not self.config.focus.is_bounded:
            self.events.system_warning("Focus loop is unbounded: ensure_focused() waits until the element takes focus")

    async def ensure_focused(self, selector: str) -> None:
        """
        Click ``selector`` until the page reports it focused.

        Each click is followed by ``focus_retry_interval_ms`` before the next
        check. Returns as soon as focus is observed; focus can still be lost
        after that, which is the caller's problem.

        Raises:
            FocusTimeoutError: the ``FocusConfig`` bound ran out first.
            ElementNotFoundError, ChannelError: straight from the collaborators.
        """
        interval = self.config.timing.focus_retry_interval_ms
        started = self._clock()
        clicks = 0

        while True:
            selected = await self.page.is_selected(selector)
            self.events.focus_poll(selector, clicks + 1, selected)
            if selected:
                self.events.focus_acquired(selector, clicks)
                return

            elapsed = self._clock() - started
            if self._focus_exhausted(clicks, elapsed):
                self.events.focus_timeout(selector, clicks, elapsed)
                raise FocusTimeoutError(
                    f"{selector} did not take focus after {clicks} click(s) in {elapsed:.0f}ms",
                    selector=selector,
                    action_type="click",
                    attempts=clicks,
                    elapsed_ms=elapsed,
                )

            clicks += 1
            self.events.focus_click(selector, clicks, interval)
            await self.channel.submit(ClickIntent(selector=selector))
            await self._sleep(interval)

    def _focus_exhausted(self, clicks: int, elapsed_ms: float) -> bool:
        focus = self.config.focus
        if focus.max_attempts is not None and clicks >= focus.max_attempts:
            return True
        if focus.timeout_ms is not None and elapsed_ms >= focus.timeout_ms:
            return True
        return False

    async def fill_text(self, selector: str, text: str) -> None:
        """
        Make the field at ``selector`` hold ``text``.

        - value already equals ``text``: nothing happens
        - value non-empty: focus, select all, wait, delete, wait, type
        - value empty: focus, wait, type

        The typed value is only re-read when ``verify_after_type`` is on.

        Raises:
            ElementNotFoundError: the initial read found no element; nothing was touched.
            FocusTimeoutError, ChannelError: from the focus step or the type step.
            FillVerificationError: verification is on and the value never matched.
        """
        timing = self.config.timing
        current = await self.page.current_value(selector)
        self.events.fill_start(selector, text, current)

        if current == text:
            self.events.fill_skipped(selector)
            return

        if current:
            self.events.fill_replace(selector)
            await self.ensure_focused(selector)
            await self.page.focused.select_all()
            await self._sleep(timing.post_select_delay_ms)
            await self.page.focused.delete_selection()
        else:
            self.events.fill_empty(selector)
            await self.ensure_focused(selector)

        await self._sleep(timing.post_delete_delay_ms)
        await self.channel.submit(TypeIntent(text=text))
        self.events.fill_typed(selector, text)

        if self.config.verification.verify_after_type:
            await self._verify_value(selector, text)

    async def _verify_value(self, selector: str, text: str) -> None:
        verification = self.config.verification
        deadline = self._clock() + verification.timeout_ms

        while True:
            actual = await self.page.current_value(selector)
            if actual == text:
                self.events.fill_verified(selector)
                return
            if self._clock() >= deadline:
                self.events.fill_verify_failed(selector, text, actual)
                raise FillVerificationError(
                    f"{selector} holds {len(actual)} chars, expected the {len(text)} typed",
                    selector=selector,
                    action_type="type",
                    expected=text,
                    actual=actual,
                )
            await self._sleep(verification.poll_interval_ms)


def create_driver(
    page: Page,
    config: Optional[DriverConfig] = None,
    event_logger: Optional[EventLogger] = None,
) -> AutomationDriver:
    """Build a driver whose channel and proxy both target one Playwright page."""
    config = config or DriverConfig()
    channel = PlaywrightActionChannel(page, type_delay_ms=config.type_delay_ms, event_logger=event_logger)
    return AutomationDriver(
        channel,
        PlaywrightRemotePage(page),
        config=config,
        event_logger=event_logger,
    )
