"""
Action channel: the asynchronous sink for click and type intents.

An ack from ``submit`` means the intent was forwarded to the page. It says
nothing about whether the page has finished reacting to it; callers that
care must check the page state themselves.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from playwright.async_api import Error as PlaywrightError, Page

from error_handling import ChannelError
from middleware import ActionContext, Middleware, MiddlewareManager
from models import Ack, ClickIntent, Intent, TypeIntent
from utils.event_logger import EventLogger, get_event_logger


class ActionChannel(ABC):
    """Base channel. Subclasses implement ``_dispatch`` for one backend."""

    def __init__(self, event_logger: Optional[EventLogger] = None):
        self.middleware = MiddlewareManager()
        self.event_logger = event_logger

    @property
    def events(self) -> EventLogger:
        """This channel's logger, or the process-wide one when none was bound."""
        return self.event_logger or get_event_logger()

    def use(self, middleware: Middleware) -> "ActionChannel":
        """Add middleware to this channel's chain."""
        self.middleware.use(middleware)
        return self

    async def submit(self, intent: Intent) -> Ack:
        """
        Forward an intent through the middleware chain.

        Raises:
            ChannelError: the intent could not be forwarded. Never retried here.
        """
        context = ActionContext(action_type=intent.kind, intent=intent, channel=self)
        return await self.middleware.run(context, self._forward)

    async def _forward(self, intent: Intent) -> Ack:
        try:
            await self._dispatch(intent)
        except ChannelError as e:
            self.events.intent_failed(intent.describe(), e)
            raise
        except Exception as e:
            error = ChannelError(
                f"Failed to forward {intent.describe()}: {e}",
                action_type=intent.kind,
                action_data=intent.model_dump(),
                selector=getattr(intent, "selector", None),
            )
            self.events.intent_failed(intent.describe(), error)
            raise error from e

        self.events.intent_submitted(intent.describe())
        return Ack(intent=intent)

    @abstractmethod
    async def _dispatch(self, intent: Intent) -> None:
        """Deliver one intent to the page."""


class PlaywrightActionChannel(ActionChannel):
    """Forwards intents to a Playwright page."""

    def __init__(self, page: Page, type_delay_ms: int = 0, event_logger: Optional[EventLogger] = None):
        super().__init__(event_logger)
        self.page = page
        self.type_delay_ms = type_delay_ms

    async def _dispatch(self, intent: Intent) -> None:
        try:
            if isinstance(intent, ClickIntent):
                await self.page.click(intent.selector)
            elif isinstance(intent, TypeIntent):
                await self.page.keyboard.type(intent.text, delay=self.type_delay_ms)
            else:
                raise ChannelError(f"Unsupported intent: {intent!r}")
        except PlaywrightError as e:
            raise ChannelError(
                f"Playwright rejected {intent.describe()}: {e}",
                action_type=intent.kind,
                action_data=intent.model_dump(),
                selector=getattr(intent, "selector", None),
            ) from e


class RecordingActionChannel(ActionChannel):
    """
    Channel that only records what it was asked to do.

    Useful as a dry-run sink. Set ``fail_with`` to make every submit fail.
    """

    def __init__(self, fail_with: Optional[Exception] = None, event_logger: Optional[EventLogger] = None):
        super().__init__(event_logger)
        self.intents: List[Intent] = []
        self.fail_with = fail_with

    async def _dispatch(self, intent: Intent) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.intents.append(intent)

    @property
    def clicks(self) -> List[str]:
        return [i.selector for i in self.intents if isinstance(i, ClickIntent)]

    @property
    def typed(self) -> List[str]:
        return [i.text for i in self.intents if isinstance(i, TypeIntent)]
