"""
Middleware system for the action channel.

Middleware intercepts every intent submitted through an ActionChannel,
before and after it is forwarded to the page.

Example:
    >>> from middlewares import ErrorHandlingMiddleware, MetricsMiddleware
    >>> channel = PlaywrightActionChannel(page)
    >>> channel.use(MetricsMiddleware()).use(ErrorHandlingMiddleware())
"""
from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Dict, List, TYPE_CHECKING

from models import Ack, Intent

if TYPE_CHECKING:
    from action_channel import ActionChannel


@dataclass
class ActionContext:
    """
    Context passed to middleware hooks.

    Contains the intent being submitted and allows middleware to modify
    or short-circuit it.
    """

    action_type: str
    """Type of intent: 'click' or 'type'"""

    intent: Intent
    """The intent as submitted by the caller"""

    channel: Optional['ActionChannel'] = None
    """Reference to the channel forwarding the intent"""

    metadata: Dict[str, Any] = field(default_factory=dict)
    """Metadata that middleware can use to pass data between hooks"""

    should_continue: bool = True
    """If False, the intent is not forwarded"""

    modified_intent: Optional[Intent] = None
    """If set, this intent is forwarded instead of the original"""

    cached_result: Optional[Ack] = None
    """If set and should_continue=False, this is returned as the ack"""

    @property
    def action_data(self) -> Dict[str, Any]:
        return self.effective_intent.model_dump()

    @property
    def effective_intent(self) -> Intent:
        return self.modified_intent or self.intent


class Middleware(ABC):
    """
    Base class for middleware.

    Example:
        >>> class DropEmptyTyping(Middleware):
        ...     def before_action(self, context):
        ...         if context.action_type == "type" and not context.intent.text:
        ...             context.should_continue = False
        ...         return context
    """

    def before_action(self, context: ActionContext) -> ActionContext:
        """
        Called before the intent is forwarded.

        Args:
            context: Action context

        Returns:
            Modified context (can modify should_continue, modified_intent, etc.)
        """
        return context

    def after_action(self, context: ActionContext, result: Ack) -> Ack:
        """
        Called after the intent was forwarded.

        Args:
            context: Action context
            result: Ack returned by the channel

        Returns:
            Modified ack (or original ack)
        """
        return result

    def on_error(self, context: ActionContext, error: Exception) -> None:
        """
        Called when forwarding fails. The error is re-raised afterwards.

        Args:
            context: Action context
            error: The exception that was raised
        """
        pass


Forward = Callable[[Intent], Awaitable[Ack]]


class MiddlewareManager:
    """
    Runs one intent through the middleware chain.

    Only middleware whose ``before_action`` ran sees the matching
    ``after_action`` (innermost first) or ``on_error``. A short-circuit stops
    the chain and skips forwarding.
    """

    def __init__(self):
        self.middlewares: List[Middleware] = []

    def use(self, middleware: Middleware) -> None:
        """Add middleware to the chain."""
        self.middlewares.append(middleware)

    def __len__(self) -> int:
        return len(self.middlewares)

    async def run(self, context: ActionContext, forward: Forward) -> Ack:
        """
        Args:
            context: Context for the submitted intent
            forward: Delivers the effective intent and returns its ack

        Returns:
            The ack after every entered middleware had a chance to replace it
        """
        entered: List[Middleware] = []
        for middleware in self.middlewares:
            context = middleware.before_action(context)
            entered.append(middleware)
            if not context.should_continue:
                return context.cached_result or Ack(intent=context.effective_intent)

        try:
            ack = await forward(context.effective_intent)
        except Exception as error:
            for middleware in entered:
                self._notify_error(middleware, context, error)
            raise

        while entered:
            ack = entered.pop().after_action(context, ack)
        return ack

    @staticmethod
    def _notify_error(middleware: Middleware, context: ActionContext, error: Exception) -> None:
        try:
            middleware.on_error(context, error)
        except Exception as hook_error:
            # the forwarding error is what propagates; hook failures are kept on the context
            context.metadata.setdefault('hook_errors', []).append(
                f"{type(middleware).__name__}: {hook_error!r}"
            )
