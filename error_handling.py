"""
Structured error handling for the automation driver.

Provides custom exception types, error context, and an error recorder.
Every error here is raised to the caller; nothing in the driver recovers
from them locally.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from datetime import datetime
from enum import Enum


class RecoveryStrategy(Enum):
    """What the caller may do about an error. The driver itself never retries."""
    RETRY = "retry"  # transient: the same call can succeed later
    ABORT = "abort"  # the call cannot succeed as issued


@dataclass
class ErrorContext:
    """
    Context information about an error.

    Captures everything needed to understand and debug a failed interaction.
    """

    error_type: str
    message: str
    timestamp: datetime = field(default_factory=datetime.now)

    # Target
    selector: Optional[str] = None

    # Action context
    action_type: Optional[str] = None
    action_data: Optional[Dict[str, Any]] = None

    # Additional metadata
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'error_type': self.error_type,
            'message': self.message,
            'timestamp': self.timestamp.isoformat(),
            'selector': self.selector,
            'action_type': self.action_type,
            'action_data': self.action_data,
            'metadata': self.metadata
        }


class BotError(Exception):
    """
    Base exception for all driver errors.

    All custom exceptions should inherit from this.
    """

    recovery_strategy: RecoveryStrategy = RecoveryStrategy.ABORT

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        **kwargs
    ):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext(
            error_type=self.__class__.__name__,
            message=message
        )

        # Allow overriding context fields; anything else lands in metadata
        for key, value in kwargs.items():
            if key != 'metadata' and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value

    @property
    def selector(self) -> Optional[str]:
        return self.context.selector


class ElementNotFoundError(BotError, LookupError):
    """Selector did not resolve to any element on the page."""
    recovery_strategy = RecoveryStrategy.ABORT


class ProxyError(BotError):
    """Reading page state failed for a reason other than a missing element."""
    recovery_strategy = RecoveryStrategy.ABORT


class ChannelError(BotError):
    """The action channel rejected or failed to forward an intent."""
    recovery_strategy = RecoveryStrategy.RETRY


class FocusTimeoutError(BotError):
    """Element never reported focus within the configured retry bound."""
    recovery_strategy = RecoveryStrategy.RETRY

    @property
    def attempts(self) -> int:
        return self.context.metadata.get('attempts', 0)

    @property
    def elapsed_ms(self) -> float:
        return self.context.metadata.get('elapsed_ms', 0.0)


class FillVerificationError(BotError):
    """Field value did not match the typed text after the verification window."""
    recovery_strategy = RecoveryStrategy.RETRY

    @property
    def expected(self) -> Optional[str]:
        return self.context.metadata.get('expected')

    @property
    def actual(self) -> Optional[str]:
        return self.context.metadata.get('actual')


@dataclass
class ErrorHandler:
    """
    Records errors and reports the strategy each one suggests.

    The handler never suppresses an error; whoever calls it is expected to
    re-raise.
    """

    max_history: int = 100

    # Error history
    errors: List[ErrorContext] = field(default_factory=list)

    def handle_error(
        self,
        error: Exception,
        action_context: Optional[Dict[str, Any]] = None
    ) -> RecoveryStrategy:
        """
        Record an error and determine its recovery strategy.

        Args:
            error: The exception that occurred
            action_context: Context about the action that failed

        Returns:
            RecoveryStrategy suggested for the caller
        """
        if isinstance(error, BotError):
            context = error.context
        else:
            context = ErrorContext(
                error_type=type(error).__name__,
                message=str(error)
            )

        if action_context:
            context.action_type = action_context.get('action_type')
            context.action_data = action_context.get('action_data')

        self.errors.append(context)
        if len(self.errors) > self.max_history:
            self.errors.pop(0)

        if isinstance(error, BotError):
            return error.recovery_strategy
        return RecoveryStrategy.ABORT

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all errors."""
        error_counts: Dict[str, int] = {}
        for error in self.errors:
            error_type = error.error_type
            error_counts[error_type] = error_counts.get(error_type, 0) + 1

        return {
            'total_errors': len(self.errors),
            'error_counts': error_counts,
            'recent_errors': [e.to_dict() for e in self.errors[-5:]]
        }

    def clear_errors(self) -> None:
        """Clear error history."""
        self.errors.clear()
