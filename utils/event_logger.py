"""
Simple, robust event-driven logging for the automation driver.

Design principles:
- Non-blocking: logging errors never break an interaction
- Simple: minimal API surface
- Flexible: easy to customize output via callbacks
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Callable
from dataclasses import dataclass, field
from datetime import datetime
import time


class EventType(str, Enum):
    """All event types that can be logged"""
    # Focus events
    FOCUS_POLL = "focus_poll"
    FOCUS_CLICK = "focus_click"
    FOCUS_ACQUIRED = "focus_acquired"
    FOCUS_TIMEOUT = "focus_timeout"

    # Fill events
    FILL_START = "fill_start"
    FILL_SKIPPED = "fill_skipped"
    FILL_REPLACE = "fill_replace"
    FILL_EMPTY = "fill_empty"
    FILL_TYPED = "fill_typed"
    FILL_VERIFIED = "fill_verified"
    FILL_VERIFY_FAILED = "fill_verify_failed"

    # Channel events
    INTENT_SUBMITTED = "intent_submitted"
    INTENT_FAILED = "intent_failed"

    # System events
    SYSTEM_INFO = "system_info"
    SYSTEM_WARNING = "system_warning"
    SYSTEM_ERROR = "system_error"
    SYSTEM_DEBUG = "system_debug"


@dataclass
class BotEvent:
    """Structured event data"""
    event_type: EventType
    message: str
    timestamp: float = field(default_factory=time.time)
    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, SUCCESS
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "event_type": self.event_type.value,
            "message": self.message,
            "timestamp": self.timestamp,
            "timestamp_iso": datetime.fromtimestamp(self.timestamp).isoformat(),
            "level": self.level,
            "details": self.details
        }


class EventLogger:
    """
    Simple, robust event logger.

    In debug mode: prints directly to console
    In normal mode: only calls callbacks (no prints)
    """

    def __init__(self, debug_mode: bool = False, max_history: int = 1000):
        self.debug_mode = debug_mode
        self._callbacks: List[Callable[[BotEvent], None]] = []
        self._event_history: List[BotEvent] = []
        self._max_history = max_history

    def register_callback(self, callback: Callable[[BotEvent], None]) -> None:
        """Register a callback for all events"""
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unregister_callback(self, callback: Callable[[BotEvent], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    @property
    def history(self) -> List[BotEvent]:
        return list(self._event_history)

    def events_of(self, event_type: EventType) -> List[BotEvent]:
        """History filtered to one event type"""
        return [e for e in self._event_history if e.event_type == event_type]

    def clear_history(self) -> None:
        self._event_history.clear()

    def _safe_emit(self, event: BotEvent) -> None:
        """Safely emit an event - never raises exceptions"""
        try:
            self._event_history.append(event)
            if len(self._event_history) > self._max_history:
                self._event_history.pop(0)
        except Exception:
            pass  # Ignore history errors

        if self.debug_mode:
            try:
                self._print_event(event)
            except Exception:
                pass  # Ignore print errors

        for callback in self._callbacks:
            try:
                callback(event)
            except Exception:
                pass  # Ignore callback errors

    def _print_event(self, event: BotEvent) -> None:
        """Print event in debug mode"""
        level_emoji = {
            "DEBUG": "🔍",
            "INFO": "ℹ️",
            "WARNING": "⚠️",
            "ERROR": "❌",
            "SUCCESS": "✅"
        }
        emoji = level_emoji.get(event.level, "•")
        print(f"{emoji} {event.message}")

        if event.details:
            for key, value in event.details.items():
                if value is not None and isinstance(value, (str, int, float, bool)):
                    print(f"   {key}: {value}")

    def emit(self, event_type: EventType, message: str, level: str = "INFO", **details) -> None:
        """Emit an event - safe wrapper that never raises"""
        try:
            event = BotEvent(
                event_type=event_type,
                message=message,
                level=level,
                details=details
            )
            self._safe_emit(event)
        except Exception:
            if self.debug_mode:
                try:
                    print(f"⚠️ Event logger error: {message}")
                except Exception:
                    pass

    # Focus
    def focus_poll(self, selector: str, attempt: int, selected: bool, **details):
        self.emit(EventType.FOCUS_POLL, f"Focus poll #{attempt} on {selector}: {'selected' if selected else 'not selected'}",
                  "DEBUG", selector=selector, attempt=attempt, selected=selected, **details)

    def focus_click(self, selector: str, attempt: int, wait_ms: int, **details):
        self.emit(EventType.FOCUS_CLICK, f"Clicking {selector} to focus (attempt {attempt}), waiting {wait_ms}ms",
                  "INFO", selector=selector, attempt=attempt, wait_ms=wait_ms, **details)

    def focus_acquired(self, selector: str, clicks: int, **details):
        self.emit(EventType.FOCUS_ACQUIRED, f"Focused {selector} after {clicks} click(s)",
                  "SUCCESS", selector=selector, clicks=clicks, **details)

    def focus_timeout(self, selector: str, attempts: int, elapsed_ms: float, **details):
        self.emit(EventType.FOCUS_TIMEOUT, f"Gave up focusing {selector} after {attempts} click(s) ({elapsed_ms:.0f}ms)",
                  "ERROR", selector=selector, attempts=attempts, elapsed_ms=elapsed_ms, **details)

    # Fill
    def fill_start(self, selector: str, text: str, current_value: str, **details):
        self.emit(EventType.FILL_START, f"Filling {selector}", "INFO",
                  selector=selector, text_length=len(text), current_length=len(current_value), **details)

    def fill_skipped(self, selector: str, **details):
        self.emit(EventType.FILL_SKIPPED, f"{selector} already holds the requested text", "DEBUG",
                  selector=selector, **details)

    def fill_replace(self, selector: str, **details):
        self.emit(EventType.FILL_REPLACE, f"Replacing existing value in {selector}", "INFO",
                  selector=selector, **details)

    def fill_empty(self, selector: str, **details):
        self.emit(EventType.FILL_EMPTY, f"{selector} is empty, typing directly", "INFO",
                  selector=selector, **details)

    def fill_typed(self, selector: str, text: str, **details):
        self.emit(EventType.FILL_TYPED, f"Typed into {selector}", "SUCCESS",
                  selector=selector, text_length=len(text), **details)

    def fill_verified(self, selector: str, **details):
        self.emit(EventType.FILL_VERIFIED, f"Verified value of {selector}", "SUCCESS",
                  selector=selector, **details)

    def fill_verify_failed(self, selector: str, expected: str, actual: str, **details):
        self.emit(EventType.FILL_VERIFY_FAILED, f"Value of {selector} did not settle to the typed text",
                  "ERROR", selector=selector, expected_length=len(expected), actual_length=len(actual), **details)

    # Channel
    def intent_submitted(self, description: str, **details):
        self.emit(EventType.INTENT_SUBMITTED, f"Forwarded {description}", "DEBUG",
                  intent=description, **details)

    def intent_failed(self, description: str, error: Exception = None, **details):
        msg = f"Failed to forward {description}"
        if error:
            msg += f" - {error}"
        self.emit(EventType.INTENT_FAILED, msg, "ERROR",
                  intent=description, error=str(error) if error else None, **details)

    # System
    def system_info(self, message: str, **details):
        self.emit(EventType.SYSTEM_INFO, message, "INFO", **details)

    def system_warning(self, message: str, **details):
        self.emit(EventType.SYSTEM_WARNING, message, "WARNING", **details)

    def system_error(self, message: str, error: Exception = None, **details):
        msg = message
        if error:
            msg += f" - {str(error)}"
        self.emit(EventType.SYSTEM_ERROR, msg, "ERROR", error=str(error) if error else None, **details)

    def system_debug(self, message: str, **details):
        self.emit(EventType.SYSTEM_DEBUG, message, "DEBUG", **details)


# Global instance
_global_event_logger: Optional[EventLogger] = None

def get_event_logger() -> EventLogger:
    """Get the global event logger instance"""
    global _global_event_logger
    if _global_event_logger is None:
        _global_event_logger = EventLogger(debug_mode=False)
    return _global_event_logger

def set_event_logger(logger: EventLogger) -> None:
    """Set the global event logger instance"""
    global _global_event_logger
    _global_event_logger = logger
