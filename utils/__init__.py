"""
Utility modules for the automation driver.
"""
from .event_logger import BotEvent, EventLogger, EventType, get_event_logger, set_event_logger
from .timing import ClockFn, SleepFn, monotonic_ms, sleep_ms

__all__ = [
    "BotEvent",
    "EventLogger",
    "EventType",
    "get_event_logger",
    "set_event_logger",
    "ClockFn",
    "SleepFn",
    "monotonic_ms",
    "sleep_ms",
]
