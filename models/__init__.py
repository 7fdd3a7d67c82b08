"""
Data models for the automation driver.
"""
from .intent_models import Ack, ClickIntent, Intent, TypeIntent

__all__ = [
    "Ack",
    "ClickIntent",
    "Intent",
    "TypeIntent",
]
