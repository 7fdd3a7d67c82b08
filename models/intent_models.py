"""Intent models submitted through the action channel."""
from __future__ import annotations

import time
from typing import Literal, Union

from pydantic import BaseModel, Field


class ClickIntent(BaseModel):
    """Click the element matched by a selector."""

    kind: Literal["click"] = "click"
    selector: str = Field(description="Selector of the element to click")

    def describe(self) -> str:
        return f"click: {self.selector}"


class TypeIntent(BaseModel):
    """Type text into whichever element currently has focus."""

    kind: Literal["type"] = "type"
    text: str = Field(description="Text to type, keystroke by keystroke")

    def describe(self) -> str:
        return f"type: {len(self.text)} chars"


Intent = Union[ClickIntent, TypeIntent]


class Ack(BaseModel):
    """Acknowledgement that an intent was forwarded (not that the page reacted)."""

    intent: Intent = Field(discriminator="kind")
    forwarded_at: float = Field(default_factory=time.time)


__all__ = ["ClickIntent", "TypeIntent", "Intent", "Ack"]
