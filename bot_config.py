"""
Configuration models for the automation driver.

Settle delays, the focus retry bound and the post-type check are grouped
into pydantic models so an embedding application can tune them without
touching driver logic. All durations are in milliseconds.

Example:
    >>> from bot_config import DriverConfig, TimingConfig
    >>> config = DriverConfig(timing=TimingConfig(focus_retry_interval_ms=1200))
    >>> driver = AutomationDriver(channel, page, config=config)
"""
from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


class TimingConfig(BaseModel):
    """Settle delays inserted between interaction steps."""

    focus_retry_interval_ms: int = Field(
        default=800,
        ge=0,
        description="Wait after each focus click before polling focus again"
    )
    post_select_delay_ms: int = Field(
        default=300,
        ge=0,
        description="Wait after select-all so the selection registers before deleting"
    )
    post_delete_delay_ms: int = Field(
        default=500,
        ge=0,
        description="Wait for the field to settle empty and focused before typing"
    )


class FocusConfig(BaseModel):
    """Bound on the click-until-focused loop. None disables that limit."""

    max_attempts: Optional[int] = Field(
        default=30,
        ge=1,
        description="Maximum focus clicks before giving up (None = unbounded)"
    )
    timeout_ms: Optional[int] = Field(
        default=None,
        ge=0,
        description="Maximum wall-clock time spent acquiring focus (None = unbounded)"
    )

    @property
    def is_bounded(self) -> bool:
        return self.max_attempts is not None or self.timeout_ms is not None


class VerificationConfig(BaseModel):
    """Optional post-condition check after text has been typed."""

    verify_after_type: bool = Field(
        default=False,
        description="Re-read the field after typing and require it to equal the text"
    )
    poll_interval_ms: int = Field(
        default=100,
        ge=1,
        description="Interval between value reads while verifying"
    )
    timeout_ms: int = Field(
        default=2000,
        ge=0,
        description="How long the typed value may take to show up"
    )


class DriverConfig(BaseModel):
    """
    Complete driver configuration.

    Example:
        >>> config = DriverConfig.strict()
        >>> config = DriverConfig(focus=FocusConfig(max_attempts=None))
    """

    timing: TimingConfig = Field(default_factory=TimingConfig)
    focus: FocusConfig = Field(default_factory=FocusConfig)
    verification: VerificationConfig = Field(default_factory=VerificationConfig)

    type_delay_ms: int = Field(
        default=0,
        ge=0,
        description="Per-keystroke delay used by the Playwright channel when typing"
    )
    debug_mode: bool = Field(
        default=False,
        description="Print driver events to the console"
    )

    @classmethod
    def fast(cls) -> DriverConfig:
        """Short settle delays for pages that render quickly (local fixtures, tests)."""
        return cls(
            timing=TimingConfig(
                focus_retry_interval_ms=100,
                post_select_delay_ms=50,
                post_delete_delay_ms=50,
            ),
            focus=FocusConfig(max_attempts=10),
        )

    @classmethod
    def strict(cls) -> DriverConfig:
        """Default timings with a time-boxed focus loop and post-type verification."""
        return cls(
            focus=FocusConfig(max_attempts=30, timeout_ms=30000),
            verification=VerificationConfig(verify_after_type=True),
        )

    @classmethod
    def legacy(cls) -> DriverConfig:
        """Unbounded focus loop and no verification: click until focused, trust the channel."""
        return cls(
            focus=FocusConfig(max_attempts=None, timeout_ms=None),
            verification=VerificationConfig(verify_after_type=False),
        )
