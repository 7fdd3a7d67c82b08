"""
Remote page proxy: read access to the hosted page plus focus-relative edits.

Reads are addressed by selector. Edits are not: ``select_all`` and
``delete_selection`` act on whatever element currently has focus, so they
live on a separate ``FocusedElement`` handle that takes no selector at all.
Callers must establish focus before using it.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from playwright.async_api import Error as PlaywrightError, Locator, Page

from error_handling import ElementNotFoundError, ProxyError


# Value of form controls, text of contenteditable or plain elements
_READ_VALUE_JS = """
el => {
    if (typeof el.value === 'string') return el.value;
    if (el.isContentEditable) return el.innerText;
    return el.textContent || '';
}
"""

_IS_FOCUSED_JS = """
el => {
    const active = document.activeElement;
    return !!active && (el === active || el.contains(active));
}
"""


class FocusedElement(ABC):
    """Edits applied to the element that currently holds focus."""

    @abstractmethod
    async def select_all(self) -> None:
        ...

    @abstractmethod
    async def delete_selection(self) -> None:
        ...


class RemotePage(ABC):
    """Read/query contract consumed by the automation driver."""

    @abstractmethod
    async def current_value(self, selector: str) -> str:
        """
        Present text content of the element.

        Returns "" for an empty field.

        Raises:
            ElementNotFoundError: selector resolves to nothing.
        """

    @abstractmethod
    async def is_selected(self, selector: str) -> bool:
        """True iff the element currently holds input focus."""

    @property
    @abstractmethod
    def focused(self) -> FocusedElement:
        """Handle for edits on the currently focused element."""


class PlaywrightFocusedElement(FocusedElement):
    """Keyboard-driven edits on a Playwright page's active element."""

    def __init__(self, page: Page):
        self.page = page

    async def select_all(self) -> None:
        await self._press("ControlOrMeta+A")

    async def delete_selection(self) -> None:
        await self._press("Delete")

    async def _press(self, key: str) -> None:
        try:
            await self.page.keyboard.press(key)
        except PlaywrightError as e:
            raise ProxyError(f"Key press {key} failed: {e}", action_type="press", action_data={"key": key}) from e


class PlaywrightRemotePage(RemotePage):
    """RemotePage backed by a Playwright ``Page``."""

    def __init__(self, page: Page):
        self.page = page
        self._focused = PlaywrightFocusedElement(page)

    @property
    def focused(self) -> FocusedElement:
        return self._focused

    async def current_value(self, selector: str) -> str:
        locator = await self._resolve(selector)
        value = await self._evaluate(locator, _READ_VALUE_JS, selector)
        return value or ""

    async def is_selected(self, selector: str) -> bool:
        locator = await self._resolve(selector)
        return bool(await self._evaluate(locator, _IS_FOCUSED_JS, selector))

    async def _resolve(self, selector: str) -> Locator:
        locator = self.page.locator(selector).first
        try:
            count = await locator.count()
        except PlaywrightError as e:
            raise ProxyError(f"Could not query {selector}: {e}", selector=selector) from e
        if count == 0:
            raise ElementNotFoundError(f"No element matches {selector}", selector=selector)
        return locator

    async def _evaluate(self, locator: Locator, script: str, selector: str):
        try:
            return await locator.evaluate(script)
        except PlaywrightError as e:
            raise ProxyError(f"Could not read {selector}: {e}", selector=selector) from e
