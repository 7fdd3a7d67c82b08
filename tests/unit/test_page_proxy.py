"""
Unit tests for the Playwright-backed page proxy (mocked Page).
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from error_handling import ElementNotFoundError, ProxyError
from page_proxy import PlaywrightRemotePage


def make_page(count=1, evaluated=""):
    locator = MagicMock()
    locator.count = AsyncMock(return_value=count)
    locator.evaluate = AsyncMock(return_value=evaluated)

    page = MagicMock()
    page.locator.return_value.first = locator
    page.keyboard = MagicMock()
    page.keyboard.press = AsyncMock()
    return page, locator


def test_current_value_reads_first_match():
    page, locator = make_page(evaluated="a@x.com")
    proxy = PlaywrightRemotePage(page)

    assert asyncio.run(proxy.current_value("#email")) == "a@x.com"
    page.locator.assert_called_once_with("#email")
    locator.evaluate.assert_awaited_once()


def test_current_value_empty_when_null():
    page, _ = make_page(evaluated=None)
    proxy = PlaywrightRemotePage(page)

    assert asyncio.run(proxy.current_value("#email")) == ""


def test_missing_element_raises_lookup_error():
    page, locator = make_page(count=0)
    proxy = PlaywrightRemotePage(page)

    with pytest.raises(LookupError) as exc_info:
        asyncio.run(proxy.current_value("#missing"))

    assert isinstance(exc_info.value, ElementNotFoundError)
    locator.evaluate.assert_not_awaited()


def test_is_selected_missing_element_raises():
    page, _ = make_page(count=0)
    proxy = PlaywrightRemotePage(page)

    with pytest.raises(ElementNotFoundError):
        asyncio.run(proxy.is_selected("#missing"))


@pytest.mark.parametrize("evaluated", [True, False])
def test_is_selected_reflects_active_element(evaluated):
    page, _ = make_page(evaluated=evaluated)
    proxy = PlaywrightRemotePage(page)

    assert asyncio.run(proxy.is_selected("#email")) is evaluated


def test_evaluate_failure_becomes_proxy_error():
    page, locator = make_page()
    locator.evaluate.side_effect = PlaywrightError("Execution context was destroyed")
    proxy = PlaywrightRemotePage(page)

    with pytest.raises(ProxyError, match="context was destroyed"):
        asyncio.run(proxy.current_value("#email"))


def test_count_failure_becomes_proxy_error():
    page, locator = make_page()
    locator.count.side_effect = PlaywrightError("Target page has been closed")
    proxy = PlaywrightRemotePage(page)

    with pytest.raises(ProxyError, match="Could not query #email") as exc_info:
        asyncio.run(proxy.is_selected("#email"))

    assert not isinstance(exc_info.value, LookupError)
    assert exc_info.value.selector == "#email"
    assert isinstance(exc_info.value.__cause__, PlaywrightError)
    locator.evaluate.assert_not_awaited()


def test_focused_edits_use_keyboard():
    page, _ = make_page()
    proxy = PlaywrightRemotePage(page)

    asyncio.run(proxy.focused.select_all())
    asyncio.run(proxy.focused.delete_selection())

    assert [c.args[0] for c in page.keyboard.press.await_args_list] == ["ControlOrMeta+A", "Delete"]
    page.locator.assert_not_called()
