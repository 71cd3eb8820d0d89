"""Headless browser client built on Playwright."""

import logging
from typing import Optional, Protocol

from playwright.async_api import async_playwright, Browser, Page, Playwright

logger = logging.getLogger(__name__)

# DOM selectors of the booking site
USERNAME_INPUT = '#username'
PASSWORD_INPUT = '#password'
LOGIN_BUTTON = '#login-button'
LOCATION_SELECTOR = '#location-selector'
DAY_SELECTOR = '#day-selector'
TIME_SELECTOR = '#time-selector'
RESERVE_BUTTON = '#reserve-button'
CONFIRMATION_SELECTOR = '#confirmation-selector'


class BrowserPage(Protocol):
    """Operations the reservation workflow needs from a browser page."""

    async def goto(self, url: str) -> None: ...

    async def fill(self, selector: str, text: str) -> None: ...

    async def click(self, selector: str, wait_for_navigation: bool = False) -> None: ...

    async def select(self, selector: str, value: str) -> None: ...

    async def wait_for_selector(self, selector: str) -> None: ...


class BrowserSession(Protocol):
    """A browser instance owned by a single workflow run."""

    async def new_page(self) -> BrowserPage: ...

    async def close(self) -> None: ...


class PlaywrightPage:
    """Thin adapter exposing a Playwright page as a BrowserPage."""

    def __init__(self, page: Page):
        self.page = page

    async def goto(self, url: str) -> None:
        logger.debug(f'Navigating to {url}')
        await self.page.goto(url)

    async def fill(self, selector: str, text: str) -> None:
        await self.page.fill(selector, text)

    async def click(self, selector: str, wait_for_navigation: bool = False) -> None:
        """
        Click an element.

        When wait_for_navigation is set, the click is wrapped so the call only
        returns once the navigation it triggers has completed.
        """
        if wait_for_navigation:
            async with self.page.expect_navigation():
                await self.page.click(selector)
        else:
            await self.page.click(selector)

    async def select(self, selector: str, value: str) -> None:
        await self.page.select_option(selector, value)

    async def wait_for_selector(self, selector: str) -> None:
        await self.page.wait_for_selector(selector)


class PlaywrightSession:
    """Chromium browser session driven by async Playwright."""

    def __init__(self, playwright: Playwright, browser: Browser, timeout: Optional[int] = None):
        """
        Wrap a running Playwright browser.

        Args:
            playwright: The started Playwright driver
            browser: The launched Chromium browser
            timeout: Default timeout for every page wait, in milliseconds
        """
        self.playwright = playwright
        self.browser = browser
        self.timeout = timeout
        self._closed = False

    async def new_page(self) -> PlaywrightPage:
        page = await self.browser.new_page()
        if self.timeout is not None:
            page.set_default_timeout(self.timeout)
        return PlaywrightPage(page)

    async def close(self) -> None:
        """Close the browser and stop Playwright. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            await self.browser.close()
        finally:
            await self.playwright.stop()
        logger.debug('Browser session closed')


async def launch(headless: bool = True, timeout: Optional[int] = None) -> PlaywrightSession:
    """Start Playwright and launch a Chromium browser."""
    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.launch(headless=headless)
    except Exception:
        await playwright.stop()
        raise
    logger.debug(f'Chromium launched (headless={headless})')
    return PlaywrightSession(playwright, browser, timeout=timeout)
