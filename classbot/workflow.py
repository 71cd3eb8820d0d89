"""Reservation workflow: login, venue selection and one attempt per slot."""

import logging

from classbot.browser import client as browser
from classbot.browser.exceptions import (
    LoginError,
    VenueSelectionError,
    ReservationError
)

logger = logging.getLogger(__name__)


class ReservationWorkflow:
    """One end-to-end reservation attempt across every configured slot."""

    def __init__(self, settings, launcher=None):
        """
        Args:
            settings: BotSettings for this run
            launcher: Coroutine function returning a BrowserSession,
                called as launcher(headless=..., timeout=...)
        """
        self.settings = settings
        self.launcher = launcher or browser.launch

    async def login(self, page):
        """Log into the booking site. Raises LoginError on any failure."""
        try:
            logger.info('🔐 Accessing the login portal...')
            await page.goto(self.settings.login_url)
            await page.fill(browser.USERNAME_INPUT, self.settings.credentials.username)
            await page.fill(browser.PASSWORD_INPUT, self.settings.credentials.password)
            await page.click(browser.LOGIN_BUTTON, wait_for_navigation=True)
            logger.info('✅ Login successful')
        except Exception as e:
            logger.error(f'❌ Error during login: {e}')
            raise LoginError(f'Login failed: {e}') from e

    async def select_venue(self, page):
        """Pick the configured venue. Raises VenueSelectionError on any failure."""
        try:
            logger.info('🏢 Selecting the venue...')
            await page.goto(self.settings.booking_url)
            await page.wait_for_selector(browser.LOCATION_SELECTOR)
            await page.select(browser.LOCATION_SELECTOR, self.settings.venue)
            logger.info(f'📍 Venue selected: {self.settings.venue}')
        except Exception as e:
            logger.error(f'❌ Error selecting the venue: {e}')
            raise VenueSelectionError(f'Venue selection failed: {e}') from e

    async def reserve_slot(self, page, day, time):
        """Reserve a single slot. Raises ReservationError scoped to (day, time)."""
        try:
            logger.info(f'🕒 Reserving class for {day} at {time}...')
            await page.goto(self.settings.booking_url)
            await page.select(browser.DAY_SELECTOR, day)
            await page.select(browser.TIME_SELECTOR, time)
            await page.click(browser.RESERVE_BUTTON)
            await page.wait_for_selector(browser.CONFIRMATION_SELECTOR)
            logger.info(f'✅ Class reserved for {day} at {time}')
        except Exception as e:
            raise ReservationError(f'Reservation failed for {day} at {time}: {e}', day, time) from e

    async def run(self):
        """
        Run one workflow execution.

        Login and venue failures abort the run; slot failures are logged and
        skipped. The browser session is closed exactly once on every path.
        """
        logger.info('=' * 52)
        logger.info('🔄 Starting reservation run...')

        session = await self.launcher(
            headless=self.settings.headless,
            timeout=self.settings.browser_timeout
        )
        try:
            page = await session.new_page()
            await self.login(page)
            await self.select_venue(page)

            for day, time in self.settings.slots():
                try:
                    await self.reserve_slot(page, day, time)
                except ReservationError as e:
                    logger.error(f'❌ Error reserving class for {e.day} at {e.time}: {e.__cause__}')

        except (LoginError, VenueSelectionError) as e:
            logger.info(f'⏹️ Reservation run aborted: {e}')
        finally:
            await session.close()
            logger.info('✔️ Reservation run finished')
