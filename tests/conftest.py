"""Pytest fixtures for ClassSniper tests."""

import pytest

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from classbot.models import BotSettings, Credentials, ScheduleEntry, TriggerSpec


class FakePage:
    """In-memory BrowserPage that records calls and fails on chosen selectors."""

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on or {}

    def _maybe_fail(self, action, target):
        error = self.fail_on.get((action, target))
        if callable(error):
            error = error()
        if error is not None:
            raise error

    async def goto(self, url):
        self.calls.append(('goto', url))
        self._maybe_fail('goto', url)

    async def fill(self, selector, text):
        self.calls.append(('fill', selector, text))
        self._maybe_fail('fill', selector)

    async def click(self, selector, wait_for_navigation=False):
        self.calls.append(('click', selector, wait_for_navigation))
        self._maybe_fail('click', selector)

    async def select(self, selector, value):
        self.calls.append(('select', selector, value))
        self._maybe_fail('select', (selector, value))
        self._maybe_fail('select', selector)

    async def wait_for_selector(self, selector):
        self.calls.append(('wait_for_selector', selector))
        self._maybe_fail('wait_for_selector', selector)


class FakeSession:
    """In-memory BrowserSession handing out a single FakePage."""

    def __init__(self, page):
        self.page = page
        self.close_count = 0

    async def new_page(self):
        return self.page

    async def close(self):
        self.close_count += 1


class FakeLauncher:
    """Callable standing in for classbot.browser.launch."""

    def __init__(self, session):
        self.session = session
        self.calls = []

    async def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return self.session


@pytest.fixture
def settings():
    """Settings with one day and two time slots."""
    return BotSettings(
        login_url='https://gym.example.com/login',
        booking_url='https://gym.example.com/booking',
        credentials=Credentials('user@example.com', 'secret'),
        venue='centro',
        schedule=(ScheduleEntry('Mon', ('10:00', '11:00')),),
        timezone='America/Bogota',
        triggers=(
            TriggerSpec('*/1 * * * *', 'America/Bogota'),
            TriggerSpec('0 15 * * 1-3', 'America/Bogota'),
        ),
    )


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def fake_session(fake_page):
    return FakeSession(fake_page)


@pytest.fixture
def fake_launcher(fake_session):
    return FakeLauncher(fake_session)


@pytest.fixture
def bot_environ():
    """Minimal environment accepted by load_settings."""
    return {
        'LOGIN_URL': 'https://gym.example.com/login',
        'BOOKING_URL': 'https://gym.example.com/booking',
        'USUARIO': 'user@example.com',
        'CONTRASENA': 'secret',
        'SEDE': 'centro',
        'HORARIOS': '[{"dia": "Mon", "horas": ["10:00", "11:00"]}, {"dia": "Tue", "horas": ["07:00"]}]',
    }
