from classbot.browser.client import (
    BrowserPage,
    BrowserSession,
    PlaywrightPage,
    PlaywrightSession,
    launch
)
from classbot.browser.exceptions import (
    BotError,
    ConfigError,
    LoginError,
    VenueSelectionError,
    ReservationError
)

__all__ = [
    'BrowserPage',
    'BrowserSession',
    'PlaywrightPage',
    'PlaywrightSession',
    'launch',
    'BotError',
    'ConfigError',
    'LoginError',
    'VenueSelectionError',
    'ReservationError'
]
