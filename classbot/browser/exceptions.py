"""Custom exceptions for the reservation bot."""


class BotError(Exception):
    """Base exception for reservation bot errors."""
    pass


class ConfigError(BotError):
    """Missing or malformed configuration."""
    pass


class LoginError(BotError):
    """Failed to login to the booking site."""
    pass


class VenueSelectionError(BotError):
    """Failed to select the venue on the booking page."""
    pass


class ReservationError(BotError):
    """Failed to reserve a single (day, time) slot."""

    def __init__(self, message, day, time):
        super().__init__(message)
        self.day = day
        self.time = time
