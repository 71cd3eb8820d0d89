"""Tests for settings data structures and schedule parsing."""

import dataclasses

import pytest

from classbot.models import (
    BotSettings, Credentials, ScheduleEntry, parse_schedule
)
from classbot.browser.exceptions import ConfigError


class TestParseSchedule:
    """Tests for HORARIOS decoding."""

    def test_parses_days_and_hours_in_order(self):
        """Should keep configuration order for days and hours."""
        raw = '[{"dia": "Mon", "horas": ["10:00", "11:00"]}, {"dia": "Sat", "horas": ["08:15"]}]'
        schedule = parse_schedule(raw)

        assert schedule == (
            ScheduleEntry('Mon', ('10:00', '11:00')),
            ScheduleEntry('Sat', ('08:15',)),
        )

    def test_empty_text_is_empty_schedule(self):
        """Should treat missing or blank text as no schedule."""
        assert parse_schedule(None) == ()
        assert parse_schedule('') == ()
        assert parse_schedule('[]') == ()

    def test_missing_horas_defaults_to_no_slots(self):
        """Should accept a day without hours."""
        assert parse_schedule('[{"dia": "Mon"}]') == (ScheduleEntry('Mon', ()),)

    def test_invalid_json_raises(self):
        """Should raise ConfigError for malformed JSON."""
        with pytest.raises(ConfigError):
            parse_schedule('[{"dia": ')

    def test_non_list_raises(self):
        """Should reject a top-level object."""
        with pytest.raises(ConfigError):
            parse_schedule('{"dia": "Mon", "horas": []}')

    def test_missing_day_raises(self):
        """Should reject an entry without dia."""
        with pytest.raises(ConfigError):
            parse_schedule('[{"horas": ["10:00"]}]')

    def test_non_string_hours_raise(self):
        """Should reject hours that are not strings."""
        with pytest.raises(ConfigError):
            parse_schedule('[{"dia": "Mon", "horas": [10]}]')


class TestBotSettings:
    """Tests for BotSettings."""

    def test_slots_are_day_major(self, settings):
        """Should yield every pair day-major, time-minor."""
        settings = dataclasses.replace(settings, schedule=(
            ScheduleEntry('Mon', ('10:00', '11:00')),
            ScheduleEntry('Fri', ('16:30',)),
        ))
        assert list(settings.slots()) == [
            ('Mon', '10:00'), ('Mon', '11:00'), ('Fri', '16:30')
        ]

    def test_settings_are_immutable(self, settings):
        """Should not allow mutation after construction."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.venue = 'norte'

    def test_password_hidden_from_repr(self):
        """Should never print the password."""
        credentials = Credentials('user', 'hunter2')
        assert 'hunter2' not in repr(credentials)
