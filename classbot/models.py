import json
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from classbot.browser.exceptions import ConfigError


@dataclass(frozen=True)
class Credentials:
    """Login credentials for the booking site."""
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class ScheduleEntry:
    """A day paired with the time slots to reserve on it."""
    day: str
    time_slots: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TriggerSpec:
    """A recurring trigger: five-field crontab expression plus timezone."""
    cron_expression: str
    timezone: str


@dataclass(frozen=True)
class BotSettings:
    """Immutable settings handed to the reservation workflow at startup."""
    login_url: str
    booking_url: str
    credentials: Credentials
    venue: str
    schedule: Tuple[ScheduleEntry, ...] = ()
    timezone: str = 'America/Bogota'
    headless: bool = True
    browser_timeout: Optional[int] = None  # milliseconds
    triggers: Tuple[TriggerSpec, ...] = ()

    def slots(self) -> Iterator[Tuple[str, str]]:
        """Yield (day, time) pairs day-major, in configuration order."""
        for entry in self.schedule:
            for time in entry.time_slots:
                yield entry.day, time


def parse_schedule(raw: Optional[str]) -> Tuple[ScheduleEntry, ...]:
    """
    Decode the HORARIOS JSON text.

    Expected shape: [{"dia": "Mon", "horas": ["10:00", "11:00"]}, ...]
    Empty or missing text means an empty schedule.
    """
    if raw is None or not raw.strip():
        return ()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f'HORARIOS is not valid JSON: {e}') from e

    if not isinstance(data, list):
        raise ConfigError('HORARIOS must be a JSON list')

    entries = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ConfigError(f'HORARIOS[{index}] must be an object')

        day = item.get('dia')
        if not isinstance(day, str) or not day:
            raise ConfigError(f'HORARIOS[{index}] is missing "dia"')

        hours = item.get('horas', [])
        if not isinstance(hours, list) or not all(isinstance(h, str) for h in hours):
            raise ConfigError(f'HORARIOS[{index}].horas must be a list of strings')

        entries.append(ScheduleEntry(day=day, time_slots=tuple(hours)))

    return tuple(entries)
