"""Cron scheduler firing the reservation workflow."""

import asyncio
import logging
from datetime import datetime

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from classbot.browser.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Overlapping runs are allowed; each gets its own worker thread and browser
MAX_OVERLAPPING_RUNS = 10

scheduler = BlockingScheduler(job_defaults={
    'coalesce': False,
    'max_instances': MAX_OVERLAPPING_RUNS,
})

# crontab day-of-week numbers, Sunday = 0 (7 is also accepted for Sunday)
CRON_DAY_NAMES = ['sun', 'mon', 'tue', 'wed', 'thu', 'fri', 'sat']
CRON_DAY_MAX = 7


def _day_number(value: str) -> int:
    value = value.strip().lower()
    if value.isdigit():
        number = int(value)
        if number > CRON_DAY_MAX:
            raise ConfigError(f'Day of week out of range: {value}')
        return number
    if value in CRON_DAY_NAMES:
        return CRON_DAY_NAMES.index(value)
    raise ConfigError(f'Invalid day of week: {value!r}')


def _translate_day_of_week(field: str) -> str:
    """
    Convert a crontab day-of-week field into APScheduler day names.

    APScheduler numbers days from Monday = 0, crontab from Sunday = 0, and
    their steps count from different origins. Every part (`*/N`, `a-b/N`,
    `a/N`, lists) is expanded into crontab day numbers first, then each day
    is written out by name.
    """
    if field == '*':
        return '*'

    days = set()
    for part in field.split(','):
        step = 1
        if '/' in part:
            part, raw_step = part.split('/', 1)
            if not raw_step.isdigit() or int(raw_step) == 0:
                raise ConfigError(f'Invalid day-of-week step: {raw_step!r}')
            step = int(raw_step)

        if part == '*':
            start, end = 0, CRON_DAY_MAX
        elif '-' in part:
            start, end = (_day_number(v) for v in part.split('-', 1))
            if start > end:
                raise ConfigError(f'Day-of-week range runs backwards: {part!r}')
        else:
            start = _day_number(part)
            end = CRON_DAY_MAX if step > 1 else start

        days.update(number % 7 for number in range(start, end + 1, step))

    return ','.join(CRON_DAY_NAMES[number] for number in sorted(days))


def build_trigger(spec) -> CronTrigger:
    """Build a CronTrigger from a five-field crontab TriggerSpec."""
    fields = spec.cron_expression.split()
    if len(fields) != 5:
        raise ConfigError(
            f'Cron expression must have 5 fields, got {len(fields)}: {spec.cron_expression!r}'
        )
    minute, hour, day, month, day_of_week = fields

    try:
        return CronTrigger(
            minute=minute,
            hour=hour,
            day=day,
            month=month,
            day_of_week=_translate_day_of_week(day_of_week),
            timezone=spec.timezone,
        )
    except ConfigError:
        raise
    except Exception as e:
        raise ConfigError(f'Invalid trigger {spec.cron_expression!r} ({spec.timezone}): {e}') from e


def init_scheduler(settings):
    """Register one job per configured trigger."""
    for index, spec in enumerate(settings.triggers):
        trigger = build_trigger(spec)
        job = scheduler.add_job(
            func=run_reservations,
            trigger=trigger,
            args=[settings],
            id=f'reservation_run_{index}',
            name=f'Reservation run ({spec.cron_expression})',
            replace_existing=True
        )
        next_run = trigger.get_next_fire_time(None, datetime.now(trigger.timezone))
        logger.info(f'Scheduled job: {job.name} - Next run: {next_run}')

    logger.info(f'Scheduler initialized with {len(settings.triggers)} triggers ({settings.timezone})')


def start_scheduler():
    """Block running the scheduler until the process is stopped."""
    logger.info('Scheduler starting')
    scheduler.start()


def run_reservations(settings):
    """Execute one reservation run. Called by APScheduler."""
    from classbot.workflow import ReservationWorkflow

    logger.info(f'=== RESERVATION TRIGGER at {datetime.now().strftime("%Y-%m-%d %H:%M:%S")} ===')
    try:
        asyncio.run(ReservationWorkflow(settings).run())
    except Exception as e:
        logger.exception(f'Unexpected error in reservation run: {e}')


def run_reservations_now(settings):
    """Execute one reservation run immediately (for testing)."""
    logger.info('=== Starting IMMEDIATE reservation run ===')
    run_reservations(settings)


def shutdown_scheduler():
    """Shutdown the scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info('Scheduler shut down')
