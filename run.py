#!/usr/bin/env python3
"""ClassSniper - Entry point."""

import argparse
import logging
import sys

from classbot import create_bot, load_settings
from classbot.browser.exceptions import ConfigError
from classbot.scheduler import run_reservations_now, start_scheduler, shutdown_scheduler

# Configure logging to stdout
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stdout
)
# Reduce noise from external libraries only
logging.getLogger('asyncio').setLevel(logging.WARNING)
logging.getLogger('apscheduler').setLevel(logging.INFO)

logger = logging.getLogger('classbot')


def main():
    parser = argparse.ArgumentParser(description='Recurring class reservation bot')
    parser.add_argument(
        '--once',
        action='store_true',
        help='Run a single reservation pass now and exit',
    )
    parser.add_argument(
        '--env',
        default=None,
        help='Configuration name (development, production, testing). Defaults to BOT_ENV.',
    )
    args = parser.parse_args()

    try:
        if args.once:
            run_reservations_now(load_settings(args.env))
            return 0
        create_bot(args.env)
    except ConfigError as e:
        logger.error(f'❌ Invalid configuration: {e}')
        return 1

    try:
        start_scheduler()
    except (KeyboardInterrupt, SystemExit):
        pass
    finally:
        shutdown_scheduler()
    return 0


if __name__ == '__main__':
    sys.exit(main())
