import os
from dotenv import load_dotenv

from classbot.browser.exceptions import ConfigError
from classbot.models import BotSettings, Credentials, TriggerSpec, parse_schedule

load_dotenv()


class Config:
    """Base configuration."""
    DEFAULT_TIMEZONE = 'America/Bogota'
    HEADLESS = True
    BROWSER_TIMEOUT = None  # milliseconds, None keeps Playwright's default

    # Trigger table (crontab day-of-week numbering, 0 = Sunday)
    TEST_TRIGGER = False
    TEST_TRIGGER_CRON = '*/1 * * * *'
    PRODUCTION_TRIGGERS = (
        '0 15 * * 1-3',
        '30 16 * * 1-3',
        '30 16 * * 5',
        '15 8 * * 6',
        '45 9 * * 6',
        '15 11 * * 6',
    )

    REQUIRED_KEYS = ('LOGIN_URL', 'BOOKING_URL', 'USUARIO', 'CONTRASENA', 'SEDE')


class DevelopmentConfig(Config):
    """Development configuration."""
    TEST_TRIGGER = True


class ProductionConfig(Config):
    """Production configuration."""
    TEST_TRIGGER = False


class TestingConfig(Config):
    """Testing configuration."""
    TEST_TRIGGER = False


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


TRUE_VALUES = ('1', 'true', 'yes', 'on')
FALSE_VALUES = ('0', 'false', 'no', 'off')


def _parse_bool(name, value, default):
    if value is None or value == '':
        return default
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ConfigError(f'{name} must be one of {", ".join(TRUE_VALUES + FALSE_VALUES)}, got {value!r}')


def _parse_timeout(value, default):
    if value is None or value == '':
        return default
    try:
        timeout = int(value)
    except ValueError:
        raise ConfigError(f'BROWSER_TIMEOUT must be an integer, got {value!r}')
    if timeout < 0:
        raise ConfigError('BROWSER_TIMEOUT must not be negative')
    return timeout


def build_triggers(cfg, timezone):
    """Build the trigger table for a config class."""
    expressions = list(cfg.PRODUCTION_TRIGGERS)
    if cfg.TEST_TRIGGER:
        expressions.insert(0, cfg.TEST_TRIGGER_CRON)
    return tuple(TriggerSpec(expr, timezone) for expr in expressions)


def load_settings(config_name=None, environ=None):
    """
    Read the environment once and return immutable BotSettings.

    Args:
        config_name: Key into `config`; defaults to BOT_ENV or 'development'
        environ: Mapping to read instead of os.environ

    Raises:
        ConfigError: A required key is missing or a value is malformed
    """
    if environ is None:
        environ = os.environ
    if config_name is None:
        config_name = environ.get('BOT_ENV', 'development')
    if config_name not in config:
        raise ConfigError(f'Unknown configuration {config_name!r}')
    cfg = config[config_name]

    missing = [key for key in cfg.REQUIRED_KEYS if not environ.get(key)]
    if missing:
        raise ConfigError(f'Missing required settings: {", ".join(missing)}')

    timezone = environ.get('TIMEZONE') or cfg.DEFAULT_TIMEZONE

    return BotSettings(
        login_url=environ['LOGIN_URL'],
        booking_url=environ['BOOKING_URL'],
        credentials=Credentials(environ['USUARIO'], environ['CONTRASENA']),
        venue=environ['SEDE'],
        schedule=parse_schedule(environ.get('HORARIOS', '[]')),
        timezone=timezone,
        headless=_parse_bool('HEADLESS', environ.get('HEADLESS'), cfg.HEADLESS),
        browser_timeout=_parse_timeout(environ.get('BROWSER_TIMEOUT'), cfg.BROWSER_TIMEOUT),
        triggers=build_triggers(cfg, timezone),
    )
