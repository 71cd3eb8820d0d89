from classbot.config import load_settings

__version__ = '1.0.0'


def create_bot(config_name=None):
    """Bot factory: load settings and register every trigger."""
    from classbot.scheduler import init_scheduler

    settings = load_settings(config_name)
    init_scheduler(settings)
    return settings
