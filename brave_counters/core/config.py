import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """
    Base configuration for the BRAVE Counters service.
    Everything is read from environment variables (or a .env file) once at import.
    """
    # Storage
    DATA_DIR = os.getenv('DATA_DIR', os.path.join(os.getcwd(), 'data'))
    DATA_FILE = os.getenv('DATA_FILE', os.path.join(DATA_DIR, 'db.json'))
    LOG_DB = os.getenv('LOG_DB', os.path.join(DATA_DIR, 'activity_log.db'))

    # Server
    PORT = int(os.getenv('PORT', '3000'))
    BASE_URL = os.getenv('BASE_URL', f'http://localhost:{PORT}').rstrip('/')

    # MailerLite
    PROVIDER_API_URL = os.getenv('MAILERLITE_API_URL', 'https://api.mailerlite.com/api/v2').rstrip('/')
    PROVIDER_TIMEOUT = float(os.getenv('PROVIDER_TIMEOUT', '10'))

    # Refresh cycle
    REFRESH_INTERVAL = int(os.getenv('REFRESH_INTERVAL', '600'))  # every 10 minutes on the clock
    REFRESH_MAX_WORKERS = int(os.getenv('REFRESH_MAX_WORKERS', '4'))
    REFRESH_ON_STARTUP = _env_bool('REFRESH_ON_STARTUP', True)
    SCHEDULER_ENABLED = _env_bool('SCHEDULER_ENABLED', True)

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_RETENTION_DAYS = int(os.getenv('LOG_RETENTION_DAYS', '30'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then default"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return default
