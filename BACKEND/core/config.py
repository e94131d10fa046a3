"""
Configuration classes for the Bookmark Index application

Values come from environment variables (a .env file is loaded by app.py
through python-dotenv) with sensible defaults.
"""

import os


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name, default):
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


class Config:
    """Base configuration shared by every environment"""

    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-me')
    DEBUG = False
    TESTING = False

    # Bookmark index limits
    MAX_BOOKMARKS = _env_int('MAX_BOOKMARKS', 100)
    RECENT_LIST_SIZE = _env_int('RECENT_LIST_SIZE', 20)
    LEAST_VISITED_DEFAULT = _env_int('LEAST_VISITED_DEFAULT', 5)
    SEARCH_RESULT_LIMIT = _env_int('SEARCH_RESULT_LIMIT', 8)

    # Load the sample bookmarks at startup
    SEED_SAMPLE_BOOKMARKS = _env_bool('SEED_SAMPLE_BOOKMARKS', False)

    # Timezone used for *_display timestamps in API responses
    DISPLAY_TIMEZONE = os.environ.get('DISPLAY_TIMEZONE', 'UTC')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Response compression (Flask-Compress)
    COMPRESS_MIMETYPES = ['application/json']
    COMPRESS_LEVEL = 6
    COMPRESS_MIN_SIZE = 500


class DevelopmentConfig(Config):
    DEBUG = True
    SEED_SAMPLE_BOOKMARKS = _env_bool('SEED_SAMPLE_BOOKMARKS', True)
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    pass


class TestingConfig(Config):
    TESTING = True
    SEED_SAMPLE_BOOKMARKS = False
    MAX_BOOKMARKS = 100
    RECENT_LIST_SIZE = 20


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}


def get_config(config_name='default'):
    """Return the configuration class for config_name (falls back to default)."""
    return config.get(config_name, config['default'])
