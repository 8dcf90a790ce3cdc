import os

DEFAULT_ADMIN_PASSWORD = 'password'


def _env_bool(name, default='true'):
    return os.environ.get(name, default).lower() == 'true'


class Config:
    """Base configuration for the application."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-please-change-in-production'
    DEBUG = False
    TESTING = False

    # Database settings (local replica + job logs)
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///app.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FORMAT = os.environ.get('LOG_FORMAT', 'json')

    # Upstream SQL Server (source of vwZSDOrder_Advanced)
    SQLSERVER_HOST = os.environ.get('SQLSERVER_HOST')
    SQLSERVER_PORT = int(os.environ.get('SQLSERVER_PORT', 1433))
    SQLSERVER_USERNAME = os.environ.get('SQLSERVER_USERNAME')
    SQLSERVER_PASSWORD = os.environ.get('SQLSERVER_PASSWORD')
    SQLSERVER_DATABASE = os.environ.get('SQLSERVER_DATABASE', 'ProcessStatus')
    SQLSERVER_TIMEOUT = int(os.environ.get('SQLSERVER_TIMEOUT', 30))
    SQLSERVER_LOGIN_TIMEOUT = int(os.environ.get('SQLSERVER_LOGIN_TIMEOUT', 30))
    SQLSERVER_CHARSET = os.environ.get('SQLSERVER_CHARSET', 'UTF-8')

    # Shared admin credentials for the web UI (HTTP Basic)
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', DEFAULT_ADMIN_PASSWORD)

    # Sync scheduling
    SYNC_ENABLED = _env_bool('SYNC_ENABLED')
    SYNC_SCHEDULE = os.environ.get('SYNC_SCHEDULE', '*/5 * * * *')
    SYNC_RETRY_ATTEMPTS = int(os.environ.get('SYNC_RETRY_ATTEMPTS', 3))
    SYNC_RETRY_DELAY_SECONDS = int(os.environ.get('SYNC_RETRY_DELAY_SECONDS', 30))
    JOB_LOG_RETENTION_DAYS = int(os.environ.get('JOB_LOG_RETENTION_DAYS', 90))

    # Listing
    OPEN_ORDERS_PER_PAGE = 50
    JOB_LOGS_PER_PAGE = 25
    CSV_EXPORT_LIMIT = 1000

    # Flask-APScheduler
    SCHEDULER_API_ENABLED = False

    # Application settings
    VERSION = '1.0.0'
    APP_NAME = 'Open Orders'


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True

    # Use SQLite for development
    SQLALCHEMY_DATABASE_URI = os.environ.get('DEV_DATABASE_URL') or 'sqlite:///dev.db'
    LOG_FORMAT = os.environ.get('LOG_FORMAT', 'standard')


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    DEBUG = True

    # Use in-memory SQLite for testing
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    SYNC_ENABLED = False
    SYNC_RETRY_DELAY_SECONDS = 0


class ProductionConfig(Config):
    """Production configuration."""

    # Ensure proper secret key is set
    SECRET_KEY = os.environ.get('SECRET_KEY')

    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True


# Configuration dictionary
config_dict = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}

def get_config(config_name=None):
    """Get configuration class based on environment."""
    if not config_name:
        config_name = os.environ.get('FLASK_ENV', 'default')
    return config_dict.get(config_name, config_dict['default'])
