"""Logging configuration."""

import os
import json
import logging
import logging.config
from datetime import datetime

from ordersync.config import DEFAULT_ADMIN_PASSWORD

MASK = '***'

# Attributes every LogRecord carries; anything else was passed through ``extra``
_RESERVED_ATTRS = (
    'args', 'asctime', 'created', 'exc_info', 'exc_text', 'filename',
    'funcName', 'id', 'levelname', 'levelno', 'lineno', 'module',
    'msecs', 'message', 'msg', 'name', 'pathname', 'process',
    'processName', 'relativeCreated', 'stack_info', 'thread', 'threadName',
    'taskName',
)

class JSONFormatter(logging.Formatter):
    """One JSON object per line, tagged with the application name and version."""

    def __init__(self, app_name=None, version=None, **kwargs):
        super().__init__(**kwargs)
        self.app_name = app_name
        self.version = version

    def format(self, record):
        log_data = {
            'timestamp': datetime.utcnow().isoformat(),
            'level': record.levelname,
            'name': record.name,
            'message': record.getMessage(),
        }
        if self.app_name:
            log_data['app'] = self.app_name
        if self.version:
            log_data['version'] = self.version

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)

class SecretMaskingFilter(logging.Filter):
    """Replace configured secrets in every record with ``***``.

    The SQL Server driver echoes connection details in some error messages;
    this keeps the source password out of app.log whichever module logs it.
    """

    def __init__(self, secrets=()):
        super().__init__()
        self.secrets = [secret for secret in secrets if secret]

    def filter(self, record):
        if not self.secrets:
            return True

        message = record.getMessage()
        masked = message
        for secret in self.secrets:
            masked = masked.replace(secret, MASK)
        if masked != message:
            record.msg = masked
            record.args = None
        return True

def _secrets(app):
    """Configured passwords worth masking; the stock admin default is not one."""
    secrets = [app.config.get('SQLSERVER_PASSWORD')]
    admin_password = app.config.get('ADMIN_PASSWORD')
    if admin_password != DEFAULT_ADMIN_PASSWORD:
        secrets.append(admin_password)
    return secrets

def build_logging_config(app, log_dir):
    """dictConfig for console, app.log and error.log."""
    log_level = app.config.get('LOG_LEVEL', 'INFO').upper()
    formatter = 'json' if app.config.get('LOG_FORMAT', 'json') == 'json' else 'standard'
    handler_defaults = {'formatter': formatter, 'filters': ['mask_secrets']}

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'json': {
                '()': JSONFormatter,
                'app_name': app.config.get('APP_NAME'),
                'version': app.config.get('VERSION'),
            }
        },
        'filters': {
            'mask_secrets': {
                '()': SecretMaskingFilter,
                'secrets': _secrets(app),
            }
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': log_level,
                **handler_defaults,
            },
            'file': {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': log_level,
                'filename': os.path.join(log_dir, 'app.log'),
                'maxBytes': 10485760,  # 10 MB
                'backupCount': 5,
                **handler_defaults,
            },
            'error_file': {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': 'ERROR',
                'filename': os.path.join(log_dir, 'error.log'),
                'maxBytes': 10485760,  # 10 MB
                'backupCount': 5,
                **handler_defaults,
            }
        },
        'loggers': {
            '': {  # Root logger
                'handlers': ['console', 'file', 'error_file'],
                'level': log_level,
            },
            'werkzeug': {
                'level': 'WARNING',
                'handlers': ['console'],
                'propagate': False
            },
            # Job execution chatter; sync progress is logged by ordersync.tasks
            'apscheduler': {
                'level': 'WARNING',
            }
        }
    }

def setup_logging(app):
    """Setup logging for the application."""
    log_dir = app.config.get('LOG_DIR') or os.path.join(app.root_path, '..', 'logs')
    os.makedirs(log_dir, exist_ok=True)

    logging.config.dictConfig(build_logging_config(app, log_dir))

    app.logger.info(f"Logging set up with level {app.config.get('LOG_LEVEL', 'INFO').upper()}")
