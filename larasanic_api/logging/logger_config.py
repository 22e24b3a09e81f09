"""
Logging Configuration
Rotating JSON log files with credential redaction
"""
import json
import logging
import logging.handlers
import re
from datetime import datetime
from typing import Any, List, Optional


class SensitiveDataFilter(logging.Filter):
    """
    Masks credential values in log messages

    Repositories log create/update payloads at debug level as dict
    reprs, so both 'field': 'value' and "field": "value" are matched.

    Example:
        SensitiveDataFilter().redact("{'password': 'hunter2'}")
        # "{'password': '[REDACTED]'}"
    """

    SENSITIVE_FIELDS = [
        'password', 'passwd', 'pwd', 'password_hash', 'password_confirmation',
        'api_key', 'api_secret', 'token', 'access_token', 'refresh_token',
        'secret', 'secret_key',
    ]

    def __init__(self, additional_fields: Optional[List[str]] = None):
        super().__init__()
        fields = '|'.join(re.escape(field) for field in self.SENSITIVE_FIELDS + list(additional_fields or []))
        self.pattern = re.compile(rf'''(["'](?:{fields})["']\s*:\s*)(["'])[^"']*\2''', re.IGNORECASE)

    def redact(self, text: str) -> str:
        return self.pattern.sub(r'\1\2[REDACTED]\2', text)

    def _redact_value(self, value: Any) -> Any:
        return self.redact(value) if isinstance(value, str) else value

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self._redact_value(record.msg)

        if isinstance(record.args, dict):
            record.args = {key: self._redact_value(value) for key, value in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self._redact_value(arg) for arg in record.args)

        # Never drops records, only rewrites them
        return True


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record

    Standard record fields are mapped to short keys; anything passed
    with extra={...} is copied as is (non-JSON values via str()).
    """

    # LogRecord attributes that aren't extras
    RESERVED_ATTRS = frozenset({
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'pathname', 'process', 'processName', 'relativeCreated',
        'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
        'message', 'taskName',
    })

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            entry['stack'] = self.formatStack(record.stack_info)

        entry.update(
            (key, value) for key, value in vars(record).items()
            if key not in self.RESERVED_ATTRS
        )

        return json.dumps(entry, default=str)


TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

ENVIRONMENT_LEVELS = {
    'production': logging.WARNING,
    'staging': logging.INFO,
    'development': logging.DEBUG,
    'testing': logging.ERROR,
}


class LoggerConfig:
    """Sets up package loggers from config and environment"""

    @staticmethod
    def setup_logger(
        name: str,
        format_type: str = 'json',
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
        filter_sensitive: bool = True,
        additional_sensitive_fields: Optional[List[str]] = None,
        file_name: Optional[str] = None
    ) -> logging.Logger:
        """
        Point a logger at storage/logs/<file_name or name>.log

        The level follows app.app_env; with app.app_debug on, records are
        mirrored to the console as well. Existing handlers are replaced and
        propagation is turned off.

        Args:
            name: Logger name ('larasanic_api' covers every package logger)
            format_type: 'json' or 'text'
            max_bytes: Rotate after this many bytes
            backup_count: Rotated files to keep
            filter_sensitive: Redact credential fields
            additional_sensitive_fields: More field names to redact
            file_name: Log file name without extension

        Example:
            LoggerConfig.setup_logger('larasanic_api', format_type='text')
        """
        from larasanic_api.defaults import DEFAULT_APP_ENV, DEFAULT_LOG_BACKUP_COUNT, DEFAULT_LOG_MAX_BYTES
        from larasanic_api.support import Config, EnvHelper, Storage

        app_env = Config.get('app.app_env', EnvHelper.get('APP_ENV', DEFAULT_APP_ENV))
        app_debug = Config.get('app.app_debug', EnvHelper.get_bool('APP_DEBUG', False))

        log_file = Storage.logs(f"{file_name or name}.log")
        Storage.ensure_directory(log_file.parent)

        handlers: List[logging.Handler] = [
            logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=DEFAULT_LOG_MAX_BYTES if max_bytes is None else max_bytes,
                backupCount=DEFAULT_LOG_BACKUP_COUNT if backup_count is None else backup_count,
                encoding='utf-8'
            )
        ]
        if app_debug:
            handlers.append(logging.StreamHandler())

        formatter = JSONFormatter() if format_type == 'json' else logging.Formatter(TEXT_FORMAT)
        sensitive_filter = SensitiveDataFilter(additional_sensitive_fields) if filter_sensitive else None

        logger = logging.getLogger(name)
        logger.setLevel(LoggerConfig.get_level_by_environment(app_env))
        logger.handlers.clear()
        logger.propagate = False

        for handler in handlers:
            handler.setFormatter(formatter)
            if sensitive_filter:
                handler.addFilter(sensitive_filter)
            logger.addHandler(handler)

        return logger

    @staticmethod
    def get_level_by_environment(environment: str) -> int:
        """Level for an environment name; unknown names get INFO"""
        return ENVIRONMENT_LEVELS.get(str(environment).lower(), logging.INFO)

    @staticmethod
    def setup_from_config() -> List[logging.Logger]:
        """
        Set up every logger listed under app.allowed_logging_handlers

        Example (config/app.py):
            ALLOWED_LOGGING_HANDLERS = {
                'package': {'name': 'larasanic_api', 'file_name': 'api'},
            }
        """
        from larasanic_api.defaults import DEFAULT_LOGGING_HANDLERS
        from larasanic_api.support import Config

        handlers = Config.get('app.allowed_logging_handlers', DEFAULT_LOGGING_HANDLERS)

        return [
            LoggerConfig.setup_logger(
                name=handler['name'],
                format_type=handler.get('format_type', 'json'),
                filter_sensitive=handler.get('filter_sensitive', True),
                additional_sensitive_fields=handler.get('additional_sensitive_fields'),
                file_name=handler.get('file_name'),
            )
            for handler in handlers.values()
        ]
