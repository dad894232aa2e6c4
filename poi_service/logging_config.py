"""
Logging configuration utility - configures logging from application settings
"""
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from poi_service.config import Settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Loggers that flood the console with connection and SQL chatter
NOISY_LOGGERS = ['asyncpg', 'asyncpg.pool', 'sqlalchemy.engine', 'sqlalchemy.pool', 'multipart']


class JSONFormatter(logging.Formatter):
    """One JSON object per log line"""

    def format(self, record):
        log_entry = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(settings: Settings) -> None:
    """Configure root logging: stdout plus a rotating log file."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)
    
    if settings.log_file:
        logs_dir = os.path.dirname(settings.log_file)
        if logs_dir:
            os.makedirs(logs_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.log_file,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding='utf-8'
        )
        if settings.log_json_format:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)
    
    root_logger.setLevel(log_level)
    
    if not settings.debug:
        for noisy_logger in NOISY_LOGGERS:
            logging.getLogger(noisy_logger).setLevel(logging.WARNING)
    
    logging.getLogger(__name__).info(
        f"Logging configured: file={settings.log_file or '-'}, "
        f"level={settings.log_level.upper()}, json={settings.log_json_format}"
    )
