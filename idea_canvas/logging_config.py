"""
JSON structured logging configuration using python-json-logger
"""
import logging
import logging.config
import sys
from typing import Dict, Any

import pythonjsonlogger.jsonlogger

from idea_canvas.config import get_settings


SERVICE_NAME = 'idea-canvas'

# Package logger shared by every module
logger = logging.getLogger('idea_canvas')


class CustomJsonFormatter(pythonjsonlogger.jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['service'] = SERVICE_NAME

        # Present on records logged from the ideas pipeline
        if hasattr(record, 'idea_id'):
            log_record['idea_id'] = record.idea_id


def build_logging_config(log_level: str, environment: str) -> Dict[str, Any]:
    """Build the dictConfig payload for the given level and environment"""
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'json': {
                '()': CustomJsonFormatter,
                'format': '%(asctime)s %(name)s %(levelname)s %(message)s'
            },
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            }
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': log_level,
                'formatter': 'json' if environment == 'production' else 'standard',
                'stream': sys.stdout
            }
        },
        'loggers': {
            'idea_canvas': {
                'level': log_level,
                'handlers': ['console'],
                'propagate': False
            },
            'uvicorn': {
                'level': 'INFO',
                'handlers': ['console'],
                'propagate': False
            },
            'uvicorn.access': {
                'level': 'INFO',
                'handlers': ['console'],
                'propagate': False
            }
        },
        'root': {
            'level': log_level,
            'handlers': ['console']
        }
    }


def setup_logging() -> None:
    """Setup JSON structured logging"""
    settings = get_settings()

    logging.config.dictConfig(
        build_logging_config(settings.LOG_LEVEL.upper(), settings.ENVIRONMENT)
    )

    logger.info(
        "Logging configured",
        extra={
            'log_level': settings.LOG_LEVEL,
            'environment': settings.ENVIRONMENT
        }
    )
