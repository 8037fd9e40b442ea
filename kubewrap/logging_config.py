"""
Logging configuration with job poll noise suppression
"""

import logging
import logging.config
from typing import Dict, Any

POLL_LOGGER = "kubewrap.cli.poll"


class JobPollFilter(logging.Filter):
    """Filter to suppress routine job poll logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Drop INFO poll records that only report a still-running job."""
        if record.name == POLL_LOGGER and record.levelno == logging.INFO:
            return getattr(record, "job_status", None) not in ("active", "unknown")
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with poll suppression."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "job_poll_filter": {
                "()": JobPollFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
                "filters": [] if level == "DEBUG" else ["job_poll_filter"]
            }
        },
        "loggers": {
            "kubewrap": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
