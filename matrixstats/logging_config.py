"""
Logging configuration for the Matrixstats API.

uvicorn access lines for polling endpoints (the health check) are dropped;
everything else goes to stdout.
"""

import logging
import logging.config
from typing import Any, Dict, Iterable

QUIET_PATHS = ("/health",)


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access-log lines for GET requests on quiet paths."""

    def __init__(self, paths: Iterable[str] = QUIET_PATHS):
        super().__init__()
        self.paths = tuple(paths)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True

        # uvicorn passes (client, method, path, http_version, status) as args
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3:
            return not (args[1] == "GET" and args[2] in self.paths)

        message = record.getMessage()
        return not ("GET" in message and any(f"{path} " in message for path in self.paths))


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Build the dictConfig used by both the app and uvicorn."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check_filter": {
                "()": HealthCheckFilter,
                "paths": QUIET_PATHS,
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout"
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_check_filter"]
            }
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": "INFO",
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": "INFO",
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration process-wide."""
    logging.config.dictConfig(get_logging_config(level))
