"""Logging configuration"""

import logging
import sys
from logging.config import dictConfig
from typing import Any

from dockerflow import logging as dockerflow_logging

from iconfinder.configs import settings

# Third-party loggers that log every outbound request at INFO. A fully walked
# fallback chain issues a dozen of those per icon.
HTTP_CLIENT_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


def configure_logging() -> None:
    """Configure logging with MozLog or rich console output."""
    match settings.logging.format:
        case "mozlog":
            handlers = ["console-mozlog"]
        case "pretty":
            handlers = ["console-pretty"]
        case _:
            raise ValueError(
                f"Invalid log format: {settings.logging.format}."
                f" Should either be 'mozlog' or 'pretty'."
            )

    if settings.current_env.lower() == "production" and handlers != ["console-mozlog"]:
        raise ValueError("Log format must be 'mozlog' in production")

    loggers: dict[str, Any] = {
        "iconfinder": _logger_config(handlers, settings.logging.level),
        "uvicorn.error": {
            "handlers": ["uvicorn-error-handler"],
            "level": "ERROR",
            "propagate": False,
        },
    }
    for name in HTTP_CLIENT_LOGGERS:
        loggers[name] = _logger_config(handlers, settings.logging.http_client_level)

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {"format": "%(message)s"},
                "json": {
                    "()": GCPCompatibleJSONFormatter,
                    "logger_name": "iconfinder",
                },
            },
            "handlers": {
                "console-mozlog": {
                    "level": settings.logging.level,
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": sys.stdout,
                },
                "console-pretty": {
                    "level": settings.logging.level,
                    "class": "rich.logging.RichHandler",
                    "formatter": "text",
                },
                "uvicorn-error-handler": {
                    "level": "ERROR",
                    "class": "logging.StreamHandler",
                    "formatter": "text",
                    "stream": sys.stderr,
                },
            },
            "loggers": loggers,
        }
    )


def _logger_config(handlers: list[str], level: str) -> dict[str, Any]:
    return {
        "handlers": handlers,
        "level": level,
        "propagate": settings.logging.can_propagate,
    }


class GCPCompatibleJSONFormatter(dockerflow_logging.JsonLogFormatter):
    """Override the dockerflow log formatter with GCP compatible levels."""

    STACKDRIVER_LEVEL_MAP = {
        logging.CRITICAL: 600,
        logging.ERROR: 500,
        logging.WARNING: 400,
        logging.INFO: 200,
        logging.DEBUG: 100,
        logging.NOTSET: 0,
    }

    def convert_record(self, record):
        """Write the `severity` field picked up by GCP next to MozLog's `Severity`."""
        out = super().convert_record(record)
        out["severity"] = self.STACKDRIVER_LEVEL_MAP.get(record.levelno, 0)
        return out
