# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Unit tests for the config_logging.py module."""

import logging
from typing import Any

import pytest

from iconfinder.configs import settings
from iconfinder.configs.app_configs.config_logging import (
    GCPCompatibleJSONFormatter,
    configure_logging,
)


def test_configure_logging_invalid_format() -> None:
    """Test that configure_logging will raise a ValueError when encountering unknown log
    formats.
    """
    old_format = settings.logging.format
    settings.logging.format = "invalid"

    with pytest.raises(ValueError) as excinfo:
        configure_logging()

    assert "Invalid log format:" in str(excinfo)

    settings.logging.format = old_format


def test_configure_logging_mozlog_production() -> None:
    """Test that configure_logging will raise a ValueError when using a format other
    than 'mozlog' in production.
    """
    with settings.using_env("production"):
        old_format = settings.logging.format
        settings.logging.format = "pretty"

        with pytest.raises(ValueError) as excinfo:
            configure_logging()

        assert "Log format must be 'mozlog' in production" in str(excinfo)

        settings.logging.format = old_format


@pytest.mark.parametrize(
    ("log_format", "handler_name"),
    [("mozlog", "console-mozlog"), ("pretty", "console-pretty")],
)
def test_configure_log_handler_assigned(log_format: str, handler_name: str) -> None:
    """Test that the log handler matches the configured format."""
    old_format = settings.logging.format
    settings.logging.format = log_format
    configure_logging()

    log_manager: Any = logging.root.manager
    assert log_manager.loggerDict["iconfinder"].handlers[0].name == handler_name

    settings.logging.format = old_format
    configure_logging()


def test_configure_logging_quiets_http_client() -> None:
    """Test that the HTTP client libraries log at their own level."""
    configure_logging()

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
    assert logging.getLogger("iconfinder").level == logging.DEBUG


def test_gcp_compatible_formatter_severity() -> None:
    """Test that JSON log records carry a GCP severity."""
    formatter = GCPCompatibleJSONFormatter(logger_name="iconfinder")
    record = logging.LogRecord(
        name="iconfinder.icons.resolver",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="No icon found for ex.com",
        args=None,
        exc_info=None,
    )

    converted = formatter.convert_record(record)

    assert converted["severity"] == 400
    assert converted["Logger"] == "iconfinder"
