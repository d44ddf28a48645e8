"""Shared fixtures for the unit tests."""

from typing import Generator

import pytest
import structlog


@pytest.fixture(autouse=True)
def route_structlog_through_stdlib() -> Generator[None, None, None]:
    """Send structlog events to the standard library so caplog can assert on parser and merge warnings."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def draft_release_body() -> str:
    """Body of a draft release as GitHub returns it after an earlier merge."""
    return (
        "## Исправления\r\n"
        "- [Tabs](https://vkcom.github.io/VKUI/6.5.0/#/Tabs): поправлен фокус (#10)\r\n"
        "\r\n"
        "## Документация\r\n"
        "- Обновлены примеры (#11)\r\n"
        "\r\n"
    )
