"""Root conftest: load test environment variables and configure structlog for tests."""

from pathlib import Path

import pytest
import structlog
from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env.tests")

# Configure structlog to route through stdlib logging so caplog works in tests.
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)

_ASCND_ENV_VARS = ("ASCND_API_KEY", "ASCND_BASE_URL", "ASCND_TIMEOUT_SECONDS")


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Prevent context leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def _isolate_ascnd_env(monkeypatch):
    """Keep a developer's real ASCND_* variables out of the tests."""
    for name in _ASCND_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
