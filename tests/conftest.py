"""
Pytest fixtures for the archive conversion test suite.

Provides:
- Structured logging configured once per session, context cleared per test
- The shipped default configuration and a resolver built from it
- Per-test DiagnosticLog, seeded IdentityRegistry and ConversionContext
- A DeterministicClock so container location start dates are stable
"""

import json
import logging
import random
from io import StringIO

import pytest

from archive_config import get_active_config
from archive_config.bridges import build_enum_resolver
from archive_convert.converters import ConversionContext
from archive_convert.mapping.identity import IdentityRegistry
from archive_kernel.domain.clock import DeterministicClock
from archive_kernel.domain.diagnostics import DiagnosticLog
from archive_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture archive_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, service):
            service.run(records)
            logs = captured_logs()
            assert any(r["message"] == "run_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("archive_kernel")
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)


# =============================================================================
# Configuration fixtures
# =============================================================================


@pytest.fixture(scope="session")
def default_config():
    return get_active_config()


@pytest.fixture
def resolver(default_config):
    """Fresh resolver per test; dynamic lists are mutable."""
    return build_enum_resolver(default_config)


# =============================================================================
# Run fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    return DeterministicClock()


@pytest.fixture
def diagnostics():
    return DiagnosticLog()


@pytest.fixture
def registry(diagnostics):
    return IdentityRegistry(diagnostics, rng=random.Random(1234))


@pytest.fixture
def ctx(resolver, registry, diagnostics, default_config, deterministic_clock):
    return ConversionContext(
        resolver=resolver,
        registry=registry,
        sink=diagnostics,
        settings=default_config.settings,
        clock=deterministic_clock,
    )
