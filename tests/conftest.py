"""Shared test fixtures for all test modules."""

import pytest
import structlog

from storydeck.core.state_machine import ViewStateMachine
from storydeck.models.config import Config


@pytest.fixture(autouse=True)
def silent_structlog():
    """Discard log events so they do not mix with command output."""
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())
    yield
    structlog.reset_defaults()


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def fixed_clock():
    """Clock frozen at a known instant (seconds since the epoch)."""
    return lambda: 1700000000.5


@pytest.fixture
def machine(config):
    """Fresh state machine in the Idle stage."""
    return ViewStateMachine(config=config)
