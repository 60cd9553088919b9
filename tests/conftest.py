"""Shared fixtures for gcms-migrate tests."""

import pytest

from gcms_migrate import Migration
from gcms_migrate.builder import ChangeLog, ModelBuilder
from gcms_migrate.core import configure_logging
from gcms_migrate.transport import MockTransport


@pytest.fixture
def change_log():
    """Create an empty change log."""
    return ChangeLog()


@pytest.fixture
def post_builder(change_log):
    """Create a builder for the ``Post`` model registering into ``change_log``."""
    return ModelBuilder(change_log, "Post")


@pytest.fixture
def migration():
    """Create an empty named migration session."""
    return Migration(name="test-migration")


@pytest.fixture
def mock_transport():
    """Create an in-memory transport that succeeds on the first poll."""
    return MockTransport()


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Route structured logs through stdlib logging, away from command output."""
    configure_logging(environment="testing", log_level="WARNING")
