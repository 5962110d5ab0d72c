"""Pytest Configuration and Shared Fixtures

This file is automatically loaded by pytest and makes all fixtures available to all tests.
"""
import os
import tempfile
from pathlib import Path

import pytest

# Keep logs and the default database out of the working tree; must run
# before gaitlab is imported
_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="gaitlab-tests-"))
os.environ.setdefault("LOGGER__FILE_PATH", str(_TEST_DATA_DIR / "logs" / "test.log"))
os.environ.setdefault("DATABASE__URL", f"sqlite:///{_TEST_DATA_DIR / 'default.db'}")

# Import all fixture modules to register them
pytest_plugins = [
    "tests.fixtures.database",
    "tests.fixtures.gait_data",
]


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Integration tests through the HTTP app or CLI"
    )
    config.addinivalue_line(
        "markers",
        "unit: Unit tests of a single component"
    )
    config.addinivalue_line(
        "markers",
        "db: Tests requiring a database"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if "db_engine" in item.fixturenames:
            item.add_marker(pytest.mark.db)


@pytest.fixture
def captured_logs(caplog):
    """Capture loguru messages through the standard caplog fixture."""
    from loguru import logger

    handler_id = logger.add(caplog.handler, format="{message}", level="DEBUG")
    yield caplog
    logger.remove(handler_id)
