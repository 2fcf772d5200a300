"""
Pytest configuration and fixtures.
"""

import sys
import logging
import shutil
from pathlib import Path

import pytest

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)

# Add project root and tests directory to path
project_root = Path(__file__).parent.parent
for path in (project_root, Path(__file__).parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from fixtures import FakeClock, FakeWatchdog, MockSMBus  # noqa: E402

HAS_BASH = shutil.which("bash") is not None and Path("/bin/bash").exists()


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "requires_bash: mark test as requiring /bin/bash"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip tests that require a missing shell."""
    if not HAS_BASH:
        skip_bash = pytest.mark.skip(reason="/bin/bash not available")
        for item in items:
            if "requires_bash" in item.keywords:
                item.add_marker(skip_bash)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo logging configuration done by the code under test."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def clock():
    """Manually advanced clock starting at zero."""
    return FakeClock()


@pytest.fixture
def mock_bus():
    """Mock PiWatcher register file."""
    return MockSMBus()


@pytest.fixture
def fake_watchdog():
    """Watchdog with a 10 second period (5 second tick)."""
    return FakeWatchdog(period=10)


@pytest.fixture
def write_config(tmp_path):
    """Write a configuration module and return its path."""
    def _write(text: str, name: str = "config.py") -> str:
        path = tmp_path / name
        path.write_text(text)
        return str(path)
    return _write
