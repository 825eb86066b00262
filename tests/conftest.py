"""
Shared test fixtures and sample inputs for unitfmt tests.

Sample command outputs are defined here as module-level constants so
unit and integration tests exercise the same realistic text.
"""

import pytest

from unitfmt.config import UnitfmtConfig

# ---------------------------------------------------------------------------
# Sample inputs -- shaped like the output of df(1) and ls(1)
# ---------------------------------------------------------------------------
DF_OUTPUT = (
    "Filesystem     1B-blocks       Used   Available Use% Mounted on\n"
    "/dev/sda1    52576092160 8589934592 41270575104  18% /\n"
    "tmpfs         8246681600          0  8246681600   0% /dev/shm\n"
)

LS_LINE = "-rw-r--r-- 1 root root 4096 Oct 16 22:42 notes.txt"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def make_config():
    """Build a UnitfmtConfig from keyword options (aliases allowed)."""

    def _make(**options) -> UnitfmtConfig:
        return UnitfmtConfig.model_validate(options)

    return _make


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs the CLI end to end)",
    )
