"""
Pytest fixtures for termprobe tests.

Test imports use the src/termprobe/ package via --import-mode=importlib (see pyproject.toml).
The CLI is additionally exercised end-to-end via subprocess.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from termprobe import probe
from termprobe.settings import ENV_OVERRIDES
from termprobe.snapshot import TRACKED_VARIABLES, EnvironmentSnapshot


# ═══════════════════════════════════════════════════════════════════════════════
# Path Constants
# ═══════════════════════════════════════════════════════════════════════════════

PROJECT_ROOT = Path(__file__).parent.parent
SRC_DIR = PROJECT_ROOT / "src"


# ═══════════════════════════════════════════════════════════════════════════════
# Snapshot Fixtures
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def make_snapshot():
    """Factory building an EnvironmentSnapshot from keyword arguments."""

    def _make(**values):
        return EnvironmentSnapshot.from_mapping(values)

    return _make


@pytest.fixture
def empty_snapshot():
    """Snapshot with no tracked variable set."""
    return EnvironmentSnapshot.from_mapping({})


# ═══════════════════════════════════════════════════════════════════════════════
# Environment Isolation
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every tracked and TERMPROBE_* variable from os.environ."""
    for name in (*TRACKED_VARIABLES, *ENV_OVERRIDES):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_report_cache():
    """Make sure no test sees another test's cached report."""
    probe.invalidate_cache()
    yield
    probe.invalidate_cache()


# ═══════════════════════════════════════════════════════════════════════════════
# Subprocess Helpers
# ═══════════════════════════════════════════════════════════════════════════════


def _subprocess_env(extra=None):
    """Minimal environment for running termprobe in a child interpreter."""
    env = {"PYTHONPATH": str(SRC_DIR)}
    # Windows needs SYSTEMROOT to start Python at all
    if "SYSTEMROOT" in os.environ:
        env["SYSTEMROOT"] = os.environ["SYSTEMROOT"]
    if extra:
        env.update(extra)
    return env


@pytest.fixture
def run_termprobe():
    """Run `python -m termprobe` with a controlled environment."""

    def _run(env=None, args=None, **kwargs):
        return subprocess.run(
            [sys.executable, "-m", "termprobe", *(args or [])],
            capture_output=True,
            text=True,
            env=_subprocess_env(env),
            timeout=30,
            **kwargs,
        )

    return _run


@pytest.fixture
def child_env():
    """Factory for the minimal environment of a child interpreter."""
    return _subprocess_env
