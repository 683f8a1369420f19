"""Pytest configuration shared by every test package."""

from __future__ import annotations

import os

import pytest

from tests import _ensure_repo_on_path

# Keep the application on the throwaway SQLite fallback unless a test opts in
# to something else; the settings singleton is built on first import.
os.environ.setdefault("USE_SQLITE", "true")


def pytest_configure(config: pytest.Config) -> None:
    """Hook executed by pytest prior to running any tests."""

    _ensure_repo_on_path()
