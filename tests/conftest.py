"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ppe.backend import Backend  # noqa: E402
from ppe.local_refs import LocalRefRegistry  # noqa: E402
from ppe.store import ProfileStore  # noqa: E402

CATEGORIES = ["Web Development", "Mobile Development", "Data Science", "E-commerce"]
TECHNOLOGIES = ["React", "Redux", "Vue", "Python", "Django"]


@pytest.fixture
def vocabularies() -> dict[str, list[str]]:
    return {"categories": list(CATEGORIES), "technologies": list(TECHNOLOGIES)}


@pytest.fixture
def registry() -> LocalRefRegistry:
    return LocalRefRegistry()


@pytest.fixture
def store() -> ProfileStore:
    return ProfileStore()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory so no config, vocabulary or language files exist."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def backend(workdir: Path) -> Backend:
    return Backend()
