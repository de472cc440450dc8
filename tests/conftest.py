"""Pytest configuration: local package imports and a headless Qt platform."""
from __future__ import annotations

import itertools
import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def _ensure_repo_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    repo_str = str(repo_root)
    if repo_str not in sys.path:
        sys.path.insert(0, repo_str)


_ensure_repo_on_syspath()

from roomkit import PlacementController, RoomConfig, RoomEditor, preset  # noqa: E402


@pytest.fixture
def room():
    return RoomConfig()


@pytest.fixture
def placement(room):
    return PlacementController(room, preset("med"))


@pytest.fixture
def editor():
    counter = itertools.count(1)
    return RoomEditor(preset_name="med", id_factory=lambda t: f"{t}-{next(counter)}")


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
