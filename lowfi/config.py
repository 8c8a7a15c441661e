"""Environment switches and the directories used for persistence."""

from __future__ import annotations

import os
from pathlib import Path

import platformdirs

APP_NAME = "lowfi"


def env(name: str) -> bool:
    """Return whether the environment variable ``name`` is set to ``1``."""
    return os.environ.get(name) == "1"


def data_dir() -> Path:
    """The per-user data directory for track lists and bookmarks."""
    return platformdirs.user_data_path(APP_NAME, appauthor=False, roaming=True)


def config_dir() -> Path:
    """The per-user configuration directory, home of the saved volume."""
    return platformdirs.user_config_path(APP_NAME, appauthor=False, roaming=True)