# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/config/loader.py

import logging
import os
import yaml
from pathlib import Path
from typing import Optional

from .models import Settings

log = logging.getLogger("machinist")

ENV_CONFIG_FILE = "MACHINIST_CONFIG"
ENV_STORAGE_PATH = "MACHINIST_STORAGE_PATH"


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text()
    expanded = os.path.expandvars(raw)
    return yaml.safe_load(expanded) or {}


def default_config_path() -> Path:
    env = os.environ.get(ENV_CONFIG_FILE)
    if env:
        return Path(env)
    return Path.home() / ".machinist" / "config.yaml"


def load_settings(path: Optional[str | Path] = None) -> Settings:
    """
    Load machinist settings.

    Resolution order:
      1. ``path`` if given, else ``$MACHINIST_CONFIG``, else
         ``~/.machinist/config.yaml``. A missing file means defaults.
      2. ``$MACHINIST_STORAGE_PATH`` overrides ``storage_path``.

    ``${ENV_VAR}`` placeholders in the YAML are expanded at load time.
    """
    path = Path(path) if path else default_config_path()

    data: dict = {}
    if path.is_file():
        log.debug("Loading settings from %s", path)
        data = _load_yaml(path)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
    else:
        log.debug("No settings file at %s, using defaults", path)

    storage = os.environ.get(ENV_STORAGE_PATH)
    if storage:
        data["storage_path"] = storage

    return Settings.model_validate(data)
