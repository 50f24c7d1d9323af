# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/persist/filestore.py

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

import pydantic

from machinist.errors import HostConfigError, HostNotFoundError
from machinist.host.models import HostRecord

log = logging.getLogger("machinist")

CONFIG_FILE = "config.json"


class Filestore:
    """
    Keeps one directory per machine under ``<path>/machines``:

        <path>/machines/<name>/config.json

    The directory is the source of truth for whether a machine exists.
    """

    def __init__(
        self,
        path: str | Path,
        ca_cert_path: Optional[str | Path] = None,
        ca_private_key_path: Optional[str | Path] = None,
    ):
        self.path = Path(path)
        self.ca_cert_path = Path(ca_cert_path) if ca_cert_path else None
        self.ca_private_key_path = Path(ca_private_key_path) if ca_private_key_path else None

    @property
    def machines_dir(self) -> Path:
        return self.path / "machines"

    def _host_path(self, name: str) -> Path:
        if not name or name in (".", "..") or "/" in name or os.sep in name:
            raise ValueError(f"Invalid machine name: {name!r}")
        return self.machines_dir / name

    # ------------------ file helpers ------------------

    def _save_to_file(self, data: str, path: Path) -> None:
        """
        Write ``data`` to ``path`` so readers see either the old or the new
        document, never a torn one.
        """
        try:
            os.stat(path)
        except FileNotFoundError:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            return

        fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            # os.replace swaps the file in one step; the target is never missing
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    # ------------------ public API ------------------

    def list(self) -> List[str]:
        try:
            entries = list(os.scandir(self.machines_dir))
        except FileNotFoundError:
            return []

        return sorted(
            e.name for e in entries
            if e.is_dir(follow_symlinks=False) and not e.name.startswith(".")
        )

    def exists(self, name: str) -> bool:
        try:
            os.stat(self._host_path(name))
        except FileNotFoundError:
            return False
        return True

    def save(self, record: HostRecord) -> None:
        data = json.dumps(record.model_dump(mode="json"), indent=4)

        host_path = self._host_path(record.name)
        host_path.mkdir(mode=0o700, parents=True, exist_ok=True)

        self._save_to_file(data, host_path / CONFIG_FILE)
        log.debug("Saved machine %s to %s", record.name, host_path)

    def load(self, name: str) -> HostRecord:
        host_path = self._host_path(name)
        try:
            os.stat(host_path)
        except FileNotFoundError:
            raise HostNotFoundError(name) from None

        raw = (host_path / CONFIG_FILE).read_bytes()
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise HostConfigError(name, str(e)) from e

        if not isinstance(data, dict):
            raise HostConfigError(name, f"expected a JSON object, got {type(data).__name__}")

        # The directory name is the identity; the document can only override it
        # with a real value.
        if not data.get("name"):
            data["name"] = name

        try:
            return HostRecord.model_validate(data)
        except pydantic.ValidationError as e:
            raise HostConfigError(name, str(e)) from e

    def remove(self, name: str) -> None:
        host_path = self._host_path(name)
        try:
            shutil.rmtree(host_path)
        except FileNotFoundError:
            log.debug("Machine %s already removed", name)
            return
        log.debug("Removed machine %s", name)
