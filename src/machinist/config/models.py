# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/config/models.py

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


def _default_storage_path() -> Path:
    return Path.home() / ".machinist"


class SSHSettings(BaseModel):
    connect_timeout: float = 20.0
    command_timeout: Optional[float] = None   # None → wait for the command
    connect_retries: int = Field(default=30, ge=1)
    retry_delay: float = Field(default=20.0, ge=0)


class Settings(BaseModel):
    """Settings shared by the store, the SSH commander and logging."""

    storage_path: Path = Field(default_factory=_default_storage_path)
    ca_cert_path: Optional[Path] = None
    ca_private_key_path: Optional[Path] = None
    log_dir: Optional[Path] = None            # None → <storage_path>/logs
    ssh: SSHSettings = Field(default_factory=SSHSettings)

    def resolved_log_dir(self) -> Path:
        return self.log_dir or (self.storage_path / "logs")
