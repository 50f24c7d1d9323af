# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/host/models.py

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from machinist.engine.options import EngineOptions

CONFIG_VERSION = 3


class AuthOptions(BaseModel):
    """Paths of the TLS material used to talk to the host's engine."""

    model_config = ConfigDict(extra="allow")

    store_path: Optional[str] = None
    ca_cert_path: Optional[str] = None
    ca_private_key_path: Optional[str] = None
    server_cert_path: Optional[str] = None
    server_key_path: Optional[str] = None
    client_cert_path: Optional[str] = None
    client_key_path: Optional[str] = None


class HostOptions(BaseModel):
    model_config = ConfigDict(extra="allow")

    driver: str = ""
    memory: int = 0
    disk: int = 0
    engine: EngineOptions = Field(default_factory=EngineOptions)
    auth: AuthOptions = Field(default_factory=AuthOptions)


class HostRecord(BaseModel):
    """
    Persisted configuration of one machine.

    ``driver`` is the provider driver's own settings and is stored as-is.
    Unknown top-level keys survive a load/save cycle.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    config_version: int = CONFIG_VERSION
    driver_name: str = ""
    driver: Dict[str, Any] = Field(default_factory=dict)
    host_options: HostOptions = Field(default_factory=HostOptions)
