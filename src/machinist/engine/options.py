# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/engine/options.py

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ENGINE_INSTALL_URL = "https://get.docker.com"


class EngineOptions(BaseModel):
    """Options used to install and run the container engine on a host."""

    model_config = ConfigDict(extra="allow")

    install_url: str = DEFAULT_ENGINE_INSTALL_URL
    storage_driver: str = ""                      # "" → provisioner default
    arbitrary_flags: List[str] = Field(default_factory=list)
    env: List[str] = Field(default_factory=list)
    insecure_registry: List[str] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)
    registry_mirror: List[str] = Field(default_factory=list)
    selinux_enabled: bool = False
    tls_verify: bool = True

    def uses_default_install_url(self) -> bool:
        return self.install_url == DEFAULT_ENGINE_INSTALL_URL
