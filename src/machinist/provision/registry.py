# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/provision/registry.py

from __future__ import annotations

import logging
import shlex
from typing import Dict, List, Optional

from machinist.drivers.driver import Driver
from machinist.errors import UnknownProvisionerError
from .commander import Commander
from .interface import Provisioner, ProvisionerFactory
from .rancheros import OS_RELEASE_ID as RANCHEROS_ID, RancherProvisioner

log = logging.getLogger("machinist")


def parse_os_release(content: str) -> Dict[str, str]:
    """
    Parse /etc/os-release ``KEY=value`` lines. Quotes are stripped.
    """
    info: Dict[str, str] = {}
    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        try:
            parts = shlex.split(value)
        except ValueError:
            parts = [value.strip("\"'")]
        info[key.strip()] = " ".join(parts)
    return info


class ProvisionerRegistry:
    """
    Maps OS release ids to provisioner factories. Built once at startup
    and passed to whoever needs to create provisioners.
    """

    def __init__(self):
        self._factories: Dict[str, ProvisionerFactory] = {}

    def register(self, os_release_id: str, factory: ProvisionerFactory) -> None:
        if os_release_id in self._factories:
            raise ValueError(f"Provisioner already registered for {os_release_id!r}")
        self._factories[os_release_id] = factory

    def names(self) -> List[str]:
        return sorted(self._factories)

    def new(self, os_release_id: str, driver: Driver, commander: Commander) -> Provisioner:
        factory = self._factories.get(os_release_id)
        if factory is None:
            raise UnknownProvisionerError(os_release_id)
        return factory(driver, commander)

    def detect(self, driver: Driver, commander: Commander) -> Provisioner:
        """
        Read /etc/os-release on the host and build the matching provisioner.
        """
        info = parse_os_release(commander.run("cat /etc/os-release"))
        os_id: Optional[str] = info.get("ID")
        log.debug("[%s] Detected OS id=%s", driver.get_machine_name(), os_id)
        if os_id is None:
            raise UnknownProvisionerError(None)
        return self.new(os_id, driver, commander)


def default_registry() -> ProvisionerRegistry:
    registry = ProvisionerRegistry()
    registry.register(RANCHEROS_ID, RancherProvisioner.create)
    return registry
