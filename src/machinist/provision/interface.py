# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/provision/interface.py

from __future__ import annotations
from typing import Callable, Protocol

from machinist.drivers.driver import Driver
from machinist.engine.options import EngineOptions
from .actions import PackageAction, ServiceAction
from .commander import Commander


class Provisioner(Protocol):
    """
    Bootstraps the container engine on one reachable host.
    Each OS family supplies one implementation.
    """

    @property
    def name(self) -> str: ...

    @property
    def engine_options(self) -> EngineOptions:
        """Options of the last provision() call, after defaults were applied."""
        ...

    def ssh_command(self, command: str) -> str: ...

    def provision(self, engine_options: EngineOptions) -> None:
        """
        Run the full bootstrap sequence. Stops at the first failing step
        and raises; already applied steps are not rolled back.
        """
        ...

    def package(self, name: str, action: PackageAction) -> None: ...

    def service(self, name: str, action: ServiceAction) -> None: ...

    def set_hostname(self, hostname: str) -> None: ...


ProvisionerFactory = Callable[[Driver, Commander], Provisioner]
