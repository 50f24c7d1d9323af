# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/provision/rancheros.py

from __future__ import annotations

import logging
import shlex
from typing import Callable, List, Optional

from machinist.drivers.driver import Driver
from machinist.engine.options import EngineOptions
from machinist.errors import (
    CommandError,
    ProvisionError,
    UnsupportedActionError,
    UnsupportedStorageDriverError,
)
from .actions import PackageAction, ServiceAction
from .commander import Commander
from .generic import GenericProvisioner, validate_hostname

log = logging.getLogger("machinist")

OS_RELEASE_ID = "rancheros"
ENGINE_PACKAGE = "docker"
DEFAULT_STORAGE_DRIVER = "overlay"

HOSTNAME_TMPL = """\
sudo mkdir -p /var/lib/rancher/conf/cloud-config.d/
sudo tee /var/lib/rancher/conf/cloud-config.d/machine-hostname.yml << EOF
#cloud-config

hostname: {hostname}
EOF
"""

_PACKAGE_VERBS = {
    PackageAction.INSTALL: "enable",
    PackageAction.REMOVE: "disable",
}


class RancherProvisioner:
    """
    RancherOS: services run under system-docker and are toggled with
    ``rancherctl service``; persistent settings live in cloud-config.
    """

    def __init__(self, generic: GenericProvisioner):
        self.generic = generic

    @classmethod
    def create(
        cls,
        driver: Driver,
        commander: Commander,
        packages: Optional[List[str]] = None,
    ) -> "RancherProvisioner":
        return cls(
            GenericProvisioner(
                commander=commander,
                driver=driver,
                os_release_id=OS_RELEASE_ID,
                packages=packages,
            )
        )

    @property
    def name(self) -> str:
        return OS_RELEASE_ID

    @property
    def driver(self) -> Driver:
        return self.generic.driver

    @property
    def engine_options(self) -> EngineOptions:
        return self.generic.engine_options

    def ssh_command(self, command: str) -> str:
        return self.generic.ssh_command(command)

    # ------------------ actions ------------------

    def service(self, name: str, action: ServiceAction) -> None:
        action = ServiceAction(action)
        self.ssh_command(f"sudo system-docker {action.value} {name}")

    def package(self, name: str, action: PackageAction) -> None:
        action = PackageAction(action)

        if action is PackageAction.UPGRADE:
            if name == ENGINE_PACKAGE:
                self._upgrade()
                return
            # rancherctl has no per-service upgrade
            raise UnsupportedActionError(name, action.value)

        self.ssh_command(f"sudo rancherctl service {_PACKAGE_VERBS[action]} {name}")

    def set_hostname(self, hostname: str) -> None:
        validate_hostname(hostname)

        # /etc/hosts is bind mounted by system-docker and cannot be moved,
        # so drop the stale loopback alias through a copy.
        self.ssh_command("sed /127.0.1.1/d /etc/hosts > /tmp/hosts && cat /tmp/hosts | sudo tee /etc/hosts")

        self.generic.set_hostname(hostname)

        self.ssh_command(HOSTNAME_TMPL.format(hostname=hostname))

    # ------------------ provisioning ------------------

    def _validate(self, engine_options: EngineOptions) -> EngineOptions:
        opts = engine_options.model_copy(deep=True)
        if not opts.storage_driver:
            opts.storage_driver = DEFAULT_STORAGE_DRIVER
        elif opts.storage_driver != DEFAULT_STORAGE_DRIVER:
            raise UnsupportedStorageDriverError(opts.storage_driver)
        return opts

    def _step(self, step: str, fn: Callable[..., None], *args) -> None:
        try:
            fn(*args)
        except CommandError as e:
            raise ProvisionError(step, str(e), output=e.stdout) from e

    def _select_engine(self, install_url: str) -> None:
        self.ssh_command(f"wget -O- {shlex.quote(install_url)} | sh -")

    def _upgrade(self) -> None:
        machine = self.driver.get_machine_name()
        log.info("[%s] Running upgrade", machine)
        self.ssh_command("sudo rancherctl os upgrade -f --no-reboot")

        log.info("[%s] Upgrade succeeded, rebooting", machine)
        try:
            self.ssh_command("sudo reboot")
        except CommandError as e:
            # The SSH session goes away with the host
            log.debug("[%s] Ignoring reboot result: %s", machine, e)

    def provision(self, engine_options: EngineOptions) -> None:
        machine = self.driver.get_machine_name()
        log.debug("Running RancherOS provisioner on %s", machine)

        self.generic.engine_options = self._validate(engine_options)

        self._step("set-hostname", self.set_hostname, machine)

        for pkg in self.generic.packages:
            log.debug("[%s] Installing package %s", machine, pkg)
            self._step(f"install-package {pkg}", self.package, pkg, PackageAction.INSTALL)

        install_url = self.engine_options.install_url
        if not self.engine_options.uses_default_install_url():
            log.debug("[%s] Selecting docker engine: %s", machine, install_url)
            self._step("select-engine", self._select_engine, install_url)
            return

        log.debug("[%s] Skipping docker engine default: %s", machine, install_url)
