# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/provision/generic.py

from __future__ import annotations

import logging
import re
import shlex
from typing import List, Optional

from machinist.drivers.driver import Driver
from machinist.engine.options import EngineOptions
from machinist.errors import ValidationError
from .commander import Commander

log = logging.getLogger("machinist")

_HOSTNAME_RE = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9.-]{0,252}")


def validate_hostname(hostname: str) -> str:
    if not _HOSTNAME_RE.fullmatch(hostname or ""):
        raise ValidationError(f"Invalid hostname: {hostname!r}")
    return hostname


class GenericProvisioner:
    """
    Shared state and commands used by every OS variant. Variants hold one of
    these and delegate to it.
    """

    def __init__(
        self,
        *,
        commander: Commander,
        driver: Driver,
        os_release_id: str,
        packages: Optional[List[str]] = None,
    ):
        self.commander = commander
        self.driver = driver
        self.os_release_id = os_release_id
        self.packages: List[str] = list(packages or [])
        self.engine_options = EngineOptions()

    def ssh_command(self, command: str) -> str:
        return self.commander.run(command)

    def set_hostname(self, hostname: str) -> None:
        validate_hostname(hostname)
        log.debug("[%s] Setting hostname %s", self.os_release_id, hostname)
        q = shlex.quote(hostname)
        self.ssh_command(f"sudo hostname {q} && echo {q} | sudo tee /etc/hostname")

        # Rewrite the loopback alias in place, or add it once
        self.ssh_command(
            "if grep -xq '127.0.1.1.*' /etc/hosts; then "
            f"sudo sed -i 's/^127.0.1.1.*/127.0.1.1 {hostname}/g' /etc/hosts; "
            f"else echo '127.0.1.1 {hostname}' | sudo tee -a /etc/hosts; fi"
        )
