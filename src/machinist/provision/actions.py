# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/provision/actions.py

from __future__ import annotations

from enum import Enum


class PackageAction(str, Enum):
    INSTALL = "install"
    REMOVE = "remove"
    UPGRADE = "upgrade"

    def __str__(self) -> str:
        return self.value


class ServiceAction(str, Enum):
    """Value is the verb handed to the OS service supervisor."""

    RESTART = "restart"
    START = "start"
    STOP = "stop"
    ENABLE = "enable"
    DISABLE = "disable"
    DAEMON_RELOAD = "daemon-reload"

    def __str__(self) -> str:
        return self.value
