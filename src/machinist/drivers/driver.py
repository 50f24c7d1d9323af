# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/drivers/driver.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from machinist.host.models import HostRecord


class Driver(Protocol):
    """
    What a provider driver exposes about an already created machine.
    """

    def get_machine_name(self) -> str: ...

    def get_ssh_hostname(self) -> str: ...

    def get_ssh_port(self) -> int: ...

    def get_ssh_username(self) -> str: ...

    def get_ssh_key_path(self) -> Optional[str]: ...


@dataclass
class StaticDriver:
    """
    Driver backed by the settings stored in a host record, for machines whose
    provider is not loaded in this process.
    """
    machine_name: str
    ip_address: str
    ssh_user: str = "root"
    ssh_port: int = 22
    ssh_key_path: Optional[str] = None

    @classmethod
    def from_record(cls, record: HostRecord) -> "StaticDriver":
        d = record.driver
        address = d.get("ip_address") or d.get("IPAddress")
        if not address:
            raise ValueError(f"Machine {record.name!r} has no IP address in its driver settings")
        return cls(
            machine_name=record.name,
            ip_address=address,
            ssh_user=d.get("ssh_user") or d.get("SSHUser") or "root",
            ssh_port=int(d.get("ssh_port") or d.get("SSHPort") or 22),
            ssh_key_path=d.get("ssh_key_path") or d.get("SSHKeyPath") or None,
        )

    def get_machine_name(self) -> str:
        return self.machine_name

    def get_ssh_hostname(self) -> str:
        return self.ip_address

    def get_ssh_port(self) -> int:
        return self.ssh_port

    def get_ssh_username(self) -> str:
        return self.ssh_user

    def get_ssh_key_path(self) -> Optional[str]:
        return self.ssh_key_path
