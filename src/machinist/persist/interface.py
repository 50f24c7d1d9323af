# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/persist/interface.py

from __future__ import annotations
from typing import List, Protocol

from machinist.host.models import HostRecord


class Store(Protocol):
    """
    Contract for persisting host records keyed by name.
    Implementations must never expose a partially written record.
    """

    def list(self) -> List[str]: ...

    def exists(self, name: str) -> bool: ...

    def save(self, record: HostRecord) -> None: ...

    def load(self, name: str) -> HostRecord:
        """
        Raise HostNotFoundError when the host is absent.
        """
        ...

    def remove(self, name: str) -> None: ...
