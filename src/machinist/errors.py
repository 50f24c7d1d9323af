# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/errors.py

from __future__ import annotations

from typing import Optional


class MachinistError(RuntimeError):
    """Base class for machinist failures."""


class HostNotFoundError(MachinistError):
    """Raised when a host record has no directory in the store."""

    def __init__(self, name: str):
        super().__init__(f"Host does not exist: {name!r}")
        self.name = name


class HostConfigError(MachinistError):
    """Raised when a persisted host document cannot be decoded."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Invalid config for host {name!r}: {reason}")
        self.name = name


class ValidationError(MachinistError):
    """An explicit configuration value is not supported."""


class UnsupportedStorageDriverError(ValidationError):
    def __init__(self, storage_driver: str):
        super().__init__(f"Unsupported storage driver: {storage_driver}")
        self.storage_driver = storage_driver


class UnsupportedActionError(ValidationError):
    def __init__(self, name: str, action: str):
        super().__init__(f"Action {action!r} is not yet supported for package {name!r}")
        self.name = name
        self.action = action


class CommandError(MachinistError):
    """
    A remote command exited non-zero or its channel failed.
    """

    def __init__(
        self,
        command: str,
        *,
        exit_code: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
        reason: Optional[str] = None,
    ):
        detail = reason or f"rc={exit_code}"
        msg = f"Command failed ({detail}): {command}"
        if stderr.strip():
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class SshUnavailableError(MachinistError):
    """SSH never came up on the machine within the allowed attempts."""

    def __init__(self, name: str, attempts: int, reason: str):
        super().__init__(f"SSH to {name!r} not available after {attempts} attempts: {reason}")
        self.name = name
        self.attempts = attempts


class ProvisionError(MachinistError):
    """Raised when a provisioning step fails. Carries the step name."""

    def __init__(self, step: str, message: str, output: str = ""):
        super().__init__(f"[{step}] {message}")
        self.step = step
        self.output = output


class UnknownProvisionerError(MachinistError):
    def __init__(self, os_release_id: Optional[str]):
        super().__init__(f"No provisioner registered for OS {os_release_id!r}")
        self.os_release_id = os_release_id
