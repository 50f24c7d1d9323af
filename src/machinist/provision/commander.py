# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/provision/commander.py

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol

import paramiko

from machinist.drivers.driver import Driver
from machinist.errors import CommandError, SshUnavailableError

log = logging.getLogger("machinist")


class Commander(Protocol):
    """
    Runs shell commands on exactly one remote host.
    Returns stdout; raises CommandError on failure.
    """

    def run(self, command: str) -> str: ...


class SshCommander:
    """
    Commander over a paramiko SSH session to the machine described by ``driver``.
    """

    def __init__(
        self,
        driver: Driver,
        *,
        connect_timeout: float = 20.0,
        command_timeout: Optional[float] = None,
        connect_retries: int = 30,
        retry_delay: float = 20.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.driver = driver
        self.connect_timeout = connect_timeout
        self.command_timeout = command_timeout
        self.connect_retries = connect_retries
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._client: Optional[paramiko.SSHClient] = None

    # ------------------ connection ------------------

    def _load_key(self, key_path: str):
        for key_cls in (
            paramiko.Ed25519Key,
            paramiko.RSAKey,
            paramiko.ECDSAKey,
        ):
            try:
                return key_cls.from_private_key_file(key_path)
            except paramiko.SSHException:
                continue
        raise paramiko.SSHException(f"Unsupported private key format for {key_path}")

    def _connect_once(self) -> paramiko.SSHClient:
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        key_path = self.driver.get_ssh_key_path()
        pkey = self._load_key(key_path) if key_path else None

        client.connect(
            hostname=self.driver.get_ssh_hostname(),
            port=self.driver.get_ssh_port(),
            username=self.driver.get_ssh_username(),
            pkey=pkey,
            look_for_keys=pkey is None,
            allow_agent=pkey is None,
            timeout=self.connect_timeout,
        )
        return client

    def connect(self) -> None:
        """
        Open the session, waiting for a freshly created machine to accept SSH.
        Only transport errors are retried; a rejected key fails straight away.
        """
        machine = self.driver.get_machine_name()
        for attempt in range(1, self.connect_retries + 1):
            try:
                self._client = self._connect_once()
                return
            except paramiko.AuthenticationException as exc:
                raise SshUnavailableError(machine, attempt, f"authentication failed: {exc}") from exc
            except (paramiko.SSHException, OSError) as exc:
                last = exc
                if attempt == self.connect_retries:
                    break
                log.info(
                    "[%s] SSH not ready (attempt %d/%d, %s: %s), retrying in %ss...",
                    machine, attempt, self.connect_retries,
                    type(exc).__name__, exc, self.retry_delay,
                )
                self._sleep(self.retry_delay)

        raise SshUnavailableError(machine, self.connect_retries, f"{type(last).__name__}: {last}") from last

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "SshCommander":
        self.connect()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------ commands ------------------

    def run(self, command: str) -> str:
        if self._client is None:
            self.connect()

        log.debug("[%s] $ %s", self.driver.get_machine_name(), command)
        try:
            _stdin, stdout, stderr = self._client.exec_command(command, timeout=self.command_timeout)
            out = stdout.read().decode("utf-8", errors="replace")
            err = stderr.read().decode("utf-8", errors="replace")
            rc = stdout.channel.recv_exit_status()
        except (paramiko.SSHException, OSError) as e:
            raise CommandError(command, reason=f"{type(e).__name__}: {e}") from e

        if rc != 0:
            raise CommandError(command, exit_code=rc, stdout=out, stderr=err)
        return out
