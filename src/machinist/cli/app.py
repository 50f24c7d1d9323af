# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/cli/app.py
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

from machinist.config.loader import load_settings
from machinist.config.models import Settings
from machinist.drivers.driver import StaticDriver
from machinist.errors import HostNotFoundError, MachinistError
from machinist.logging.log import init_logging
from machinist.persist.filestore import Filestore
from machinist.persist.interface import Store
from machinist.provision.commander import SshCommander
from machinist.provision.registry import default_registry


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Machinist host registry and provisioning CLI")


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def _store(settings: Settings) -> Store:
    return Filestore(
        settings.storage_path,
        ca_cert_path=settings.ca_cert_path,
        ca_private_key_path=settings.ca_private_key_path,
    )


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config.yaml"),
    debug: bool = typer.Option(False, "--debug"),
):
    ctx.obj = {"settings": load_settings(config), "debug": debug}


# ------------------------------------------------------------------------------
# Store commands
# ------------------------------------------------------------------------------

@app.command("ls")
def list_machines(ctx: typer.Context):
    """List stored machines."""
    for name in _store(_settings(ctx)).list():
        typer.echo(name)


@app.command()
def inspect(ctx: typer.Context, name: str):
    """Print the stored config of a machine."""
    try:
        record = _store(_settings(ctx)).load(name)
    except MachinistError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(record.model_dump(mode="json"), indent=4))


@app.command("rm")
def remove(ctx: typer.Context, name: str):
    """Remove a machine record."""
    try:
        _store(_settings(ctx)).remove(name)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Removed {name}")


# ------------------------------------------------------------------------------
# Provisioning
# ------------------------------------------------------------------------------

@app.command()
def provision(
    ctx: typer.Context,
    name: str,
    os_id: Optional[str] = typer.Option(None, "--os", help="Skip detection and use this OS id"),
    install_url: Optional[str] = typer.Option(None, "--install-url"),
    storage_driver: Optional[str] = typer.Option(None, "--storage-driver"),
    engine_flag: Optional[List[str]] = typer.Option(None, "--engine-flag"),
):
    """Bootstrap the container engine on a stored machine."""
    settings = _settings(ctx)
    store = _store(settings)
    try:
        record = store.load(name)
    except (HostNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    _, run_id, log_path = init_logging(
        machine=name,
        base_dir=settings.resolved_log_dir(),
        verbose=ctx.obj["debug"],
    )
    typer.echo(f"  Run ID   : {run_id}")
    typer.echo(f"  Logs     : {log_path}")

    opts = record.host_options.engine.model_copy(deep=True)
    if install_url:
        opts.install_url = install_url
    if storage_driver is not None:
        opts.storage_driver = storage_driver
    if engine_flag:
        opts.arbitrary_flags = list(engine_flag)

    registry = default_registry()
    try:
        driver = StaticDriver.from_record(record)
        with SshCommander(
            driver,
            connect_timeout=settings.ssh.connect_timeout,
            command_timeout=settings.ssh.command_timeout,
            connect_retries=settings.ssh.connect_retries,
            retry_delay=settings.ssh.retry_delay,
        ) as commander:
            if os_id:
                provisioner = registry.new(os_id, driver, commander)
            else:
                provisioner = registry.detect(driver, commander)
            typer.echo(f"[{name}] Provisioning with {provisioner.name}...")
            provisioner.provision(opts)
    except (MachinistError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    # Persist the options the host was actually provisioned with
    record.host_options.engine = provisioner.engine_options
    store.save(record)
    typer.echo(f"[{name}] Provisioning complete")


if __name__ == "__main__":
    app()
