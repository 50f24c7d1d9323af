# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/logging/log.py

from __future__ import annotations

import logging
from pathlib import Path
from datetime import datetime, timezone
import uuid


class _RunContext(logging.Filter):
    """Stamps every record with the machine and run it belongs to."""

    def __init__(self, machine: str, run_id: str):
        super().__init__()
        self.machine = machine
        self.run = run_id[:8]

    def filter(self, record: logging.LogRecord) -> bool:
        record.machine = self.machine
        record.run = self.run
        return True


def init_logging(
    *,
    machine: str,
    base_dir: Path | None = None,
    name: str = "machinist",
    verbose: bool = False,
) -> tuple[logging.Logger, str, Path]:
    """
    Set up logging for one provisioning run against ``machine``.

    Each machine keeps its own history under ``<base_dir>/<machine>/``, one
    file per run, holding every command sent to the host. The console gets
    INFO (DEBUG when verbose). Returns the logger, the run id and the log file.
    """
    run_id = str(uuid.uuid4())

    if base_dir is None:
        base_dir = Path.home() / ".machinist" / "logs"
    machine_dir = base_dir / machine
    machine_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    log_path = machine_dir / f"{ts}-{run_id}.log"

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()
    logger.propagate = False

    context = _RunContext(machine, run_id)

    fh = logging.FileHandler(log_path)
    fh.setLevel(logging.DEBUG)
    fh.addFilter(context)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(machine)s %(run)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)
    ch.addFilter(context)
    ch.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    logger.addHandler(fh)
    logger.addHandler(ch)

    logger.debug("run_id=%s machine=%s", run_id, machine)
    logger.debug("log_file=%s", log_path)

    return logger, run_id, log_path
