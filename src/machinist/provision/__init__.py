# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/machinist/provision/__init__.py

from .actions import PackageAction, ServiceAction
from .generic import GenericProvisioner
from .rancheros import RancherProvisioner
from .registry import ProvisionerRegistry, default_registry

__all__ = [
    "PackageAction",
    "ServiceAction",
    "GenericProvisioner",
    "RancherProvisioner",
    "ProvisionerRegistry",
    "default_registry",
]
