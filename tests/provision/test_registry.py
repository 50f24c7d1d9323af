# tests/provision/test_registry.py
from __future__ import annotations

import pytest

from machinist.drivers.driver import StaticDriver
from machinist.errors import UnknownProvisionerError
from machinist.provision.rancheros import RancherProvisioner
from machinist.provision.registry import (
    ProvisionerRegistry,
    default_registry,
    parse_os_release,
)

RANCHEROS_RELEASE = 'NAME="RancherOS"\nVERSION=v1.5.8\nID=rancheros\nID_LIKE=\nPRETTY_NAME="RancherOS v1.5.8"\n'
UBUNTU_RELEASE = 'NAME="Ubuntu"\nVERSION="22.04.4 LTS (Jammy Jellyfish)"\nID=ubuntu\nID_LIKE=debian\n'


class OsReleaseCommander:
    def __init__(self, content):
        self.content = content
        self.commands = []

    def run(self, command):
        self.commands.append(command)
        return self.content


DRIVER = StaticDriver(machine_name="m1", ip_address="10.0.0.5")


def test_default_registry_knows_rancheros():
    registry = default_registry()
    assert registry.names() == ["rancheros"]

    p = registry.new("rancheros", DRIVER, OsReleaseCommander(""))
    assert isinstance(p, RancherProvisioner)
    assert p.name == "rancheros"
    assert p.driver is DRIVER


def test_registries_do_not_share_state():
    a = ProvisionerRegistry()
    b = ProvisionerRegistry()
    a.register("custom", RancherProvisioner.create)

    assert a.names() == ["custom"]
    assert b.names() == []


def test_duplicate_registration_is_rejected():
    registry = default_registry()
    with pytest.raises(ValueError):
        registry.register("rancheros", RancherProvisioner.create)


def test_unknown_os_id():
    with pytest.raises(UnknownProvisionerError) as exc:
        default_registry().new("plan9", DRIVER, OsReleaseCommander(""))
    assert exc.value.os_release_id == "plan9"


def test_detect_reads_os_release():
    commander = OsReleaseCommander(RANCHEROS_RELEASE)

    p = default_registry().detect(DRIVER, commander)

    assert isinstance(p, RancherProvisioner)
    assert commander.commands == ["cat /etc/os-release"]


def test_detect_unsupported_os():
    with pytest.raises(UnknownProvisionerError) as exc:
        default_registry().detect(DRIVER, OsReleaseCommander(UBUNTU_RELEASE))
    assert exc.value.os_release_id == "ubuntu"


def test_detect_without_id():
    with pytest.raises(UnknownProvisionerError):
        default_registry().detect(DRIVER, OsReleaseCommander("NAME=mystery\n"))


def test_parse_os_release_strips_quotes_and_comments():
    info = parse_os_release("# comment\n" + UBUNTU_RELEASE + "\nGARBAGE\n")

    assert info["ID"] == "ubuntu"
    assert info["NAME"] == "Ubuntu"
    assert info["VERSION"] == "22.04.4 LTS (Jammy Jellyfish)"
    assert info["ID_LIKE"] == "debian"
    assert "GARBAGE" not in info
