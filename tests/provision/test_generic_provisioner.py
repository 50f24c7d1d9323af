# tests/provision/test_generic_provisioner.py
from __future__ import annotations

import pytest

from machinist.drivers.driver import StaticDriver
from machinist.errors import ValidationError
from machinist.provision.generic import GenericProvisioner, validate_hostname


class RecordingCommander:
    def __init__(self):
        self.commands = []

    def run(self, command):
        self.commands.append(command)
        return ""


def _generic(commander):
    return GenericProvisioner(
        commander=commander,
        driver=StaticDriver(machine_name="m1", ip_address="10.0.0.5"),
        os_release_id="testos",
        packages=("curl", "git"),
    )


def test_packages_are_kept_in_order():
    g = _generic(RecordingCommander())
    assert g.packages == ["curl", "git"]


def test_set_hostname_writes_hostname_and_loopback_alias():
    commander = RecordingCommander()
    _generic(commander).set_hostname("node-1")

    assert commander.commands[0] == "sudo hostname node-1 && echo node-1 | sudo tee /etc/hostname"
    hosts_cmd = commander.commands[1]
    assert hosts_cmd.startswith("if grep -xq '127.0.1.1.*' /etc/hosts; then ")
    assert "sudo sed -i 's/^127.0.1.1.*/127.0.1.1 node-1/g' /etc/hosts" in hosts_cmd
    assert "else echo '127.0.1.1 node-1' | sudo tee -a /etc/hosts; fi" in hosts_cmd


@pytest.mark.parametrize("hostname", ["", "-lead", "m1\n", "m1\nEOF", "a b", "a/b", "x" * 254])
def test_validate_hostname_rejects(hostname):
    with pytest.raises(ValidationError):
        validate_hostname(hostname)


def test_validate_hostname_accepts_dotted_names():
    assert validate_hostname("node-1.example.com") == "node-1.example.com"
