import pytest

from machinist.drivers.driver import StaticDriver
from machinist.host.models import HostRecord


def test_from_record_reads_driver_settings():
    record = HostRecord(
        name="m1",
        driver_name="generic",
        driver={"IPAddress": "203.0.113.7", "SSHUser": "rancher", "SSHPort": "2222", "SSHKeyPath": "/keys/id_rsa"},
    )

    d = StaticDriver.from_record(record)

    assert d.get_machine_name() == "m1"
    assert d.get_ssh_hostname() == "203.0.113.7"
    assert d.get_ssh_username() == "rancher"
    assert d.get_ssh_port() == 2222
    assert d.get_ssh_key_path() == "/keys/id_rsa"


def test_from_record_defaults():
    d = StaticDriver.from_record(HostRecord(name="m1", driver={"ip_address": "10.0.0.5"}))
    assert d.get_ssh_username() == "root"
    assert d.get_ssh_port() == 22
    assert d.get_ssh_key_path() is None


def test_from_record_requires_address():
    with pytest.raises(ValueError):
        StaticDriver.from_record(HostRecord(name="m1"))
