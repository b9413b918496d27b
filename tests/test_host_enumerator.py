import ipaddress

import pytest

from netprobe.core.data_models import NetworkRange
from netprobe.core.host_enumerator import MAX_HOSTS, enumerate_hosts
from netprobe.utils.error_handler import ValidationError


def _within(address: str, network: str, prefix: int) -> bool:
    mask = (0xFFFFFFFF << (32 - prefix)) & 0xFFFFFFFF
    return int(ipaddress.IPv4Address(address)) & mask == int(ipaddress.IPv4Address(network)) & mask


def test_slash_24_skips_own_last_octet():
    hosts = enumerate_hosts(NetworkRange("192.168.1.10", 24))

    assert len(hosts) == 253
    assert "192.168.1.10" not in hosts
    assert len(set(hosts)) == len(hosts)
    assert all(h.startswith("192.168.1.") for h in hosts)
    assert hosts[0] == "192.168.1.1"
    assert hosts[-1] == "192.168.1.254"


def test_slash_24_network_base_skips_nothing():
    # Own last octet 0 is outside 1..254, so all 254 hosts are candidates
    hosts = enumerate_hosts(NetworkRange("192.168.1.0", 24))

    assert len(hosts) == 254
    assert "192.168.1.0" not in hosts
    assert "192.168.1.255" not in hosts


@pytest.mark.parametrize("prefix", [25, 28, 30, 31, 32])
def test_longer_prefixes_keep_slash_24_behaviour(prefix):
    # Known quirk kept for compatibility: prefixes longer than /24 still
    # sweep the whole last octet instead of the real subnet.
    hosts = enumerate_hosts(NetworkRange("10.1.2.17", prefix))

    assert len(hosts) == 253
    assert "10.1.2.17" not in hosts
    assert "10.1.2.1" in hosts


def test_slash_16_is_capped():
    hosts = enumerate_hosts(NetworkRange("10.0.0.0", 16))

    assert len(hosts) == MAX_HOSTS == 1000
    assert hosts[0] == "10.0.0.1"
    assert hosts[-1] == "10.0.3.232"
    assert all(_within(h, "10.0.0.0", 16) for h in hosts)


def test_slash_23_is_not_capped():
    hosts = enumerate_hosts(NetworkRange("192.168.0.0", 23))

    assert len(hosts) == 2 ** 9 - 2
    assert len(set(hosts)) == len(hosts)
    assert all(_within(h, "192.168.0.0", 23) for h in hosts)
    assert hosts[-1] == "192.168.1.254"


@pytest.mark.parametrize("network,prefix", [("0.0.0.0", 0), ("172.16.0.0", 12), ("10.20.0.0", 20)])
def test_short_prefixes_stay_in_subnet(network, prefix):
    hosts = enumerate_hosts(NetworkRange(network, prefix))

    assert len(hosts) == min(2 ** (32 - prefix) - 2, 1000)
    assert all(_within(h, network, prefix) for h in hosts)


def test_non_base_address_is_used_as_given():
    hosts = enumerate_hosts(NetworkRange("10.0.5.0", 16))

    assert hosts[0] == "10.0.5.1"
    assert all(_within(h, "10.0.0.0", 16) for h in hosts)


def test_output_is_deterministic():
    network_range = NetworkRange("172.16.4.0", 22)
    assert enumerate_hosts(network_range) == enumerate_hosts(network_range)


@pytest.mark.parametrize("address,prefix", [("10.0.0.0", 33), ("10.0.0.0", -1), ("10.0.0.256", 24), ("nope", 24)])
def test_invalid_range_is_rejected(address, prefix):
    with pytest.raises(ValidationError):
        NetworkRange(address, prefix)
