import pytest

import netprobe.main as cli
from netprobe.core.data_models import DeviceRecord, InterfaceInfo, NetworkRange, ScanSummary
from netprobe.utils.error_handler import NetworkDetectionError


class _StubCoordinator:
    instances = []

    def __init__(self, config):
        self.config = config
        self.scanned = []
        self.last_summary = ScanSummary(chunk_count=1, workers_used=1)
        _StubCoordinator.instances.append(self)

    def comprehensive_scan(self, network_range):
        self.scanned.append(network_range)
        return [DeviceRecord("192.168.1.10", hostname="nas.local", open_ports=(22, 80), services=("SSH", "HTTP"))]


class _StubDetector:
    def __init__(self, network=None):
        self.network = network

    def list_interfaces(self):
        return [InterfaceInfo(
            name="eth0", description="eth0", index=2, mac_address="aa:bb:cc:dd:ee:ff",
            addresses=[("192.168.1.37", 24)], is_up=True,
        )]

    def get_local_network(self):
        if self.network is None:
            raise NetworkDetectionError("Could not determine local network: no active IPv4 interface")
        return self.network


@pytest.fixture(autouse=True)
def stubs(monkeypatch):
    _StubCoordinator.instances = []
    monkeypatch.setattr(cli, "ScanCoordinator", _StubCoordinator)
    monkeypatch.setattr(cli, "NetworkDetector", _StubDetector)
    monkeypatch.setattr(cli, "dump_routing_table", lambda: "default via 192.168.1.1 dev eth0")


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])

    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == "version 1.0.0"


def test_short_version_flag(capsys):
    with pytest.raises(SystemExit):
        cli.main(["-v"])
    assert "version 1.0.0" in capsys.readouterr().out


def test_help(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["-h"])

    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "--analyze_network" in out
    assert "--interfaces" in out


def test_unknown_argument(capsys):
    assert cli.main(["--bogus"]) == 0
    assert "Unknown argument: --bogus" in capsys.readouterr().out
    assert _StubCoordinator.instances == []


def test_missing_target_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["-an"])

    assert exc.value.code == 0
    assert "expected one argument" in capsys.readouterr().err


def test_interfaces(capsys):
    assert cli.main(["-i"]) == 0

    out = capsys.readouterr().out
    assert "Interface name: eth0" in out
    assert "MAC address: aa:bb:cc:dd:ee:ff" in out
    assert "IP: 192.168.1.37/24" in out
    assert "Status: Up" in out


def test_analyze_network_uses_network_scan_profile(capsys):
    assert cli.main(["-an", "192.168.1.0/24"]) == 0

    (coordinator,) = _StubCoordinator.instances
    assert coordinator.config.timeout_ms == 5000
    assert coordinator.config.max_threads == 5
    assert coordinator.scanned == [NetworkRange("192.168.1.0", 24)]

    out = capsys.readouterr().out
    assert "Device: 192.168.1.10" in out
    assert "Hostname: nas.local" in out
    assert "Open ports: [22, 80]" in out
    assert "Services: ['SSH', 'HTTP']" in out


def test_long_option_name():
    assert cli.main(["--analyze_network", "10.0.0.0/16"]) == 0
    assert _StubCoordinator.instances[0].scanned == [NetworkRange("10.0.0.0", 16)]


@pytest.mark.parametrize("target", ["192.168.1.0/32", "192.168.1.0", "300.1.1.1/24", "192.168.1.0/x"])
def test_analyze_network_rejects_bad_target(capsys, target):
    assert cli.main(["-an", target]) == 0
    assert _StubCoordinator.instances == []
    assert capsys.readouterr().err


def test_config_file_overrides_profile(tmp_path):
    cfg = tmp_path / "scan.yml"
    cfg.write_text("network_scan:\n  timeout_ms: 700\n  max_threads: 3\n", encoding="utf-8")

    assert cli.main(["-an", "192.168.1.0/24", "--config", str(cfg)]) == 0

    config = _StubCoordinator.instances[0].config
    assert (config.timeout_ms, config.max_threads) == (700, 3)


def test_analyze_local_without_network(capsys):
    assert cli.main(["-a"]) == 0

    assert _StubCoordinator.instances == []
    assert "Could not determine local network" in capsys.readouterr().err


def test_analyze_local_sweeps_and_prints_routes(monkeypatch, capsys):
    monkeypatch.setattr(cli, "NetworkDetector", lambda: _StubDetector(NetworkRange("192.168.1.37", 24)))

    assert cli.main(["-a"]) == 0

    (coordinator,) = _StubCoordinator.instances
    assert coordinator.config.timeout_ms == 500
    assert coordinator.scanned == [NetworkRange("192.168.1.37", 24)]
    out = capsys.readouterr().out
    assert "Interface name: eth0" in out
    assert "default via 192.168.1.1 dev eth0" in out


def test_routes(capsys):
    assert cli.main(["-r"]) == 0
    assert "default via 192.168.1.1" in capsys.readouterr().out


def test_no_arguments_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage:" in capsys.readouterr().out


def test_missing_config_file_is_reported(tmp_path, capsys):
    assert cli.main(["-an", "192.168.1.0/24", "--config", str(tmp_path / "absent.yml")]) == 0

    assert _StubCoordinator.instances == []
    assert "Config file not found" in capsys.readouterr().err
