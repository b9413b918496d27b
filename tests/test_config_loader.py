from pathlib import Path

import yaml

from netprobe.config.config_loader import PROFILE_DEFAULTS, ConfigLoader, ScanConfig


def test_defaults():
    config = ScanConfig()
    assert config.timeout_ms == 1000
    assert config.max_threads == 100
    assert config.parallel_ports is False
    assert config.timeout == 1.0


def test_missing_file_falls_back_to_profiles(tmp_path: Path):
    loader = ConfigLoader(str(tmp_path / "absent.yml"))

    assert loader.load_scan_config() == ScanConfig()
    assert loader.load_scan_config("network_scan") == ScanConfig(timeout_ms=5000, max_threads=5)
    assert loader.load_scan_config("local_analysis").timeout_ms == 500


def test_shipped_config_matches_builtin_profiles():
    loader = ConfigLoader()
    for name, config in PROFILE_DEFAULTS.items():
        assert loader.load_scan_config(name) == config


def test_values_override_profile(tmp_path: Path):
    cfg = tmp_path / "scan.yml"
    cfg.write_text(yaml.dump({"network_scan": {"timeout_ms": 250, "parallel_ports": True}}), encoding="utf-8")

    config = ConfigLoader(str(cfg)).load_scan_config("network_scan")

    assert config.timeout_ms == 250
    assert config.max_threads == 5
    assert config.parallel_ports is True
    assert config.timeout == 0.25


def test_invalid_values_use_profile_value(tmp_path: Path, capsys):
    cfg = tmp_path / "scan.yml"
    cfg.write_text(
        yaml.dump({"scan": {"timeout_ms": -5, "max_threads": "many", "parallel_ports": "yes"}}),
        encoding="utf-8",
    )

    assert ConfigLoader(str(cfg)).load_scan_config() == ScanConfig()
    assert "Invalid timeout_ms" in capsys.readouterr().out


def test_malformed_yaml_uses_defaults(tmp_path: Path):
    cfg = tmp_path / "scan.yml"
    cfg.write_text("scan: [unclosed", encoding="utf-8")

    assert ConfigLoader(str(cfg)).load_scan_config() == ScanConfig()


def test_non_mapping_section_uses_defaults(tmp_path: Path):
    cfg = tmp_path / "scan.yml"
    cfg.write_text("scan: 12\n", encoding="utf-8")

    assert ConfigLoader(str(cfg)).load_scan_config() == ScanConfig()


def test_create_default_config_roundtrip(tmp_path: Path):
    cfg = tmp_path / "nested" / "scan.yml"
    loader = ConfigLoader(str(cfg))
    loader.create_default_config()

    assert cfg.exists()
    reloaded = ConfigLoader(str(cfg))
    assert reloaded.load_scan_config("network_scan") == PROFILE_DEFAULTS["network_scan"]
