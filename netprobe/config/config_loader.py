"""
Configuration loader for netprobe.
Handles loading and validation of the YAML sweep configuration with fallback to defaults.
"""

import yaml
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

from ..utils.logger import get_logger

DEFAULT_CONFIG_FILE = "scan_config.yml"


@dataclass(frozen=True)
class ScanConfig:
    """Timeout and worker cap for one sweep."""
    timeout_ms: int = 1000
    max_threads: int = 100
    parallel_ports: bool = False

    @property
    def timeout(self) -> float:
        """Per-connect timeout in seconds."""
        return self.timeout_ms / 1000.0


# Built-in profiles: "scan" is the engine default, "network_scan" is used by
# --analyze_network and "local_analysis" by --analyze.
PROFILE_DEFAULTS: Dict[str, ScanConfig] = {
    "scan": ScanConfig(),
    "network_scan": ScanConfig(timeout_ms=5000, max_threads=5),
    "local_analysis": ScanConfig(timeout_ms=500, max_threads=100),
}


class ConfigLoader:
    """
    Loads and validates the YAML sweep configuration.
    Provides fallback to the built-in profiles when the file or a section is missing.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize ConfigLoader.

        Args:
            config_file: Path to the YAML configuration file.
                         Defaults to scan_config.yml next to this module.
        """
        if config_file is None:
            self.config_path = Path(__file__).parent / DEFAULT_CONFIG_FILE
        else:
            self.config_path = Path(config_file)

        self.logger = get_logger(__name__)
        self._data: Optional[Dict[str, Any]] = None

    def _read(self) -> Dict[str, Any]:
        if self._data is not None:
            return self._data

        self._data = {}
        if not self.config_path.exists():
            self.logger.warning(f"Config file not found at {self.config_path}. Using default configuration.")
            return self._data

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self.logger.error(f"Error parsing config file {self.config_path}: {e}")
            self.logger.warning("Using default configuration.")
            return self._data
        except OSError as e:
            self.logger.error(f"Could not read config file {self.config_path}: {e}")
            self.logger.warning("Using default configuration.")
            return self._data

        if not isinstance(config_data, dict):
            self.logger.warning(f"Invalid config structure in {self.config_path}. Using default configuration.")
            return self._data

        self._data = config_data
        return self._data

    def load_scan_config(self, profile: str = "scan") -> ScanConfig:
        """
        Load the configuration for a profile.

        Missing keys take the profile's built-in value; invalid values are
        reported and replaced by the built-in value.

        Args:
            profile: Section name in the YAML file

        Returns:
            ScanConfig with loaded or default values
        """
        defaults = PROFILE_DEFAULTS.get(profile, PROFILE_DEFAULTS["scan"])
        section = self._read().get(profile)

        if section is None:
            return defaults

        if not isinstance(section, dict):
            self.logger.warning(f"Invalid '{profile}' section in {self.config_path}. Using default configuration.")
            return defaults

        return ScanConfig(
            timeout_ms=self._validate_positive_int(section.get('timeout_ms', defaults.timeout_ms), 'timeout_ms', defaults.timeout_ms),
            max_threads=self._validate_positive_int(section.get('max_threads', defaults.max_threads), 'max_threads', defaults.max_threads),
            parallel_ports=self._validate_bool(section.get('parallel_ports', defaults.parallel_ports), 'parallel_ports', defaults.parallel_ports)
        )

    def _validate_positive_int(self, value: Any, field_name: str, default: int) -> int:
        """
        Validate that a value is a positive integer.

        Args:
            value: Value to validate
            field_name: Name of the field for error messages
            default: Default value to use if validation fails

        Returns:
            Validated integer value or default
        """
        if isinstance(value, bool):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be an integer. Using default: {default}")
            return default
        try:
            int_value = int(value)
            if int_value <= 0:
                self.logger.warning(f"Invalid {field_name}: {value}. Must be positive. Using default: {default}")
                return default
            return int_value
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be an integer. Using default: {default}")
            return default

    def _validate_bool(self, value: Any, field_name: str, default: bool) -> bool:
        if isinstance(value, bool):
            return value
        self.logger.warning(f"Invalid {field_name}: {value}. Must be true or false. Using default: {default}")
        return default

    def create_default_config(self) -> None:
        """
        Write the built-in profiles to the config file if it doesn't exist.
        """
        if self.config_path.exists():
            return

        default_config = {name: asdict(config) for name, config in PROFILE_DEFAULTS.items()}

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                yaml.dump(default_config, f, default_flow_style=False, indent=2)
            self.logger.info(f"Created default config at {self.config_path}")
        except OSError as e:
            self.logger.error(f"Failed to create default config: {e}")
