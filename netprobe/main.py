"""
Main entry point for netprobe.

This module provides the command-line interface: argument parsing, the
interface listing, targeted and local sweeps, and the routing table dump.
Every path exits with status 0, input errors included; only an interrupted
sweep returns 130.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config.config_loader import ConfigLoader, ScanConfig
from .core.data_models import DeviceRecord, NetworkRange
from .core.host_enumerator import enumerate_hosts
from .core.network_detector import NetworkDetector, describe_network
from .core.scan_coordinator import ScanCoordinator
from .utils.error_handler import (
    ConfigurationError,
    ErrorContext,
    ErrorType,
    NetprobeError,
    NetworkDetectionError,
    ValidationError,
)
from .utils.logger import LogLevel, get_logger, set_log_level
from .utils.network_utils import parse_target
from .utils.route_table import dump_routing_table

__version__ = "1.0.0"


class NetprobeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors without a failing exit status."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(0, f"{self.prog}: error: {message}\n")


class NetprobeApp:
    """
    Main application class for netprobe.

    Dispatches the selected command and turns NetprobeError exceptions into
    user-facing messages.
    """

    def __init__(self, detector: Optional[NetworkDetector] = None):
        self.logger = get_logger(__name__)
        self.detector = detector or NetworkDetector()

    def show_interfaces(self) -> None:
        """Print every local interface with its addresses and status."""
        for iface in self.detector.list_interfaces():
            print(f"Interface name: {iface.name}")
            print(f"Description: {iface.description}")
            print(f"Index: {iface.index}")
            print(f"MAC address: {iface.mac_address or '00:00:00:00:00:00'}")
            for ip, prefix in iface.addresses:
                print(f"IP: {ip}/{prefix}")
            print(f"Status: {iface.status}")
            print("===================================")

    def show_routes(self) -> None:
        self.logger.section("Routing table")
        try:
            print(dump_routing_table())
        except NetprobeError as e:
            self.logger.error(f"Could not read routing table: {e}")

    def analyze_network(self, target: str, config: ScanConfig) -> Optional[List[DeviceRecord]]:
        """
        Sweep an operator-supplied "<IP>/<prefix>" target.

        Returns:
            The inventory, or None if the target was rejected
        """
        self.logger.info(f"Analyzing network: {target}")
        try:
            network_range = parse_target(target, max_prefix=31)
        except ValidationError as e:
            self.logger.error(str(e))
            return None

        return self._sweep(network_range, config)

    def analyze_local(self, config: ScanConfig) -> Optional[List[DeviceRecord]]:
        """
        Full local analysis: interfaces, local sweep, routing table.

        Returns:
            The inventory, or None if the local network could not be determined
        """
        self.logger.section("Local network analysis")
        self.show_interfaces()

        try:
            network_range = self.detector.get_local_network()
        except NetworkDetectionError as e:
            self.logger.error(str(e))
            return None

        self.logger.info(f"📍 Local network: {network_range} ({describe_network(network_range)})")
        devices = self._sweep(network_range, config)
        self.show_routes()
        return devices

    def _sweep(self, network_range: NetworkRange, config: ScanConfig) -> List[DeviceRecord]:
        coordinator = ScanCoordinator(config)
        self.logger.network_info(
            network=str(network_range),
            candidates=len(enumerate_hosts(network_range)),
            timeout_ms=config.timeout_ms,
            workers=config.max_threads,
        )
        self.logger.progress_start(f"Sweeping {network_range}")
        devices = coordinator.comprehensive_scan(network_range)
        self.logger.progress_end(f"Sweep of {network_range} complete")
        self.print_devices(devices)

        summary = coordinator.last_summary
        if summary:
            self.logger.info(
                f"Sweep finished in {summary.scan_duration:.1f}s",
                chunks=summary.chunk_count,
                workers=summary.workers_used,
            )
        return devices

    def print_devices(self, devices: List[DeviceRecord]) -> None:
        self.logger.section("Discovered devices")
        if not devices:
            self.logger.info("No live hosts found")
            return

        for device in devices:
            print(f"\n🖥️  Device: {device.ip_address}")
            if device.hostname:
                print(f"   Hostname: {device.hostname}")
            if device.mac_address:
                print(f"   MAC: {device.mac_address}")
            print(f"   Open ports: {list(device.open_ports)}")
            print(f"   Services: {list(device.services)}")

    def _config_loader(self, config_file: Optional[str]) -> ConfigLoader:
        if config_file is not None and not Path(config_file).is_file():
            raise ConfigurationError(
                f"Config file not found: {config_file}",
                ErrorContext(ErrorType.CONFIGURATION_ERROR, "load_config", "cli", {"path": config_file}),
            )
        return ConfigLoader(config_file)

    def run(self, args: argparse.Namespace) -> int:
        """
        Run the selected command.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code
        """
        try:
            loader = self._config_loader(args.config)
            if args.interfaces:
                self.show_interfaces()
            elif args.routes:
                self.show_routes()
            elif args.analyze_network is not None:
                self.analyze_network(args.analyze_network, loader.load_scan_config("network_scan"))
            elif args.analyze:
                self.analyze_local(loader.load_scan_config("local_analysis"))
        except KeyboardInterrupt:
            self.logger.warning("Scan interrupted by user")
            return 130
        except NetprobeError as e:
            self.logger.error(str(e))

        return 0


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = NetprobeArgumentParser(
        prog="netprobe",
        description="Local network discovery and TCP service fingerprinting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Examples:
  netprobe -i                            # List local interfaces
  netprobe -an 192.168.1.0/24            # Sweep a network
  netprobe -a                            # Detect the local network and sweep it
  netprobe -an 10.0.0.0/16 --config my.yml --verbose
        """
    )

    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"version {__version__}"
    )

    parser.add_argument(
        "-i", "--interfaces",
        action="store_true",
        help="Show local network interfaces"
    )

    parser.add_argument(
        "-an", "--analyze_network",
        metavar="IP/PREFIX",
        help="Sweep the given network (prefix 0-31)"
    )

    parser.add_argument(
        "-a", "--analyze",
        action="store_true",
        help="Detect the local network, sweep it and show the routing table"
    )

    parser.add_argument(
        "-r", "--routes",
        action="store_true",
        help="Show the routing table"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="YAML configuration file. Defaults to netprobe/config/scan_config.yml"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for netprobe.

    Returns:
        int: Exit code
    """
    parser = create_argument_parser()
    args, unknown = parser.parse_known_args(argv)

    if unknown:
        print(f"Unknown argument: {unknown[0]}")
        return 0

    if args.verbose:
        set_log_level(LogLevel.DEBUG)

    if not (args.interfaces or args.routes or args.analyze or args.analyze_network is not None):
        parser.print_help()
        return 0

    app = NetprobeApp()
    return app.run(args)


if __name__ == "__main__":
    sys.exit(main())
