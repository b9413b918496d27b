"""
Probe modules for netprobe.

This package contains the TCP connect primitive and the probes built on it:
liveness checking, port scanning and reverse-DNS resolution.
"""

from .base_scanner import BaseScanner, tcp_connect
from .liveness_prober import LivenessProber, LIVENESS_PORTS
from .port_scanner import PortScanner, COMMON_PORTS
from .hostname_resolver import HostnameResolver

__all__ = [
    'BaseScanner',
    'tcp_connect',
    'LivenessProber',
    'LIVENESS_PORTS',
    'PortScanner',
    'COMMON_PORTS',
    'HostnameResolver'
]
