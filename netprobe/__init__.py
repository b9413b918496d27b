"""
netprobe

Local network discovery: sweeps an IPv4 range with TCP connect probes,
lists open well-known ports and maps them to service names.
"""

__version__ = "1.0.0"
__author__ = "netprobe developers"
