"""
Static port to service name mapping.
"""

from typing import Dict, Iterable, List

SERVICE_MAP: Dict[int, str] = {
    21: "FTP",
    22: "SSH",
    23: "Telnet",
    25: "SMTP",
    53: "DNS",
    80: "HTTP",
    110: "POP3",
    135: "RPC",
    139: "NetBIOS",
    143: "IMAP",
    443: "HTTPS",
    445: "SMB",
    993: "IMAPS",
    995: "POP3S",
    1723: "PPTP",
    3306: "MySQL",
    3389: "RDP",
    5900: "VNC",
    8080: "HTTP-Proxy",
}


def identify_services(open_ports: Iterable[int]) -> List[str]:
    """
    Label open ports with conventional service names.

    Ports without a table entry are left out rather than labelled unknown.

    Args:
        open_ports: Open port numbers, in the order they should be labelled

    Returns:
        List[str]: Service labels in the same order as the ports
    """
    return [SERVICE_MAP[port] for port in open_ports if port in SERVICE_MAP]
