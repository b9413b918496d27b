"""
Candidate host enumeration for a sweep.

Turns a NetworkRange into the ordered list of addresses the coordinator
probes. Large ranges are capped at MAX_HOSTS addresses to bound sweep time.
"""

from typing import List

from .data_models import NetworkRange
from ..utils.network_utils import calculate_host_count, int_to_ip

MAX_HOSTS = 1000


def enumerate_hosts(network_range: NetworkRange) -> List[str]:
    """
    Produce the candidate addresses for a network range.

    For prefixes of 24 and longer every address x.y.z.1 to x.y.z.254 is
    produced except the one whose last octet equals the input address's own
    last octet. This keeps the historical behaviour: it does not compute the
    true network and broadcast addresses for prefixes other than /24.

    For shorter prefixes the first min(2**(32-prefix) - 2, MAX_HOSTS) host
    offsets are OR-ed into the input address.

    Args:
        network_range: Range to enumerate

    Returns:
        List[str]: Candidate addresses in probe order
    """
    if network_range.prefix >= 24:
        a, b, c, own = network_range.octets
        return [f"{a}.{b}.{c}.{i}" for i in range(1, 255) if i != own]

    network_int = network_range.network_int
    bound = min(calculate_host_count(network_range.prefix), MAX_HOSTS)
    return [int_to_ip(network_int | offset) for offset in range(1, bound + 1)]
