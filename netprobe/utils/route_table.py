"""
Routing table dump through the platform's route printing command.
"""

import platform
import subprocess
from typing import List, Optional

from .error_handler import ErrorContext, ErrorType, NetworkError, ToolMissingError


def routing_command(system: Optional[str] = None) -> List[str]:
    """
    Command that prints the routing table on this platform.

    Args:
        system: platform.system() value; detected when omitted

    Returns:
        List[str]: Command and arguments
    """
    system = (system or platform.system()).lower()

    if system == "windows":
        return ["route", "print"]
    if system == "linux":
        return ["ip", "route"]
    return ["netstat", "-nr"]


def dump_routing_table(timeout: int = 10) -> str:
    """
    Run the routing command and return its output verbatim.

    Args:
        timeout: Seconds to wait for the command

    Returns:
        str: Standard output of the command

    Raises:
        ToolMissingError: If the command is not installed
        NetworkError: If the command fails or times out
    """
    cmd = routing_command()

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding='utf-8',
            errors='ignore',
            timeout=timeout,
            check=True
        )
    except FileNotFoundError as e:
        context = ErrorContext(ErrorType.TOOL_MISSING_ERROR, "dump_routing_table", "route_table",
                               {"command": cmd[0]})
        raise ToolMissingError(f"{cmd[0]} command not found", context) from e
    except subprocess.TimeoutExpired as e:
        context = ErrorContext(ErrorType.TIMEOUT, "dump_routing_table", "route_table",
                               {"command": " ".join(cmd), "timeout": timeout})
        raise NetworkError(f"{' '.join(cmd)} timed out after {timeout} seconds", context) from e
    except subprocess.CalledProcessError as e:
        context = ErrorContext(ErrorType.NETWORK_ERROR, "dump_routing_table", "route_table",
                               {"command": " ".join(cmd), "returncode": e.returncode})
        raise NetworkError(f"{' '.join(cmd)} failed with exit code {e.returncode}", context) from e

    return result.stdout
