"""
Core components for netprobe sweeps.
"""

from .data_models import (
    CoordinatorState,
    ScanEventType,
    NetworkRange,
    DeviceRecord,
    ScanEvent,
    ScanSummary,
    InterfaceInfo
)

__all__ = [
    'CoordinatorState',
    'ScanEventType',
    'NetworkRange',
    'DeviceRecord',
    'ScanEvent',
    'ScanSummary',
    'InterfaceInfo'
]
