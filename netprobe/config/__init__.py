"""
Configuration management for netprobe.
"""

from .config_loader import ConfigLoader, ScanConfig, PROFILE_DEFAULTS

__all__ = ['ConfigLoader', 'ScanConfig', 'PROFILE_DEFAULTS']
