"""
Configuration for the VCP Security Gate.

Handles:
- Process settings (config file name, project root variable)
- Locating .vcp.json within the project root
- Extracting the CWE ignore list
"""

from vcpgate.config.loader import GateConfig, EMPTY_CONFIG, resolve_config
from vcpgate.config.settings import GateSettings, DEFAULT_SETTINGS

__all__ = [
    "GateConfig",
    "GateSettings",
    "DEFAULT_SETTINGS",
    "EMPTY_CONFIG",
    "resolve_config",
]
