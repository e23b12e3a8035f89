"""
Gate Settings.

Process-level knobs for the gate. These are fixed per installation; the
per-project ignore list lives in .vcp.json (see loader.py).
"""

from dataclasses import dataclass

from vcpgate.policy.engine import SHELL_TOOLS


# Name of the project configuration file
CONFIG_FILENAME = ".vcp.json"

# Environment variable the host sets to the project root
PROJECT_DIR_ENV = "CLAUDE_PROJECT_DIR"


@dataclass
class GateSettings:
    """
    Configurable gate settings.

    The defaults match the hook host's conventions.
    """

    config_filename: str = CONFIG_FILENAME
    project_dir_env: str = PROJECT_DIR_ENV

    # Tools whose payload is a shell command
    shell_tools: tuple[str, ...] = SHELL_TOOLS

    # Print config resolution details to stderr
    verbose: bool = False


# Default settings instance
DEFAULT_SETTINGS = GateSettings()
