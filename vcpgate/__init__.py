"""
VCP Security Gate

Pre-tool-use policy gate that blocks writes and shell commands containing
known dangerous code patterns.
"""

__version__ = "0.1.0"

from vcpgate.gate import GateDecision, evaluate, run_gate
from vcpgate.request import ToolRequest, parse_request

__all__ = [
    "GateDecision",
    "ToolRequest",
    "evaluate",
    "parse_request",
    "run_gate",
    "__version__",
]
