"""
Policy Engine for the VCP Security Gate.

Decides whether content about to be written, or a command about to run,
contains a known-dangerous pattern:
- Hardcoded secrets (CWE-798)
- SQL and code injection (CWE-89, CWE-95)
- Unsafe markup sinks (CWE-79)
- Insecure deserialization (CWE-502)
- Encoded payloads piped to a shell (CWE-116)

The policy engine is deterministic and pattern-based.
"""

from vcpgate.policy.engine import Finding, applicable_detectors, scan
from vcpgate.policy.rules import DETECTORS, KNOWN_CWES, Applicability, Detector
from vcpgate.policy.suppression import SuppressionResult, apply_suppressions

__all__ = [
    "scan",
    "applicable_detectors",
    "apply_suppressions",
    "Finding",
    "SuppressionResult",
    "Detector",
    "Applicability",
    "DETECTORS",
    "KNOWN_CWES",
]
