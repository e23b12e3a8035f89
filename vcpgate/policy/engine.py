"""
Pattern Engine for the VCP Security Gate.

Runs the detector table against a payload. Every applicable detector is
tested independently, so one edit can surface a secret and an injection
at the same time.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from vcpgate.policy.rules import Applicability, Detector, DETECTORS


SHELL_TOOLS = ("Bash",)


@dataclass(frozen=True)
class Finding:
    """A detector that fired for the current payload."""

    cwe: str
    rule: str
    message: str
    critical: bool = True

    @classmethod
    def from_detector(cls, detector: Detector) -> "Finding":
        return cls(
            cwe=detector.cwe,
            rule=detector.name,
            message=detector.message,
            critical=detector.critical,
        )


def applicable_detectors(
    tool_name: str,
    detectors: Iterable[Detector] = DETECTORS,
    shell_tools: tuple[str, ...] = SHELL_TOOLS,
) -> list[Detector]:
    """
    Select the detectors that apply to a tool call.

    Args:
        tool_name: Name of the intercepted tool
        detectors: Detector table (defaults to the built-in one)
        shell_tools: Tool names treated as shell execution

    Returns:
        Detectors in declaration order
    """
    is_shell = tool_name in shell_tools
    return [
        d for d in detectors
        if d.applicability is Applicability.ALWAYS
        or (d.applicability is Applicability.SHELL_ONLY and is_shell)
    ]


def scan(
    content: str,
    tool_name: str,
    detectors: Optional[Iterable[Detector]] = None,
    shell_tools: tuple[str, ...] = SHELL_TOOLS,
) -> list[Finding]:
    """
    Evaluate a payload against the detector table.

    Args:
        content: Text being written, or the shell command being run
        tool_name: Name of the intercepted tool
        detectors: Detector table (uses DETECTORS if not provided)
        shell_tools: Tool names treated as shell execution

    Returns:
        One finding per matching detector, in declaration order
    """
    if detectors is None:
        detectors = DETECTORS

    if not content:
        return []

    findings = []

    for detector in applicable_detectors(tool_name, detectors, shell_tools):
        if detector.matches(content):
            findings.append(Finding.from_detector(detector))

    return findings
