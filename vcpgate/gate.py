"""
Gate Decision for the VCP Security Gate.

This is the one place that turns a tool call into allow or block:
- Input that cannot be parsed always blocks
- Empty content always allows
- Findings block unless their CWE is on the project ignore list
- Config problems only ever mean "nothing suppressed"
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from vcpgate.config.loader import GateConfig, EMPTY_CONFIG, resolve_config
from vcpgate.config.settings import GateSettings, DEFAULT_SETTINGS
from vcpgate.errors import InputParseError
from vcpgate.policy.engine import Finding, scan
from vcpgate.policy.suppression import SuppressionResult, apply_suppressions
from vcpgate.request import ToolRequest, parse_request


EXIT_ALLOW = 0
EXIT_BLOCK = 2

PARSE_ERROR_MESSAGE = "Could not parse hook input. Refusing to allow unverified tool call."


@dataclass
class GateDecision:
    """Outcome of one gate invocation."""

    # Findings left after suppression
    findings: list[Finding] = field(default_factory=list)
    suppression: SuppressionResult = field(default_factory=SuppressionResult)
    config: GateConfig = EMPTY_CONFIG

    # Set when the call was blocked without being evaluated
    error: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.error is None and not self.findings

    @property
    def exit_code(self) -> int:
        return EXIT_ALLOW if self.allowed else EXIT_BLOCK


def blocked(reason: str) -> GateDecision:
    """A decision that blocks without evaluating any pattern."""
    return GateDecision(error=reason)


def evaluate(
    request: ToolRequest,
    settings: Optional[GateSettings] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GateDecision:
    """
    Evaluate a parsed tool call.

    Args:
        request: The tool call
        settings: Gate settings (uses default if not provided)
        environ: Environment mapping (uses os.environ if not provided)

    Returns:
        GateDecision
    """
    if settings is None:
        settings = DEFAULT_SETTINGS
    if environ is None:
        environ = os.environ

    if request.is_empty:
        return GateDecision()

    findings = scan(request.content, request.tool_name, shell_tools=settings.shell_tools)

    # Config only matters for filtering
    if not findings:
        return GateDecision()

    config = resolve_config(request.cwd, settings, environ)
    suppression = apply_suppressions(findings, config.ignore)

    return GateDecision(
        findings=suppression.kept,
        suppression=suppression,
        config=config,
    )


def run_gate(
    raw: str,
    settings: Optional[GateSettings] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GateDecision:
    """
    Parse raw hook input and evaluate it, failing closed on bad input.

    Args:
        raw: Everything read from stdin
        settings: Gate settings (uses default if not provided)
        environ: Environment mapping (uses os.environ if not provided)

    Returns:
        GateDecision
    """
    if settings is None:
        settings = DEFAULT_SETTINGS

    try:
        request = parse_request(raw, shell_tools=settings.shell_tools)
    except InputParseError:
        return blocked(PARSE_ERROR_MESSAGE)

    return evaluate(request, settings, environ)
