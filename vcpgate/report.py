"""
Gate Report.

Renders a decision as plain lines and prints them on stderr. Hosts show
stderr to the user when a call is blocked; stdout stays empty.
"""

from typing import Optional

from rich.console import Console

from vcpgate.config.settings import CONFIG_FILENAME
from vcpgate.gate import GateDecision
from vcpgate.policy.engine import Finding
from vcpgate.policy.suppression import SuppressionResult

HEADER = "VCP Security Gate"

# No wrapping or highlighting: hosts read these lines verbatim
console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)


def format_finding(finding: Finding, prefix: str = "") -> str:
    return f"  {prefix}{finding.cwe}: {finding.message} ({finding.rule})"


def format_blocked(decision: GateDecision) -> list[str]:
    """Lines explaining why a call was blocked."""
    if decision.error:
        return [f"{HEADER}: BLOCKED: {decision.error}"]

    lines = [f"{HEADER}: BLOCKED"]
    lines.extend(format_finding(f) for f in decision.findings)
    return lines


def format_suppression_warning(
    suppression: SuppressionResult,
    config_filename: str = CONFIG_FILENAME,
) -> list[str]:
    """
    Lines announcing suppressed findings.

    Suppression is never silent: this is printed whether the call ends up
    allowed or blocked.
    """
    if not suppression.suppressed:
        return []

    cwes = ", ".join(suppression.suppressed_cwes)
    lines = [
        f"{HEADER}: WARNING: Suppressed {suppression.suppressed_count} finding(s) "
        f"via {config_filename} ignore list: {cwes}"
    ]
    lines.extend(format_finding(f, prefix="suppressed ") for f in suppression.suppressed)

    if suppression.critical_suppressed:
        lines.append(
            f"  Security-critical findings were suppressed. "
            f"Review the ignore list in {config_filename}."
        )

    return lines


def report_lines(
    decision: GateDecision,
    config_filename: str = CONFIG_FILENAME,
) -> list[tuple[str, str]]:
    """Report lines for a decision paired with their console style."""
    lines = [
        (line, "yellow")
        for line in format_suppression_warning(decision.suppression, config_filename)
    ]

    if not decision.allowed:
        lines.extend((line, "bold red") for line in format_blocked(decision))

    return lines


def format_report(
    decision: GateDecision,
    config_filename: str = CONFIG_FILENAME,
) -> list[str]:
    """All report lines for a decision (empty for a clean allow)."""
    return [line for line, _ in report_lines(decision, config_filename)]


def print_report(
    decision: GateDecision,
    config_filename: str = CONFIG_FILENAME,
    out: Optional[Console] = None,
) -> None:
    """
    Print the report for a decision on stderr.

    Args:
        decision: Gate decision
        config_filename: Config file name to mention in warnings
        out: Console to print to (uses the stderr console if not provided)
    """
    if out is None:
        out = console

    for line, style in report_lines(decision, config_filename):
        out.print(line, style=style, markup=False)
