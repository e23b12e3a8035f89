"""
Suppression Filter for the VCP Security Gate.

Projects can accept a whole CWE as a known risk through the ignore list in
.vcp.json. Suppression is never silent: the result keeps every suppressed
finding so the report can name them.
"""

from dataclasses import dataclass, field
from typing import Iterable

from vcpgate.policy.engine import Finding


@dataclass
class SuppressionResult:
    """Findings split into those that still block and those that were ignored."""

    kept: list[Finding] = field(default_factory=list)
    suppressed: list[Finding] = field(default_factory=list)

    @property
    def suppressed_count(self) -> int:
        return len(self.suppressed)

    @property
    def suppressed_cwes(self) -> list[str]:
        """Suppressed CWE ids, unique, in the order they were found."""
        seen = []
        for finding in self.suppressed:
            if finding.cwe not in seen:
                seen.append(finding.cwe)
        return seen

    @property
    def critical_suppressed(self) -> bool:
        return any(f.critical for f in self.suppressed)


def apply_suppressions(
    findings: Iterable[Finding],
    ignore: Iterable[str],
) -> SuppressionResult:
    """
    Partition findings by CWE membership in the ignore list.

    Args:
        findings: Findings from the pattern engine
        ignore: CWE ids the project accepts

    Returns:
        SuppressionResult with kept and suppressed findings
    """
    ignored = frozenset(ignore)
    result = SuppressionResult()

    for finding in findings:
        if finding.cwe in ignored:
            result.suppressed.append(finding)
        else:
            result.kept.append(finding)

    return result
