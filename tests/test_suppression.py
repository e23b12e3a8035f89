"""Tests for CWE suppression."""

import pytest

from vcpgate.policy.engine import Finding
from vcpgate.policy.suppression import apply_suppressions


SECRET = Finding(cwe="CWE-798", rule="hardcoded-secret", message="secret")
AWS = Finding(cwe="CWE-798", rule="aws-access-key", message="aws")
SQL = Finding(cwe="CWE-89", rule="sql-string-concat", message="sql")
PICKLE = Finding(cwe="CWE-502", rule="pickle-load", message="pickle")


class TestApplySuppressions:

    def test_nothing_ignored(self):
        result = apply_suppressions([SECRET, SQL], [])
        assert result.kept == [SECRET, SQL]
        assert result.suppressed == []
        assert result.suppressed_count == 0
        assert not result.critical_suppressed

    def test_suppression_is_cwe_scoped(self):
        """Ignoring CWE-798 leaves the CWE-89 finding in place."""
        result = apply_suppressions([SECRET, SQL], ["CWE-798"])
        assert result.kept == [SQL]
        assert result.suppressed == [SECRET]

    def test_whole_cwe_suppressed(self):
        result = apply_suppressions([SECRET, AWS, SQL], ["CWE-798"])
        assert result.suppressed_count == 2
        assert result.suppressed_cwes == ["CWE-798"]

    def test_everything_suppressed(self):
        result = apply_suppressions([SECRET, SQL, PICKLE], ["CWE-502", "CWE-89", "CWE-798"])
        assert result.kept == []
        assert result.suppressed_cwes == ["CWE-798", "CWE-89", "CWE-502"]

    def test_rule_names_do_not_suppress(self):
        result = apply_suppressions([SECRET], ["hardcoded-secret"])
        assert result.kept == [SECRET]

    def test_critical_flag(self):
        assert apply_suppressions([SECRET], ["CWE-798"]).critical_suppressed

    def test_advisory_finding_not_critical(self):
        advisory = Finding(cwe="CWE-79", rule="advisory", message="m", critical=False)
        result = apply_suppressions([advisory], ["CWE-79"])
        assert result.suppressed_count == 1
        assert not result.critical_suppressed


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
