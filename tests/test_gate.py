"""
Tests for the gate decision.

These tests verify that the gate:
- Blocks on unparseable input, whatever the config says
- Allows empty payloads for every tool
- Blocks on findings unless their CWE is ignored
- Treats a broken config exactly like no config
- Never lets suppression go unreported
"""

import io

import pytest
from rich.console import Console

from vcpgate.gate import EXIT_ALLOW, EXIT_BLOCK, PARSE_ERROR_MESSAGE, evaluate, run_gate
from vcpgate.report import format_report, print_report
from vcpgate.request import ToolRequest

from payloads import (
    BASE64_BASH,
    HARDCODED_SECRET,
    SQL_FSTRING,
    bash_input,
    edit_input,
    write_config,
    write_input,
)


@pytest.fixture
def project(tmp_path):
    """Environment pointing the gate at an empty project root."""
    return tmp_path, {"CLAUDE_PROJECT_DIR": str(tmp_path)}


def reported_cwes(decision):
    return [f.cwe for f in decision.findings]


class TestBaseline:
    """Decisions without any project config."""

    def test_clean_code_allowed(self, project):
        _, env = project
        decision = run_gate(write_input("const x = 1 + 2;"), environ=env)
        assert decision.allowed
        assert decision.exit_code == EXIT_ALLOW
        assert format_report(decision) == []

    def test_secret_blocked(self, project):
        _, env = project
        decision = run_gate(write_input(HARDCODED_SECRET), environ=env)
        assert decision.exit_code == EXIT_BLOCK
        assert reported_cwes(decision) == ["CWE-798"]

    def test_encoded_shell_blocked(self, project):
        _, env = project
        decision = run_gate(bash_input(BASE64_BASH), environ=env)
        assert decision.exit_code == EXIT_BLOCK
        assert reported_cwes(decision) == ["CWE-116"]

    def test_safe_bash_allowed(self, project):
        _, env = project
        assert run_gate(bash_input("git status"), environ=env).allowed

    def test_edit_new_string_checked(self, project):
        _, env = project
        assert not run_gate(edit_input(SQL_FSTRING), environ=env).allowed

    @pytest.mark.parametrize("raw", ["not json", "", "[]", "{\"tool_input\": 5}"])
    def test_unparseable_input_blocked(self, raw):
        decision = run_gate(raw, environ={})
        assert decision.exit_code == EXIT_BLOCK
        assert decision.error == PARSE_ERROR_MESSAGE
        assert "Could not parse hook input" in "\n".join(format_report(decision))

    def test_unparseable_input_blocked_despite_config(self, project):
        root, env = project
        write_config(root, ["CWE-798", "CWE-89", "CWE-95", "CWE-79", "CWE-502", "CWE-116"])
        assert run_gate("not json", environ=env).exit_code == EXIT_BLOCK

    @pytest.mark.parametrize("raw", [
        write_input(""),
        bash_input(""),
        edit_input(""),
        "{\"tool_name\": \"Write\", \"tool_input\": {}}",
    ])
    def test_empty_payload_allowed(self, raw):
        assert run_gate(raw, environ={}).allowed

    def test_every_finding_reported(self, project):
        _, env = project
        content = "\n".join([HARDCODED_SECRET, SQL_FSTRING])
        decision = run_gate(write_input(content), environ=env)
        lines = format_report(decision)
        assert lines[0] == "VCP Security Gate: BLOCKED"
        assert any(line.startswith("  CWE-798: ") for line in lines)
        assert any(line.startswith("  CWE-89: ") for line in lines)

    def test_idempotent(self, project):
        root, env = project
        write_config(root, ["CWE-89"])
        raw = write_input("\n".join([HARDCODED_SECRET, SQL_FSTRING]))
        first = run_gate(raw, environ=env)
        second = run_gate(raw, environ=env)
        assert first.exit_code == second.exit_code
        assert reported_cwes(first) == reported_cwes(second)
        assert format_report(first) == format_report(second)


class TestSuppression:
    """Decisions with a .vcp.json ignore list."""

    def test_suppressed_cwe_allows_with_warning(self, project):
        root, env = project
        write_config(root, ["CWE-798"])
        decision = run_gate(write_input(HARDCODED_SECRET), environ=env)
        assert decision.exit_code == EXIT_ALLOW
        report = "\n".join(format_report(decision))
        assert "WARNING" in report
        assert "Suppressed 1" in report
        assert "CWE-798" in report
        assert "BLOCKED" not in report

    def test_only_specified_cwe_suppressed(self, project):
        root, env = project
        write_config(root, ["CWE-798"])
        content = "\n".join([HARDCODED_SECRET, SQL_FSTRING])
        decision = run_gate(write_input(content), environ=env)
        assert decision.exit_code == EXIT_BLOCK
        assert reported_cwes(decision) == ["CWE-89"]
        lines = format_report(decision)
        report = "\n".join(lines)
        assert "WARNING" in report
        assert "  suppressed CWE-798: " in report
        assert not any(line.startswith("  CWE-798:") for line in lines)
        assert any(line.startswith("  CWE-89: ") for line in lines)

    def test_multiple_cwes_ignored(self, project):
        root, env = project
        write_config(root, ["CWE-798", "CWE-89"])
        content = "\n".join([HARDCODED_SECRET, SQL_FSTRING])
        decision = run_gate(write_input(content), environ=env)
        assert decision.allowed
        assert "Suppressed 2" in format_report(decision)[0]

    def test_non_cwe_entries_do_not_suppress(self, project):
        root, env = project
        write_config(root, ["core-security", "core-security/rule-3"])
        decision = run_gate(write_input(HARDCODED_SECRET), environ=env)
        assert decision.exit_code == EXIT_BLOCK
        assert reported_cwes(decision) == ["CWE-798"]

    def test_empty_ignore_still_blocks(self, project):
        root, env = project
        write_config(root, [])
        assert run_gate(write_input(HARDCODED_SECRET), environ=env).exit_code == EXIT_BLOCK

    def test_malformed_config_same_as_missing(self, project):
        root, env = project
        raw = write_input(HARDCODED_SECRET)
        missing = run_gate(raw, environ=env)
        (root / ".vcp.json").write_text("not json{{{", encoding="utf-8")
        malformed = run_gate(raw, environ=env)
        assert malformed.exit_code == missing.exit_code == EXIT_BLOCK
        assert reported_cwes(malformed) == reported_cwes(missing)

    def test_config_above_root_ignored(self, tmp_path):
        child = tmp_path / "child"
        child.mkdir()
        write_config(tmp_path, ["CWE-798"])
        decision = run_gate(write_input(HARDCODED_SECRET), environ={"CLAUDE_PROJECT_DIR": str(child)})
        assert decision.exit_code == EXIT_BLOCK

    def test_falls_back_to_request_cwd(self, tmp_path):
        write_config(tmp_path, ["CWE-798"])
        decision = run_gate(
            write_input(HARDCODED_SECRET, cwd=str(tmp_path)),
            environ={"CLAUDE_PROJECT_DIR": ""},
        )
        assert decision.allowed
        assert decision.suppression.suppressed_count == 1

    def test_no_root_and_no_cwd_still_blocks(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        decision = run_gate(write_input(HARDCODED_SECRET), environ={"CLAUDE_PROJECT_DIR": ""})
        assert decision.exit_code == EXIT_BLOCK

    def test_shell_rule_suppressed(self, project):
        root, env = project
        write_config(root, ["CWE-116"])
        assert run_gate(bash_input(BASE64_BASH), environ=env).allowed

    @pytest.mark.parametrize("cwd", ["/tmp/a\x00b", "/" + "a" * 5000])
    def test_unusable_cwd_still_reports_findings(self, project, cwd):
        """A working directory that cannot be searched means no config."""
        _, env = project
        decision = run_gate(write_input(HARDCODED_SECRET, cwd=cwd), environ=env)
        assert decision.exit_code == EXIT_BLOCK
        assert decision.error is None
        assert reported_cwes(decision) == ["CWE-798"]
        assert "  CWE-798: " in "\n".join(format_report(decision))

    @pytest.mark.parametrize("cwd", ["/tmp/a\x00b", "/" + "a" * 5000])
    def test_unusable_cwd_without_project_root(self, cwd):
        decision = run_gate(write_input(HARDCODED_SECRET, cwd=cwd), environ={"CLAUDE_PROJECT_DIR": ""})
        assert decision.exit_code == EXIT_BLOCK
        assert reported_cwes(decision) == ["CWE-798"]


class TestPrintReport:
    """Printed output matches the formatted lines."""

    def render(self, decision):
        buffer = io.StringIO()
        out = Console(file=buffer, soft_wrap=True, highlight=False, emoji=False)
        print_report(decision, out=out)
        return buffer.getvalue()

    def test_blocked(self, project):
        _, env = project
        decision = run_gate(write_input("\n".join([HARDCODED_SECRET, SQL_FSTRING])), environ=env)
        assert self.render(decision) == "\n".join(format_report(decision)) + "\n"

    def test_partial_suppression(self, project):
        root, env = project
        write_config(root, ["CWE-798"])
        decision = run_gate(write_input("\n".join([HARDCODED_SECRET, SQL_FSTRING])), environ=env)
        assert self.render(decision) == "\n".join(format_report(decision)) + "\n"

    def test_allowed_prints_nothing(self, project):
        _, env = project
        assert self.render(run_gate(write_input("x = 1"), environ=env)) == ""


class TestEvaluate:
    """evaluate() on already-parsed requests."""

    def test_empty_request(self):
        assert evaluate(ToolRequest(tool_name="Bash", content=""), environ={}).allowed

    def test_config_not_consulted_without_findings(self, project):
        root, env = project
        write_config(root, ["CWE-798"])
        decision = evaluate(ToolRequest(tool_name="Write", content="x = 1"), environ=env)
        assert decision.config.path is None

    def test_config_recorded(self, project):
        root, env = project
        write_config(root, ["CWE-798"])
        decision = evaluate(ToolRequest(tool_name="Write", content=HARDCODED_SECRET), environ=env)
        assert decision.config.path == (root / ".vcp.json").resolve()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
