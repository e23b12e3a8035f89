"""
VCP Security Gate CLI Entry Point.

Registered as a PreToolUse hook for Write|Edit|Bash. The host pipes the
tool call as JSON on stdin and reads the exit status:

    0 = allow the tool call
    2 = block the tool call (stderr shown to the user)

Usage:
    vcp-security-gate < hook-input.json
    python -m vcpgate --verbose < hook-input.json
"""

import argparse
import sys
from dataclasses import replace

from dotenv import load_dotenv
from rich.markup import escape

from vcpgate import __version__
from vcpgate.config.settings import DEFAULT_SETTINGS, GateSettings
from vcpgate.gate import EXIT_BLOCK, GateDecision, run_gate
from vcpgate.report import HEADER, console, print_report

# Load environment (never overrides variables the host already set)
load_dotenv()

UNEXPECTED_ERROR_MESSAGE = "Gate failed while checking the call. Refusing to allow unverified tool call."


def print_config_details(decision: GateDecision, settings: GateSettings) -> None:
    """Describe which config file was used, for --verbose."""
    config = decision.config

    if config.path is None:
        console.print(f"[dim]{settings.config_filename}: none in use[/dim]")
        return

    path = escape(str(config.path))
    if config.error:
        console.print(f"[dim]{path}: ignored ({escape(config.error)})[/dim]")
    else:
        ignore = ", ".join(config.ignore) or "nothing"
        console.print(f"[dim]{path}: ignoring {ignore}[/dim]")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="vcp-security-gate",
        description="VCP Security Gate - block tool calls containing known dangerous code patterns",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Reads one hook request as JSON from stdin.

Exit status:
  0  allow the tool call
  2  block the tool call

Suppress a whole CWE for a project with an ignore list in .vcp.json:
  {"ignore": ["CWE-798"]}
        """,
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Report which config file was used",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"VCP Security Gate {__version__}",
    )

    args = parser.parse_args(argv)

    settings = replace(DEFAULT_SETTINGS, verbose=args.verbose)

    try:
        raw = sys.stdin.read()
        decision = run_gate(raw, settings)

    except Exception as e:
        # Never let a failure turn into an allow
        console.print(
            f"{HEADER}: BLOCKED: {UNEXPECTED_ERROR_MESSAGE} ({type(e).__name__}: {e})",
            style="bold red",
            markup=False,
        )
        sys.exit(EXIT_BLOCK)

    if settings.verbose and decision.error is None:
        print_config_details(decision, settings)

    print_report(decision, settings.config_filename)

    sys.exit(decision.exit_code)


if __name__ == "__main__":
    main()
