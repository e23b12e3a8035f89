"""
VCP Stop Reminder.

Registered as a Stop hook. Reminds the user to run the VCP review skills
before committing. Informational only: always exits 0.
"""

import sys

from vcpgate.gate import EXIT_ALLOW
from vcpgate.report import console

REMINDER = (
    "Reminder: Run /vcp-security-check, /vcp-quality-check, "
    "or /vcp-pre-commit-review before committing."
)


def main():
    console.print(REMINDER, markup=False)
    sys.exit(EXIT_ALLOW)


if __name__ == "__main__":
    main()
