"""
Detector Rules for the VCP Security Gate.

Every detector is one row in DETECTORS:
- A stable rule name
- The CWE it reports under
- A matcher over the raw payload text
- Whether it applies to every tool or to shell commands only

Regex cannot perform taint tracking (a query built in a variable and then
passed to .query() is not caught). The review skills cover that case.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable


# CWE identifiers the gate reports under. These are stable external ids:
# project ignore lists reference them directly.
CWE_HARDCODED_CREDENTIALS = "CWE-798"
CWE_SQL_INJECTION = "CWE-89"
CWE_CODE_INJECTION = "CWE-95"
CWE_XSS = "CWE-79"
CWE_DESERIALIZATION = "CWE-502"
CWE_ENCODING = "CWE-116"

CWE_CATEGORIES = {
    CWE_HARDCODED_CREDENTIALS: "Secrets exposure",
    CWE_SQL_INJECTION: "Injection via untrusted structure",
    CWE_CODE_INJECTION: "Dynamic code execution",
    CWE_XSS: "Unsafe markup sink",
    CWE_DESERIALIZATION: "Insecure deserialization",
    CWE_ENCODING: "Encoded payload / shell obfuscation",
}

KNOWN_CWES = frozenset(CWE_CATEGORIES)


class Applicability(str, Enum):
    """Which tool calls a detector runs against."""

    ALWAYS = "always"
    SHELL_ONLY = "shell-only"


Matcher = Callable[[str], bool]


@dataclass(frozen=True)
class Detector:
    """A single pattern rule. Immutable, defined once at import."""

    name: str
    cwe: str
    message: str
    matcher: Matcher
    applicability: Applicability = Applicability.ALWAYS

    # Every current rule is security-critical; suppressing one always
    # produces the review warning.
    critical: bool = True

    def matches(self, content: str) -> bool:
        return self.matcher(content)


def regex(pattern: str, flags: int = 0) -> Matcher:
    """
    Build a matcher that fires when the pattern occurs anywhere.

    Word boundaries and character classes are ASCII-only, so a non-ASCII
    letter glued to a keyword (as in "éeval(") never hides a match.
    """
    compiled = re.compile(pattern, flags | re.ASCII)
    return lambda content: compiled.search(content) is not None


def all_of(*matchers: Matcher) -> Matcher:
    return lambda content: all(m(content) for m in matchers)


def any_of(*matchers: Matcher) -> Matcher:
    return lambda content: any(m(content) for m in matchers)


# Query-building methods across DB drivers, Prisma and Knex
_SQL_CALL_NAMES = (
    r"execute|query|raw|queryRawUnsafe|executeRawUnsafe"
    r"|whereRaw|havingRaw|orderByRaw|joinRaw"
)

_SHELLS = r"bash|sh|zsh|dash|ksh"


DETECTORS: tuple[Detector, ...] = (
    # CWE-798: password/key/secret assigned a literal of 8+ chars
    Detector(
        name="hardcoded-secret",
        cwe=CWE_HARDCODED_CREDENTIALS,
        message="Hardcoded secret detected. Use environment variables or a secret manager.",
        matcher=regex(
            r"(password|secret|api_key|apikey|api_secret|private_key|secret_key)"
            r"\s*[:=]\s*[\"'][^\s\"']{8,}[\"']",
            re.IGNORECASE,
        ),
    ),
    # CWE-798: AWS access key ids (documented prefixes only)
    Detector(
        name="aws-access-key",
        cwe=CWE_HARDCODED_CREDENTIALS,
        message="AWS access key detected. Use IAM roles or environment variables.",
        matcher=regex(r"(?:A3T[A-Z0-9]|AKIA|ASIA|AGPA|AIDA|AROA|AIPA|ANPA|ANVA)[A-Z0-9]{16}"),
    ),
    # CWE-798: PEM private keys, PKCS#8 included
    Detector(
        name="private-key",
        cwe=CWE_HARDCODED_CREDENTIALS,
        message="Private key detected. Never commit private keys to source control.",
        matcher=regex(r"-----BEGIN [\w ]*PRIVATE KEY-----"),
    ),
    # CWE-798: JWTs (base64url "eyJ" header, three dot-separated segments)
    Detector(
        name="jwt-token",
        cwe=CWE_HARDCODED_CREDENTIALS,
        message="JWT token detected. Use environment variables or a secret manager.",
        matcher=regex(r"\beyJ[A-Za-z0-9_-]{20,}\.[A-Za-z0-9_-]{20,}\.[A-Za-z0-9_-]{20,}"),
    ),
    # CWE-89: f-string, +, ${} or % formatting inside a query call
    Detector(
        name="sql-string-concat",
        cwe=CWE_SQL_INJECTION,
        message="SQL string concatenation detected. Use parameterized queries.",
        matcher=regex(
            r"(\.execute|\.query|\.raw|\.\$?queryRawUnsafe|\.\$?executeRawUnsafe"
            r"|\.whereRaw|\.havingRaw|\.orderByRaw|\.joinRaw)"
            r"\s*\(\s*(f[\"']|[\"'].*\+|[\"'].*\$\{|[\"'].*%\s*\()"
        ),
    ),
    # CWE-89: template literal with interpolation inside a query call
    Detector(
        name="sql-template-literal",
        cwe=CWE_SQL_INJECTION,
        message="SQL template literal with interpolation detected. Use parameterized queries.",
        matcher=regex(r"\.\$?(" + _SQL_CALL_NAMES + r")\s*\(\s*`[^`]*\$\{"),
    ),
    # CWE-95: eval() whose argument mentions a user-controlled name
    Detector(
        name="eval-user-input",
        cwe=CWE_CODE_INJECTION,
        message="eval() with user input detected. Never eval untrusted data.",
        matcher=regex(r"\beval\s*\([^)]*\b(req|request|input|user|param|query|body|data)\b"),
    ),
    # CWE-79: innerHTML assigned something other than a string literal or tag
    Detector(
        name="innerhtml-variable",
        cwe=CWE_XSS,
        message="innerHTML with variable detected. Use textContent or sanitize first.",
        matcher=regex(r"\.innerHTML\s*=\s*[^\"'<\s]"),
    ),
    Detector(
        name="pickle-load",
        cwe=CWE_DESERIALIZATION,
        message="pickle is never safe with untrusted data. Use json instead.",
        matcher=regex(r"pickle\.loads?\("),
    ),
    Detector(
        name="yaml-load-no-loader",
        cwe=CWE_DESERIALIZATION,
        message="yaml.load() without Loader= is unsafe. Use yaml.safe_load() instead.",
        matcher=regex(r"yaml\.load\s*\((?![^)]*Loader\s*=)[^)]*\)"),
    ),
    Detector(
        name="yaml-unsafe-load",
        cwe=CWE_DESERIALIZATION,
        message="yaml.unsafe_load/full_load are dangerous. Use yaml.safe_load() instead.",
        matcher=regex(r"yaml\.(unsafe_load|full_load)\s*\("),
    ),
    # CWE-502: node-serialize (CVE-2017-5941)
    Detector(
        name="node-unserialize",
        cwe=CWE_DESERIALIZATION,
        message="Insecure deserialization detected. node-serialize is never safe with untrusted data.",
        matcher=regex(r"\.unserialize\s*\("),
    ),
    # CWE-116: decoded data piped into a shell, or decode alongside `sh -c`
    Detector(
        name="encoded-shell-exec",
        cwe=CWE_ENCODING,
        message="Encoded data with shell execution detected. Review manually.",
        matcher=all_of(
            regex(r"\b(base64\s+(-d|--decode)|xxd\s+-r)\b"),
            any_of(
                regex(r"\|\s*(" + _SHELLS + r"|eval|\$SHELL|source)\b"),
                regex(r"\b(" + _SHELLS + r")\s+-c\b"),
            ),
        ),
        applicability=Applicability.SHELL_ONLY,
    ),
    # CWE-95: shell eval of a quoted string or variable expansion
    Detector(
        name="shell-eval-dynamic",
        cwe=CWE_CODE_INJECTION,
        message="Shell eval with dynamic input detected. Review manually.",
        matcher=regex(r"\beval\s+[\"'$]"),
        applicability=Applicability.SHELL_ONLY,
    ),
)

