# pegcheck/analysis/findings.py
"""Analysis findings (errors and warnings).

Findings are plain values collected into a list; analysis never raises them.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Iterable, Optional, Tuple, Union
from ..grammar.ast import Index

ERROR   = "error"
WARNING = "warning"


@dataclass(frozen=True)
class NoReduction:
    """A nonterminal is referenced but no rule declares it."""
    severity: ClassVar[str] = ERROR
    kind: ClassVar[str] = "no_reduction"
    name: str
    indices: Tuple[Index, ...]  # every occurrence, sorted

@dataclass(frozen=True)
class UnusedRule:
    """A rule (other than the entry point) nobody references."""
    severity: ClassVar[str] = WARNING
    kind: ClassVar[str] = "unused_rule"
    name: str
    index: Index

@dataclass(frozen=True)
class HostSyntaxError:
    """Action code failed to tokenize."""
    severity: ClassVar[str] = ERROR
    kind: ClassVar[str] = "host_syntax_error"
    info: str
    location: Index

@dataclass(frozen=True)
class HostParseError:
    """Action code tokenized but is not a valid statement list."""
    severity: ClassVar[str] = ERROR
    kind: ClassVar[str] = "host_parse_error"
    reason: str
    location: Optional[Index] = None


Finding = Union[NoReduction, UnusedRule, HostSyntaxError, HostParseError]


def is_error(f: Finding) -> bool:
    return f.severity == ERROR


def format_finding(f: Finding) -> str:
    """One-line, human readable message."""
    if isinstance(f, NoReduction):
        where = ", ".join(str(i) for i in f.indices)
        return f"{f.severity}: no rule for nonterminal '{f.name}' (referenced at {where})"
    if isinstance(f, UnusedRule):
        return f"{f.severity}: {f.index}: rule '{f.name}' is never used"
    if isinstance(f, HostSyntaxError):
        return f"{f.severity}: {f.location}: action code does not tokenize: {f.info}"
    if isinstance(f, HostParseError):
        if f.location is None:
            return f"{f.severity}: action code does not parse: {f.reason}"
        return f"{f.severity}: {f.location}: action code does not parse: {f.reason}"
    raise TypeError(f"unknown finding: {f!r}")


def pretty_findings(findings: Iterable[Finding]) -> str:
    return "\n".join(format_finding(f) for f in findings)
