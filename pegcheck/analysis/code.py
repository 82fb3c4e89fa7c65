# pegcheck/analysis/code.py
"""Action code validation.

check_code_block() runs one code block through the host front-end and
reports one of:
- Unchanged            : nothing to check (no block, or identity action)
- Annotated(block)     : valid; a copy carrying parsed/comments/used_args
- Failed(findings)     : invalid; the caller's findings with the new error
                         in front
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple, Union
from ..grammar.ast import CodeBlock
from ..host.frontend import Frontend, HostParseFailure, HostScanFailure, HostToken
from .findings import Finding, HostParseError, HostSyntaxError


@dataclass(frozen=True)
class Unchanged:
    pass

@dataclass(frozen=True)
class Annotated:
    code: CodeBlock

@dataclass(frozen=True)
class Failed:
    findings: List[Finding]

CodeOutcome = Union[Unchanged, Annotated, Failed]


def used_implicit_args(tokens: Iterable[HostToken], frontend: Frontend) -> Tuple[str, ...]:
    """Implicit parameter names referenced by identifier tokens, sorted."""
    found = {t.text for t in tokens
             if frontend.is_identifier(t) and t.text in frontend.implicit_args}
    return tuple(sorted(found))


def check_code_block(code: Optional[CodeBlock], findings: List[Finding],
                     frontend: Frontend) -> CodeOutcome:
    if code is None or code.identity:
        return Unchanged()

    try:
        res = frontend.tokenize_and_parse(code.code, code.index.line, code.index.column)
    except HostScanFailure as e:
        return Failed([HostSyntaxError(e.info, e.location)] + findings)
    except HostParseFailure as e:
        return Failed([HostParseError(e.reason, e.location)] + findings)

    return Annotated(replace(
        code,
        parsed=res.parsed,
        comments=frontend.scan_comments(code.code),
        used_args=used_implicit_args(res.tokens, frontend),
    ))
