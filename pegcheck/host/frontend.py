# pegcheck/host/frontend.py
"""Host-language front-end interface.

The analyzer never looks inside action code itself; it hands the text to a
Frontend, which tokenizes and parses it, and asks it for comments.

API
---
- `HostToken(kind, text, line, col)`: one host token, grammar coordinates
- `Comment(line, column, indent, text)`: comment group inside a block
- `Frontend`
    - `tokenize_and_parse(text, line, column) -> HostParse`
    - `scan_comments(text) -> List[Comment]`
    - `is_identifier(tok) -> bool`
    - `implicit_args`: names available to action code without declaration

Failures are raised as HostScanFailure / HostParseFailure (SyntaxError
subclasses); the analyzer turns them into findings.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, FrozenSet, List, Optional, Tuple
from ..grammar.ast import Index


@dataclass(frozen=True)
class HostToken:
    kind: str   # front-end specific token kind, e.g. "NAME"
    text: str
    line: int   # 1-based, grammar coordinates
    col: int    # 1-based, grammar coordinates


@dataclass(frozen=True)
class Comment:
    line: int               # 1-based, relative to the block text
    column: int             # 1-based
    indent: int             # whitespace before the comment marker
    text: Tuple[str, ...]   # one entry per merged comment line


@dataclass
class HostParse:
    parsed: List[Any]       # host AST (statement list)
    tokens: List[HostToken]
    end: Index              # where the block's text ends


class HostScanFailure(SyntaxError):
    def __init__(self, info: str, location: Index):
        super().__init__(f"{location}: {info}")
        self.info = info
        self.location = location


class HostParseFailure(SyntaxError):
    def __init__(self, reason: str, location: Optional[Index] = None):
        super().__init__(reason if location is None else f"{location}: {reason}")
        self.reason = reason
        self.location = location


class Frontend:
    """Minimal interface the code validator relies on."""
    implicit_args: FrozenSet[str] = frozenset()

    def tokenize_and_parse(self, text: str, line: int, column: int) -> HostParse:
        raise NotImplementedError

    def scan_comments(self, text: str) -> List[Comment]:
        raise NotImplementedError

    def is_identifier(self, tok: HostToken) -> bool:
        raise NotImplementedError
