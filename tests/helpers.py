from __future__ import annotations
from typing import List, Optional

import regex as re

from pegcheck.grammar.ast import (
    CodeBlock, Declaration, Grammar, Index, Nonterminal, String,
)
from pegcheck.host.frontend import (
    Comment, Frontend, HostParse, HostParseFailure, HostScanFailure, HostToken,
)

BAD_SCAN = "<<scan error>>"
BAD_PARSE = "<<parse error>>"


class FakeFrontend(Frontend):
    """Deterministic front-end: rejects two magic strings, accepts the rest.

    Every word becomes a NAME token; '#' starts a comment to end of line.
    """
    implicit_args = frozenset({"node", "idx"})

    def __init__(self):
        self.calls: List[str] = []

    def tokenize_and_parse(self, text, line, column):
        self.calls.append(text)
        if text == BAD_SCAN:
            raise HostScanFailure("bad token", Index(line, column))
        if text == BAD_PARSE:
            raise HostParseFailure("bad expression", Index(line, column))
        toks = [HostToken("NAME", m.group(), line, column + m.start())
                for m in re.finditer(r"\w+", text.split("#")[0])]
        return HostParse(parsed=[text], tokens=toks, end=Index(line, column + len(text)))

    def scan_comments(self, text):
        at = text.find("#")
        if at < 0:
            return []
        return [Comment(1, at + 1, at, (text[at:].rstrip(),))]

    def is_identifier(self, tok):
        return tok.kind == "NAME"


def idx(line: int, column: int = 1) -> Index:
    return Index(line, column)


def code(text: str, line: int = 1, column: int = 1, identity: bool = False) -> CodeBlock:
    return CodeBlock(text, Index(line, column), identity=identity)


def rule(name: str, expr, line: int, action: Optional[CodeBlock] = None) -> Declaration:
    return Declaration(name=name, expr=expr, index=Index(line, 1), code=action)


def nt(name: str, line: int, column: int = 10) -> Nonterminal:
    return Nonterminal(name, Index(line, column))


def lit(text: str) -> String:
    return String(text)


def grammar(*decls: Declaration, header: Optional[CodeBlock] = None) -> Grammar:
    return Grammar(declarations=list(decls), code=header)
