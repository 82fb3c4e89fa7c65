# pegcheck/host/python.py
"""Python front-end for action code.

Action code sits inside a grammar file, usually indented to fit the rule
around it:

    sum <- term "+" term `
        lhs = node[0]
        lhs + node[2]
    `;

so the block is normalized first: whitespace before the first line's code is
dropped and the common indentation of the remaining lines removed. Line
numbers are kept; reported positions are translated back to the grammar
file.

Parsing appends a synthetic end-of-statement so a bare expression, or a run
of statements, is accepted as a complete unit.
"""

from __future__ import annotations
import ast as _pyast
import io
import tokenize
from typing import Dict, Iterable, List, Optional, Set, Tuple
from ..grammar.ast import Index
from .comments import scan_comments
from .frontend import (
    Comment, Frontend, HostParse, HostParseFailure, HostScanFailure, HostToken,
)

# node: value produced by the match, idx: offset where the match starts
DEFAULT_IMPLICIT_ARGS = frozenset({"node", "idx"})

_END_OF_STATEMENT = "\n"

# tokens that carry no source text
_SKIP = {tokenize.ENDMARKER, tokenize.DEDENT}
# tokens that never open a logical line
_LAYOUT = {tokenize.NL, tokenize.COMMENT, tokenize.INDENT, tokenize.DEDENT,
           tokenize.ENDMARKER, tokenize.ERRORTOKEN}


def _logical_rows(src: str) -> Optional[Tuple[Dict[int, int], Set[int]]]:
    """
    Returns (starts, inside):
    - starts: row -> column of the token opening each logical line
    - inside: rows that begin inside a multi-line token (string body)
    None when the text does not tokenize; the real pass reports that.
    """
    starts: Dict[int, int] = {}
    inside: Set[int] = set()
    new_line = True
    try:
        for tok in tokenize.generate_tokens(io.StringIO(src).readline):
            if tok.end[0] > tok.start[0]:
                inside.update(range(tok.start[0] + 1, tok.end[0] + 1))
            if tok.type == tokenize.NEWLINE:
                new_line = True
            elif tok.type not in _LAYOUT and new_line:
                starts[tok.start[0]] = tok.start[1]
                new_line = False
    except (tokenize.TokenError, SyntaxError):
        return None
    return starts, inside


def _normalize_block(text: str, column: int) -> Tuple[str, List[int]]:
    """
    Returns (source, shifts); shifts[row-1] is how many chars were removed
    in front of that row.

    The margin comes from the lines opening a logical line only: comment
    lines and string bodies don't count, and string bodies are left as they
    are. Line 1 starts at `column` in the grammar file, so its code counts as
    indented by column-1.
    """
    lines = text.split("\n")
    head = lines[0].lstrip()
    first_shift = len(lines[0]) - len(lines[0].lstrip())
    scan = _logical_rows("\n".join([head] + lines[1:]))
    if scan is None:
        starts = {row: len(ln) - len(ln.lstrip())
                  for row, ln in enumerate(lines[1:], start=2) if ln.strip()}
        inside: Set[int] = set()
    else:
        starts, inside = scan
    indents = [col for row, col in starts.items() if row > 1]
    if head and indents:
        indents.append(column - 1 + first_shift)
    margin = min(indents) if indents else 0
    # only strip the margin if it's shared whitespace
    if len({lines[row - 1][:margin] for row in starts if row > 1}) > 1:
        margin = 0

    out = [head]
    shifts = [first_shift]
    for row, ln in enumerate(lines[1:], start=2):
        if row in inside:
            cut = 0
        elif not ln.strip():
            cut = len(ln)
        else:
            cut = min(margin, len(ln) - len(ln.lstrip()))
        out.append(ln[cut:])
        shifts.append(cut)
    return "\n".join(out), shifts


class PythonFrontend(Frontend):
    def __init__(self, implicit_args: Iterable[str] = DEFAULT_IMPLICIT_ARGS,
                 filename: str = "<action>"):
        self.implicit_args = frozenset(implicit_args)
        self.filename = filename

    # ----- Frontend -----
    def tokenize_and_parse(self, text: str, line: int, column: int) -> HostParse:
        src, shifts = _normalize_block(text, column)
        rows = src.split("\n")

        def offset(row: int) -> int:
            """Grammar column (0-based) of col 0 on `row` of the block."""
            return column - 1 + shifts[0] if row <= 1 else shifts[row - 1]

        def where(row: int, col0: int) -> Index:
            """(row 1-based, col 0-based) in the normalized block -> grammar Index."""
            if row > len(rows):
                # past the end (EOF errors): last real position
                row, col0 = len(rows), len(rows[-1])
            return Index(line + max(row, 1) - 1, offset(row) + col0 + 1)

        tokens: List[HostToken] = []
        end = Index(line, column)
        try:
            for tok in tokenize.generate_tokens(io.StringIO(src).readline):
                if tok.type == tokenize.ERRORTOKEN and not tok.string.isspace():
                    raise HostScanFailure(f"invalid token {tok.string!r}", where(*tok.start))
                end = where(*tok.end)
                if tok.type in _SKIP or tok.type == tokenize.ERRORTOKEN:
                    continue
                at = where(*tok.start)
                tokens.append(HostToken(tokenize.tok_name[tok.type], tok.string, at.line, at.column))
        except tokenize.TokenError as e:
            msg = e.args[0]
            pos = e.args[1] if len(e.args) > 1 else (1, 0)
            raise HostScanFailure(msg, where(*pos)) from None
        except SyntaxError as e:
            if isinstance(e, (HostScanFailure, HostParseFailure)):
                raise
            raise HostScanFailure(e.msg, where(e.lineno or 1, max((e.offset or 1) - 1, 0))) from None

        try:
            tree = _pyast.parse(src + _END_OF_STATEMENT, filename=self.filename, mode="exec")
        except SyntaxError as e:
            loc = None
            if e.lineno is not None:
                loc = where(e.lineno, max((e.offset or 1) - 1, 0))
            raise HostParseFailure(e.msg, loc) from None

        # parsed locations in grammar coordinates (col_offset stays 0-based)
        for n in _pyast.walk(tree):
            if getattr(n, "col_offset", None) is not None and getattr(n, "lineno", None):
                n.col_offset += offset(min(n.lineno, len(rows)))
            if getattr(n, "end_col_offset", None) is not None and getattr(n, "end_lineno", None):
                n.end_col_offset += offset(min(n.end_lineno, len(rows)))
        if line > 1:
            _pyast.increment_lineno(tree, line - 1)
        return HostParse(parsed=list(tree.body), tokens=tokens, end=end)

    def scan_comments(self, text: str) -> List[Comment]:
        return scan_comments(text)

    def is_identifier(self, tok: HostToken) -> bool:
        return tok.kind == "NAME"
