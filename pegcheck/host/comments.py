# pegcheck/host/comments.py
"""Comment scanner for Python action code.

Works on raw text, independently of the host parser, so it also sees
comments the AST drops. String literals are skipped, so a '#' inside a
string is not a comment.

Adjacent full-line comments starting at the same column are merged into a
single Comment with one `text` entry per line.
"""

from __future__ import annotations
import regex as re
from typing import List, Optional
from .frontend import Comment

_TOKEN_SPEC = [
    ("TSTRING",  r"(?i:[rbuf]{0,2})(?:'''(?:\\.|.)*?'''|\"\"\"(?:\\.|.)*?\"\"\")"),
    ("STRING",   r"(?i:[rbuf]{0,2})(?:'(?:\\.|[^'\\\n])*'|\"(?:\\.|[^\"\\\n])*\")"),
    ("COMMENT",  r"#[^\n]*"),
    ("NEWLINE",  r"\n"),
    ("WS",       r"[ \t\f\r]+"),
    ("NAME",     r"\w+"),
    ("OTHER",    r"."),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC), re.S)


def scan_comments(src: str) -> List[Comment]:
    out: List[Comment] = []
    line = col = 1
    # column right after the last non-blank lexeme on the current line (1 = margin)
    code_end = 1
    only_ws = True
    prev_full_line: Optional[Comment] = None
    i = 0
    while i < len(src):
        m = MASTER_RE.match(src, i)
        kind = m.lastgroup
        lexeme = m.group()

        if kind == "COMMENT":
            text = lexeme.rstrip()
            full_line = only_ws
            if (full_line and prev_full_line is not None
                    and prev_full_line.line + len(prev_full_line.text) == line
                    and prev_full_line.column == col):
                merged = Comment(prev_full_line.line, prev_full_line.column,
                                 prev_full_line.indent, prev_full_line.text + (text,))
                out[-1] = merged
                prev_full_line = merged
            else:
                c = Comment(line, col, col - code_end, (text,))
                out.append(c)
                prev_full_line = c if full_line else None

        # advance position
        nl = lexeme.count("\n")
        if nl:
            line += nl
            col = len(lexeme) - lexeme.rfind("\n")
            code_end = 1
            only_ws = kind == "NEWLINE"
            if kind != "NEWLINE":
                # multi-line string: code continues on this line
                code_end = col
        else:
            col += len(lexeme)
            if kind not in ("WS", "COMMENT"):
                code_end = col
                only_ws = False
        if kind not in ("WS", "NEWLINE", "COMMENT"):
            prev_full_line = None
        i = m.end()
    return out
