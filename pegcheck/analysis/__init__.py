# pegcheck/analysis/__init__.py
"""Semantic analysis of a parsed PEG grammar.

analyze() proves a grammar self-consistent before code generation:

1) header code block is validated (seeds the findings)
2) symbol table is built and normalized
3) checks run in order: nonterminals -> rules -> code blocks
4) no findings at all -> AnalysisOk, otherwise AnalysisFailed

Errors recorded:
- a nonterminal has no rule (no_reduction)
- a code block does not tokenize (host_syntax_error) or parse (host_parse_error)

Warnings recorded:
- a rule is never used (unused_rule); the first rule is the entry point and
  is exempt

Warnings also make the analysis fail: the caller decides, per finding
severity, what is fatal.
"""

from __future__ import annotations
import sys
from dataclasses import dataclass, replace
from typing import List, Optional, Union
from ..grammar.ast import Grammar
from ..host.frontend import Frontend
from .checks import CHECKS
from .code import Annotated, Failed, check_code_block
from .findings import Finding, is_error
from .symbols import SymbolTable, build_symbol_table, normalize_symbol_table


def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


@dataclass
class AnalysisOk:
    grammar: Grammar
    ok = True


@dataclass
class AnalysisFailed:
    findings: List[Finding]
    ok = False

    @property
    def errors(self) -> List[Finding]:
        return [f for f in self.findings if is_error(f)]

    @property
    def warnings(self) -> List[Finding]:
        return [f for f in self.findings if not is_error(f)]


Analysis = Union[AnalysisOk, AnalysisFailed]


def analyze(g: Grammar, frontend: Optional[Frontend] = None, debug: bool = False) -> Analysis:
    if frontend is None:
        from ..host.python import PythonFrontend
        frontend = PythonFrontend()

    header = g.code
    findings: List[Finding] = []
    outcome = check_code_block(g.code, findings, frontend)
    if isinstance(outcome, Annotated):
        header = outcome.code
    elif isinstance(outcome, Failed):
        findings = outcome.findings
    if debug: _eprint("[DEBUG] header code: %s" % type(outcome).__name__)

    st: SymbolTable = normalize_symbol_table(build_symbol_table(g.declarations))
    if debug: _eprint("[DEBUG] SymbolTable ready | rules=%d nts=%d combinators=%s" %
                      (len(st.rules), len(st.nts), ",".join(sorted(st.combinators))))

    for check in CHECKS:
        st, findings = check(st, findings, frontend)
        if debug: _eprint("[DEBUG] %s done | findings=%d" % (check.__name__, len(findings)))

    if findings:
        if debug: _eprint("[DEBUG] analysis failed | errors=%d warnings=%d" %
                          (sum(1 for f in findings if is_error(f)),
                           sum(1 for f in findings if not is_error(f))))
        return AnalysisFailed(findings)
    if debug: _eprint("[DEBUG] analysis ok | entry=%s" % st.entry_point)
    return AnalysisOk(replace(g, analysis=st, code=header))
