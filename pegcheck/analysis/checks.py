# pegcheck/analysis/checks.py
"""Checks over a normalized symbol table.

Every check takes (table, findings, frontend) and returns a new
(table, findings) pair; findings only ever grow, new ones in front.
"""

from __future__ import annotations
from typing import Callable, List, Tuple
from ..host.frontend import Frontend
from .code import Annotated, Failed, check_code_block
from .findings import Finding, NoReduction, UnusedRule
from .symbols import RuleEntry, SymbolTable

State = Tuple[SymbolTable, List[Finding]]
Check = Callable[[SymbolTable, List[Finding], Frontend], State]


def check_nonterminals(st: SymbolTable, findings: List[Finding], frontend: Frontend) -> State:
    """Every referenced nonterminal needs a rule; one finding per name."""
    declared = {r.name for r in st.rules}
    for name, indices in st.nts.items():
        if name not in declared:
            findings = [NoReduction(name, tuple(indices))] + findings
    return st, findings


def check_rules(st: SymbolTable, findings: List[Finding], frontend: Frontend) -> State:
    """Every rule but the entry point (rules[0]) must be referenced somewhere."""
    for rule in st.rules[1:]:
        if rule.name not in st.nts:
            findings = [UnusedRule(rule.name, rule.index)] + findings
    return st, findings


def check_code(st: SymbolTable, findings: List[Finding], frontend: Frontend) -> State:
    """Validate every rule's action code, annotating the ones that pass."""
    rules = list(st.rules)
    for pos, rule in enumerate(st.rules):
        outcome = check_code_block(rule.code, findings, frontend)
        if isinstance(outcome, Annotated):
            rules[pos] = RuleEntry(rule.name, rule.index, outcome.code)
        elif isinstance(outcome, Failed):
            findings = outcome.findings
    return SymbolTable(rules=rules, nts=st.nts, combinators=st.combinators), findings


CHECKS: List[Check] = [check_nonterminals, check_rules, check_code]
