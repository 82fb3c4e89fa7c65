# pegcheck/analysis/symbols.py
"""Symbol table of a PEG grammar.

build_symbol_table() folds over the declarations and walks every rule body,
collecting:
- rules       : (name, index, code) per declaration
- nts         : nonterminal name -> every index where it is referenced
- combinators : construct tags the grammar uses (choice, sequence,
                modifiers, terminal kinds), so codegen only emits the
                runtime support that is actually needed

The walk is built for speed, so the result comes out in traversal order;
normalize_symbol_table() puts everything in source order.
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Dict, Iterable, List, Optional, Set
from ..grammar.ast  import (
    Choice, Sequence, Primary, Nonterminal, TERMINALS,
    CodeBlock, Declaration, Expr, Index,
)


class Combinator:
    CHOICE   = "choice"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class RuleEntry:
    name: str
    index: Index
    code: Optional[CodeBlock] = None


@dataclass
class SymbolTable:
    rules: List[RuleEntry] = field(default_factory=list)
    nts: Dict[str, List[Index]] = field(default_factory=dict)
    combinators: Set[str] = field(default_factory=set)

    @property
    def entry_point(self) -> Optional[str]:
        """Name of the first rule (only meaningful once normalized)."""
        return self.rules[0].name if self.rules else None


def build_symbol_table(declarations: Iterable[Declaration]) -> SymbolTable:
    st = SymbolTable()
    for decl in declarations:
        st = _analyze_declaration(decl, st)
    return st


def _analyze_declaration(decl: Declaration, st: SymbolTable) -> SymbolTable:
    st = _analyze_expression(decl.expr, st)
    st.rules.append(RuleEntry(decl.name, decl.index, decl.code))
    return st


def _analyze_expression(expr: Expr, st: SymbolTable) -> SymbolTable:
    if isinstance(expr, Choice):
        for alt in expr.alts:
            st = _analyze_expression(alt, st)
        st.combinators.add(Combinator.CHOICE)
        return st

    if isinstance(expr, Sequence):
        for sub in expr.exprs:
            st = _analyze_expression(sub, st)
        st.combinators.add(Combinator.SEQUENCE)
        return st

    if isinstance(expr, Primary):
        st = _analyze_expression(expr.expr, st)
        if expr.modifier is not None:
            st.combinators.add(expr.modifier)
        return st

    if isinstance(expr, Nonterminal):
        st.nts.setdefault(expr.name, []).append(expr.index)
        return st

    if isinstance(expr, TERMINALS):
        st.combinators.add(expr.tag)
        return st

    raise TypeError(f"unknown expression node: {expr!r}")


def normalize_symbol_table(st: SymbolTable) -> SymbolTable:
    """
    Return a copy of `st` in source order:
    - rules sorted by declaration index, so rules[0] is the entry point
    - every nonterminal's occurrences sorted
    - nts keyed in name order (stable diagnostics)
    """
    return SymbolTable(
        rules=sorted(st.rules, key=lambda r: r.index),
        nts={name: sorted(locs) for name, locs in sorted(st.nts.items())},
        combinators=set(st.combinators),
    )
