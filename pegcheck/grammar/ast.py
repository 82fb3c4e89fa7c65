# pegcheck/grammar/ast.py
"""Grammar AST

Nodes handed over by the grammar surface parser:
- Grammar: declarations + optional header code block + analysis slot
- Declaration: one rule (name, body expression, action code)
- Expr: Choice / Sequence / Primary / Nonterminal / terminals

The expression tree is read-only during analysis; only code blocks get
annotated (as copies) and the analysis slot gets filled.
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Any, ClassVar, List, Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ..analysis.symbols import SymbolTable
    from ..host.frontend import Comment


@dataclass(frozen=True, order=True)
class Index:
    """Source position inside the grammar file (1-based line/column)."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass
class CodeBlock:
    """
    Action code attached to a rule (or the grammar header).
    - identity : no user code, default pass-through action (never validated)
    - parsed   : host statement list, filled once validated
    - comments : comments found inside the block
    - used_args: implicit parameters the code refers to (sorted)
    """
    code: str
    index: Index
    identity: bool = False
    # host AST nodes do not compare by value
    parsed: Optional[List[Any]] = field(default=None, compare=False)
    comments: Optional[List["Comment"]] = None
    used_args: Optional[Tuple[str, ...]] = None

    @property
    def annotated(self) -> bool:
        return self.used_args is not None


class Modifier:
    OPTIONAL     = "optional"       # e?
    ZERO_OR_MORE = "zero_or_more"   # e*
    ONE_OR_MORE  = "one_or_more"    # e+
    ASSERT       = "assert"         # &e
    NOT          = "not"            # !e

    ALL = (OPTIONAL, ZERO_OR_MORE, ONE_OR_MORE, ASSERT, NOT)


# ---- expression nodes ----

@dataclass(frozen=True)
class Choice:
    alts: Tuple["Expr", ...]  # ordered: first match wins

@dataclass(frozen=True)
class Sequence:
    exprs: Tuple["Expr", ...]

@dataclass(frozen=True)
class Primary:
    expr: "Expr"
    modifier: Optional[str] = None  # one of Modifier.ALL, None for a bare primary

@dataclass(frozen=True)
class Nonterminal:
    name: str
    index: Index  # where it is referenced, not where it is declared

# ---- terminals (leaves) ----

@dataclass(frozen=True)
class Regexp:
    tag: ClassVar[str] = "regexp"
    pattern: str
    index: Optional[Index] = None

@dataclass(frozen=True)
class String:
    tag: ClassVar[str] = "string"
    text: str
    index: Optional[Index] = None

@dataclass(frozen=True)
class CharClass:
    tag: ClassVar[str] = "charclass"
    chars: str  # raw class text, e.g. "[a-z_]"
    index: Optional[Index] = None

@dataclass(frozen=True)
class Anything:
    tag: ClassVar[str] = "anything"
    index: Optional[Index] = None


Terminal = Union[Regexp, String, CharClass, Anything]
TERMINALS = (Regexp, String, CharClass, Anything)

Expr = Union[Choice, Sequence, Primary, Nonterminal, Terminal]


@dataclass
class Declaration:
    name: str
    expr: Expr
    index: Index
    code: Optional[CodeBlock] = None


@dataclass
class Grammar:
    declarations: List[Declaration] = field(default_factory=list)
    # header code: host forms run once at module scope
    code: Optional[CodeBlock] = None
    # filled by analysis
    analysis: Optional["SymbolTable"] = None
