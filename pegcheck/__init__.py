# pegcheck/__init__.py
"""pegcheck: semantic analysis for PEG grammar definitions.

Takes the grammar tree built by the surface parser, builds its symbol table,
validates the embedded Python action code and reports undefined
nonterminals and unused rules.
"""

from .grammar.ast import (
    Index, CodeBlock, Modifier,
    Choice, Sequence, Primary, Nonterminal,
    Regexp, String, CharClass, Anything,
    Declaration, Grammar,
)
from .analysis import Analysis, AnalysisFailed, AnalysisOk, analyze
from .analysis.findings import (
    HostParseError, HostSyntaxError, NoReduction, UnusedRule,
    format_finding, pretty_findings,
)
from .analysis.symbols import Combinator, RuleEntry, SymbolTable
from .host import Frontend, PythonFrontend
