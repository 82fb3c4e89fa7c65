import pytest

from pegcheck.analysis.symbols import (
    Combinator, RuleEntry, SymbolTable, build_symbol_table, normalize_symbol_table,
)
from pegcheck.grammar.ast import (
    Anything, CharClass, Choice, Modifier, Primary, Regexp, Sequence,
)
from tests.helpers import code, idx, lit, nt, rule


def test_walk_collects_every_combinator_kind():
    body = Choice((
        Sequence((lit("a"), Primary(nt("x", 1), Modifier.ZERO_OR_MORE))),
        Primary(Regexp("[0-9]+"), Modifier.NOT),
        Primary(CharClass("[a-z]")),
        Anything(),
    ))
    st = build_symbol_table([rule("start", body, 1)])
    assert st.combinators == {
        Combinator.CHOICE, Combinator.SEQUENCE, "zero_or_more", "not",
        "string", "regexp", "charclass", "anything",
    }


def test_bare_primary_adds_no_modifier():
    st = build_symbol_table([rule("start", Primary(lit("a")), 1)])
    assert st.combinators == {"string"}


def test_nonterminal_occurrences_are_grouped_by_name():
    body = Sequence((nt("a", 1, 5), nt("b", 1, 7), nt("a", 1, 9)))
    st = build_symbol_table([rule("start", body, 1)])
    assert st.nts == {"a": [idx(1, 5), idx(1, 9)], "b": [idx(1, 7)]}


def test_rules_keep_their_code():
    action = code("node", line=1, column=20)
    st = build_symbol_table([rule("start", lit("x"), 1, action)])
    assert st.rules == [RuleEntry("start", idx(1), action)]


def test_unknown_node_is_a_type_error():
    with pytest.raises(TypeError):
        build_symbol_table([rule("start", object(), 1)])


def test_normalize_sorts_rules_and_occurrences():
    st = SymbolTable(
        rules=[RuleEntry("b", idx(5)), RuleEntry("a", idx(2)), RuleEntry("c", idx(9))],
        nts={"z": [idx(7, 3), idx(3, 1)], "a": [idx(4, 2), idx(4, 1)]},
        combinators={"seq"},
    )
    out = normalize_symbol_table(st)
    assert [r.name for r in out.rules] == ["a", "b", "c"]
    assert out.nts == {"a": [idx(4, 1), idx(4, 2)], "z": [idx(3, 1), idx(7, 3)]}
    assert list(out.nts) == ["a", "z"]
    assert out.entry_point == "a"
    # input left alone
    assert [r.name for r in st.rules] == ["b", "a", "c"]


def test_normalize_orders_by_line_then_column():
    st = SymbolTable(nts={"x": [idx(2, 1), idx(1, 30), idx(1, 4)]})
    assert normalize_symbol_table(st).nts["x"] == [idx(1, 4), idx(1, 30), idx(2, 1)]


def test_empty_table_has_no_entry_point():
    assert normalize_symbol_table(build_symbol_table([])).entry_point is None
