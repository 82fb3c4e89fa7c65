from pegcheck.analysis.code import (
    Annotated, Failed, Unchanged, check_code_block, used_implicit_args,
)
from pegcheck.analysis.findings import HostParseError, HostSyntaxError, UnusedRule
from pegcheck.host.frontend import HostToken
from tests.helpers import BAD_PARSE, BAD_SCAN, code, idx


def test_missing_or_identity_block_is_unchanged(fake):
    assert check_code_block(None, [], fake) == Unchanged()
    assert check_code_block(code("node", identity=True), [], fake) == Unchanged()
    assert fake.calls == []


def test_valid_block_is_annotated_copy(fake):
    block = code("node + 1  # keep", line=4, column=12)
    out = check_code_block(block, [], fake)
    assert isinstance(out, Annotated)
    assert out.code.used_args == ("node",)
    assert out.code.parsed == ["node + 1  # keep"]
    assert len(out.code.comments) == 1
    assert out.code.index == idx(4, 12)
    assert block.used_args is None
    assert not block.annotated


def test_used_args_collapse_and_sort(fake):
    out = check_code_block(code("idx node idx node other"), [], fake)
    assert out.code.used_args == ("idx", "node")


def test_scan_failure_prepends_syntax_error(fake):
    prior = [UnusedRule("r", idx(9))]
    out = check_code_block(code(BAD_SCAN, line=3, column=7), prior, fake)
    assert isinstance(out, Failed)
    assert out.findings == [HostSyntaxError("bad token", idx(3, 7)), UnusedRule("r", idx(9))]
    assert prior == [UnusedRule("r", idx(9))]


def test_parse_failure_prepends_parse_error(fake):
    out = check_code_block(code(BAD_PARSE, line=2, column=5), [], fake)
    assert out.findings == [HostParseError("bad expression", idx(2, 5))]


def test_used_implicit_args_only_counts_identifiers(fake):
    toks = [HostToken("STRING", "node", 1, 1), HostToken("NAME", "idx", 1, 8)]
    assert used_implicit_args(toks, fake) == ("idx",)
