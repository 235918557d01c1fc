import pytest

from ghaudit.expr import (
    BinaryOp,
    BinOp,
    Boolean,
    Call,
    Context,
    ExprParseError,
    Identifier,
    Index,
    Null,
    Number,
    Star,
    String,
    UnaryOp,
    UnOp,
    parse,
)

TRUE = Boolean(True)
FALSE = Boolean(False)


def _ids(*names):
    return tuple(Identifier(name) for name in names)


def _or(lhs, rhs):
    return BinaryOp(lhs, BinOp.OR, rhs)


def _not(inner):
    return UnaryOp(UnOp.NOT, inner)


STRING_CASES = [
    ("''", ""), ("' '", " "), ("''''", "'"), ("'test'", "test"),
    ("'spaces are ok'", "spaces are ok"),
    ("'escaping '' works'", "escaping ' works"),
]


@pytest.mark.parametrize(("case", "expected"), STRING_CASES)
def test_parse_string(case, expected):
    assert parse(case) == String(expected)


CONTEXT_CASES = [
    "foo.bar", "github.action_path", "inputs.foo-bar", "inputs.also--valid",
    "inputs.this__too", "secrets.GH_TOKEN", "foo.*.bar",
    "github.event.issue.labels.*.name",
]


@pytest.mark.parametrize("case", CONTEXT_CASES)
def test_parse_context(case):
    result = parse(case)
    assert isinstance(result, Context)
    assert result.raw == case


CALL_CASES = [
    ("foo()", "foo", 0), ("foo(bar)", "foo", 1), ("foo(bar())", "foo", 1),
    ("foo(1.23)", "foo", 1), ("foo(1,2)", "foo", 2), ("foo(1, 2)", "foo", 2),
    ("foo(1, 2, secret.GH_TOKEN)", "foo", 3), ("foo(   )", "foo", 0),
    ("fromJSON(inputs.free-threading)", "fromJSON", 1),
]


@pytest.mark.parametrize(("case", "func", "nargs"), CALL_CASES)
def test_parse_call(case, func, nargs):
    result = parse(case)
    assert isinstance(result, Call)
    assert result.func == func
    assert len(result.args) == nargs


def test_nested_call_arguments():
    assert parse("foo(bar())") == Call("foo", (Call("bar", ()),))
    assert parse("foo(bar)") == Call("foo", (Context("bar", _ids("bar")),))


EXPRESSION_CASES = [
    "fromJSON(inputs.free-threading) && " "'--disable-gil' || ''",
    "foo || bar || baz", "foo || bar && baz || foo && 1 && 2 && 3 || 4",
    "(github.actor != 'github-actions[bot]' && " "github.actor) || 'BrewTestBot'",
    "(true || false) == true", "!(!true || false)",
    "!(!true || false) == true", "(true == false) == true",
    "(true == (false || true && " "(true || false))) == true",
    "(github.actor != 'github-actions[bot]' && " "github.actor) == 'BrewTestBot'",
    "foo()[0]", "fromJson(steps.runs.outputs.data)" ".workflow_runs[0].id",
]


@pytest.mark.parametrize("case", EXPRESSION_CASES)
def test_parse_expressions_parenthesis_invariant(case):
    assert parse(case) == parse(f"({case})")


BRANCH_EXPR = (
    "github.ref == 'refs/heads/main' && 'value_for_main_branch'"
    " || 'value_for_other_branches'"
)

PARSE_CASES = [
    ("!true || false || true", _or(_or(_not(TRUE), FALSE), TRUE)),
    ("'foo '' bar'", String("foo ' bar")),
    ("('foo '' bar')", String("foo ' bar")),
    ("((('foo '' bar')))", String("foo ' bar")),
    ("foo(1, 2, 3)", Call("foo", (Number(1.0), Number(2.0), Number(3.0)))),
    ("foo.bar.baz", Context("foo.bar.baz", _ids("foo", "bar", "baz"))),
    (
        "foo.bar.baz[1][2]",
        Context(
            "foo.bar.baz[1][2]",
            _ids("foo", "bar", "baz") + (Index(Number(1.0)), Index(Number(2.0))),
        ),
    ),
    (
        "foo.bar.baz[*]",
        Context("foo.bar.baz[*]", _ids("foo", "bar", "baz") + (Index(Star()),)),
    ),
    (
        "vegetables.*.ediblePortions",
        Context(
            "vegetables.*.ediblePortions",
            (Identifier("vegetables"), Star(), Identifier("ediblePortions")),
        ),
    ),
    (
        BRANCH_EXPR,
        _or(
            BinaryOp(
                BinaryOp(
                    Context("github.ref", _ids("github", "ref")),
                    BinOp.EQ,
                    String("refs/heads/main"),
                ),
                BinOp.AND,
                String("value_for_main_branch"),
            ),
            String("value_for_other_branches"),
        ),
    ),
    ("(true || false) == true", BinaryOp(_or(TRUE, FALSE), BinOp.EQ, TRUE)),
    ("!(!true || false)", _not(_or(_not(TRUE), FALSE))),
]


@pytest.mark.parametrize(("case", "expected"), PARSE_CASES)
def test_parse(case, expected):
    assert parse(case) == expected


def test_literals():
    assert parse("null") == Null()
    assert parse("false") == FALSE
    assert parse("1.5") == Number(1.5)
    assert parse("-2") == Number(-2.0)


def test_comparison_operators_fold_left():
    assert parse("1 < 2 >= 3") == BinaryOp(
        BinaryOp(Number(1.0), BinOp.LT, Number(2.0)), BinOp.GE, Number(3.0)
    )
    assert parse("1 > 2 <= 3") == BinaryOp(
        BinaryOp(Number(1.0), BinOp.GT, Number(2.0)), BinOp.LE, Number(3.0)
    )


def test_precedence_of_equality_over_and():
    assert parse("true != false && null") == BinaryOp(
        BinaryOp(TRUE, BinOp.NEQ, FALSE), BinOp.AND, Null()
    )


def test_call_followed_by_index_is_context():
    result = parse("foo()[0]")
    assert result == Context("foo()[0]", (Call("foo", ()), Index(Number(0.0))))


def test_expr_contexts():
    chained = (
        "foo.bar && abc && d.e.f && andThis(should.work).except.this"
        " && but().not.this"
    )
    assert parse(chained).contexts() == ["foo.bar", "abc", "d.e.f", "should.work"]

    indexed = "fromJson(steps.runs.outputs.data)" ".workflow_runs[0].id"
    assert parse(indexed).contexts() == ["steps.runs.outputs.data"]


def test_contexts_of_literals_and_negation():
    assert parse("'foo' == 1").contexts() == []
    assert parse("!github.actor").contexts() == ["github.actor"]


@pytest.mark.parametrize(
    "case",
    ["", "foo ||", "'unterminated", "(true", "foo.", "1 2", "foo(1,", "foo[0"],
)
def test_parse_errors(case):
    with pytest.raises(ExprParseError):
        parse(case)


def test_parse_error_is_value_error_with_position():
    with pytest.raises(ValueError) as info:
        parse("true &&")
    assert info.value.position == 7