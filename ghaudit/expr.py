"""Parsing and analysis of the GitHub Actions expression language."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass


class ExprParseError(ValueError):
    """Raised when text is not a valid expression."""

    def __init__(self, message: str, text: str, position: int) -> None:
        super().__init__(f"{message} at position {position}: {text!r}")
        self.text = text
        self.position = position


class BinOp(enum.Enum):
    """Binary operators, both logical and comparative."""

    AND = "&&"
    OR = "||"
    EQ = "=="
    NEQ = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="


class UnOp(enum.Enum):
    """Unary operators. Negation is the only one."""

    NOT = "!"


class Expr:
    """Base class of every expression node."""

    def contexts(self) -> list[str]:
        """Return the well-known contexts used in this expression.

        Contexts hanging off a function call, such as ``foo().bar``, are not
        well-known and are left out; the call's arguments are still searched.
        """
        return []


@dataclass(frozen=True)
class Number(Expr):
    """A number literal."""

    value: float


@dataclass(frozen=True)
class String(Expr):
    """A string literal, with quote escapes resolved."""

    value: str


@dataclass(frozen=True)
class Boolean(Expr):
    """A boolean literal."""

    value: bool


@dataclass(frozen=True)
class Null(Expr):
    """The ``null`` literal."""


@dataclass(frozen=True)
class Star(Expr):
    """The ``*`` wildcard within an index or context."""


@dataclass(frozen=True)
class Call(Expr):
    """A function call."""

    func: str
    args: tuple[Expr, ...] = ()

    def contexts(self) -> list[str]:
        return [ctx for arg in self.args for ctx in arg.contexts()]


@dataclass(frozen=True)
class Identifier(Expr):
    """A context component such as ``github`` in ``github.actor``."""

    name: str


@dataclass(frozen=True)
class Index(Expr):
    """A context index component such as ``[0]``."""

    expr: Expr


@dataclass(frozen=True)
class Context(Expr):
    """A full context reference, with its source text."""

    raw: str
    components: tuple[Expr, ...]

    def contexts(self) -> list[str]:
        head = self.components[0]
        if isinstance(head, Call):
            return head.contexts()
        return [self.raw]


@dataclass(frozen=True)
class BinaryOp(Expr):
    """A binary operation."""

    lhs: Expr
    op: BinOp
    rhs: Expr

    def contexts(self) -> list[str]:
        return self.lhs.contexts() + self.rhs.contexts()


@dataclass(frozen=True)
class UnaryOp(Expr):
    """A unary operation."""

    op: UnOp
    expr: Expr

    def contexts(self) -> list[str]:
        return self.expr.contexts()


_WHITESPACE = " \t\r\n"
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")
_NUMBER = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")
_KEYWORDS: dict[str, Expr] = {
    "true": Boolean(True),
    "false": Boolean(False),
    "null": Null(),
}
_EQ_OPS = (("==", BinOp.EQ), ("!=", BinOp.NEQ))
_COMP_OPS = (
    (">=", BinOp.GE),
    (">", BinOp.GT),
    ("<=", BinOp.LE),
    ("<", BinOp.LT),
)


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def fail(self, message: str) -> ExprParseError:
        return ExprParseError(message, self.text, self.pos)

    def skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def accept(self, token: str) -> bool:
        self.skip_ws()
        if self.text.startswith(token, self.pos):
            self.pos += len(token)
            return True
        return False

    def expect(self, token: str) -> None:
        if not self.accept(token):
            raise self.fail(f"expected {token!r}")

    def parse(self) -> Expr:
        expr = self.or_expr()
        self.skip_ws()
        if self.pos != len(self.text):
            raise self.fail("unexpected input")
        return expr

    def or_expr(self) -> Expr:
        expr = self.and_expr()
        while self.accept("||"):
            expr = BinaryOp(expr, BinOp.OR, self.and_expr())
        return expr

    def and_expr(self) -> Expr:
        expr = self.eq_expr()
        while self.accept("&&"):
            expr = BinaryOp(expr, BinOp.AND, self.eq_expr())
        return expr

    def _operator(self, table: tuple[tuple[str, BinOp], ...]) -> BinOp | None:
        return next((op for token, op in table if self.accept(token)), None)

    def eq_expr(self) -> Expr:
        expr = self.comp_expr()
        while (op := self._operator(_EQ_OPS)) is not None:
            expr = BinaryOp(expr, op, self.comp_expr())
        return expr

    def comp_expr(self) -> Expr:
        expr = self.unary_expr()
        while (op := self._operator(_COMP_OPS)) is not None:
            expr = BinaryOp(expr, op, self.unary_expr())
        return expr

    def unary_expr(self) -> Expr:
        if self.accept("!"):
            return UnaryOp(UnOp.NOT, self.primary_expr())
        return self.primary_expr()

    def primary_expr(self) -> Expr:
        if self.accept("("):
            expr = self.or_expr()
            self.expect(")")
            return expr

        self.skip_ws()
        if self.text.startswith("'", self.pos):
            return self.string()

        if number := _NUMBER.match(self.text, self.pos):
            self.pos = number.end()
            return Number(float(number.group()))

        ident = _IDENTIFIER.match(self.text, self.pos)
        if ident is None:
            raise self.fail("expected an expression")
        if ident.group() in _KEYWORDS:
            self.pos = ident.end()
            return _KEYWORDS[ident.group()]
        return self.context()

    def string(self) -> String:
        start = self.pos
        cursor = start + 1
        while True:
            end = self.text.find("'", cursor)
            if end == -1:
                raise self.fail("unterminated string")
            if self.text.startswith("''", end):
                cursor = end + 2
                continue
            break
        self.pos = end + 1
        return String(self.text[start + 1 : end].replace("''", "'"))

    def context(self) -> Expr:
        start = self.pos
        ident = _IDENTIFIER.match(self.text, self.pos)
        if ident is None:
            raise self.fail("expected an identifier")
        self.pos = ident.end()

        head: Expr
        if self.text.startswith("(", self.pos):
            head = self.call(ident.group())
        else:
            head = Identifier(ident.group())
        components = [head]

        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == ".":
                self.pos += 1
                if self.text.startswith("*", self.pos):
                    self.pos += 1
                    components.append(Star())
                elif name := _IDENTIFIER.match(self.text, self.pos):
                    self.pos = name.end()
                    components.append(Identifier(name.group()))
                else:
                    raise self.fail("expected an identifier or '*' after '.'")
            elif char == "[":
                self.pos += 1
                inner: Expr = Star() if self.accept("*") else self.or_expr()
                self.expect("]")
                components.append(Index(inner))
            else:
                break

        if len(components) == 1 and isinstance(head, Call):
            return head
        return Context(self.text[start : self.pos], tuple(components))

    def call(self, func: str) -> Call:
        self.pos += 1  # the opening parenthesis
        args: list[Expr] = []
        if not self.accept(")"):
            args.append(self.or_expr())
            while self.accept(","):
                args.append(self.or_expr())
            self.expect(")")
        return Call(func, tuple(args))


def parse(text: str) -> Expr:
    """Parse an expression body (without the ``${{ }}`` delimiters)."""
    return _Parser(text).parse()