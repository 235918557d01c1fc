"""Detection of template expansions that may inject attacker-controlled code."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator

from ghaudit.audits import Confidence, Persona, Severity
from ghaudit.expr import (
    BinaryOp,
    BinOp,
    Boolean,
    Call,
    Context,
    Expr,
    ExprParseError,
    Null,
    Number,
    String,
    UnaryOp,
    parse,
)

logger = logging.getLogger(__name__)

# Contexts that are believed to be always safe.
SAFE_CONTEXTS = frozenset(
    {
        "github.action_path",
        "github.event_name",
        "github.event.after",
        "github.event.before",
        "github.event.issue.number",
        "github.event.merge_group.base_sha",
        "github.event.number",
        "github.event.pull_request.commits",
        "github.event.pull_request.number",
        "github.event.workflow_run.id",
        "github.repository",
        "github.repository_id",
        "github.repositoryUrl",
        "github.repository_owner",
        "github.repository_owner_id",
        "github.run_attempt",
        "github.run_id",
        "github.run_number",
        "github.server_url",
        "github.sha",
        "github.token",
        "github.workspace",
        "runner.arch",
        "runner.debug",
        "runner.os",
        "runner.temp",
        "runner.tool_cache",
    }
)

_TEMPLATE = re.compile(r"\$\{\{(?:[^'}]|'(?:[^']|'')*'|\}(?!\}))*\}\}")

Injection = tuple[str, Severity, Confidence, Persona]


def expr_is_safe(expr: Expr) -> bool:
    """Whether every branch of ``expr`` can only produce a literal value.

    Context accesses and function calls are treated as unsafe; ``==``,
    ``!=`` and ``!`` always yield booleans and so are safe.
    """
    if isinstance(expr, (Number, String, Boolean, Null)):
        return True
    if isinstance(expr, (Call, Context)):
        return False
    if isinstance(expr, BinaryOp):
        if expr.op in (BinOp.EQ, BinOp.NEQ):
            return True
        if expr.op is BinOp.AND:
            return expr_is_safe(expr.rhs)
        return expr_is_safe(expr.lhs) and expr_is_safe(expr.rhs)
    if isinstance(expr, UnaryOp):
        return True
    raise ValueError(f"not a top-level expression: {expr!r}")


def extract_expressions(text: str) -> Iterator[str]:
    """Yield each ``${{ ... }}`` template in ``text``, delimiters included."""
    for match in _TEMPLATE.finditer(text):
        yield match.group()


def _bare(raw: str) -> str:
    return raw[3:-2].strip()


def injectable_template_expressions(
    script: str,
    env_is_static: Callable[[str], bool] | None = None,
    matrix_is_static: Callable[[str], bool] | None = None,
) -> list[Injection]:
    """Return ``(expression, severity, confidence, persona)`` for risky templates.

    ``env_is_static`` tells whether an environment variable (named without
    the ``env.`` prefix) holds a static value; without it every variable is
    taken as non-static. ``matrix_is_static`` tells whether a ``matrix``
    context expands only to static values; ``None`` means the step has no
    matrix, and matrix contexts are then not reported.
    """
    findings: list[Injection] = []
    for raw in extract_expressions(script):
        bare = _bare(raw)
        try:
            parsed = parse(bare)
        except ExprParseError:
            logger.warning("couldn't parse expression: %s", bare)
            continue

        if expr_is_safe(parsed):
            # Every template expansion is a code smell, even if unexploitable.
            findings.append(
                (raw, Severity.UNKNOWN, Confidence.UNKNOWN, Persona.PEDANTIC)
            )
            continue

        for context in parsed.contexts():
            if context.startswith("secrets.") or context in SAFE_CONTEXTS:
                continue
            if context.startswith("inputs."):
                findings.append(
                    (context, Severity.HIGH, Confidence.LOW, Persona.REGULAR)
                )
            elif context.startswith("env."):
                name = context[len("env.") :]
                if env_is_static is None or not env_is_static(name):
                    findings.append(
                        (context, Severity.LOW, Confidence.HIGH, Persona.REGULAR)
                    )
            elif context.startswith("github."):
                findings.append(
                    (context, Severity.HIGH, Confidence.HIGH, Persona.REGULAR)
                )
            elif context.startswith("matrix.") or context == "matrix":
                if matrix_is_static is not None and not matrix_is_static(context):
                    findings.append(
                        (context, Severity.MEDIUM, Confidence.MEDIUM, Persona.REGULAR)
                    )
            else:
                findings.append(
                    (context, Severity.INFORMATIONAL, Confidence.LOW, Persona.REGULAR)
                )
    return findings