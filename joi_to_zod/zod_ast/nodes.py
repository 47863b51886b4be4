"""
Zod expression node definitions.

These nodes represent the TypeScript expression being generated. The
translator builds a tree of them and the serializer turns the tree into
source text.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass, field

from ..describe_ast.nodes import JsonValue


@dataclass(frozen=True)
class Expression:
    """Base class for all expression nodes."""

    pass


@dataclass(frozen=True)
class Identifier(Expression):
    """A bare name such as ``z``."""

    name: str = ""


@dataclass(frozen=True)
class Raw(Expression):
    """Source text emitted verbatim (callback bodies)."""

    code: str = ""


@dataclass(frozen=True)
class Literal(Expression):
    """A JSON value emitted as a JavaScript literal."""

    value: JsonValue = None


@dataclass(frozen=True)
class Call(Expression):
    """A method call ``callee.name(args)``, or ``name(args)`` without callee."""

    callee: Expression | None = None
    name: str = ""
    args: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    elements: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class ObjectLiteral(Expression):
    """An object literal; members are emitted in the given order."""

    members: tuple[tuple[str, Expression], ...] = ()


@dataclass(frozen=True)
class Not(Expression):
    """Logical negation ``!operand``."""

    operand: Expression = field(default_factory=Raw)


@dataclass(frozen=True)
class ArrowFunction(Expression):
    """``(params) => body``"""

    params: tuple[str, ...] = ()
    body: Expression = field(default_factory=Raw)


@dataclass(frozen=True)
class ManualFix(Expression):
    """Marker for a construct that has no Zod translation.

    Serialized as a ``needsManualFix`` call carrying the original tag and its
    raw arguments, so the output stays valid and the spot is easy to grep for.
    """

    METHOD_NAME = "needsManualFix"

    callee: Expression | None = None
    tag: str = ""
    raw_args: tuple[JsonValue, ...] = ()


def chain(callee: Expression, name: str, *args: Expression) -> Call:
    """Build the chained call ``callee.name(*args)``."""
    return Call(callee=callee, name=name, args=tuple(args))


def iter_expressions(expr: Expression) -> Iterator[Expression]:
    """Yield ``expr`` and every expression nested inside it, depth first."""
    stack = [expr]
    while stack:
        node = stack.pop()
        yield node
        children = []
        for f in dataclasses.fields(node):
            _collect_children(getattr(node, f.name), children)
        stack.extend(reversed(children))


def _collect_children(value, out: list[Expression]) -> None:
    if isinstance(value, Expression):
        out.append(value)
    elif isinstance(value, tuple):
        for item in value:
            if isinstance(item, Expression):
                out.append(item)
            elif isinstance(item, tuple):
                # Object members are (name, expression) pairs
                out.extend(part for part in item if isinstance(part, Expression))


def collect_manual_fixes(expr: Expression) -> list[ManualFix]:
    """Return every ManualFix marker in an expression tree."""
    return [node for node in iter_expressions(expr) if isinstance(node, ManualFix)]
