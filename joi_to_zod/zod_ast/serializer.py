"""
Zod expression serializer.

Converts expression nodes to TypeScript source. The joining rules are fixed
so that the same tree always yields the same text:
- Chained calls join with "."
- Call arguments and array elements join with ", "
- Object members join with ",\\n" inside "{\\n" ... "\\n}"
- Empty fragments are dropped
"""

from __future__ import annotations

import json
import re

from ..errors import FormatError
from .nodes import (
    ArrayLiteral,
    ArrowFunction,
    Call,
    Expression,
    Identifier,
    Literal,
    ManualFix,
    Not,
    ObjectLiteral,
    Raw,
)

# Property names that can be written without quotes
_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


class ZodSerializer:
    """Serializes Zod expression nodes to source code."""

    LIST_SEPARATOR = ", "
    MEMBER_SEPARATOR = ",\n"

    def serialize(self, expr: Expression) -> str:
        """
        Serialize an expression tree.

        Args:
            expr: Root of the expression tree

        Returns:
            TypeScript source for the expression

        Raises:
            FormatError: If a node or literal cannot be written out
        """
        if isinstance(expr, (Call, ManualFix)):
            return self._serialize_chain(expr)
        if isinstance(expr, Identifier):
            return expr.name
        if isinstance(expr, Raw):
            return expr.code
        if isinstance(expr, Literal):
            return self.format_literal(expr.value)
        if isinstance(expr, ArrayLiteral):
            return f"[{self._join(expr.elements)}]"
        if isinstance(expr, ObjectLiteral):
            return self._serialize_object(expr)
        if isinstance(expr, Not):
            return f"!{self.serialize(expr.operand)}"
        if isinstance(expr, ArrowFunction):
            params = self.LIST_SEPARATOR.join(expr.params)
            return f"({params}) => {self.serialize(expr.body)}"
        raise FormatError(f"Cannot serialize expression of type {type(expr).__name__}")

    def format_literal(self, value) -> str:
        """Format a JSON value as a JavaScript literal."""
        try:
            return json.dumps(value, allow_nan=False, ensure_ascii=False)
        except (TypeError, ValueError, RecursionError) as e:
            raise FormatError(f"Cannot serialize literal {value!r}: {e}") from e

    def format_property_name(self, name: str) -> str:
        """Quote an object key unless it is a valid identifier."""
        if _IDENTIFIER_PATTERN.fullmatch(name):
            return name
        return self.format_literal(name)

    def _serialize_chain(self, expr: Call | ManualFix) -> str:
        """Serialize a method chain iteratively, base first."""
        links = []
        node = expr
        while isinstance(node, (Call, ManualFix)):
            links.append(node)
            node = node.callee

        parts = [] if node is None else [self.serialize(node)]
        for link in reversed(links):
            if isinstance(link, ManualFix):
                args = [self.format_literal(link.tag)]
                args.extend(self.format_literal(arg) for arg in link.raw_args)
                parts.append(f"{ManualFix.METHOD_NAME}({self.LIST_SEPARATOR.join(args)})")
            else:
                parts.append(f"{link.name}({self._join(link.args)})")
        return ".".join(parts)

    def _serialize_object(self, expr: ObjectLiteral) -> str:
        members = [f"{self.format_property_name(name)}: {self.serialize(value)}" for name, value in expr.members]
        if not members:
            return "{}"
        return "{\n" + self.MEMBER_SEPARATOR.join(members) + "\n}"

    def _join(self, exprs: tuple[Expression, ...]) -> str:
        """Serialize and join with ", ", dropping empty fragments."""
        parts = (self.serialize(e) for e in exprs)
        return self.LIST_SEPARATOR.join(part for part in parts if part)
