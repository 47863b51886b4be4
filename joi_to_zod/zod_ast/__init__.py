"""
Zod AST module.

Contains the expression node definitions and the serializer that turns
them into TypeScript source.
"""

from __future__ import annotations

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
    chain,
    collect_manual_fixes,
    iter_expressions,
)
from .serializer import ZodSerializer

__all__ = [
    "Expression",
    "Identifier",
    "Raw",
    "Literal",
    "Call",
    "ArrayLiteral",
    "ObjectLiteral",
    "ArrowFunction",
    "ManualFix",
    "Not",
    "chain",
    "collect_manual_fixes",
    "iter_expressions",
    "ZodSerializer",
]
