"""
Describe AST module.

Contains the node definitions and parser for Joi describe output.
"""

from __future__ import annotations

from .nodes import (
    AlternativesNode,
    AnyNode,
    ArrayNode,
    BooleanNode,
    DateNode,
    Flags,
    JsonValue,
    NumberNode,
    ObjectNode,
    Presence,
    Rule,
    SchemaNode,
    StringNode,
    UnknownNode,
)
from .parser import DescribeParser

__all__ = [
    "SchemaNode",
    "ObjectNode",
    "ArrayNode",
    "AlternativesNode",
    "DateNode",
    "NumberNode",
    "StringNode",
    "BooleanNode",
    "AnyNode",
    "UnknownNode",
    "Flags",
    "Presence",
    "Rule",
    "JsonValue",
    "DescribeParser",
]
