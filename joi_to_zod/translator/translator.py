"""
Translator from the describe AST to a Zod expression tree.

Phase 2 of the conversion. Each node variant has its own handler producing
a base expression plus what has to be layered on top of it. Layers are
always applied in the same order:

1. chained rule calls (``.int()``, ``.min()``, ...), then conditional ``when`` fixes
2. widening union for extra allowed literals
3. refinements (``unique``, invalid values)
4. ``.nullable()``
5. flag suffixes (describe, default or presence, label)
6. pre-processing steps, outermost last
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..config import ConverterConfig
from ..describe_ast.nodes import (
    AlternativesNode,
    AnyNode,
    ArrayNode,
    BooleanNode,
    DateNode,
    JsonValue,
    NumberNode,
    ObjectNode,
    SchemaNode,
    StringNode,
    UnknownNode,
)
from ..errors import ParseError
from ..zod_ast.nodes import (
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
)
from .flags import FlagResolver
from .rules import RuleResolver

logger = logging.getLogger(__name__)

# Wraps a bare value into a one-element array; undefined and null pass through
SINGLE_TO_ARRAY = ArrowFunction(
    params=("val",),
    body=Raw("(val === undefined || val === null || Array.isArray(val) ? val : [val])"),
)

EMPTY_STRING_TO_NULL = ArrowFunction(params=("val",), body=Raw('(val === "" ? null : val)'))


@dataclass
class _Translation:
    """A base expression and the layers still to be applied to it."""

    expr: Expression
    nullable: bool = False
    widen_with: list[JsonValue] = field(default_factory=list)
    refinements: list[ArrowFunction] = field(default_factory=list)
    preprocess: list[ArrowFunction] = field(default_factory=list)


class Translator:
    """Translates describe nodes into Zod expressions."""

    NULLABLE_STRING_TYPE = "nullableString"

    def __init__(self, config: ConverterConfig | None = None):
        self.config = config or ConverterConfig()
        self.z = Identifier(self.config.zod_identifier)
        self.flag_resolver = FlagResolver()
        self.rule_resolver = RuleResolver()

    def translate(self, node: SchemaNode, default_to_optional: bool) -> Expression:
        """
        Translate a node and everything below it.

        Args:
            node: The describe node
            default_to_optional: Whether a node with no explicit presence is
                optional. Object members pass True, which mirrors Joi's own
                default; roots, array items and alternatives pass False.

        Returns:
            The Zod expression for the node
        """
        result = self._translate_variant(node)

        expr = self.rule_resolver.apply_chained(result.expr, node.rules, node.source_path)
        if node.whens:
            logger.warning("No Zod translation for conditional 'when' at %s", node.source_path)
            expr = ManualFix(callee=expr, tag="when", raw_args=(node.whens,))

        if result.widen_with:
            expr = self._union([expr] + [self._literal(value) for value in result.widen_with])

        for check in self.rule_resolver.refinements(node.rules) + result.refinements:
            expr = chain(expr, "refine", check)

        if result.nullable:
            expr = chain(expr, "nullable")

        expr = self.flag_resolver.apply(expr, node.flags, default_to_optional)

        for step in result.preprocess:
            expr = self._zod("preprocess", step, expr)
        return expr

    def _translate_variant(self, node: SchemaNode) -> _Translation:
        """Dispatch on the node variant."""
        if isinstance(node, ObjectNode):
            return self._translate_object(node)
        if isinstance(node, ArrayNode):
            return self._translate_array(node)
        if isinstance(node, AlternativesNode):
            return self._translate_alternatives(node)
        if isinstance(node, StringNode):
            return self._translate_string(node)
        if isinstance(node, NumberNode):
            return self._translate_number(node)
        if isinstance(node, DateNode):
            return _Translation(self._zod("date"))
        if isinstance(node, BooleanNode):
            return _Translation(self._zod("boolean"))
        if isinstance(node, AnyNode):
            return _Translation(self._zod("any"))
        if isinstance(node, UnknownNode):
            return self._translate_unknown(node)
        raise TypeError(f"Unsupported node type {type(node).__name__}")

    def _translate_object(self, node: ObjectNode) -> _Translation:
        members = tuple((name, self.translate(value, True)) for name, value in sorted(node.members, key=lambda member: member[0]))
        return _Translation(self._zod("object", ObjectLiteral(members)))

    def _translate_array(self, node: ArrayNode) -> _Translation:
        items = [self.translate(item, False) for item in node.items]
        if not items:
            element = self._zod("any")
        elif len(items) == 1:
            element = items[0]
        else:
            element = self._union(items)

        result = _Translation(self._zod("array", element))
        if node.flags.single:
            result.preprocess.append(SINGLE_TO_ARRAY)
        return result

    def _translate_alternatives(self, node: AlternativesNode) -> _Translation:
        matches = [self.translate(match, False) for match in node.matches]
        if not matches:
            return _Translation(self._zod("never"))
        if len(matches) == 1:
            return _Translation(matches[0])
        return _Translation(self._union(matches))

    def _translate_string(self, node: StringNode) -> _Translation:
        if node.flags.only:
            result = self._translate_string_allow_list(node.allow, node.source_path)
        else:
            result = _Translation(
                self._zod("string"),
                nullable=_contains_null(node.allow),
                widen_with=[value for value in node.allow if value is not None and value != ""],
            )
        self._add_invalid_check(result, node.invalid)
        return result

    def _translate_string_allow_list(self, allow: tuple[JsonValue, ...] | list[JsonValue], source_path: str, implicit_null: bool = False) -> _Translation:
        """Exhaustive string allow-list; ``""`` is normalized to null first."""
        literals = [value for value in allow if value is not None and value != ""]
        has_empty = "" in allow
        has_null = implicit_null or _contains_null(allow)

        if len(literals) > 1 and all(isinstance(value, str) for value in literals):
            expr = self._zod("enum", ArrayLiteral(tuple(Literal(value) for value in literals)))
        else:
            expr = self._literal_set(literals, "string", has_null or has_empty, source_path)

        result = _Translation(expr, nullable=has_null or has_empty)
        if has_empty:
            result.preprocess.append(EMPTY_STRING_TO_NULL)
        return result

    def _translate_number(self, node: NumberNode) -> _Translation:
        has_null = _contains_null(node.allow)
        literals = [value for value in node.allow if value is not None]
        if node.flags.only:
            result = _Translation(self._literal_set(literals, "number", has_null, node.source_path), nullable=has_null)
        else:
            result = _Translation(self._zod("number"), nullable=has_null, widen_with=literals)
        self._add_invalid_check(result, node.invalid)
        return result

    def _translate_unknown(self, node: UnknownNode) -> _Translation:
        if node.type_name == self.NULLABLE_STRING_TYPE:
            return self._translate_string_allow_list(node.fields.get("allow") or [], node.source_path, implicit_null=True)

        logger.warning("No Zod translation for type %r at %s", node.type_name, node.source_path)
        return _Translation(ManualFix(callee=self.z, tag=node.type_name))

    def _literal_set(self, literals: list[JsonValue], base_type: str, has_null: bool, source_path: str) -> Expression:
        """Single literal, union of literals, or the base type when only null remains."""
        if len(literals) == 1:
            return self._literal(literals[0])
        if literals:
            return self._union([self._literal(value) for value in literals])
        if not has_null:
            raise ParseError("'flags.only' is set but the allow-list is empty", source_path)
        return self._zod(base_type)

    def _add_invalid_check(self, result: _Translation, invalid: tuple[JsonValue, ...]) -> None:
        if invalid:
            values = ArrayLiteral(tuple(Literal(value) for value in invalid))
            check = Not(Call(callee=values, name="includes", args=(Identifier("val"),)))
            result.refinements.append(ArrowFunction(params=("val",), body=check))

    def _literal(self, value: JsonValue) -> Expression:
        return self._zod("literal", Literal(value))

    def _union(self, options: list[Expression]) -> Expression:
        return self._zod("union", ArrayLiteral(tuple(options)))

    def _zod(self, name: str, *args: Expression) -> Call:
        """Build ``z.name(*args)``."""
        return chain(self.z, name, *args)


def _contains_null(values) -> bool:
    return any(value is None for value in values)
