"""
Joi describe parser that builds a describe AST.

Phase 1 of the conversion: decode the JSON produced by ``schema.describe()``
and check the type of every field, without doing any Zod-specific work.
Unknown ``type`` tags are kept as UnknownNode and left to the translator.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..config import ConverterConfig
from ..errors import ParseError
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

logger = logging.getLogger(__name__)


class DescribeParser:
    """Parses Joi describe output into a describe AST."""

    # Types with no payload besides the common fields
    SIMPLE_TYPES = {
        "date": DateNode,
        "boolean": BooleanNode,
        "any": AnyNode,
    }

    def __init__(self, config: ConverterConfig | None = None):
        self.config = config or ConverterConfig()

    def parse(self, source: str | bytes | dict[str, Any]) -> SchemaNode:
        """
        Parse describe output into a tree.

        Args:
            source: Describe JSON text, or the already decoded dictionary

        Returns:
            The root SchemaNode

        Raises:
            ParseError: If the JSON is malformed or a field has the wrong type
        """
        if isinstance(source, (str, bytes, bytearray)):
            try:
                schema = json.loads(source)
            except RecursionError as e:
                raise ParseError("Describe JSON is nested too deeply") from e
            except ValueError as e:
                raise ParseError(f"Malformed describe JSON: {e}") from e
        else:
            schema = source

        try:
            return self._parse_schema_node(schema, "#", 0)
        except RecursionError as e:
            raise ParseError("Describe output is nested too deeply") from e

    def _parse_schema_node(self, schema: Any, path: str, depth: int) -> SchemaNode:
        """
        Parse a describe node recursively.

        Args:
            schema: The decoded describe object
            path: Current path in the describe output (for error messages)
            depth: Current nesting depth

        Returns:
            Appropriate SchemaNode subclass
        """
        if depth > self.config.max_depth:
            raise ParseError(f"Schema is nested deeper than {self.config.max_depth} levels", path)

        if not isinstance(schema, dict):
            raise ParseError(f"Expected an object, got {_json_type(schema)}", path)

        type_name = schema.get("type")
        if type_name is None:
            raise ParseError("Missing 'type'", path)
        if not isinstance(type_name, str):
            raise ParseError(f"'type' must be a string, got {_json_type(type_name)}", path)

        common = {
            "flags": self._parse_flags(schema.get("flags"), f"{path}/flags"),
            "rules": self._parse_rules(schema.get("rules"), f"{path}/rules"),
            "metas": tuple(self._expect_list(schema.get("metas"), f"{path}/metas")),
            "whens": schema.get("whens"),
            "source_path": path,
        }

        if type_name == "object":
            return self._parse_object_node(schema, path, depth, common)
        if type_name == "array":
            return self._parse_array_node(schema, path, depth, common)
        if type_name == "alternatives":
            return self._parse_alternatives_node(schema, path, depth, common)
        if type_name == "string":
            return self._parse_scalar_node(StringNode, schema, path, common)
        if type_name == "number":
            return self._parse_scalar_node(NumberNode, schema, path, common)
        if type_name in self.SIMPLE_TYPES:
            return self.SIMPLE_TYPES[type_name](**common)

        if type_name == "nullableString":
            self._expect_list(schema.get("allow"), f"{path}/allow")

        logger.debug("Unknown describe type %r at %s", type_name, path)
        return UnknownNode(type_name=type_name, fields=dict(schema), **common)

    def _parse_object_node(self, schema: dict[str, Any], path: str, depth: int, common: dict[str, Any]) -> ObjectNode:
        """Parse an object node; members keep their input order."""
        keys = schema.get("keys")
        if keys is None:
            keys = {}
        if not isinstance(keys, dict):
            raise ParseError(f"'keys' must be an object, got {_json_type(keys)}", path)

        members = tuple((name, self._parse_schema_node(value, f"{path}/keys/{name}", depth + 1)) for name, value in keys.items())
        return ObjectNode(members=members, **common)

    def _parse_array_node(self, schema: dict[str, Any], path: str, depth: int, common: dict[str, Any]) -> ArrayNode:
        """Parse an array node."""
        items = self._expect_list(schema.get("items"), f"{path}/items")
        return ArrayNode(
            items=tuple(self._parse_schema_node(item, f"{path}/items/{i}", depth + 1) for i, item in enumerate(items)),
            **common,
        )

    def _parse_alternatives_node(self, schema: dict[str, Any], path: str, depth: int, common: dict[str, Any]) -> AlternativesNode:
        """Parse an alternatives node.

        Matches added with ``.try()`` carry a ``schema``. Conditional matches
        (``ref``/``is``/``then``/``otherwise``) have none and are kept as
        UnknownNode tagged ``conditional``.
        """
        matches = []
        for i, match in enumerate(self._expect_list(schema.get("matches"), f"{path}/matches")):
            match_path = f"{path}/matches/{i}"
            if not isinstance(match, dict):
                raise ParseError(f"Expected an object, got {_json_type(match)}", match_path)
            if "schema" in match:
                matches.append(self._parse_schema_node(match["schema"], f"{match_path}/schema", depth + 1))
            else:
                matches.append(UnknownNode(type_name="conditional", fields=dict(match), source_path=match_path))
        return AlternativesNode(matches=tuple(matches), **common)

    def _parse_scalar_node(self, node_class: type, schema: dict[str, Any], path: str, common: dict[str, Any]) -> SchemaNode:
        """Parse a string or number node together with its allow-list."""
        allow = tuple(self._expect_list(schema.get("allow"), f"{path}/allow"))
        invalid = tuple(self._expect_list(schema.get("invalid"), f"{path}/invalid"))

        if common["flags"].only and not allow:
            raise ParseError("'flags.only' is set but the allow-list is empty", path)

        return node_class(allow=allow, invalid=invalid, **common)

    def _parse_flags(self, flags: Any, path: str) -> Flags:
        """Parse the ``flags`` object; unrecognized flags are ignored."""
        if flags is None:
            return Flags()
        if not isinstance(flags, dict):
            raise ParseError(f"'flags' must be an object, got {_json_type(flags)}", path)

        presence = flags.get("presence")
        if presence is not None:
            try:
                presence = Presence(presence)
            except ValueError:
                raise ParseError(f"Unknown presence {presence!r}", path) from None

        return Flags(
            presence=presence,
            description=self._expect_optional_str(flags, "description", path),
            label=self._expect_optional_str(flags, "label", path),
            default=flags.get("default"),
            has_default="default" in flags,
            only=self._expect_bool(flags, "only", path),
            single=self._expect_bool(flags, "single", path),
        )

    def _parse_rules(self, rules: Any, path: str) -> tuple[Rule, ...]:
        """Parse the ``rules`` array."""
        parsed = []
        for i, rule in enumerate(self._expect_list(rules, path)):
            rule_path = f"{path}/{i}"
            if not isinstance(rule, dict):
                raise ParseError(f"Expected an object, got {_json_type(rule)}", rule_path)
            name = rule.get("name")
            if not isinstance(name, str):
                raise ParseError(f"Rule 'name' must be a string, got {_json_type(name)}", rule_path)
            parsed.append(Rule(name=name, args=rule.get("args")))
        return tuple(parsed)

    def _expect_list(self, value: Any, path: str) -> list[JsonValue]:
        """Return ``value`` as a list; a missing collection is empty."""
        if value is None:
            return []
        if not isinstance(value, list):
            raise ParseError(f"Expected an array, got {_json_type(value)}", path)
        return value

    def _expect_optional_str(self, flags: dict[str, Any], key: str, path: str) -> str | None:
        value = flags.get(key)
        if value is not None and not isinstance(value, str):
            raise ParseError(f"'{key}' must be a string, got {_json_type(value)}", path)
        return value

    def _expect_bool(self, flags: dict[str, Any], key: str, path: str) -> bool:
        value = flags.get(key, False)
        if not isinstance(value, bool):
            raise ParseError(f"'{key}' must be a boolean, got {_json_type(value)}", path)
        return value


def _json_type(value: Any) -> str:
    """Name of the JSON type of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
