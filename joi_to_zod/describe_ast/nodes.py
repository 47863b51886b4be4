"""
Describe AST node definitions.

These nodes represent the output of Joi's ``schema.describe()`` after it has
been decoded and type-checked. A tree is built once per conversion and never
mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

# Decoded JSON, narrowed at the point of use
JsonValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]


class Presence(str, Enum):
    """Joi field-level presence."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class Flags:
    """The ``flags`` object of a describe node.

    Attributes:
        presence: Explicit presence, or None when the schema did not set one
        description: Text passed to ``.description()``
        label: Text passed to ``.label()``
        default: Default value; only meaningful when ``has_default`` is set
        has_default: Whether a default was given (the default itself may be null)
        only: The allow-list is exhaustive (``.valid()``)
        single: The array also accepts a bare element (``.single()``)
    """

    presence: Presence | None = None
    description: str | None = None
    label: str | None = None
    default: JsonValue = None
    has_default: bool = False
    only: bool = False
    single: bool = False


@dataclass(frozen=True)
class Rule:
    """A refinement rule such as ``integer`` or ``min``."""

    name: str = ""
    args: JsonValue = None


@dataclass(frozen=True)
class SchemaNode:
    """Base class for all describe nodes."""

    flags: Flags = field(default_factory=Flags)
    rules: tuple[Rule, ...] = ()
    metas: tuple[JsonValue, ...] = ()
    whens: JsonValue = None

    # JSON path of the node in the describe output, for messages
    source_path: str = "#"

    @property
    def class_name(self) -> str | None:
        """The ``className`` meta, if any."""
        for meta in self.metas:
            if isinstance(meta, dict) and isinstance(meta.get("className"), str):
                return meta["className"]
        return None


@dataclass(frozen=True)
class ObjectNode(SchemaNode):
    """``Joi.object()``; members keep their input order."""

    members: tuple[tuple[str, SchemaNode], ...] = ()

    @property
    def keys(self) -> dict[str, SchemaNode]:
        return dict(self.members)


@dataclass(frozen=True)
class ArrayNode(SchemaNode):
    """``Joi.array()``"""

    items: tuple[SchemaNode, ...] = ()


@dataclass(frozen=True)
class AlternativesNode(SchemaNode):
    """``Joi.alternatives()``"""

    matches: tuple[SchemaNode, ...] = ()


@dataclass(frozen=True)
class DateNode(SchemaNode):
    pass


@dataclass(frozen=True)
class NumberNode(SchemaNode):
    """``Joi.number()`` with its allow-list and invalid values."""

    allow: tuple[JsonValue, ...] = ()
    invalid: tuple[JsonValue, ...] = ()


@dataclass(frozen=True)
class StringNode(SchemaNode):
    """``Joi.string()`` with its allow-list and invalid values."""

    allow: tuple[JsonValue, ...] = ()
    invalid: tuple[JsonValue, ...] = ()


@dataclass(frozen=True)
class BooleanNode(SchemaNode):
    pass


@dataclass(frozen=True)
class AnyNode(SchemaNode):
    pass


@dataclass(frozen=True)
class UnknownNode(SchemaNode):
    """A node whose ``type`` is not one of the known variants.

    The raw tag and every field of the input object are preserved so the
    translator can decide what to do with them.
    """

    type_name: str = ""
    fields: dict[str, Any] = field(default_factory=dict, compare=False)
