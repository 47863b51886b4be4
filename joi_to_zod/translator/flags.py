"""
Flag resolution: describe/presence/default/label suffixes.
"""

from __future__ import annotations

from ..describe_ast.nodes import Flags, Presence
from ..zod_ast.nodes import Expression, Literal, chain


class FlagResolver:
    """Appends the suffix calls implied by a node's flags.

    Suffixes always come in the same order: ``.describe()``, then either
    ``.default()`` or the presence clause, then ``.label()``. A default makes
    the field optional downstream, so it replaces the presence clause.
    """

    PRESENCE_METHODS = {
        Presence.REQUIRED: None,
        Presence.OPTIONAL: "optional",
        Presence.FORBIDDEN: "undefined",
    }

    def apply(self, expr: Expression, flags: Flags, default_to_optional: bool) -> Expression:
        """
        Append flag suffixes to an expression.

        Args:
            expr: Expression with rules already applied
            flags: Flags of the node being translated
            default_to_optional: Presence to assume when the node sets none

        Returns:
            The expression with its suffix calls
        """
        if flags.description is not None:
            expr = chain(expr, "describe", Literal(flags.description))

        if flags.has_default:
            expr = chain(expr, "default", Literal(flags.default))
        else:
            method = self.presence_method(flags.presence, default_to_optional)
            if method:
                expr = chain(expr, method)

        if flags.label is not None:
            expr = chain(expr, "label", Literal(flags.label))

        return expr

    def presence_method(self, presence: Presence | None, default_to_optional: bool) -> str | None:
        """Name of the presence suffix, or None when nothing is needed."""
        if presence is None:
            return "optional" if default_to_optional else None
        return self.PRESENCE_METHODS[presence]
