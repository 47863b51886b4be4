"""
Rule resolution: Joi rules to chained Zod calls and refinements.
"""

from __future__ import annotations

import logging

from ..describe_ast.nodes import JsonValue, Rule
from ..zod_ast.nodes import ArrowFunction, Expression, Literal, ManualFix, Raw, chain

logger = logging.getLogger(__name__)


class RuleResolver:
    """Maps describe rules to Zod.

    ``integer``, ``min`` and ``max`` become chained calls on the base type.
    ``unique`` becomes a refinement callback. Any other rule is kept as a
    ManualFix marker carrying its name and arguments.
    """

    CHAINED_RULES = {"integer", "min", "max"}
    REFINEMENT_RULES = {"unique"}

    UNIQUE_CHECK = ArrowFunction(params=("items",), body=Raw("new Set(items).size === items.length"))

    def apply_chained(self, expr: Expression, rules: tuple[Rule, ...], source_path: str = "#") -> Expression:
        """
        Chain every non-refinement rule onto ``expr``, in rule order.

        Args:
            expr: Base expression of the node
            rules: Rules of the node
            source_path: Path of the node, for log messages

        Returns:
            The expression with the rule calls appended
        """
        for rule in rules:
            if rule.name in self.REFINEMENT_RULES and self._is_plain_unique(rule):
                continue
            if rule.name == "integer":
                expr = chain(expr, "int")
            elif rule.name in ("min", "max") and _limit(rule.args) is not None:
                expr = chain(expr, rule.name, Literal(_limit(rule.args)))
            else:
                expr = self.manual_fix(expr, rule, source_path)
        return expr

    def refinements(self, rules: tuple[Rule, ...]) -> list[ArrowFunction]:
        """Refinement callbacks for the node, in rule order."""
        return [self.UNIQUE_CHECK for rule in rules if rule.name in self.REFINEMENT_RULES and self._is_plain_unique(rule)]

    def manual_fix(self, expr: Expression, rule: Rule, source_path: str) -> ManualFix:
        logger.warning("No Zod translation for rule %r at %s", rule.name, source_path)
        raw_args = () if rule.args is None else (rule.args,)
        return ManualFix(callee=expr, tag=rule.name, raw_args=raw_args)

    def _is_plain_unique(self, rule: Rule) -> bool:
        """A ``unique`` rule without a comparator compares whole items."""
        args = rule.args
        return not isinstance(args, dict) or args.get("comparator") is None


def _limit(args: JsonValue) -> int | float | None:
    """The numeric ``limit`` argument of min/max, or None for references."""
    if not isinstance(args, dict):
        return None
    limit = args.get("limit")
    if isinstance(limit, bool) or not isinstance(limit, (int, float)):
        return None
    return limit
