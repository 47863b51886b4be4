"""
Translator module.

Maps the describe AST onto a Zod expression tree.
"""

from __future__ import annotations

from .flags import FlagResolver
from .rules import RuleResolver
from .translator import Translator

__all__ = [
    "Translator",
    "FlagResolver",
    "RuleResolver",
]
