"""
Utility functions for the Joi to Zod converter.
"""

import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots) to spaces."""
    return text.replace("_", " ").replace("-", " ").replace(".", " ")


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case or camelCase text to PascalCase.

    Examples:
        "basic_object" -> "BasicObject"
        "test-list.describe" -> "TestListDescribe"
        "userProfile" -> "UserProfile"
    """
    if not text:
        return ""
    words = _WORD_PATTERN.findall(_normalize_separators(text))
    return "".join(word.capitalize() for word in words if word)


def export_name(class_name: str | None, file_stem: str | None, suffix: str = "Schema") -> str:
    """Name of the exported constant in a rendered module.

    A ``className`` meta wins as-is. Otherwise the file stem is converted to
    PascalCase and ``suffix`` is appended unless already present.
    """
    if class_name:
        return class_name
    name = snake_to_pascal_case(file_stem or "") or "Generated"
    if name[0].isdigit():
        name = f"_{name}"
    if suffix and not name.endswith(suffix):
        name += suffix
    return name
