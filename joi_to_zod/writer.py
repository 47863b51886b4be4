"""
Atomic file writer for generated Zod sources.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

from .errors import FormatError

_CLOSING = {")": "(", "]": "[", "}": "{"}


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, validate: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate: Optional validation function for the generated source
        """
        self._validate = validate or validate_brackets

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            FormatError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate(content)

            temp_path.replace(path)

        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise


def validate_brackets(content: str) -> None:
    """Check that brackets outside string literals and comments are balanced.

    Raises:
        FormatError: On the first unmatched or unclosed bracket
    """
    stack: list[str] = []
    quote: str | None = None
    escaped = False
    in_comment = False

    for i, char in enumerate(content):
        if in_comment:
            in_comment = char != "\n"
            continue
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue

        if char in "\"'`":
            quote = char
        elif char == "/" and content.startswith("//", i):
            in_comment = True
        elif char in "([{":
            stack.append(char)
        elif char in _CLOSING:
            if not stack or stack.pop() != _CLOSING[char]:
                raise FormatError(f"Generated code has an unmatched '{char}' at offset {i}")

    if quote:
        raise FormatError("Generated code has an unterminated string literal")
    if stack:
        raise FormatError(f"Generated code has {len(stack)} unclosed bracket(s)")
