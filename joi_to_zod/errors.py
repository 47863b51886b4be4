"""
Exceptions raised while converting Joi describe output to Zod source.
"""

from __future__ import annotations


class JoiToZodError(Exception):
    """Base class for every error raised by joi_to_zod."""

    pass


class ParseError(JoiToZodError):
    """Raised when describe JSON cannot be turned into a schema tree.

    This can happen when:
    - The text is not valid JSON, or its top level is not an object
    - A field has the wrong JSON type (e.g. ``keys`` is a list)
    - The tree is nested deeper than the configured limit
    - ``flags.only`` is set on an empty allow-list
    """

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)


class FormatError(JoiToZodError):
    """Raised when an expression tree cannot be written out as source."""

    pass


class ConversionError(JoiToZodError):
    """Generic failure surfaced by the ``to_zod`` binding.

    Carries the message of the underlying ParseError or FormatError, which is
    kept as ``__cause__``.
    """

    pass


class ConfigError(JoiToZodError):
    """Raised when a configuration dictionary has the wrong shape or types."""

    pass
