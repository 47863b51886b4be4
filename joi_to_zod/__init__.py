"""Joi to Zod converter

Translates the JSON produced by Joi's ``schema.describe()`` into the
source of an equivalent Zod schema.
"""

__version__ = "0.1.0"

from .config import ConverterConfig
from .errors import ConfigError, ConversionError, FormatError, JoiToZodError, ParseError
from .generator import JoiToZodGenerator, to_zod

__all__ = [
    "to_zod",
    "JoiToZodGenerator",
    "ConverterConfig",
    "JoiToZodError",
    "ParseError",
    "FormatError",
    "ConversionError",
    "ConfigError",
]
