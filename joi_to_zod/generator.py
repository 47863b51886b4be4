"""
Joi describe to Zod generator.

Runs the conversion phases in order:

1. Parser: decode describe JSON into the describe AST
2. Translator: map the describe AST onto a Zod expression tree
3. Serializer: join the expression tree into source text
4. Template (optional): wrap the expression into a TypeScript module
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from . import __version__
from .cli_utils import reconstruct_command_line
from .config import ConverterConfig
from .describe_ast import DescribeParser, SchemaNode
from .errors import ConversionError, FormatError, ParseError
from .translator import Translator
from .utils import export_name
from .zod_ast import Expression, ManualFix, ZodSerializer, collect_manual_fixes

TEMPLATE_DIR = Path(__file__).parent.resolve() / "templates"


class JoiToZodGenerator:
    """Converts one Joi describe document to Zod source."""

    def __init__(self, describe: str | bytes | dict[str, Any], config: ConverterConfig | None = None):
        """
        Initialize the generator.

        Args:
            describe: Describe JSON text or the decoded describe dictionary
            config: Conversion configuration
        """
        self.describe = describe
        self.config = config or ConverterConfig()
        self.parser = DescribeParser(self.config)
        self.translator = Translator(self.config)
        self.serializer = ZodSerializer()

        # Set by generate()
        self.root: SchemaNode | None = None
        self.expression: Expression | None = None

        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.module_template = self.jinja_env.get_template("module.ts.jinja2")

    def generate(self, default_to_optional: bool | None = None) -> str:
        """
        Generate the Zod expression.

        Args:
            default_to_optional: Presence context of the root node; defaults
                to ``config.root_default_optional``

        Returns:
            Zod expression source

        Raises:
            ParseError: If the describe output is malformed
            FormatError: If the expression cannot be serialized
        """
        if default_to_optional is None:
            default_to_optional = self.config.root_default_optional

        self.root = self.parser.parse(self.describe)
        try:
            self.expression = self.translator.translate(self.root, default_to_optional)
            return self.serializer.serialize(self.expression)
        except RecursionError as e:
            raise FormatError(f"Schema is too deeply nested to convert (max_depth={self.config.max_depth})") from e

    def generate_module(self, name: str | None = None, default_to_optional: bool | None = None) -> str:
        """
        Generate a TypeScript module exporting the Zod schema.

        Args:
            name: Fallback for the export name (e.g. the input file stem),
                used when the root has no ``className`` meta

        Returns:
            Module source
        """
        expression = self.generate(default_to_optional)
        return self.module_template.render(
            generation_comment=self._generate_command_comment(),
            zod_identifier=self.config.zod_identifier,
            zod_import=self.config.zod_import,
            export_name=export_name(self.root.class_name, name, self.config.export_suffix),
            expression=expression,
        )

    @property
    def manual_fixes(self) -> list[ManualFix]:
        """Constructs of the last generated expression that need manual work."""
        if self.expression is None:
            return []
        return collect_manual_fixes(self.expression)

    def _generate_command_comment(self) -> str:
        """Generate a command line comment for the rendered module"""
        if not self.config.add_generation_comment:
            return ""

        try:
            from .joi_to_zod import joi_to_zod as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "joi_to_zod"

        return f"// Generated by joi_to_zod v{__version__} : {command_line}"


def to_zod(schema: Any, default_to_optional: bool = False, config: ConverterConfig | None = None) -> str:
    """
    Convert a Joi schema description to a Zod expression.

    Args:
        schema: An object with a ``describe()`` method (whose result is used),
            a describe dictionary, or describe JSON text
        default_to_optional: Presence context of the root node
        config: Conversion configuration

    Returns:
        Zod expression source

    Raises:
        ConversionError: If the description cannot be parsed or serialized
    """
    describe = getattr(schema, "describe", None)
    if callable(describe):
        schema = describe()

    try:
        return JoiToZodGenerator(schema, config).generate(default_to_optional)
    except (ParseError, FormatError) as e:
        raise ConversionError(str(e)) from e
