import json
import logging
from pathlib import Path

import click

from .config import ConverterConfig
from .errors import ConfigError, JoiToZodError
from .generator import JoiToZodGenerator
from .writer import AtomicWriter


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Export name fallback when the schema has no className meta")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--module", "-m", is_flag=True, default=False, help="Render a TypeScript module instead of a bare expression")
@click.option(
    "--optional-root",
    is_flag=True,
    default=False,
    help="Treat the root schema as optional when it sets no presence",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", required=False, default=None, type=click.Path(dir_okay=False, resolve_path=True))
def joi_to_zod(name, config, module, optional_root, verbose, path, output):
    """Convert the Joi describe() JSON in PATH to Zod source."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        with open(config) as f:
            try:
                config = ConverterConfig.from_dict(json.load(f))
            except json.JSONDecodeError as e:
                raise click.ClickException(f"Malformed config JSON in {f.name}: {e}") from e
            except ConfigError as e:
                raise click.ClickException(str(e)) from e
    else:
        config = ConverterConfig()

    # CLI flag overrides config file if set
    if optional_root:
        config.root_default_optional = True

    if name is None:
        name = Path(path).stem

    with open(path, encoding="utf-8") as f:
        describe = f.read()

    codegen = JoiToZodGenerator(describe, config)
    try:
        if module:
            out = codegen.generate_module(name)
        else:
            out = codegen.generate() + "\n"

        if output is None:
            click.echo(out, nl=False)
        else:
            AtomicWriter().write(Path(output), out)
    except JoiToZodError as e:
        raise click.ClickException(str(e)) from e

    fixes = codegen.manual_fixes
    if fixes:
        tags = ", ".join(sorted({fix.tag for fix in fixes}))
        click.echo(f"{len(fixes)} construct(s) need a manual fix: {tags}", err=True)
