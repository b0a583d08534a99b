"""CLI entry point for api2swagger."""

import logging
from pathlib import Path

import click

from api2swagger.errors import SwaggerGenError
from api2swagger.generator.document import SwaggerGenerator, to_json
from api2swagger.generator.validator import validate_document
from api2swagger.parser.plugin import Plugin, load_plugin, parse_plugin

DEFAULT_FILENAME = "rest.swagger.json"


def _load_spec(spec_path: Path) -> Plugin:
    """Load the parsed specification from a file, or from stdin for '-'."""
    if str(spec_path) == "-":
        return parse_plugin(click.get_text_stream("stdin").read())
    return load_plugin(spec_path)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group(context_settings={"auto_envvar_prefix": "API2SWAGGER"})
def main():
    """Generate Swagger 2.0 documents from parsed API definitions."""
    pass


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path))
@click.option("--host", default=None, help="API request address.")
@click.option("--basepath", default=None, help="URL request prefix.")
@click.option("--filename", default=DEFAULT_FILENAME, show_default=True, help="Swagger file name.")
@click.option("--schemes", default=None, help="Comma-separated schemes: http, https, ws, wss.")
@click.option("--pack", default=None, help="Wrap responses in an outer structure with this name, e.g. Response.")
@click.option("--response", default=None, help="Outer response structure as a JSON array of fields.")
@click.option("--style", default=None, help="Naming style for tags, e.g. gozero or go_zero.")
@click.option("-o", "--dir", "output_dir", default=None, type=click.Path(file_okay=False, path_type=Path), help="Output directory (defaults to the plugin directory, then '.').")
@click.option("-v", "--verbose", is_flag=True, help="Log debug details.")
def swagger(
    spec_path: Path,
    host: str | None,
    basepath: str | None,
    filename: str,
    schemes: str | None,
    pack: str | None,
    response: str | None,
    style: str | None,
    output_dir: Path | None,
    verbose: bool,
):
    """Generate a swagger JSON document from a parsed API specification."""
    _setup_logging(verbose)

    try:
        plugin = _load_spec(spec_path)
        generator = SwaggerGenerator(
            host=host,
            base_path=basepath,
            schemes=schemes,
            pack=pack,
            response=response,
            style=style or plugin.style,
        )
        click.echo(f"Generating swagger for service {plugin.api.service.name}...")
        document = generator.generate(plugin.api)
    except SwaggerGenError as e:
        raise click.ClickException(str(e)) from e

    errors = validate_document(document)
    for location, error in errors.items():
        click.echo(f"  warning: {location}: {error}", err=True)

    output = output_dir or Path(plugin.dir or ".")
    output.mkdir(parents=True, exist_ok=True)
    file_path = output / filename
    file_path.write_text(to_json(document), encoding="utf-8")
    click.echo(f"Swagger document saved to {file_path}")
