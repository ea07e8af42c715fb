"""CLI entry point for curl2openapi."""

import json
import logging
import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from curl2openapi.config import get_settings
from curl2openapi.generator.spec import EmptyProjectError, convert_spec, generate_from_project, render_spec
from curl2openapi.generator.validator import validate_spec
from curl2openapi.parser.curl import ParseError, extract_api_info, parse_curl
from curl2openapi.parser.endpoint import MalformedURLInCapture
from curl2openapi.store import CaptureService

CLI_PROJECT = "cli"


def _read_commands(input_path: Path) -> list[tuple[int, str]]:
    """Read one cURL command per line, skipping blanks and # comments."""
    commands = []
    for lineno, line in enumerate(input_path.read_text(encoding="utf-8").splitlines(), start=1):
        line = line.strip()
        if line and not line.startswith("#"):
            commands.append((lineno, line))
    return commands


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log progress at INFO level.")
def main(verbose: bool):
    """curl2openapi: turn captured cURL commands into an OpenAPI spec."""
    try:
        level = "INFO" if verbose else get_settings().log_level
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}")
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("command")
def parse(command: str):
    """Parse a single cURL COMMAND ("-" reads it from stdin) and print it as JSON."""
    if command == "-":
        command = sys.stdin.read()

    try:
        parsed = parse_curl(command)
    except ParseError as e:
        raise click.ClickException(str(e))

    output = parsed.model_dump()
    try:
        output["info"] = extract_api_info(parsed).model_dump()
    except MalformedURLInCapture as e:
        click.echo(f"Warning: {e}", err=True)
    click.echo(json.dumps(output, indent=2, ensure_ascii=False))


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file path for the spec.")
@click.option("--title", default=None, help="info.title of the generated spec.")
@click.option("--description", default=None, help="info.description of the generated spec.")
@click.option("--format", "fmt", default=None, type=click.Choice(["yaml", "json"]), help="Output format.")
def generate(input_path: Path, output: Path, title: str | None, description: str | None, fmt: str | None):
    """Generate an OpenAPI spec from a file of cURL commands, one per line."""
    settings = get_settings()
    fmt = fmt or settings.output_format

    click.echo(f"Reading cURL commands from {input_path}...")
    service = CaptureService()
    for lineno, command in _read_commands(input_path):
        try:
            service.parse_curl(command, project_id=CLI_PROJECT)
        except ParseError as e:
            click.echo(f"  Skipped line {lineno}: {e}", err=True)

    captures = service.store.find_many_by_project(CLI_PROJECT)
    click.echo(f"Parsed {len(captures)} captures.")

    try:
        result = generate_from_project(
            service.store,
            CLI_PROJECT,
            title=title or settings.default_title,
            description=description or settings.default_description,
            version=settings.spec_version,
        )
    except EmptyProjectError as e:
        raise click.ClickException(str(e))

    for warning in result.warnings:
        click.echo(f"  Warning: {warning}", err=True)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_spec(result.document, fmt), encoding="utf-8")
    click.echo(f"Spec with {len(result.document['paths'])} paths saved to {output}")


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(spec_path: Path):
    """Check a generated spec for missing required fields."""
    result = validate_spec(spec_path.read_text(encoding="utf-8"))

    for error in result.errors:
        click.echo(f"Error: {error}")
    for warning in result.warnings:
        click.echo(f"Warning: {warning}")

    if not result.is_valid:
        raise click.ClickException(f"{spec_path} is not a valid OpenAPI document")
    click.echo(f"{spec_path} is valid.")


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file path.")
@click.option("--format", "fmt", required=True, type=click.Choice(["yaml", "json"]), help="Target format.")
def convert(spec_path: Path, output: Path, fmt: str):
    """Re-serialize a spec as YAML or JSON."""
    try:
        converted = convert_spec(spec_path.read_text(encoding="utf-8"), fmt)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Failed to parse {spec_path}: {e}")
    except TypeError as e:
        raise click.ClickException(f"Cannot convert {spec_path} to {fmt}: {e}")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(converted, encoding="utf-8")
    click.echo(f"Converted {spec_path} to {fmt}: {output}")
