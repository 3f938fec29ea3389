"""CLI entry point for route-docgen."""

import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import click

from route_docgen.config import build_config, load_config
from route_docgen.errors import DocGenError
from route_docgen.extractor.pipeline import ExtractionResult, extract_routes
from route_docgen.extractor.scan import DEFAULT_PATTERN, find_route_files
from route_docgen.renderer.bundle import FORMATS, render_documents
from route_docgen.renderer.validator import validate_documents


def _extract(project: Path, pattern: str, workers: int) -> tuple[list[Path], ExtractionResult]:
    """Scan the project and extract routes, mapping terminal errors to click errors."""
    files = find_route_files(project, pattern)
    try:
        result = extract_routes(files, workers=workers)
    except DocGenError as e:
        raise click.ClickException(str(e)) from e

    for warning in result.warnings:
        click.echo(f"Warning: failed to parse {warning}", err=True)
    return files, result


@click.group()
@click.option("--log-level", default="WARNING", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]), help="Logging level.")
def main(log_level: str):
    """Route DocGen — generate API documentation from Express-style route files."""
    logging.basicConfig(level=getattr(logging, log_level), format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("project", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-o", "--output", default=Path("api-docs"), type=click.Path(path_type=Path), help="Output directory.")
@click.option("-f", "--format", "fmt", default="all", type=click.Choice(["all", *FORMATS]), help="Output format.")
@click.option("-c", "--config", "config_path", default=None, type=click.Path(path_type=Path), help="JSON or YAML configuration file.")
@click.option("--pattern", default=DEFAULT_PATTERN, help="Route file glob pattern.")
@click.option("--title", default=None, help="API title.")
@click.option("--version", "api_version", default=None, help="API version.")
@click.option("--server", default=None, help="Server URL.")
@click.option("--workers", default=1, type=click.IntRange(min=1), help="Files parsed in parallel.")
@click.option("--timestamp/--no-timestamp", default=False, help="Embed the generation time.")
def generate(
    project: Path,
    output: Path,
    fmt: str,
    config_path: Path | None,
    pattern: str,
    title: str | None,
    api_version: str | None,
    server: str | None,
    workers: int,
    timestamp: bool,
):
    """Generate OpenAPI, Markdown and HTML documentation."""
    try:
        config = build_config(
            load_config(config_path),
            title=title,
            version=api_version,
            server=server,
            generated_at=datetime.now(timezone.utc).isoformat(timespec="seconds") if timestamp else None,
        )
    except DocGenError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Scanning {project} for {pattern}...")
    files, result = _extract(project, pattern, workers)
    click.echo(f"Found {len(result.descriptors)} routes in {len(files)} files.")

    formats = FORMATS if fmt == "all" else (fmt,)
    click.echo(f"Generating {', '.join(formats)} documentation...")
    try:
        documents = render_documents(result.descriptors, config, formats)
    except DocGenError as e:
        raise click.ClickException(str(e)) from e

    errors = validate_documents(documents)
    for filename, err in errors.items():
        click.echo(f"  Validation error in {filename}: {err}", err=True)

    for file_path in _write_documents(documents, output):
        click.echo(f"  Created {file_path}")

    click.echo("")
    click.echo("Summary:")
    click.echo(f"  Routes found: {len(result.descriptors)}")
    click.echo(f"  Files processed: {len(files)}")
    click.echo(f"  Output formats: {', '.join(formats)}")
    click.echo(f"  Output directory: {output}")


@main.command()
@click.argument("project", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--pattern", default=DEFAULT_PATTERN, help="Route file glob pattern.")
def routes(project: Path, pattern: str):
    """List the routes found in a project without rendering anything."""
    _, result = _extract(project, pattern, workers=1)
    for descriptor in result.descriptors:
        click.echo(f"{descriptor.method.value:<7} {descriptor.path}  {descriptor.file}")


def _write_documents(documents: dict[str, str], output: Path) -> list[Path]:
    """Write every document, touching output/ only once all of them are on disk.

    Files are staged in a temporary directory beside output/ and moved in
    afterwards, so a failed write leaves output/ as it was.
    """
    output.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(dir=output.parent, prefix=f".{output.name}-") as tmpdir:
        staged = []
        for filename, content in documents.items():
            tmp_path = Path(tmpdir) / filename
            tmp_path.write_text(content, encoding="utf-8")
            staged.append((tmp_path, output / filename))

        output.mkdir(parents=True, exist_ok=True)
        for tmp_path, file_path in staged:
            os.replace(tmp_path, file_path)
    return [file_path for _, file_path in staged]
