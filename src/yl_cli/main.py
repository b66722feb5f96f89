import json
import logging
from functools import partial
from pathlib import Path

import typer
from yl_linter.engine import LinterEngine
from yl_linter.errors import LintError
from yl_linter.models import Severity
from yl_linter.registry import default_registry

from .config import CliConfig
from .converters import problem_to_record

app = typer.Typer(help="yl - Lint YAML files with inline-configurable rules")

OUTPUT_FORMATS = ("human", "json")


@app.command()
def lint(
    paths: list[Path] = typer.Argument(..., help="Files or directories to lint"),
    config_file: Path = typer.Option(None, "--config", "-c", help="Path to a YAML config file"),
    preset: str = typer.Option(None, help="Built-in preset: default, strict or relaxed"),
    jobs: int = typer.Option(None, "--jobs", "-j", min=1, help="Number of worker threads"),
    output_format: str = typer.Option("human", "--format", "-f", help="Output format: human or json"),
    plugins: bool = typer.Option(True, "--plugins/--no-plugins", help="Load rules from installed plugins"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Run linter on YAML files"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"Error: unknown format '{output_format}' (expected human or json)", err=True)
        raise typer.Exit(code=2)

    try:
        config = CliConfig(config_file, preset).load()
        engine = LinterEngine(config, partial(default_registry, include_plugins=plugins), jobs=jobs)
        results = engine.lint_paths(paths)
    except LintError as exc:
        typer.echo(f"Error: {exc.message}", err=True)
        raise typer.Exit(code=2)

    records = [problem_to_record(path, problem) for path, problems in results for problem in problems]

    if output_format == "json":
        typer.echo(json.dumps([record.model_dump() for record in records], indent=2))
    else:
        for record in records:
            typer.echo(f"{record.path}:{record.line}:{record.column}: [{record.severity}] {record.message} ({record.rule})")
        typer.echo(f"\nTotal problems found: {len(records)} in {len(results)} files")

    errors = sum(1 for record in records if record.severity == Severity.ERROR.value)
    if errors > 0:
        raise typer.Exit(code=1)


@app.command()
def rules(
    plugins: bool = typer.Option(True, "--plugins/--no-plugins", help="Include rules from installed plugins"),
):
    """List available rules"""
    registry = default_registry(include_plugins=plugins)
    for rule in registry.rules():
        state = "enabled" if rule.default_config().enabled else "disabled"
        typer.echo(f"{rule.rule_id:<26} {state:<9} {rule.description}")


if __name__ == "__main__":
    app()
