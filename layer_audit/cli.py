"""Click CLI with report, show, and serve subcommands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from layer_audit.config import load_config
from layer_audit.errors import LayerAuditError
from layer_audit.pipeline import AuditResult, run_audit
from layer_audit.report import format_columns, report_rows

_FORMAT_CHOICES = ["text", "json"]


def _audit_options(func):
    """Options shared by every command that runs an audit."""
    options = [
        click.option("--config-file", "-c", type=click.Path(dir_okay=False, path_type=Path),
                     help="File with the standard library configuration"),
        click.option("--input-file", "-i", "learned_file", type=click.Path(dir_okay=False, path_type=Path),
                     default="input.txt", show_default=True,
                     help="File listing the packages already learned"),
        click.option("--root", type=click.Path(exists=True, file_okay=False, path_type=Path),
                     help="Root of the package tree (overrides the config file)"),
        click.option("--vendor", "vendor_segment", help="Vendor path segment (overrides the config file)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _run(config_file, learned_file, root, vendor_segment) -> AuditResult:
    if config_file is None and root is None and Path("config.txt").is_file():
        config_file = Path("config.txt")
    try:
        config = load_config(
            config_file=config_file,
            root_path=root,
            vendor_segment=vendor_segment,
            learned_file=learned_file,
        )
        return run_audit(config)
    except LayerAuditError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """layer-audit: Report package dependency depth and import reachability."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@_audit_options
@click.option("--format", "-f", "output_format", type=click.Choice(_FORMAT_CHOICES), default="text",
              show_default=True, help="Output format")
@click.option("--summary/--no-summary", default=False, help="Print run totals after the report")
def report(config_file, learned_file, root, vendor_segment, output_format: str, summary: bool):
    """Print every package grouped by dependency depth."""
    result = _run(config_file, learned_file, root, vendor_segment)

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(format_columns(report_rows(result.entries)), nl=False)

    if summary:
        s = result.summary
        click.echo(err=True)
        click.echo("Summary:", err=True)
        click.echo(f"  packages: {s.total_packages}", err=True)
        click.echo(f"  edges: {s.total_edges}", err=True)
        click.echo(f"  learned: {s.learned}", err=True)
        click.echo(f"  reported: {s.reported}", err=True)
        click.echo(f"  suppressed: {s.suppressed}", err=True)
        click.echo(f"  max depth: {s.max_depth}", err=True)


@cli.command()
@_audit_options
@click.argument("name")
def show(config_file, learned_file, root, vendor_segment, name: str):
    """Show depth, flags, dependencies and dependents of one package."""
    result = _run(config_file, learned_file, root, vendor_segment)

    matches = result.registry.find_by_name(name)
    if not matches:
        raise click.ClickException(f"No package named {name!r}")

    for pkg in matches:
        info = result.describe(pkg)
        click.echo(click.style(info["name"], fg="cyan"))
        click.echo(f"  identity:   {info['identity']}")
        click.echo(f"  depth:      {info['depth']}")
        click.echo(f"  imported:   {'yes' if info['imported'] else 'no'}")
        flags = [flag for flag in ("internal", "learned", "predeclared", "vendor") if info[flag]]
        click.echo(f"  flags:      {', '.join(flags) or '-'}")
        click.echo("  dependencies:")
        for dep in info["dependencies"] or ["-"]:
            click.echo(f"    {dep}")
        click.echo("  dependents:")
        for dep in info["dependents"] or ["-"]:
            click.echo(f"    {dep}")


@cli.command()
@_audit_options
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(config_file, learned_file, root, vendor_segment, port: int, host: str):
    """Serve the report as a JSON API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the web API. "
            "Install with: pip install 'layer-audit[web]'"
        )

    from layer_audit.web import create_app

    result = _run(config_file, learned_file, root, vendor_segment)
    click.echo(f"Serving layer-audit report for {result.config.root} at http://{host}:{port}")
    uvicorn.run(create_app(result), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
