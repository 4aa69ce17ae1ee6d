# src/textubes/cli.py
"""Textubes Command Line Interface.

Entry point for the textubes CLI tool.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import typer
from pydantic import ValidationError

from textubes import __version__
from textubes.contracts import Determinism, GraphValidationError, KindCategory, PropagationBoundError
from textubes.core.config import TextubesSettings, load_settings

__all__ = [
    "app",
]

app = typer.Typer(
    name="textubes",
    help="Textubes: connect boxes to each other to make text into different text.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"textubes version {__version__}")
        raise typer.Exit()


def _load_dotenv() -> bool:
    """Load environment variables from a .env file in the current or a parent directory."""
    from dotenv import load_dotenv

    return load_dotenv(override=False)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """Textubes: connect boxes to each other to make text into different text."""
    from textubes.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")
    ctx.obj = {"verbose": verbose, "json_logs": json_logs}

    if not no_dotenv:
        _load_dotenv()


def _format_validation_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted validation error with optional hint and details."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console(stderr=True)

    content = Text()
    content.append(message, style="white")

    if details:
        content.append("\n\n")
        for detail in details:
            content.append(f"  • {detail}\n", style="dim")

    if hint:
        content.append("\n")
        content.append("Hint: ", style="yellow bold")
        content.append(hint, style="yellow")

    panel = Panel(
        content,
        title=f"[red bold]{title}[/]",
        border_style="red",
        padding=(0, 1),
    )
    console.print(panel)


def _load_settings_or_exit(settings: Path | None) -> TextubesSettings:
    if settings is None:
        return TextubesSettings()
    try:
        return load_settings(settings.expanduser())
    except FileNotFoundError:
        _format_validation_error(
            title="File Not Found",
            message=f"Settings file does not exist: {settings}",
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except ValidationError as e:
        details = [f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors()]
        _format_validation_error(
            title="Configuration Validation Failed",
            message=f"Invalid settings in {settings.name}",
            details=details,
            hint="Check field names, types, and required values.",
        )
        raise typer.Exit(1) from None


def _apply_logging_settings(ctx: typer.Context, config: TextubesSettings) -> None:
    from textubes.core.logging import configure_from_settings

    flags = ctx.obj or {}
    configure_from_settings(config.logging, verbose=flags.get("verbose", False), json_logs=flags.get("json_logs", False))


def _load_graph_or_exit(graph: Path) -> dict[str, Any]:
    from textubes.core.snapshot import load_document

    try:
        return load_document(graph.expanduser())
    except FileNotFoundError:
        _format_validation_error(
            title="File Not Found",
            message=f"Graph file does not exist: {graph}",
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except GraphValidationError as e:
        _format_validation_error(title="Graph Parse Error", message=str(e))
        raise typer.Exit(1) from None


# === Commands ===


@app.command()
def validate(
    graph: Path = typer.Option(
        ...,
        "--graph",
        "-g",
        help="Path to a graph document (JSON or YAML).",
    ),
) -> None:
    """Validate a graph document without running it."""
    from textubes.core.snapshot import parse_document

    data = _load_graph_or_exit(graph)
    try:
        doc = parse_document(data)
    except GraphValidationError as e:
        _format_validation_error(
            title="Graph Validation Failed",
            message=str(e),
            hint="Documents need 'nodes' and 'edges' lists; edges must reference existing node ids.",
        )
        raise typer.Exit(1) from None

    from textubes.plugins.manager import get_default_registry

    registry = get_default_registry()
    unknown = sorted({node.kind for node in doc.nodes if node.kind not in registry})

    typer.echo(f"Graph is valid: {len(doc.nodes)} nodes, {len(doc.edges)} edges.")
    if unknown:
        typer.secho(
            f"Warning: unknown kinds will evaluate as empty: {', '.join(unknown)}",
            fg=typer.colors.YELLOW,
            err=True,
        )


@app.command()
def run(
    ctx: typer.Context,
    graph: Path = typer.Option(
        ...,
        "--graph",
        "-g",
        help="Path to a graph document (JSON or YAML).",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    regenerate: list[str] | None = typer.Option(
        None,
        "--regenerate",
        "-r",
        help="Regenerate a node after import (repeatable).",
    ),
    output_format: Literal["console", "json"] = typer.Option(
        "console",
        "--format",
        "-f",
        help="Output format: 'console' (human-readable) or 'json' (structured JSON).",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the resulting graph document to this file.",
    ),
) -> None:
    """Import a graph, propagate it, and print every node's outputs."""
    from textubes.core.snapshot import dump_document
    from textubes.engine import Orchestrator

    config = _load_settings_or_exit(settings)
    if settings is not None:
        _apply_logging_settings(ctx, config)
    data = _load_graph_or_exit(graph)

    orchestrator = Orchestrator(settings=config)
    try:
        result = orchestrator.import_document(data)
        for node_id in regenerate or []:
            orchestrator.regenerate(node_id)
    except KeyError as e:
        _format_validation_error(title="Unknown Node", message=str(e.args[0]) if e.args else str(e))
        raise typer.Exit(1) from None
    except PropagationBoundError as e:
        _format_validation_error(
            title="Propagation Did Not Converge",
            message=str(e),
            hint="Raise propagation.max_iterations or break the cycle in the graph.",
        )
        raise typer.Exit(1) from None
    except GraphValidationError as e:
        _format_validation_error(title="Graph Validation Failed", message=str(e))
        raise typer.Exit(1) from None

    document = orchestrator.export_document()
    if output_format == "json":
        typer.echo(json.dumps(document, indent=2, ensure_ascii=False))
    else:
        for node in document["nodes"]:
            typer.secho(f"{node['id']} ({node['kind']})", bold=True)
            for channel, value in node["outputs"].items():
                typer.echo(f"  {channel}: {value}")
        for error in result.report.errors:
            typer.secho(f"Warning: {error['node_id']}: {error['message']}", fg=typer.colors.YELLOW, err=True)

    if output is not None:
        dump_document(document, output)
        typer.echo(f"Wrote {output}", err=True)


kinds_app = typer.Typer(help="Node kind catalog commands.")
app.add_typer(kinds_app, name="kinds")


@kinds_app.command("list")
def kinds_list(
    category: str | None = typer.Option(
        None,
        "--category",
        "-c",
        help="Filter by category (source, transformer, destination).",
    ),
) -> None:
    """List available node kinds."""
    from textubes.plugins.manager import get_default_registry

    valid = [c.value for c in KindCategory]
    if category is not None and category not in valid:
        typer.echo(f"Error: Invalid category '{category}'.", err=True)
        typer.echo(f"Valid categories: {', '.join(valid)}", err=True)
        raise typer.Exit(1)

    registry = get_default_registry()
    categories = [KindCategory(category)] if category else list(KindCategory)

    for cat in categories:
        specs = registry.specs(cat)
        typer.echo(f"\n{cat.value.upper()}S:")
        if not specs:
            typer.echo("  (none available)")
        for spec in specs:
            marker = " *" if spec.determinism == Determinism.REGENERATIVE else ""
            typer.echo(f"  {spec.name:16} - {spec.description}{marker}")

    typer.echo()


if __name__ == "__main__":
    app()
