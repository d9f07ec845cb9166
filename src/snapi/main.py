from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from uuid import uuid4

import typer
from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .capabilities.catalog import (
    Catalog,
    CapabilityNotFoundError,
    catalog_schema,
    discover_capabilities,
    resolve_capability,
)
from .core.config import ConfigLoadResult, SnapiConfig, load_config
from .core.console import console, setup_logging, stderr_console
from .core.errors import InvalidFunctionCallError, LibraryClassMissingFunctionError
from .core.runtime import RuntimeContext, reset_runtime_context, set_runtime_context

app = typer.Typer(help="snapi: inspect, export and call declarative capabilities.")
logger = logging.getLogger(__name__)


@dataclass
class AppState:
    config: SnapiConfig
    config_meta: ConfigLoadResult
    logger: logging.Logger
    runtime_ctx: RuntimeContext


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to a snapi config file (TOML or JSON)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    # load_config never raises; problems are reported through meta.error
    loaded_config, meta = load_config(config_path=config)
    app_logger = setup_logging(level=loaded_config.log_level, verbose=verbose)

    runtime = RuntimeContext(config=loaded_config, trace_id=f"cli-{uuid4().hex[:8]}")
    token = set_runtime_context(runtime)
    ctx.call_on_close(lambda: reset_runtime_context(token))

    ctx.obj = AppState(
        config=loaded_config,
        config_meta=meta,
        logger=app_logger,
        runtime_ctx=runtime,
    )

    if meta.error:
        stderr_console.print(
            Panel(
                f"[bold red]Configuration Error - Safe Mode Active[/bold red]\n\n"
                f"Failed to load {meta.path}:\n{escape(meta.error)}\n\n"
                f"[yellow]Using default settings.[/yellow]",
                border_style="red",
            )
        )
    else:
        app_logger.debug(
            "Loaded configuration from %s (env overrides: %s, trace: %s)",
            meta.path,
            sorted(meta.env_overrides),
            runtime.trace_id,
        )


def _load_catalog(state: AppState, modules: list[str] | None) -> Catalog:
    module_names = modules or state.config.capability_modules
    if not module_names:
        stderr_console.print(
            "[yellow]No capability modules given. Pass module names or set "
            "capability_modules in the config.[/yellow]"
        )
    return discover_capabilities(module_names)


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _build_arguments(pairs: list[str] | None, json_args: str | None) -> dict[str, Any]:
    arguments: dict[str, Any] = {}
    if json_args:
        try:
            decoded = json.loads(json_args)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"Invalid JSON: {exc}", param_hint="--json-args") from exc
        if not isinstance(decoded, dict):
            raise typer.BadParameter("Expected a JSON object.", param_hint="--json-args")
        arguments.update(decoded)

    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {pair!r}", param_hint="--arg")
        arguments[key] = _parse_value(raw)
    return arguments


@app.command("list")
def list_capabilities(
    ctx: typer.Context,
    modules: list[str] | None = typer.Argument(None, help="Modules to scan for capabilities."),
) -> None:
    """Show discovered capabilities and whether their libraries are complete."""
    state: AppState = ctx.obj
    catalog = _load_catalog(state, modules)

    table = Table(title="Capabilities", box=box.SIMPLE_HEAVY, expand=True)
    table.add_column("Namespace", style="cyan", no_wrap=True)
    table.add_column("Capability", style="white")
    table.add_column("Functions", style="white")
    table.add_column("Library", style="white")

    for namespace, capability in sorted(catalog.items()):
        schema = capability.schema()
        valid = capability.valid_library_class()
        style = "green" if valid else "red"
        library_cell = f"[{style}]{schema.library}[/{style}]"
        table.add_row(
            namespace,
            schema.capability,
            ", ".join(schema.functions) or "-",
            library_cell,
        )

    console.print(table)


@app.command("schema")
def show_schema(
    ctx: typer.Context,
    modules: list[str] | None = typer.Argument(None, help="Modules to scan for capabilities."),
    namespace: str | None = typer.Option(
        None, "--namespace", "-n", help="Only export this namespace."
    ),
) -> None:
    """Print the schema document (namespace -> functions) as JSON."""
    state: AppState = ctx.obj
    catalog = _load_catalog(state, modules)

    if namespace is not None:
        if namespace not in catalog:
            stderr_console.print(f"[red]Unknown namespace:[/red] {escape(namespace)}")
            raise typer.Exit(code=1)
        catalog = {namespace: catalog[namespace]}

    console.print_json(
        data=catalog_schema(catalog), indent=state.config.schema_indent or None, default=str
    )


@app.command("call")
def call_function(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Capability as module:ClassName or a namespace."),
    function_name: str = typer.Argument(..., help="Function to call."),
    arg: list[str] | None = typer.Option(
        None, "--arg", "-a", help="Argument as key=value; values are parsed as JSON when possible."
    ),
    json_args: str | None = typer.Option(None, "--json-args", help="Arguments as a JSON object."),
    strict: bool | None = typer.Option(
        None, "--strict/--no-strict", help="Override strict argument type checking."
    ),
) -> None:
    """Validate arguments and dispatch a function to its library."""
    state: AppState = ctx.obj
    arguments = _build_arguments(arg, json_args)

    try:
        catalog = None if ":" in target else _load_catalog(state, None)
        capability = resolve_capability(target, catalog)
        result = capability.run_function(function_name, arguments, strict_types=strict)
    except (
        CapabilityNotFoundError,
        InvalidFunctionCallError,
        LibraryClassMissingFunctionError,
    ) as exc:
        message = escape(str(exc))
        stderr_console.print(f"[red]{type(exc).__name__}:[/red] {message}", highlight=False)
        raise typer.Exit(code=1) from exc

    if isinstance(result, str):
        console.print(result, markup=False, highlight=False)
    else:
        console.print_json(data=result, default=str)


@app.command("config")
def show_config(ctx: typer.Context) -> None:
    """Show the active configuration and where it came from."""
    state: AppState = ctx.obj
    config = state.config
    meta = state.config_meta

    table = Table(title="Config", box=box.SIMPLE, expand=True)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    for key, value in config.model_dump().items():
        table.add_row(key, str(value))

    console.print(table)

    meta_lines = [
        f"Path: {meta.path}",
        "File loaded: yes" if meta.file_loaded else "File loaded: no (using defaults + env)",
    ]

    if meta.env_overrides:
        meta_lines.append("Env overrides: " + ", ".join(sorted(meta.env_overrides)))

    console.print(Panel("\n".join(meta_lines), title="Config source", box=box.SIMPLE))


@app.command("version")
def show_version() -> None:
    """Print the snapi version."""
    console.print(__version__)


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
