"""Typer CLI entrypoint for wxproduct."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .config import ConfigRepository, GlobalConfig
from .errors import ClassMismatch
from .logging_conf import LOG_FILES, available_logs, configure_logging, tail_log
from .products import WeatherProduct

app = typer.Typer(
    help="Parse WMO weather bulletins and look up products by name.",
    no_args_is_help=True,
    rich_markup_mode=None,
)
log_app = typer.Typer(
    name="log",
    help="Log inspection commands.",
    no_args_is_help=True,
    rich_markup_mode=None,
)
app.add_typer(log_app, name="log")

console = Console()
err_console = Console(stderr=True)


@dataclass
class AppState:
    repository: ConfigRepository
    config: GlobalConfig
    logs_dir: Path


def build_state(verbose: bool, config_path: Path | None = None) -> AppState:
    repository = ConfigRepository()
    if config_path is not None:
        config = repository.load_file(config_path)
    else:
        config = repository.load_global_config()
    logs_dir = config.logs_dir or repository.locator.logs_dir
    configure_logging(verbose=verbose, log_dir=logs_dir)
    return AppState(repository=repository, config=config, logs_dir=logs_dir)


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


def _load_products(
    state: AppState, sources: Sequence[str] | None, age_ceiling: int | None
) -> WeatherProduct:
    effective_sources = list(sources) if sources else list(state.config.sources)
    if not effective_sources:
        err_console.print("No sources given and none configured.", style="yellow")
        raise typer.Exit(code=2)
    ceiling = state.config.age_ceiling if age_ceiling is None else age_ceiling
    products = WeatherProduct(global_config=state.config, age_ceiling=ceiling)
    try:
        summary = products.import_sources(effective_sources)
    except ClassMismatch as exc:
        products.close()
        err_console.print(exc.message, style="red")
        raise typer.Exit(code=1) from exc
    if summary["failed"]:
        err_console.print(f"{summary['failed']} source(s) could not be read.", style="yellow")
    return products


def _render_products_table(products: WeatherProduct) -> Table:
    table = Table(title="Products", box=box.SIMPLE_HEAD)
    table.add_column("Name", style="green")
    table.add_column("Header", style="cyan")
    table.add_column("Time (UTC)")
    table.add_column("Age (h)", justify="right")
    for name in sorted(products.list_products()):
        header = products.header(name)
        stamp = products.time(name)
        age = products.age(name)
        table.add_row(
            name,
            str(header) if header is not None else "-",
            stamp.isoformat() if stamp else "-",
            f"{age:.1f}" if age is not None else "-",
        )
    return table


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.", is_flag=True),
    config: Optional[Path] = typer.Option(None, "--config", help="Configuration file (YAML or JSON)."),
) -> None:
    ctx.obj = build_state(verbose, config)


@app.command("products", help="List products found in the given bulletins.")
def products_list(
    ctx: typer.Context,
    sources: Optional[List[str]] = typer.Argument(
        None, help="Files or URLs to import (defaults to configured sources)."
    ),
    age_ceiling: Optional[int] = typer.Option(
        None, "--age-ceiling", min=0, help="Purge products older than N hours."
    ),
) -> None:
    state = _get_state(ctx)
    with _load_products(state, sources, age_ceiling) as products:
        if not products.list_products():
            console.print("No products found.", style="yellow")
            return
        console.print(_render_products_table(products))


@app.command("text", help="Print the text of a product.")
def product_text(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Product code or station code."),
    sources: Optional[List[str]] = typer.Argument(
        None, help="Files or URLs to import (defaults to configured sources)."
    ),
    age_ceiling: Optional[int] = typer.Option(
        None, "--age-ceiling", min=0, help="Purge products older than N hours."
    ),
) -> None:
    state = _get_state(ctx)
    with _load_products(state, sources, age_ceiling) as products:
        text = products.text(name)
    if text is None:
        err_console.print(f"Unknown product: {name}", style="red")
        raise typer.Exit(code=1)
    typer.echo(text, nl=False)


@app.command("header", help="Show the decoded header of a product.")
def product_header(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Product code or station code."),
    sources: Optional[List[str]] = typer.Argument(
        None, help="Files or URLs to import (defaults to configured sources)."
    ),
    age_ceiling: Optional[int] = typer.Option(
        None, "--age-ceiling", min=0, help="Purge products older than N hours."
    ),
) -> None:
    state = _get_state(ctx)
    with _load_products(state, sources, age_ceiling) as products:
        header = products.header(name)
        stamp = products.time(name)
    if header is None:
        err_console.print(f"Unknown product: {name}", style="red")
        raise typer.Exit(code=1)
    table = Table(box=box.SIMPLE_HEAD, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("product", header.product)
    table.add_row("station", header.station)
    table.add_row("time", header.time)
    table.add_row("indicator", getattr(header, "indicator", None) or "-")
    table.add_row("issued", stamp.isoformat() if stamp else "-")
    console.print(table)


@log_app.command("list", help="List available log files.")
def log_list(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    logs = list(available_logs(state.logs_dir))
    if not logs:
        console.print("No log files yet.", style="dim")
        return
    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("File", style="green")
    for path in logs:
        table.add_row(path.name)
    console.print(table)


@log_app.command("show", help="Show the most recent log lines.")
def log_show(
    ctx: typer.Context,
    errors: bool = typer.Option(False, "--errors", help="Show the error log.", is_flag=True),
    tail: int = typer.Option(100, "--tail", min=1, help="Number of lines to show."),
) -> None:
    state = _get_state(ctx)
    filename, _level = LOG_FILES["error_file" if errors else "app_file"]
    path = state.logs_dir / filename
    lines = tail_log(path, tail)
    if not lines:
        console.print("No log entries yet.", style="dim")
        return
    console.print(f"{path.name} · last {len(lines)} lines", style="cyan")
    console.print("".join(lines), markup=False, highlight=False)


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
