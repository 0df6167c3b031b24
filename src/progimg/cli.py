"""Click CLI for progimg — render enriched image markup and manage the cache."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from progimg.config.hierarchy import load_config_hierarchy
from progimg.config.schema import ImageOptions

console = Console()
error_console = Console(stderr=True)


def _log_level(verbosity: int, configured: str | None = None) -> int:
    """Resolve the log level: -v/-vv win over the configured ``log_level``."""
    if verbosity == 1:
        return logging.INFO
    if verbosity >= 2:
        return logging.DEBUG
    if configured:
        level = logging.getLevelNamesMapping().get(configured.strip().upper())
        if level is not None:
            return level
    return logging.WARNING


def _setup_logging(verbosity: int, configured: str | None = None) -> None:
    """Configure logging based on verbosity level."""
    logging.basicConfig(
        level=_log_level(verbosity, configured),
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


@click.group()
@click.version_option(package_name="progimg")
def cli() -> None:
    """progimg — progressive image markup with cached remote metadata."""


@cli.command()
@click.argument("url")
@click.option("--alt", default="", help="Alt text, optionally with a |W or |WxH size suffix.")
@click.option("--cache", "cache_path", type=click.Path(dir_okay=False), help="Cache file path.")
@click.option("--domain", "domains", multiple=True, help="Allowed host pattern (repeatable).")
@click.option("--no-lazy", is_flag=True, default=False, help="Disable lazy-loading hints.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def render(
    url: str,
    alt: str,
    cache_path: str | None,
    domains: tuple[str, ...],
    no_lazy: bool,
    verbose: int,
) -> None:
    """Render progressive markup for a single image URL."""
    config = load_config_hierarchy(
        cache_path=cache_path,
        supported_domains=list(domains) or None,
        lazy_enable=False if no_lazy else None,
    )
    _setup_logging(verbose, config.get("log_level"))
    options = ImageOptions.from_flat(config)

    from progimg.pipeline.engine import ImagePipeline
    from progimg.types import ImageReference

    async def _run() -> str | None:
        async with ImagePipeline(options) as pipeline:
            return await pipeline.transform(ImageReference(url=url, alt=alt))

    try:
        markup = asyncio.run(_run())
    except Exception as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if markup is None:
        error_console.print(
            "[yellow]Image not enriched; the default rendering applies.[/yellow]"
        )
        return
    console.print(markup, markup=False, highlight=False, emoji=False, soft_wrap=True)


@cli.group()
def cache() -> None:
    """Cache management commands."""


def _resolve_cache_path(cache_path: str | None) -> Path:
    config = load_config_hierarchy(cache_path=cache_path)
    resolved = config.get("cache_path")
    if not resolved:
        error_console.print(
            "[red]Error:[/red] no cache path configured (use --cache or PROGIMG_CACHE_PATH)."
        )
        sys.exit(1)
    return Path(resolved)


@cache.command("stats")
@click.option("--cache", "cache_path", type=click.Path(dir_okay=False), help="Cache file path.")
def cache_stats(cache_path: str | None) -> None:
    """Show cache statistics."""
    from progimg.cache.store import MetadataCache

    path = _resolve_cache_path(cache_path)
    store = MetadataCache(path)
    asyncio.run(store.load())

    with_placeholder = sum(1 for _, meta in store.items() if meta.has_placeholder)
    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("File", str(path))
    table.add_row("Exists", "yes" if path.is_file() else "no")
    table.add_row("Entries", str(len(store)))
    table.add_row("With placeholder", str(with_placeholder))
    if path.is_file():
        table.add_row("Size (KB)", f"{path.stat().st_size / 1024:.1f}")

    console.print(table)


@cache.command("clear")
@click.option("--cache", "cache_path", type=click.Path(dir_okay=False), help="Cache file path.")
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
def cache_clear(cache_path: str | None) -> None:
    """Remove all cached image metadata."""
    from progimg.cache.store import MetadataCache

    path = _resolve_cache_path(cache_path)
    store = MetadataCache(path)

    async def _run() -> bool:
        await store.load()
        store.clear()
        return await store.save()

    if not asyncio.run(_run()):
        error_console.print(f"[red]Error:[/red] could not write {path}")
        sys.exit(1)
    console.print("[green]Cache cleared.[/green]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
