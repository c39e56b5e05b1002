"""Click-based CLI for quotesync - local quotes synchronized with a remote collection."""

from __future__ import annotations

import asyncio
import random
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from quotesync import __version__
from quotesync.config import (
    QuoteSyncConfig,
    ensure_config_exists,
    generate_default_config,
    get_config_path,
    load_or_default_config,
    validate_config_file,
)
from quotesync.errors import MalformedRemoteData
from quotesync.output import Console, create_console, setup_logging
from quotesync.record import Record
from quotesync.storage import FileReplicaStore, read_json_records, write_json_records
from quotesync.sync import ConflictSession, LocalReplica, SyncEngine, SyncResult, SyncScheduler
from quotesync.transport import create_remote


class AppContext:
    """Per-invocation settings shared by all commands."""

    def __init__(self, config_path: Optional[Path], verbose: bool):
        self.config_path = config_path
        self.verbose = verbose
        self._config: Optional[QuoteSyncConfig] = None
        self._console: Optional[Console] = None

    @property
    def config(self) -> QuoteSyncConfig:
        """Load configuration (defaults when no file exists)."""
        if self._config is None:
            try:
                self._config = load_or_default_config(self.config_path)
            except ValidationError as e:
                self.console.print_error(f"Invalid configuration: {e}")
                sys.exit(1)
            setup_logging(
                verbose=self.verbose or self._config.output.verbose,
                log_file=self._config.output.log_file,
            )
        return self._config

    @property
    def console(self) -> Console:
        """Console for user-facing output."""
        if self._console is None:
            colored = self._config.output.colored if self._config is not None else True
            self._console = create_console(verbose=self.verbose, colored=colored)
        return self._console

    def open_replica(self) -> LocalReplica:
        """Load the local replica from the configured store."""
        store = FileReplicaStore(self.config.storage.path)
        try:
            return LocalReplica.load(store)
        except (MalformedRemoteData, ValidationError) as e:
            self.console.print_error(f"Cannot read local store {store.path}: {e}")
            sys.exit(1)

    def build_engine(self) -> SyncEngine:
        """Wire replica, remote and console into a sync engine."""
        remote_cfg = self.config.remote
        remote = create_remote(
            remote_cfg.endpoint_url,
            timeout=remote_cfg.timeout_seconds,
            use_fallback=remote_cfg.use_fallback,
            fallback_latency=remote_cfg.fallback_latency_ms / 1000,
        )
        return SyncEngine(self.open_replica(), remote, self.console)


pass_app = click.make_pass_decorator(AppContext)


@click.group()
@click.version_option(version=__version__, prog_name="quotesync")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: ~/.config/quotesync/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """quotesync - keep a local quote collection in sync with a remote one.

    \b
    Server wins by default; conflicts are listed after every sync
    and can be resolved per quote with 'quotesync sync -i'.
    """
    ctx.obj = AppContext(config_path, verbose)


# Sync


@cli.command()
@click.option("--interactive", "-i", is_flag=True, help="Resolve each conflict interactively")
@pass_app
def sync(app: AppContext, interactive: bool) -> None:
    """Synchronize local quotes with the remote collection.

    Fetches the remote collection, applies it server-wins and lists
    conflicting quotes.
    """
    engine = app.build_engine()
    result = asyncio.run(_run_sync(engine, app.console, interactive))
    app.console.print_sync_result(result)

    if not result.success:
        sys.exit(1)


async def _run_sync(engine: SyncEngine, console: Console, interactive: bool) -> SyncResult:
    try:
        result = await engine.sync(report=True)
        if interactive and result.success and len(engine.session) > 0:
            await _resolve_conflicts(engine.session, console)
        return result
    finally:
        await engine.aclose()


async def _resolve_conflicts(session: ConflictSession, console: Console) -> None:
    for conflict in session.conflicts:
        choice = console.resolve_conflict(conflict)
        if choice == "server":
            session.accept_server(conflict.id)
        elif choice == "local":
            await session.keep_local(conflict.id)
        elif choice == "abort":
            console.print_warning("Conflict resolution aborted, server versions kept")
            return


@cli.command()
@click.option("--interval", type=click.IntRange(min=1), help="Polling interval in milliseconds")
@pass_app
def watch(app: AppContext, interval: Optional[int]) -> None:
    """Sync now and then periodically until interrupted."""
    engine = app.build_engine()
    interval_ms = interval or app.config.remote.poll_interval_ms
    app.console.print_info(f"Syncing every {interval_ms / 1000:g}s, press Ctrl+C to stop")

    try:
        asyncio.run(_watch(engine, interval_ms))
    except KeyboardInterrupt:
        app.console.print_info("Stopped")


async def _watch(engine: SyncEngine, interval_ms: int) -> None:
    scheduler = SyncScheduler(engine, interval_ms)
    scheduler.start()
    try:
        await scheduler.wait()
    finally:
        await scheduler.stop()
        await engine.aclose()


# Local quotes


@cli.command("list")
@click.option("--category", "-c", help="Only show quotes of this category")
@pass_app
def list_quotes(app: AppContext, category: Optional[str]) -> None:
    """List local quotes."""
    records = app.open_replica().records
    if category:
        records = [r for r in records if r.category == category]
    app.console.print_records(records, title=f"Quotes - {category}" if category else "Quotes")


@cli.command()
@pass_app
def categories(app: AppContext) -> None:
    """List categories of local quotes."""
    app.console.print_categories(app.open_replica().categories())


@cli.command("random")
@click.option("--category", "-c", help="Pick from this category only")
@pass_app
def random_quote(app: AppContext, category: Optional[str]) -> None:
    """Show a random quote, never the same one twice in a row."""
    store = FileReplicaStore(app.config.storage.path)
    records = app.open_replica().records
    if category:
        records = [r for r in records if r.category == category]
    if not records:
        app.console.print_warning("No quotes available.")
        return

    record = pick_random(records, store.read_last_shown())
    store.write_last_shown(record.id)
    app.console.print_quote(record)


def pick_random(records: list[Record], last_id: Optional[str] = None) -> Record:
    """Pick a random record, avoiding ``last_id`` unless it is the only choice."""
    candidates = [r for r in records if r.id != last_id] or records
    return random.choice(candidates)


@cli.command()
@click.argument("text")
@click.option("--category", "-c", required=True, help="Quote category")
@pass_app
def add(app: AppContext, text: str, category: str) -> None:
    """Add a quote."""
    text, category = text.strip(), category.strip()
    if not text or not category:
        app.console.print_error("Please fill both text and category.")
        sys.exit(1)

    record = app.open_replica().put({"text": text, "category": category})
    app.console.print_success(f"Quote added: {record.id}")


@cli.command()
@click.argument("quote_id")
@click.option("--text", "-t", help="New quote text")
@click.option("--category", "-c", help="New quote category")
@pass_app
def edit(app: AppContext, quote_id: str, text: Optional[str], category: Optional[str]) -> None:
    """Edit a quote by id (see 'list -v')."""
    changes: dict[str, str] = {}
    if text is not None:
        changes["text"] = text.strip()
    if category is not None:
        changes["category"] = category.strip()

    if not changes:
        app.console.print_error("Nothing to change, pass --text and/or --category.")
        sys.exit(1)
    if not all(changes.values()):
        app.console.print_error("Text and category cannot be empty.")
        sys.exit(1)

    replica = app.open_replica()
    record = replica.get(quote_id)
    if record is None:
        app.console.print_error(f"Record '{quote_id}' not found")
        sys.exit(1)

    edited = replica.put(record.touch(**changes))
    app.console.print_success(f'Updated "{edited.text}" ({edited.category})')


@cli.command()
@click.argument("quote_id")
@pass_app
def remove(app: AppContext, quote_id: str) -> None:
    """Remove a quote by id (see 'list -v')."""
    try:
        record = app.open_replica().remove(quote_id)
    except KeyError as e:
        app.console.print_error(str(e.args[0]))
        sys.exit(1)
    app.console.print_success(f'Removed "{record.text}"')


@cli.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@pass_app
def export_quotes(app: AppContext, path: Path) -> None:
    """Export local quotes to a JSON file."""
    records = app.open_replica().records
    write_json_records(path, records)
    app.console.print_success(f"Exported {len(records)} quotes to {path}")


@cli.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@pass_app
def import_quotes(app: AppContext, path: Path) -> None:
    """Import quotes from a JSON array file."""
    try:
        imported: list[Record] = read_json_records(path)
    except (MalformedRemoteData, ValidationError) as e:
        app.console.print_error(f"Invalid JSON file: {e}")
        sys.exit(1)

    app.open_replica().put_many(imported)
    app.console.print_success(f"Imported {len(imported)} quotes")


# Config


@cli.group()
def config() -> None:
    """Manage configuration."""


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
@pass_app
def config_init(app: AppContext, force: bool) -> None:
    """Create the default configuration file."""
    path = app.config_path or get_config_path()
    if force and path.exists():
        path.write_text(generate_default_config(), encoding="utf-8")
        app.console.print_success(f"Configuration reset: {path}")
        return

    path, created = ensure_config_exists(path)
    if created:
        app.console.print_success(f"Configuration created: {path}")
    else:
        app.console.print_warning(f"Configuration already exists: {path} (use --force to overwrite)")


@config.command("show")
@pass_app
def config_show(app: AppContext) -> None:
    """Show the effective configuration."""
    cfg = app.config
    app.console.print_config_summary(
        str(app.config_path or get_config_path()),
        cfg.remote.endpoint_url,
        cfg.storage.path,
    )
    if app.verbose:
        app.console.print(cfg.model_dump(mode="json"))


@config.command("validate")
@pass_app
def config_validate(app: AppContext) -> None:
    """Validate the configuration file."""
    is_valid, errors = validate_config_file(app.config_path)
    if is_valid:
        app.console.print_success("Configuration is valid")
        return

    for error in errors:
        app.console.print_error(error)
    sys.exit(1)


@config.command("path")
@pass_app
def config_path_cmd(app: AppContext) -> None:
    """Print the configuration file path."""
    click.echo(str(app.config_path or get_config_path()))


if __name__ == "__main__":
    cli()
