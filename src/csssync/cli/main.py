"""csssync CLI entry point."""
from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click

from csssync import __version__


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_events(path: str) -> list[dict]:
    """A change file holds one change object or a list of them."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return data if isinstance(data, list) else [data]


@click.group()
@click.version_option(version=__version__, prog_name="csssync")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """csssync: write DevTools CSS edits back to your source files."""
    _setup_logging(verbose)


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.option("--root", "root_path", default=None, type=click.Path(file_okay=False), help="Project root")
@click.option("--config", "config_file", default=None, type=click.Path(exists=True, dir_okay=False), help="JSON config file")
@click.option("--debug/--no-debug", default=False, help="Enable Flask debug mode")
def serve(host: str | None, port: int | None, root_path: str | None, config_file: str | None, debug: bool) -> None:
    """Start the local sync agent."""
    from dataclasses import replace

    from csssync.config import SyncConfig
    from csssync.errors import ConfigurationError
    from csssync.web.app import create_app

    try:
        config = SyncConfig.from_file(config_file) if config_file else SyncConfig()
    except ConfigurationError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)
    config = replace(
        config,
        host=host or config.host,
        port=port or config.port,
        root_path=root_path or config.root_path,
    )

    try:
        app = create_app(sync_config=config)
    except ConfigurationError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"CSS DevTools Sync agent running on http://{config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=debug)


@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
def scan(root: str) -> None:
    """Index the stylesheets under ROOT and list their rules."""
    from csssync.index.file_index import FileIndex, absolute_path

    index = FileIndex()
    count = index.load_root(root)
    for entry in index.files_under(root):
        click.echo(f"{os.path.relpath(entry.path, absolute_path(root))}  ({len(entry.rules)} rules)")
        for rule in entry.rules:
            click.echo(f"  {rule.selector}  [{rule.source_start}:{rule.source_end}]  {len(rule.properties)} properties")
    click.echo(f"{count} CSS files indexed")


@cli.command()
@click.option("--root", "root_path", required=True, type=click.Path(exists=True, file_okay=False), help="Project root")
@click.argument("changes", type=click.Path(exists=True, dir_okay=False))
def apply(root_path: str, changes: str) -> None:
    """Apply the change events in CHANGES (JSON) directly to ROOT."""
    from csssync.service import SyncService

    service = SyncService()
    service.configure(root_path)

    failures = 0
    for event in _load_events(changes):
        result = service.apply_change(event)
        if result.success:
            verb = "Created" if result.created else "Updated"
            click.echo(f"{verb} {result.selector} in {result.file}: {', '.join(result.changed_properties)}")
        else:
            failures += 1
            click.echo(f"Failed: {result.error}", err=True)
    if failures:
        sys.exit(1)


@cli.command()
@click.argument("old", type=click.Path(exists=True, dir_okay=False))
@click.argument("new", type=click.Path(exists=True, dir_okay=False))
def diff(old: str, new: str) -> None:
    """Print the change events that turn stylesheet OLD into NEW."""
    from csssync.stylesheet.diff import change_events_from_diff

    events = change_events_from_diff(
        Path(old).read_text(encoding="utf-8"), Path(new).read_text(encoding="utf-8")
    )
    click.echo(json.dumps([event.to_dict() for event in events], indent=2))


@cli.command()
@click.option("--url", default="http://localhost:3001", help="Agent URL")
@click.argument("changes", type=click.Path(exists=True, dir_okay=False))
def push(url: str, changes: str) -> None:
    """Send the change events in CHANGES (JSON) to a running agent."""
    from csssync.client import AgentClient
    from csssync.errors import AgentError

    failures = 0
    with AgentClient(url) as client:
        for event in _load_events(changes):
            try:
                result = client.apply_change(event)
            except AgentError as exc:
                click.echo(f"Agent error: {exc}", err=True)
                sys.exit(1)
            if result.get("success"):
                click.echo(f"Applied {result.get('selector')} in {result.get('file')}")
            else:
                failures += 1
                click.echo(f"Failed: {result.get('error')}", err=True)
    if failures:
        sys.exit(1)


@cli.command()
@click.option("--url", default="http://localhost:3001", help="Agent URL")
def status(url: str) -> None:
    """Show what a running agent has indexed."""
    from csssync.client import AgentClient
    from csssync.errors import AgentError

    with AgentClient(url, timeout=5.0) as client:
        try:
            data = client.status()
        except AgentError as exc:
            click.echo(f"Agent error: {exc}", err=True)
            sys.exit(1)
    click.echo(f"Root:    {data.get('rootPath') or '(not set)'}")
    click.echo(f"Indexed: {data.get('filesIndexed', 0)} CSS files")
    for domain, path in (data.get("domainMappings") or {}).items():
        click.echo(f"  {domain} -> {path}")
