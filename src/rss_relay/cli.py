"""CLI interface for RSS Relay using Typer."""

import json
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from . import __version__
from .main import RSSRelayApp


app = typer.Typer(
    name="rss-relay",
    help="HTTP relay that serves RSS feeds as JSON",
    add_completion=False,
)


@app.command()
def serve(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")] = None,
    host: Annotated[Optional[str], typer.Option("--host", help="Listen address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Listen port")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show detailed output")] = False,
) -> None:
    """Run the HTTP relay."""
    try:
        app_instance = RSSRelayApp(config_file)
        exit_code = app_instance.run(host=host, port=port, verbose=verbose)
    except Exception as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)
    raise typer.Exit(exit_code)


@app.command()
def config(
    show: Annotated[bool, typer.Option("--show", help="Show current config")] = False,
    example: Annotated[bool, typer.Option("--example", help="Generate example config")] = False,
    init: Annotated[bool, typer.Option("--init", help="Write the default config file")] = False,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")] = None,
) -> None:
    """Manage RSS Relay configuration."""
    if init:
        from .config import Config, save_config
        from .utils.paths import get_config_file_path
        target = config_file or get_config_file_path()
        if target.exists():
            typer.echo(f"✗ Config already exists: {target}", err=True)
            raise typer.Exit(1)
        try:
            save_config(Config(), target)
        except Exception as e:
            typer.echo(f"✗ Error writing config: {e}", err=True)
            raise typer.Exit(1)
        typer.echo(f"✓ Wrote default config to {target}")
    elif example:
        from .config import create_example_config
        typer.echo(create_example_config())
    elif show:
        try:
            from .config import dump_config, load_config
            typer.echo(dump_config(load_config(config_file)))
        except Exception as e:
            typer.echo(f"✗ Error loading config: {e}", err=True)
            raise typer.Exit(1)
    else:
        typer.echo("Use --show to view config, --example to generate example or --init to create one")


@app.command()
def catalog(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")] = None,
) -> None:
    """List the known feed sources."""
    try:
        from .config import load_config
        sources = load_config(config_file).catalog
    except Exception as e:
        typer.echo(f"✗ Error loading config: {e}", err=True)
        raise typer.Exit(1)

    for index, source in enumerate(sources):
        typer.echo(f"{index:>3}  {source.title:<20} {source.host}{source.path}")


@app.command()
def fetch(
    index: Annotated[int, typer.Argument(help="Catalog position of the feed")],
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")] = None,
) -> None:
    """Fetch one catalog feed and print it as JSON."""
    try:
        app_instance = RSSRelayApp(config_file)
        if not 0 <= index < len(app_instance.catalog):
            typer.echo(f"✗ No feed at index {index}", err=True)
            raise typer.Exit(1)
        items = app_instance.fetch_feed(index)
    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)

    envelope = {"feed": [item.to_wire() for item in items]}
    typer.echo(json.dumps(envelope, indent=2, ensure_ascii=False))


@app.command()
def info(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")] = None,
) -> None:
    """Show version and effective settings."""
    typer.echo(f"RSS Relay v{__version__}")

    try:
        info_data = RSSRelayApp(config_file).get_info()
    except Exception as e:
        typer.echo(f"Warning: Could not load application info: {e}")
        return

    for key, value in info_data.items():
        if key != "version":
            typer.echo(f"  {key}: {value}")


if __name__ == "__main__":
    app()
