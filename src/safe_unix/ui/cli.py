from __future__ import annotations

import asyncio
import json
from pathlib import Path

from dotenv import load_dotenv
import typer

from safe_unix.core.config import load_gateway_config_from_env
from safe_unix.policy.catalogue import CATALOGUE
from safe_unix.setup.client_config import (
    DEFAULT_CONFIG_PATH,
    GATEWAY_KEY,
    SERVERS_KEY,
    SetupError,
    apply_setup,
    detect_unsafe_servers,
    gateway_entry,
    has_gateway,
    load_config,
    write_config,
)
from safe_unix.ui.rpc.server import main as serve_main

# Load environment variables from .env
load_dotenv()

app = typer.Typer(
    help="Safe Unix gateway: read-only Unix inspection over JSON-RPC.",
    invoke_without_command=True,
    no_args_is_help=False,
)


@app.callback()
def main_callback(ctx: typer.Context) -> None:
    """CLI callback that serves on stdio when no subcommand is provided."""
    if ctx.invoked_subcommand is None:
        _serve_impl()


@app.command("serve")
def serve() -> None:
    """Serve JSON-RPC on stdin/stdout until stdin is closed."""
    _serve_impl()


def _serve_impl() -> None:
    try:
        config = load_gateway_config_from_env()
    except ValueError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(1) from None
    asyncio.run(serve_main(config))


@app.command("operations")
def operations() -> None:
    """List every operation with its description."""
    width = max(len(operation.value) for operation in CATALOGUE)
    for operation, descriptor in CATALOGUE.items():
        typer.echo(f"{operation.value:<{width}}  {descriptor.description}")


@app.command("setup")
def setup(
    config_path: Path | None = typer.Option(
        None,
        "--config-path",
        help=f"Client config to edit (default: {DEFAULT_CONFIG_PATH})",
    ),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompts"),
) -> None:
    """Register the gateway in an MCP client config."""
    path = (config_path or DEFAULT_CONFIG_PATH).expanduser().resolve()

    try:
        config = load_config(path)
    except SetupError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1) from None

    is_new = config is None
    if config is None:
        typer.echo(f"Config file not found at: {path}")
        if not force and not typer.confirm(f"Create new config at {path}?"):
            typer.echo("Setup cancelled.")
            raise typer.Exit()
        config = {}

    remove: list[str] = []
    unsafe = detect_unsafe_servers(config.get(SERVERS_KEY) or {})
    if unsafe:
        typer.echo("\nFound potentially unsafe Unix/shell servers:")
        for server in unsafe:
            typer.echo(f'  - "{server.name}": {server.command or "unknown command"}')
        typer.echo("These servers may allow destructive operations.\n")
        if force or typer.confirm("Remove these unsafe servers?"):
            remove = [server.name for server in unsafe]
            for name in remove:
                typer.echo(f"  Removed: {name}")

    if has_gateway(config):
        typer.echo(f"\nUpdating existing {GATEWAY_KEY} configuration...")
    else:
        typer.echo(f"\nAdding {GATEWAY_KEY} configuration...")
    updated = apply_setup(config, remove)
    typer.echo(json.dumps({GATEWAY_KEY: gateway_entry()}, indent=2))

    if not force and not is_new and not typer.confirm("Save changes to config?"):
        typer.echo("Setup cancelled.")
        raise typer.Exit()

    try:
        write_config(path, updated)
    except SetupError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1) from None

    typer.echo(f"Config written to: {path}")
    typer.echo("Restart your MCP client to load the safe Unix tools.")


if __name__ == "__main__":
    app()
