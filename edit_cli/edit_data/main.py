"""edit-data CLI entrypoint."""

from __future__ import annotations

import click

from edit_cli.shared.cli import CLIContext, common_cli_options, handle_cli_errors, pass_cli_context
from edit_cli.shared.config import OUTPUT_FORMATS

from . import render
from .channel import CollectingResponseChannel
from .handler import EditDataHandler, build_dispatcher
from .registry import SessionRegistry
from .snapshot import load_sessions
from .types import GET_REFERENCED_TABLES_METHOD


@click.group(help="Inspect edit sessions and their table metadata.")
@common_cli_options
@handle_cli_errors
def cli(cli_ctx: CLIContext) -> None:
    """Primary Click group for edit-data commands."""
    cli_ctx.logger.debug(f"edit-data using session snapshot {cli_ctx.sessions_path}")


@cli.command("referenced-tables")
@click.argument("owner_uri", type=str)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    help="Output format (defaults to output.default_format from config).",
)
@pass_cli_context
@handle_cli_errors
def referenced_tables(cli_ctx: CLIContext, owner_uri: str, output_format: str | None) -> None:
    """List tables referenced by foreign keys of the session's table."""
    registry = _load_registry(cli_ctx)
    handler = EditDataHandler(
        registry=registry,
        logger=cli_ctx.logger,
        collapse_session_errors=cli_ctx.config.errors.collapse_session_errors,
    )
    dispatcher = build_dispatcher(handler)
    channel = CollectingResponseChannel()
    dispatcher.dispatch(GET_REFERENCED_TABLES_METHOD, {"ownerUri": owner_uri}, channel)

    if channel.error is not None:
        raise click.ClickException(render.format_error(channel.error))
    assert channel.result is not None
    render.render_referenced_tables(
        channel.result,
        output_format=output_format or cli_ctx.config.output.default_format,
        logger=cli_ctx.logger,
    )


@cli.command("sessions")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    help="Output format (defaults to output.default_format from config).",
)
@pass_cli_context
@handle_cli_errors
def list_sessions(cli_ctx: CLIContext, output_format: str | None) -> None:
    """List sessions in the snapshot with their lifecycle state."""
    registry = _load_registry(cli_ctx)
    sessions = [
        session
        for session in (registry.lookup(owner_uri) for owner_uri in registry.owner_uris())
        if session is not None
    ]
    render.render_sessions(
        sessions,
        output_format=output_format or cli_ctx.config.output.default_format,
        logger=cli_ctx.logger,
    )


def _load_registry(cli_ctx: CLIContext) -> SessionRegistry:
    registry = SessionRegistry()
    sessions = load_sessions(cli_ctx.sessions_path, registry)
    cli_ctx.logger.debug(f"Registered {len(sessions)} edit session(s)")
    return registry


def main() -> None:
    """Entry point for console_scripts."""
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
