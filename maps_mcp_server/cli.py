"""Command line interface for the Maps MCP server."""

import asyncio
import sys
import click
import logging
from typing import Any, Dict, Optional

from .config import load_config, AppConfig
from .exceptions import MapsCommandError
from .executor import CommandExecutor
from .logging_utils import setup_logging
from .translator import CommandTranslator
from .mcp_server.config.tool_definitions import ALL_TOOL_SCHEMAS, TOOL_CATEGORIES
from .mcp_server.utils.serialization import safe_json_dumps


logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)"
)
@click.option(
    "--config", "-c", type=click.Path(), help="Path to configuration file (YAML, TOML, or JSON)"
)
@click.pass_context
def cli(ctx, log_level: Optional[str], config: Optional[str]):
    """Apple Maps MCP server and command line tools."""
    ctx.ensure_object(dict)

    try:
        app_config = load_config(config)
        effective_log_level = log_level or app_config.log_level
        setup_logging(effective_log_level)
        ctx.obj["config"] = app_config
    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


def _run_operation(ctx, name: str, arguments: Dict[str, Any], dry_run: bool) -> None:
    """Translate one operation, execute it unless dry-running, and report."""
    config: AppConfig = ctx.obj["config"]
    translator = CommandTranslator(
        app_url_base=config.maps.app_url_base,
        web_url_base=config.maps.web_url_base,
    )
    executor = CommandExecutor(config.executor)

    try:
        result = translator.translate_call(name, arguments)
        if dry_run:
            command = executor.build_command(result)
            click.echo(f"Command: {command if command else '(none)'}")
        else:
            executor.execute(result)
        click.echo(result.message)
    except MapsCommandError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


dry_run_option = click.option(
    "--dry-run", is_flag=True, help="Print the command instead of running it"
)


@cli.command()
@click.pass_context
def serve(ctx):
    """Run the MCP server on stdio."""
    from .mcp_server import MapsMCPServer

    server = MapsMCPServer(ctx.obj["config"])
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        pass


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print raw tool schemas as JSON")
def tools(as_json: bool):
    """List the tools advertised to MCP clients."""
    if as_json:
        click.echo(safe_json_dumps(list(ALL_TOOL_SCHEMAS.values()), indent=2))
        return

    for category, names in TOOL_CATEGORIES.items():
        click.echo(f"{category}:")
        for name in names:
            schema = ALL_TOOL_SCHEMAS[name]
            required = schema["inputSchema"].get("required", [])
            args = ", ".join(required) if required else "no required arguments"
            click.echo(f"  🗺️  {name} - {schema['description']} ({args})")


@cli.command("open")
@dry_run_option
@click.pass_context
def open_app(ctx, dry_run: bool):
    """Open the Apple Maps app."""
    _run_operation(ctx, "maps_open", {}, dry_run)


@cli.command()
@click.argument("query")
@dry_run_option
@click.pass_context
def search(ctx, query: str, dry_run: bool):
    """Search for a location."""
    _run_operation(ctx, "maps_search", {"query": query}, dry_run)


@cli.command()
@click.argument("destination")
@click.option("--from", "origin", help="Starting location (default: current location)")
@click.option(
    "--mode",
    type=click.Choice(["driving", "walking", "transit"]),
    default="driving",
    help="Transportation mode (default: driving)",
)
@dry_run_option
@click.pass_context
def directions(ctx, destination: str, origin: Optional[str], mode: str, dry_run: bool):
    """Get directions to DESTINATION."""
    arguments = {"to": destination, "mode": mode}
    if origin:
        arguments["from"] = origin
    _run_operation(ctx, "maps_get_directions", arguments, dry_run)


@cli.command()
@click.argument("address")
@dry_run_option
@click.pass_context
def show(ctx, address: str, dry_run: bool):
    """Show an address or place on the map."""
    _run_operation(ctx, "maps_show_location", {"address": address}, dry_run)


@cli.command()
@click.option("--latitude", "--lat", type=float, required=True, help="Latitude coordinate")
@click.option("--longitude", "--lon", type=float, required=True, help="Longitude coordinate")
@click.option("--label", help="Label for the pin")
@dry_run_option
@click.pass_context
def coordinates(ctx, latitude: float, longitude: float, label: Optional[str], dry_run: bool):
    """Show a location by coordinates."""
    arguments = {"latitude": latitude, "longitude": longitude}
    if label:
        arguments["label"] = label
    _run_operation(ctx, "maps_show_coordinates", arguments, dry_run)


@cli.command()
@click.argument("address")
@click.option("--label", help="Label for the pin")
@dry_run_option
@click.pass_context
def pin(ctx, address: str, label: Optional[str], dry_run: bool):
    """Drop a pin at ADDRESS."""
    arguments = {"address": address}
    if label:
        arguments["label"] = label
    _run_operation(ctx, "maps_drop_pin", arguments, dry_run)


@cli.command()
@click.argument("place_type")
@click.option("--near", help="Location to search near (default: current location)")
@dry_run_option
@click.pass_context
def nearby(ctx, place_type: str, near: Optional[str], dry_run: bool):
    """Find nearby places of PLACE_TYPE."""
    arguments = {"type": place_type}
    if near:
        arguments["near"] = near
    _run_operation(ctx, "maps_nearby", arguments, dry_run)


@cli.command()
@click.argument("address")
@click.pass_context
def url(ctx, address: str):
    """Print shareable Apple Maps URLs for ADDRESS."""
    _run_operation(ctx, "maps_create_url", {"address": address}, dry_run=False)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
