#!/usr/bin/env python3
"""
modkit CLI - Module container developer tooling

Usage:
    modkit [OPTIONS] COMMAND [ARGS]...

Commands:
    scan        List module classes discovered in packages
    boot        Boot a container over discovered modules and shut it down
"""

import sys
import os

# Ensure project root is in path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import click  # noqa: E402

from cli import __version__  # noqa: E402
from modkit.config import ConfigurationError, load_settings  # noqa: E402
from modkit.utils.log_utils import setup_logging  # noqa: E402


@click.group(invoke_without_command=True)
@click.option('--version', '-v', is_flag=True, help='Show version and exit.')
@click.option('--debug', is_flag=True, help='Enable debug mode.')
@click.pass_context
def cli(ctx: click.Context, version: bool, debug: bool) -> None:
    """modkit - Dependency injection and module lifecycle container

    \b
    Quick Start:
        modkit scan myapp.modules       List discovered modules
        modkit boot myapp.modules       Register, report order, shut down
    """
    ctx.ensure_object(dict)

    if version:
        click.echo(f"modkit version {__version__}")
        ctx.exit(0)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(2)

    if debug:
        settings.debug = True
        settings.log_level = 'DEBUG'

    ctx.obj['debug'] = settings.debug
    ctx.obj['settings'] = settings
    setup_logging(
        level=settings.log_level_value,
        log_file=settings.log_file,
        json_format=settings.log_format == 'json',
    )

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Import and register commands
from cli.commands.scan import scan  # noqa: E402
from cli.commands.boot import boot  # noqa: E402

cli.add_command(scan)
cli.add_command(boot)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled.")
        sys.exit(130)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
