"""
Scan command - List module classes discovered in packages.

Usage:
    modkit scan PACKAGE... [OPTIONS]
"""

import sys
import click


@click.command()
@click.argument('packages', nargs=-1, required=True)
@click.option('--strict', is_flag=True, help='Fail on the first import error.')
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON.')
@click.pass_context
def scan(ctx: click.Context, packages: tuple, strict: bool, as_json: bool) -> None:
    """List @module classes found in PACKAGES, in registration order.

    \b
    Examples:
        modkit scan myapp.modules           List discovered modules
        modkit scan myapp --strict          Stop on import errors
        modkit scan myapp --json            Output as JSON
    """
    from modkit.plugins import ModuleScanError, ModuleScanner

    settings = ctx.obj.get('settings')
    scanner = ModuleScanner(strict=strict or bool(settings and settings.strict_scan))

    try:
        discovered = scanner.scan(packages)
    except ModuleScanError as e:
        click.echo(f"Scan failed: {e}", err=True)
        sys.exit(1)

    names = [f"{cls.__module__}.{cls.__qualname__}" for cls in discovered]
    failures = {name: str(error) for name, error in scanner.failures.items()}

    if as_json:
        import json
        click.echo(json.dumps({'modules': names, 'failures': failures}, indent=2))
        return

    if not names:
        click.echo("No modules found.")
    for index, name in enumerate(names, start=1):
        click.echo(f"  {index:>3}. {name}")

    for name, error in failures.items():
        click.echo(f"  ! {name}: {error}", err=True)
