"""
Boot command - Register discovered modules, report ordering, shut down.

Usage:
    modkit boot PACKAGE... [OPTIONS]
"""

import sys
import click


@click.command()
@click.argument('packages', nargs=-1, required=True)
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON.')
@click.pass_context
def boot(ctx: click.Context, packages: tuple, as_json: bool) -> None:
    """Boot a container over the modules found in PACKAGES.

    Every discovered module is registered in discovery order, then the
    container is shut down. Dependencies pulled in during registration
    appear in the registration order before the module that needed them.

    \b
    Examples:
        modkit boot myapp.modules           Print registration/teardown order
        modkit boot myapp --json            Output as JSON
    """
    from modkit.di import ModuleContainer, ModuleContainerError
    from modkit.plugins import ModuleScanError, ModuleScanner

    settings = ctx.obj.get('settings')
    scanner = ModuleScanner(strict=bool(settings and settings.strict_scan))

    try:
        discovered = scanner.scan(packages)
    except ModuleScanError as e:
        click.echo(f"Scan failed: {e}", err=True)
        sys.exit(1)

    container = ModuleContainer()
    try:
        container.register_all(discovered)
    except ModuleContainerError as e:
        click.echo(f"Bootstrap failed: {e}", err=True)
        if ctx.obj.get('debug'):
            import traceback
            traceback.print_exc()
        container.shutdown()
        sys.exit(1)

    registration = [_name(t) for t in container.registration_order()]
    container.shutdown()
    teardown = list(reversed(registration))

    if as_json:
        import json
        click.echo(json.dumps({'registration': registration, 'teardown': teardown}, indent=2))
        return

    click.echo("Registration order")
    for index, name in enumerate(registration, start=1):
        click.echo(f"  {index:>3}. {name}")
    click.echo("Teardown order")
    for index, name in enumerate(teardown, start=1):
        click.echo(f"  {index:>3}. {name}")


def _name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"
