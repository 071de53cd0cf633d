"""
zigbridge CLI - translate device state and convert colors from the shell.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from .config import BridgeConfig, TranslatorConfig, DEFAULT_DATA_DIR
from .color import cie_to_hsv, cie_to_rgb, hsv_to_cie, rgb_to_hsv
from .translate import (
    CharacteristicStore,
    Direction,
    TRANSLATORS,
    TranslationError,
    TranslatorNode,
    lookup_from_mapping,
    translate as translate_attributes,
)

console = Console()

DIRECTIONS = [d.value for d in Direction]


def setup_logging(verbose: bool = False):
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler()]
    )


def _load_json(value: str, what: str) -> dict:
    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{what} is not valid JSON: {e}")
    if not isinstance(data, dict):
        raise click.BadParameter(f"{what} must be a JSON object")
    return data


@click.group()
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('--data-dir', type=click.Path(), help='Data directory')
@click.pass_context
def main(ctx, verbose, data_dir):
    """🔀 zigbridge - Zigbee ↔ HomeKit state translation"""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['data_dir'] = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
    setup_logging(verbose)


@main.command()
def kinds():
    """List device kinds supported in each direction."""

    table = Table(title="Device kinds")
    table.add_column("Direction", style="cyan")
    table.add_column("Kinds")

    for direction, mappers in TRANSLATORS.items():
        table.add_row(direction.value, ", ".join(mappers))

    console.print(table)


@main.command()
@click.argument('direction', type=click.Choice(DIRECTIONS))
@click.argument('kind')
@click.argument('payload')
@click.option('--chars', help='Known characteristics as JSON, e.g. \'{"Hue": 120}\'')
def translate(direction: str, kind: str, payload: str, chars: Optional[str]):
    """Translate a single PAYLOAD (JSON object) for a device KIND."""

    attributes = _load_json(payload, "PAYLOAD")
    lookup = lookup_from_mapping(_load_json(chars, "--chars")) if chars else None

    try:
        result = translate_attributes(direction, kind, attributes, lookup)
    except TranslationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    click.echo(json.dumps(result))


@main.command()
@click.option('--node', '-n', 'node_name', help='Configured node to run')
@click.option('--kind', '-k', help='Device kind (when no node is given)')
@click.option('--direction', '-d', type=click.Choice(DIRECTIONS), default=Direction.ZIGBEE_TO_HOMEKIT.value)
@click.pass_context
def run(ctx, node_name: Optional[str], kind: Optional[str], direction: str):
    """
    Translate JSON-lines messages from stdin to stdout.

    Each line is a message envelope like {"payload": {...}}. Failed lines
    are reported on stderr and skipped.
    """
    if node_name:
        config = BridgeConfig.load(ctx.obj['data_dir'])
        try:
            node_config = config.get_node(node_name)
        except KeyError:
            console.print(f"[red]Unknown node: {node_name}[/red]")
            sys.exit(1)
        node = TranslatorNode.from_config(node_config, store=CharacteristicStore())
    elif kind:
        node = TranslatorNode(kind, direction, store=CharacteristicStore())
    else:
        raise click.UsageError("Either --node or --kind is required")

    if not node.is_valid:
        console.print(f"[red]Invalid device kind: {node.kind}[/red]")
        sys.exit(1)

    errors = Console(stderr=True)

    for line_no, line in enumerate(sys.stdin, start=1):
        line = line.strip()
        if not line:
            continue

        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            errors.print(f"[yellow]line {line_no}: invalid JSON ({e})[/yellow]")
            continue

        def _done(error=None, line_no=line_no):
            if error is not None:
                errors.print(f"[yellow]line {line_no}: {error}[/yellow]")

        node.on_input(message, lambda result: click.echo(json.dumps(result)), _done)

    logging.getLogger(__name__).debug(f"{node.name}: {node.processed} processed, {node.failed} failed")


# =============================================================================
# NODE CONFIGURATION
# =============================================================================

@main.group()
def nodes():
    """Manage configured translator nodes."""
    pass


@nodes.command('list')
@click.pass_context
def list_nodes(ctx):
    """List configured translator nodes."""
    config = BridgeConfig.load(ctx.obj['data_dir'])

    if not config.nodes:
        console.print("No translator nodes configured.")
        console.print("[dim]  zigbridge nodes add living-room 'Light Bulb' --direction zigbee2homekit[/dim]")
        return

    table = Table()
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Direction")
    table.add_column("Status")

    for node_config in config.nodes.values():
        node = TranslatorNode.from_config(node_config)
        if not node_config.enabled:
            status = "[dim]disabled[/dim]"
        elif node.is_valid:
            status = "[green]ok[/green]"
        else:
            status = "[red]unknown kind[/red]"
        table.add_row(node_config.name, node_config.kind, node_config.direction, status)

    console.print(table)


@nodes.command('add')
@click.argument('name')
@click.argument('kind')
@click.option('--direction', '-d', type=click.Choice(DIRECTIONS), default=Direction.ZIGBEE_TO_HOMEKIT.value)
@click.option('--disabled', is_flag=True, help='Add the node disabled')
@click.pass_context
def add_node(ctx, name: str, kind: str, direction: str, disabled: bool):
    """Add (or replace) a translator node."""
    config = BridgeConfig.load(ctx.obj['data_dir'])
    config.add_node(TranslatorConfig(name=name, kind=kind, direction=direction, enabled=not disabled))
    config.save()

    console.print(f"[green]✓ Node {name} saved[/green]")


@nodes.command('remove')
@click.argument('name')
@click.pass_context
def remove_node(ctx, name: str):
    """Remove a translator node."""
    config = BridgeConfig.load(ctx.obj['data_dir'])

    if not config.remove_node(name):
        console.print(f"[yellow]No node named {name}[/yellow]")
        sys.exit(1)

    config.save()
    console.print(f"[green]✓ Node {name} removed[/green]")


# =============================================================================
# COLOR CONVERSION
# =============================================================================

@main.group()
def color():
    """Convert between CIE xy, RGB and HSV."""
    pass


@color.command('cie-to-hsv')
@click.argument('x', type=float)
@click.argument('y', type=float)
@click.option('--brightness', '-b', type=float, default=255, help='Brightness [1, 255]')
def cie_to_hsv_cmd(x: float, y: float, brightness: float):
    """Convert CIE xy to HSV."""
    click.echo(json.dumps(cie_to_hsv(x, y, brightness).to_dict()))


@color.command('cie-to-rgb')
@click.argument('x', type=float)
@click.argument('y', type=float)
@click.option('--brightness', '-b', type=float, default=255, help='Brightness [1, 255]')
def cie_to_rgb_cmd(x: float, y: float, brightness: float):
    """Convert CIE xy to RGB."""
    click.echo(json.dumps(cie_to_rgb(x, y, brightness).to_dict()))


@color.command('hsv-to-cie')
@click.argument('h', type=float)
@click.argument('s', type=float)
@click.option('--value', '-V', 'v', type=float, default=100, help='Value [0, 100]')
def hsv_to_cie_cmd(h: float, s: float, v: float):
    """Convert HSV to CIE xy."""
    click.echo(json.dumps(hsv_to_cie(h, s, v).to_dict()))


@color.command('rgb-to-hsv')
@click.argument('r', type=int)
@click.argument('g', type=int)
@click.argument('b', type=int)
def rgb_to_hsv_cmd(r: int, g: int, b: int):
    """Convert RGB to HSV."""
    click.echo(json.dumps(rgb_to_hsv(r, g, b).to_dict()))


if __name__ == "__main__":
    main()
