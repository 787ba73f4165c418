"""
AquaPreset Command Line Interface

Entry point for sidecar parsing and preset management commands.
"""

import logging
from typing import Optional

import click

from ..config import get_config_value, load_config
from ..utils.logging import setup_console_logging
from .preset_commands import example, import_command, parse, upgrade_command, validate_command

logger = logging.getLogger(__name__)


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, config: Optional[str] = None, verbose: bool = False, quiet: bool = False):
    """
    AquaPreset - preset interchange for underwater photo editing

    Parse Lightroom XMP sidecars, validate and upgrade preset documents,
    and import batches of sidecar and JSON presets.
    """
    if ctx.obj is None:
        ctx.obj = {}

    ctx.obj['config'] = load_config(config)

    level = get_config_value(ctx.obj['config'], 'logging.level', 'INFO')
    if verbose:
        level = 'DEBUG'
    elif quiet:
        level = 'ERROR'
    setup_console_logging(level, fmt=get_config_value(ctx.obj['config'], 'logging.format'))

    ctx.obj['verbose'] = verbose
    ctx.obj['quiet'] = quiet


main.add_command(parse)
main.add_command(validate_command)
main.add_command(upgrade_command)
main.add_command(import_command)
main.add_command(example)


if __name__ == '__main__':
    main()
