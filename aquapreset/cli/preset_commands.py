"""
Preset CLI commands for AquaPreset

Parse sidecars, validate and upgrade presets, and batch-import files.
"""

import asyncio
import json
import logging
from pathlib import Path

import click
from tqdm import tqdm

from ..config import get_config_value
from ..exceptions import SidecarRejectedError
from ..presets import example_preset, import_preset_file, upgrade, validate
from ..presets.schema import CURRENT_VERSION
from ..utils.async_processing import AsyncProcessor
from ..utils.logging import ImportStats
from ..xmp import process_sidecar_batch

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Failed to read {path}: {e}")
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}")
    if not isinstance(data, dict):
        raise click.ClickException(f"{path} does not contain a JSON object")
    return data


def _output_name(path: Path, used: set) -> str:
    """`<stem>.json`, or `<stem>-N.json` when an earlier input took that name."""
    name = f"{path.stem}.json"
    counter = 1
    while name in used:
        name = f"{path.stem}-{counter}.json"
        counter += 1
    if counter > 1:
        logger.warning(f"{path} shares its name with an earlier input; writing {name}")
    used.add(name)
    return name


def _engine_version(ctx) -> str:
    return get_config_value(ctx.obj.get('config', {}), 'presets.engine_version', CURRENT_VERSION)


@click.command()
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--raw', is_flag=True, help='Include the raw sidecar text in the output')
@click.pass_context
def parse(ctx, files, raw):
    """Parse XMP sidecar files and print the results as JSON"""
    outcomes = asyncio.run(process_sidecar_batch(files, config=ctx.obj.get('config')))

    output = []
    failed = 0
    for outcome in outcomes:
        if outcome.ok:
            output.append({'file': str(outcome.path), **outcome.result.to_dict(include_source=raw)})
        else:
            failed += 1
            output.append({'file': str(outcome.path), 'error': str(outcome.error)})
            click.echo(f"✗ {outcome.path.name}: {outcome.error}", err=True)

    click.echo(json.dumps(output if len(output) > 1 else output[0], indent=2))
    if failed:
        ctx.exit(1)


@click.command(name='validate')
@click.argument('preset_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def validate_command(ctx, preset_file):
    """Validate a JSON preset document"""
    result = validate(_load_json(preset_file), current_version=_engine_version(ctx))

    for error in result.errors:
        click.echo(f"✗ {error}", err=True)
    for warning in result.warnings:
        click.echo(f"⚠ {warning}")

    if result.valid:
        click.echo(f"✓ {preset_file.name} is valid")
    else:
        click.echo(f"✗ {preset_file.name} is invalid", err=True)
        ctx.exit(1)


@click.command(name='upgrade')
@click.argument('preset_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Write the upgraded preset here instead of stdout')
@click.pass_context
def upgrade_command(ctx, preset_file, output):
    """Upgrade a JSON preset document to the current schema"""
    upgraded = upgrade(_load_json(preset_file), current_version=_engine_version(ctx))
    text = json.dumps(upgraded, indent=2)

    if output:
        output.write_text(text + '\n', encoding='utf-8')
        click.echo(f"✓ Upgraded preset written to {output}")
    else:
        click.echo(text)


@click.command(name='import')
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output-dir', '-o', type=click.Path(file_okay=False, path_type=Path), required=True,
              help='Directory for the imported JSON presets')
@click.pass_context
def import_command(ctx, files, output_dir):
    """Import XMP sidecars and JSON presets into upgraded preset files"""
    config = ctx.obj.get('config')
    output_dir.mkdir(parents=True, exist_ok=True)
    stats = ImportStats()
    stats.set_total(len(files))

    async def run():
        with AsyncProcessor(max_workers=get_config_value(config or {}, 'ingestion.max_concurrent', 8)) as processor:
            async def indexed(index, path):
                return index, await import_preset_file(path, config, processor)

            tasks = [indexed(index, path) for index, path in enumerate(files)]
            outcomes = [None] * len(tasks)
            with tqdm(total=len(tasks), desc="Importing", unit="file",
                      disable=ctx.obj.get('quiet', False)) as progress:
                for task in asyncio.as_completed(tasks):
                    index, outcome = await task
                    outcomes[index] = outcome
                    progress.update(1)
            return outcomes

    used_names = set()
    for outcome in asyncio.run(run()):
        if outcome.skipped:
            stats.add_rejected('unsupported format')
        elif outcome.ok:
            target = output_dir / _output_name(outcome.path, used_names)
            target.write_text(json.dumps(outcome.preset, indent=2) + '\n', encoding='utf-8')
            stats.add_imported(warnings=len(outcome.validation.warnings))
        elif outcome.validation is not None:
            stats.add_error(str(outcome.path), '; '.join(outcome.validation.errors))
        elif isinstance(outcome.error, SidecarRejectedError):
            stats.add_rejected(str(outcome.error))
        else:
            stats.add_error(str(outcome.path), str(outcome.error))

    if not ctx.obj.get('quiet', False):
        stats.print_summary()
    if stats.errors:
        ctx.exit(1)


@click.command()
def example():
    """Print an example preset document"""
    click.echo(json.dumps(example_preset(), indent=2))
