"""
Preset import from sidecar and JSON files.

Each file becomes an upgraded preset document plus its validation result.
A file that cannot be imported is reported in its outcome; it never stops
the rest of a batch.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..config import get_config_value
from ..exceptions import AquaPresetError, PresetFormatError, SidecarReadError
from ..models import ParsedXMPResult
from ..utils.async_processing import AsyncProcessor
from ..xmp.processor import process_sidecar_file, read_sidecar_text
from .schema import CURRENT_VERSION, ValidationResult
from .upgrader import upgrade
from .validator import validate

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ('.xmp', '.json')


@dataclass(frozen=True)
class ImportOutcome:
    """
    Result of importing one file.

    `preset` is None when the file failed or was skipped. A preset that
    failed validation is kept for reporting but is not `ok`.
    """
    path: Path
    preset: Optional[Dict[str, Any]] = None
    validation: Optional[ValidationResult] = None
    error: Optional[AquaPresetError] = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.preset is not None and self.validation is not None and self.validation.valid


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def preset_from_sidecar(result: ParsedXMPResult, file_name: str,
                        category: str = 'imported') -> Dict[str, Any]:
    """Build a preset document from a parsed sidecar."""
    local_adjustments = [item.to_dict() for item in result.local_adjustments]
    return {
        'name': Path(file_name).stem,
        'category': category,
        'description': 'Imported from XMP sidecar file',
        'source': 'xmp',
        'createdAt': _now(),
        'adjustments': result.adjustments.to_dict(),
        'metadata': result.metadata.to_dict(),
        'localAdjustments': local_adjustments,
        'processVersion': result.process_version,
        'hasLocalAdjustments': bool(local_adjustments),
    }


def preset_from_json(text: str, file_name: str,
                     category: str = 'imported') -> Dict[str, Any]:
    """
    Build a preset document from JSON text.

    Raises:
        PresetFormatError: Invalid JSON, not an object, or no adjustments
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PresetFormatError(f"Invalid JSON format: {e}") from e

    if not isinstance(data, dict):
        raise PresetFormatError("Invalid preset format - expected a JSON object")
    if not data.get('adjustments'):
        raise PresetFormatError("Invalid preset format - missing adjustments")

    preset = {
        'name': Path(file_name).stem,
        'category': category,
        'description': 'Imported JSON preset',
        'source': 'json',
        'createdAt': _now(),
    }
    preset.update({key: value for key, value in data.items() if value is not None})
    return preset


async def import_preset_file(path: Union[str, Path], config: Optional[Dict[str, Any]] = None,
                             processor: Optional[AsyncProcessor] = None) -> ImportOutcome:
    """Import one .xmp or .json file into an upgraded, validated preset."""
    path = Path(path)
    category = get_config_value(config or {}, 'presets.default_category', 'imported')
    version = get_config_value(config or {}, 'presets.engine_version', CURRENT_VERSION)
    extension = path.suffix.lower()

    if extension not in SUPPORTED_EXTENSIONS:
        logger.warning(f"Unsupported file format: {path.name}. Supported formats: XMP, JSON")
        return ImportOutcome(path=path, skipped=True)

    try:
        if extension == '.xmp':
            result = await process_sidecar_file(path, config, processor)
            preset = preset_from_sidecar(result, path.name, category)
        else:
            text = await read_sidecar_text(path, processor)
            preset = preset_from_json(text, path.name, category)
    except (PresetFormatError, SidecarReadError) as e:
        logger.error(f"Failed to import {path.name}: {e}")
        return ImportOutcome(path=path, error=e)
    except AquaPresetError as e:
        logger.warning(f"Rejected {path.name}: {e}")
        return ImportOutcome(path=path, error=e)

    preset = upgrade(preset, current_version=version)
    validation = validate(preset, current_version=version)
    if not validation.valid:
        logger.error(f"Invalid preset in {path.name}: {'; '.join(validation.errors)}")
        return ImportOutcome(path=path, preset=preset, validation=validation)

    for warning in validation.warnings:
        logger.info(f"{path.name}: {warning}")
    logger.info(f"Imported preset '{preset['name']}' from {path.name}")
    return ImportOutcome(path=path, preset=preset, validation=validation)


async def import_preset_files(paths: Sequence[Union[str, Path]],
                              config: Optional[Dict[str, Any]] = None,
                              max_concurrent: Optional[int] = None) -> List[ImportOutcome]:
    """Import many files concurrently; outcomes are returned in input order."""
    paths = [Path(p) for p in paths]
    if max_concurrent is None:
        max_concurrent = get_config_value(config or {}, 'ingestion.max_concurrent', 8)

    with AsyncProcessor(max_workers=max_concurrent) as processor:
        results = await processor.concurrent_map(
            lambda path: import_preset_file(path, config, processor),
            paths,
            max_concurrent=max_concurrent,
        )

    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
