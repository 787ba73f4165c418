"""
Preset schema migration.

`upgrade` returns a new document in the current schema. It is idempotent:
upgrading an already upgraded document changes nothing.
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union

from .schema import CURRENT_VERSION, HSL_CHANNEL_KEYS, LEGACY_HSL_KEYS, PresetDocument

logger = logging.getLogger(__name__)

DEFAULT_TAG = 'imported'


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _migrate_adjustments(adjustments: Dict[str, Any]) -> None:
    """Rename legacy HSL keys and expand single-value channels, in place."""
    for legacy, current in LEGACY_HSL_KEYS.items():
        if legacy not in adjustments:
            continue
        if current in adjustments:
            logger.warning(f"Replacing {current} with the legacy {legacy} value")
        adjustments[current] = adjustments.pop(legacy)

    for channel in HSL_CHANNEL_KEYS:
        value = adjustments.get(channel)
        if _is_number(value):
            adjustments[channel] = {'hue': 0, 'saturation': value, 'luminance': 0}


def upgrade(preset: Union[Mapping[str, Any], PresetDocument],
            current_version: str = CURRENT_VERSION,
            now: Optional[str] = None) -> Dict[str, Any]:
    """
    Migrate a preset document to the current schema version.

    Args:
        preset: Document mapping (or PresetDocument); never modified
        current_version: Version string stamped on the result
        now: Timestamp used when `createdAt` is missing (default: current UTC time)

    Returns:
        A new document mapping
    """
    if isinstance(preset, PresetDocument):
        preset = preset.to_dict()
    upgraded = copy.deepcopy(dict(preset))

    previous = upgraded.get('version')
    upgraded['version'] = current_version

    adjustments = upgraded.get('adjustments')
    if isinstance(adjustments, dict):
        _migrate_adjustments(adjustments)

    if not upgraded.get('createdAt'):
        upgraded['createdAt'] = now or datetime.now(timezone.utc).isoformat()

    if upgraded.get('tags') is None:
        upgraded['tags'] = [upgraded.get('category') or DEFAULT_TAG]

    if previous != current_version:
        logger.debug(f"Upgraded preset {upgraded.get('name')!r} from {previous} to {current_version}")
    return upgraded
