"""
Preset document validation.

Only structural problems are errors: a missing or empty name, and a
missing, non-object or empty adjustments set. Everything else (range
violations, odd types in optional fields, presets from a newer engine)
is reported as a warning and leaves the document valid.
"""

import logging
from typing import Any, List, Mapping, Union

from .schema import (
    ADJUSTMENT_RANGES,
    CURRENT_VERSION,
    ENVELOPE_FIELDS,
    HSL_CHANNEL_KEYS,
    HSL_RANGES,
    LEGACY_HSL_KEYS,
    PresetDocument,
    ValidationResult,
    parse_version,
)

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_envelope(preset: Mapping[str, Any], warnings: List[str]) -> None:
    for key, (required, expected, type_name) in ENVELOPE_FIELDS.items():
        if required or key not in preset or preset[key] is None:
            continue
        if not isinstance(preset[key], expected):
            warnings.append(f"{key} should be a {type_name}")


def _check_ranges(adjustments: Mapping[str, Any], warnings: List[str]) -> None:
    for key, value in adjustments.items():
        if key not in ADJUSTMENT_RANGES:
            continue
        if not _is_number(value):
            warnings.append(f"{key} value {value!r} should be a number")
            continue
        minimum, maximum = ADJUSTMENT_RANGES[key]
        if value < minimum:
            warnings.append(f"{key} value {value} is below recommended minimum {minimum}")
        if value > maximum:
            warnings.append(f"{key} value {value} is above recommended maximum {maximum}")


def _check_hsl(adjustments: Mapping[str, Any], warnings: List[str]) -> None:
    for legacy, current in LEGACY_HSL_KEYS.items():
        if legacy in adjustments:
            warnings.append(f"{legacy} is a legacy key; upgrade the preset to use {current}")

    for channel in HSL_CHANNEL_KEYS:
        hsl = adjustments.get(channel)
        if hsl is None:
            continue
        if not isinstance(hsl, Mapping):
            warnings.append(f"{channel} must be an object with hue, saturation, and luminance "
                            f"properties; upgrade the preset to convert it")
            continue
        for component, (minimum, maximum, unit) in HSL_RANGES.items():
            value = hsl.get(component)
            if _is_number(value) and not minimum <= value <= maximum:
                warnings.append(f"{channel} {component} value should be between "
                                f"{minimum} and {maximum} {unit}")


def validate(preset: Union[Mapping[str, Any], PresetDocument],
             current_version: str = CURRENT_VERSION) -> ValidationResult:
    """
    Validate a preset document.

    Args:
        preset: Document mapping (or PresetDocument) to check
        current_version: Engine version used for the forward-compatibility check

    Returns:
        ValidationResult; `valid` depends on errors only
    """
    if isinstance(preset, PresetDocument):
        preset = preset.to_dict()
    if not isinstance(preset, Mapping):
        preset = {}

    errors: List[str] = []
    warnings: List[str] = []

    name = preset.get('name')
    if not isinstance(name, str) or not name.strip():
        errors.append('Name is required and must be a string')

    adjustments = preset.get('adjustments')
    if not isinstance(adjustments, Mapping):
        errors.append('Adjustments object is required')
        return ValidationResult(valid=False, errors=errors, warnings=warnings)
    if not adjustments:
        errors.append('Adjustments object must contain at least one adjustment')
        return ValidationResult(valid=False, errors=errors, warnings=warnings)

    _check_envelope(preset, warnings)
    _check_ranges(adjustments, warnings)
    _check_hsl(adjustments, warnings)

    version = preset.get('version')
    if version:
        if parse_version(version).major > parse_version(current_version).major:
            warnings.append(f"Preset was created with a newer version ({version}). "
                            f"Some features may not be supported.")

    result = ValidationResult(valid=not errors, errors=errors, warnings=warnings)
    logger.debug(f"Validated preset {name!r}: {len(errors)} errors, {len(warnings)} warnings")
    return result
