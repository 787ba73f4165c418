"""
Gradient, radial and brush-mask local adjustments.

Each family is scanned separately, so the returned list holds all
gradients, then all radials, then all masks. Position in the list says
nothing about where an adjustment appeared in the source relative to
adjustments of another family.
"""

import html
import logging
import re
from typing import List, Sequence, Tuple

from ..models import (
    AdjustmentSet,
    BrushPoint,
    BrushStroke,
    GradientAdjustment,
    LocalAdjustment,
    MaskAdjustment,
    RadialAdjustment,
)
from .extractor import attribute_pattern, leading_float

logger = logging.getLogger(__name__)

GRADIENT_ATTRIBUTE = 'crs:GradientBasedCorrections'
RADIAL_ATTRIBUTE = 'crs:CircularGradientBasedCorrections'
MASK_ATTRIBUTE = 'crs:PaintBasedCorrections'

# Parameters recognised inside a local adjustment payload.
LOCAL_PARAMETERS = (
    'Exposure', 'Contrast', 'Highlights', 'Shadows', 'Whites', 'Blacks',
    'Texture', 'Clarity', 'Dehaze', 'Vibrance', 'Saturation',
    'Temperature', 'Tint', 'Sharpness',
)

GRADIENT_DEFAULTS = (0.5, 0.5, 0.0, 50.0)  # centerX, centerY, rotation, feather
RADIAL_DEFAULTS = (0.5, 0.5, 0.2, 0.2, 50.0)  # centerX, centerY, radiusX, radiusY, feather

_DABS_RE = re.compile(r'Dabs="([^"]*)"')


def _positional(payload: str, defaults: Sequence[float]) -> Tuple[float, ...]:
    """Read leading comma-separated numbers, defaulting each one that fails."""
    parts = payload.split(',')
    values = []
    for index, default in enumerate(defaults):
        value = leading_float(parts[index]) if index < len(parts) else None
        values.append(default if value is None else value)
    return tuple(values)


def parse_local_parameters(payload: str) -> AdjustmentSet:
    """Pick the allow-listed `Name="value"` pairs out of a payload."""
    values = {}
    for name in LOCAL_PARAMETERS:
        match = attribute_pattern(name).search(payload)
        if match:
            number = leading_float(match.group(1))
            values[name.lower()] = number if number is not None else 0.0
    return AdjustmentSet(**values)


def parse_brush_strokes(payload: str) -> Tuple[BrushStroke, ...]:
    """One stroke per `Dabs="x,y,pressure ..."` occurrence."""
    strokes = []
    for match in _DABS_RE.finditer(payload):
        points = []
        for dab in match.group(1).split():
            parts = dab.split(',')
            x, y, pressure = (
                leading_float(parts[i]) if i < len(parts) else None
                for i in range(3)
            )
            points.append(BrushPoint(
                x=x if x is not None else 0.0,
                y=y if y is not None else 0.0,
                pressure=pressure if pressure is not None else 1.0,
            ))
        strokes.append(BrushStroke(points=tuple(points)))
    return tuple(strokes)


def parse_gradient(payload: str) -> GradientAdjustment:
    center_x, center_y, rotation, feather = _positional(payload, GRADIENT_DEFAULTS)
    return GradientAdjustment(
        center_x=center_x,
        center_y=center_y,
        rotation=rotation,
        feather=feather,
        adjustments=parse_local_parameters(payload),
    )


def parse_radial(payload: str) -> RadialAdjustment:
    center_x, center_y, radius_x, radius_y, feather = _positional(payload, RADIAL_DEFAULTS)
    return RadialAdjustment(
        center_x=center_x,
        center_y=center_y,
        radius_x=radius_x,
        radius_y=radius_y,
        feather=feather,
        adjustments=parse_local_parameters(payload),
    )


def parse_mask(payload: str) -> MaskAdjustment:
    return MaskAdjustment(
        brush_strokes=parse_brush_strokes(payload),
        adjustments=parse_local_parameters(payload),
    )


_FAMILIES = (
    (GRADIENT_ATTRIBUTE, parse_gradient),
    (RADIAL_ATTRIBUTE, parse_radial),
    (MASK_ATTRIBUTE, parse_mask),
)


def find_payloads(source: str, attribute: str) -> List[str]:
    """Every non-empty value of attribute, entity-unescaped, in source order."""
    payloads = []
    for match in attribute_pattern(attribute).finditer(source):
        if match.group(1):
            payloads.append(html.unescape(match.group(1)))
    return payloads


def parse_local_adjustments(source: str) -> Tuple[LocalAdjustment, ...]:
    """
    Extract all local adjustments, grouped by family.

    Returns:
        Gradients, then radials, then masks; source order within a family
    """
    adjustments: List[LocalAdjustment] = []
    for attribute, parse in _FAMILIES:
        for payload in find_payloads(source, attribute):
            adjustments.append(parse(payload))
    if adjustments:
        logger.debug(f"Found {len(adjustments)} local adjustments")
    return tuple(adjustments)
