"""
Mapping of Camera Raw develop settings onto AdjustmentSet fields.
"""

import logging
from typing import Dict, NamedTuple

from .extractor import extract_value

logger = logging.getLogger(__name__)


class ParameterMapping(NamedTuple):
    attribute: str
    key: str
    scale: float = 1.0


# Rows are applied in order; when two attributes feed the same key the
# later row wins (Clarity2012 over Texture, ChromaticAberrationB over R).
PARAMETER_MAP = (
    ParameterMapping('crs:Exposure2012', 'exposure', 100),  # EV -> percent
    ParameterMapping('crs:Contrast2012', 'contrast'),
    ParameterMapping('crs:Highlights2012', 'highlights'),
    ParameterMapping('crs:Shadows2012', 'shadows'),
    ParameterMapping('crs:Whites2012', 'whites'),
    ParameterMapping('crs:Blacks2012', 'blacks'),
    ParameterMapping('crs:Texture', 'clarity'),
    ParameterMapping('crs:Clarity2012', 'clarity'),
    ParameterMapping('crs:Dehaze', 'dehaze'),
    ParameterMapping('crs:Vibrance', 'vibrance'),
    ParameterMapping('crs:Saturation', 'saturation'),
    ParameterMapping('crs:Temperature', 'temperature', 0.02),  # +-5000 -> +-100
    ParameterMapping('crs:Tint', 'tint', 0.5),
    ParameterMapping('crs:LensProfileDistortionScale', 'distortion'),
    ParameterMapping('crs:ChromaticAberrationR', 'chromatic_aberration'),
    ParameterMapping('crs:ChromaticAberrationB', 'chromatic_aberration'),
    ParameterMapping('crs:PostCropVignetteAmount', 'vignette'),
    ParameterMapping('crs:LuminanceSmoothing', 'luminance_noise'),
    ParameterMapping('crs:ColorNoiseReduction', 'color_noise'),
    ParameterMapping('crs:SharpenAmount', 'sharpening'),
    ParameterMapping('crs:SharpenRadius', 'sharpen_radius'),
)


def map_parameters(source: str, table=PARAMETER_MAP) -> Dict[str, float]:
    """
    Extract every mapped attribute present in source.

    Returns:
        AdjustmentSet field name -> scaled value, for present attributes only
    """
    values = {}
    for row in table:
        value = extract_value(source, row.attribute)
        if value is None:
            continue
        if isinstance(value, str):
            logger.debug(f"Ignoring non-numeric {row.attribute}={value!r}")
            continue
        values[row.key] = value * row.scale
    return values
