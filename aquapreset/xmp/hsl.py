"""
HSL colour band extraction.
"""

from typing import Dict

from ..models import HSL_CHANNELS, HSLChannelAdjustment
from .extractor import extract_value

HSL_ATTRIBUTE_TEMPLATES = (
    ('hue', 'crs:HueAdjustment{color}'),
    ('saturation', 'crs:SaturationAdjustment{color}'),
    ('luminance', 'crs:LuminanceAdjustment{color}'),
)


def _component(source: str, template: str, color: str) -> float:
    value = extract_value(source, template.format(color=color), 0.0)
    return value if isinstance(value, float) else 0.0


def parse_hsl_channels(source: str) -> Dict[str, HSLChannelAdjustment]:
    """
    Extract the eight HSL bands.

    Missing components count as 0, and a band whose three components are
    all 0 is left out of the result.

    Returns:
        AdjustmentSet field name (e.g. `hsl_cyans`) -> channel adjustment
    """
    channels = {}
    for color, field_name in HSL_CHANNELS:
        values = {
            component: _component(source, template, color)
            for component, template in HSL_ATTRIBUTE_TEMPLATES
        }
        channel = HSLChannelAdjustment(**values)
        if not channel.is_neutral():
            channels[field_name] = channel
    return channels
