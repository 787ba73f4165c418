"""
Tone curve control point extraction.
"""

from typing import Optional, Tuple

from ..models import ToneCurvePoint
from .extractor import extract_value, leading_int

TONE_CURVE_ATTRIBUTE = 'crs:ToneCurve'


def parse_point_list(text: str) -> Tuple[ToneCurvePoint, ...]:
    """Parse space-separated `x,y` pairs; unparsable components become 0."""
    points = []
    for pair in text.split():
        parts = pair.split(',')
        x = leading_int(parts[0])
        y = leading_int(parts[1]) if len(parts) > 1 else None
        points.append(ToneCurvePoint(x if x is not None else 0, y if y is not None else 0))
    return tuple(points)


def parse_tone_curve(source: str) -> Optional[Tuple[ToneCurvePoint, ...]]:
    """
    Recover the master tone curve control points, in source order.

    Returns:
        The points, or None when the attribute is missing or holds fewer
        than two points
    """
    value = extract_value(source, TONE_CURVE_ATTRIBUTE, None, numeric=False)
    if value is None:
        return None
    points = parse_point_list(value)
    return points if len(points) >= 2 else None
