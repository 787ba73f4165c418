"""
Camera and capture metadata extraction.
"""

from datetime import datetime, timezone
from typing import Optional

from ..models import CaptureMetadata
from .extractor import extract_value

DEFAULT_PROCESS_VERSION = '5.0'
DEFAULT_SOFTWARE = 'Adobe Lightroom'
DEFAULT_COLOR_SPACE = 'sRGB'
UNKNOWN = 'Unknown'


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def extract_process_version(source: str) -> str:
    """Camera Raw process version as text, e.g. "11.0"."""
    return extract_value(source, 'crs:ProcessVersion', DEFAULT_PROCESS_VERSION, numeric=False)


def parse_metadata(source: str, now: Optional[str] = None) -> CaptureMetadata:
    """
    Field-by-field metadata extraction.

    Args:
        source: Raw sidecar text
        now: Timestamp used for missing create/modify dates (default: current UTC time)
    """
    now = now or _now()
    lens = extract_value(source, 'aux:Lens', None, numeric=False)
    if lens is None:
        lens = extract_value(source, 'aux:LensInfo', UNKNOWN, numeric=False)

    return CaptureMetadata(
        camera=extract_value(source, 'tiff:Model', UNKNOWN, numeric=False),
        lens=lens,
        iso=extract_value(source, 'exif:ISOSpeedRatings'),
        aperture=extract_value(source, 'exif:FNumber'),
        shutter_speed=extract_value(source, 'exif:ExposureTime'),
        focal_length=extract_value(source, 'exif:FocalLength'),
        creation_date=extract_value(source, 'xmp:CreateDate', now, numeric=False),
        modify_date=extract_value(source, 'xmp:ModifyDate', now, numeric=False),
        software=extract_value(source, 'xmp:CreatorTool', DEFAULT_SOFTWARE, numeric=False),
        color_space=extract_value(source, 'exif:ColorSpace', DEFAULT_COLOR_SPACE, numeric=False),
        process_version=extract_process_version(source),
    )
