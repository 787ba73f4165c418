"""
AquaPreset: preset interchange engine for underwater photo editing

Parses Lightroom-style XMP sidecars into sparse adjustment sets and
validates, upgrades and imports the application's own preset documents.
"""

__version__ = "1.0.0"

from .config import load_config
from .models import AdjustmentSet, ParsedXMPResult
from .xmp import parse_sidecar, process_sidecar_file
from .presets import upgrade, validate

__all__ = [
    "load_config",
    "AdjustmentSet",
    "ParsedXMPResult",
    "parse_sidecar",
    "process_sidecar_file",
    "upgrade",
    "validate",
]
