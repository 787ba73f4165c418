"""
Lightroom-style XMP sidecar parsing.

Turns loosely structured sidecar text into a ParsedXMPResult by scanning
for `prefix:Name="value"` attributes.
"""

from .extractor import extract_value
from .mapping import PARAMETER_MAP, map_parameters
from .hsl import parse_hsl_channels
from .tone_curve import parse_tone_curve
from .local_adjustments import parse_local_adjustments
from .metadata import parse_metadata
from .processor import (
    FileCheckResult,
    SidecarOutcome,
    check_sidecar_file,
    parse_adjustments,
    parse_sidecar,
    process_sidecar_batch,
    process_sidecar_file,
    read_sidecar_text,
)

__all__ = [
    'extract_value',
    'PARAMETER_MAP',
    'map_parameters',
    'parse_hsl_channels',
    'parse_tone_curve',
    'parse_local_adjustments',
    'parse_metadata',
    'FileCheckResult',
    'SidecarOutcome',
    'check_sidecar_file',
    'parse_adjustments',
    'parse_sidecar',
    'process_sidecar_batch',
    'process_sidecar_file',
    'read_sidecar_text',
]
