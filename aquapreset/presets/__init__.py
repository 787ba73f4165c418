"""
Preset documents: schema, validation, version upgrades and import.
"""

from .schema import (
    CURRENT_VERSION,
    PresetDocument,
    ValidationResult,
    Version,
    example_preset,
    parse_version,
)
from .validator import validate
from .upgrader import upgrade
from .importer import (
    ImportOutcome,
    import_preset_file,
    import_preset_files,
    preset_from_json,
    preset_from_sidecar,
)

__all__ = [
    'CURRENT_VERSION',
    'PresetDocument',
    'ValidationResult',
    'Version',
    'example_preset',
    'parse_version',
    'validate',
    'upgrade',
    'ImportOutcome',
    'import_preset_file',
    'import_preset_files',
    'preset_from_json',
    'preset_from_sidecar',
]
