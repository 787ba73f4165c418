"""
Exception hierarchy for AquaPreset.

Parsers never raise on malformed attribute content; these exceptions cover
the failures that are fatal for a single file or preset.
"""


class AquaPresetError(Exception):
    """Base exception for the preset interchange engine."""
    pass


class SidecarError(AquaPresetError):
    """Base exception for sidecar file ingestion."""

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path


class SidecarRejectedError(SidecarError):
    """Raised when a file fails the pre-flight checks before reading."""
    pass


class SidecarReadError(SidecarError):
    """Raised when a sidecar file cannot be read as text."""
    pass


class PresetFormatError(AquaPresetError):
    """Raised when a preset file cannot be turned into a preset document."""
    pass
