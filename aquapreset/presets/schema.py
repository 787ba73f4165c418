"""
Preset document schema.

Preset documents are JSON-shaped mappings with camelCase keys. This module
declares their envelope, the recommended adjustment ranges used by the
validator, version handling, and a typed view of a document.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple

from ..models import HSL_CHANNELS, AdjustmentSet

CURRENT_VERSION = '1.0.0'

# Envelope fields: name -> (required, python type, type name for messages)
ENVELOPE_FIELDS = {
    'name': (True, str, 'string'),
    'description': (False, str, 'string'),
    'category': (False, str, 'string'),
    'creator': (False, str, 'string'),
    'version': (False, str, 'string'),
    'tags': (False, list, 'list'),
    'adjustments': (True, dict, 'object'),
}

# Recommended (min, max) per adjustment key. Values outside these ranges
# are allowed but reported.
ADJUSTMENT_RANGES = {
    'exposure': (-500, 500),
    'contrast': (-100, 100),
    'highlights': (-100, 100),
    'shadows': (-100, 100),
    'whites': (-100, 100),
    'blacks': (-100, 100),
    'clarity': (-100, 100),
    'dehaze': (-100, 100),
    'saturation': (-100, 100),
    'vibrance': (-100, 100),
    'warmth': (-100, 100),
    'temperature': (-100, 100),
    'tint': (-100, 100),
    'distortion': (-100, 100),
    'chromaticAberration': (-100, 100),
    'vignette': (-100, 100),
    'luminanceNoise': (0, 100),
    'colorNoise': (0, 100),
    'sharpening': (0, 150),
    'sharpenRadius': (0.5, 3),
}

# Saturation may be boosted past +100; hue is in degrees.
HSL_RANGES = {
    'hue': (-180, 180, 'degrees'),
    'saturation': (-100, 200, 'percent'),
    'luminance': (-100, 100, 'percent'),
}

HSL_CHANNEL_KEYS = tuple(AdjustmentSet.wire_key(name) for _, name in HSL_CHANNELS)

# Legacy document key -> current key
LEGACY_HSL_KEYS = {'hslAquas': 'hslCyans'}


class Version(NamedTuple):
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def _version_part(text: str) -> int:
    digits = ''
    for char in text.strip():
        if not char.isdigit():
            break
        digits += char
    return int(digits) if digits else 0


def parse_version(version: Any) -> Version:
    """
    Parse "major.minor.patch"; missing or non-numeric parts become 0.

    >>> parse_version("2.1")
    Version(major=2, minor=1, patch=0)
    """
    parts = [_version_part(part) for part in str(version).split('.')]
    parts += [0] * (3 - len(parts))
    return Version(*parts[:3])


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'valid': self.valid, 'errors': list(self.errors), 'warnings': list(self.warnings)}


# Document key -> PresetDocument attribute
_DOCUMENT_KEYS = {
    'name': 'name', 'adjustments': 'adjustments', 'version': 'version',
    'description': 'description', 'category': 'category', 'creator': 'creator',
    'tags': 'tags', 'metadata': 'metadata', 'createdAt': 'created_at',
}


@dataclass(frozen=True)
class PresetDocument:
    """
    Typed view of a preset document.

    Keys this class does not model (source, localAdjustments, ...) are kept
    in `extra` and written back by `to_dict`.
    """
    name: str
    adjustments: AdjustmentSet = field(default_factory=AdjustmentSet)
    version: str = CURRENT_VERSION
    description: Optional[str] = None
    category: Optional[str] = None
    creator: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a document mapping, omitting unset optional fields."""
        result = dict(self.extra)
        for key, attr in _DOCUMENT_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if attr == 'adjustments':
                value = value.to_dict()
            elif attr == 'tags':
                value = list(value)
            elif attr == 'metadata':
                value = dict(value)
            result[key] = value
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PresetDocument':
        """Create from a document mapping; fields of the wrong type are dropped."""
        def text(key: str) -> Optional[str]:
            value = data.get(key)
            return value if isinstance(value, str) else None

        adjustments = data.get('adjustments')
        tags = data.get('tags')
        metadata = data.get('metadata')
        return cls(
            name=text('name') or '',
            adjustments=AdjustmentSet.from_dict(adjustments) if isinstance(adjustments, Mapping) else AdjustmentSet(),
            version=text('version') or CURRENT_VERSION,
            description=text('description'),
            category=text('category'),
            creator=text('creator'),
            tags=tuple(str(tag) for tag in tags) if isinstance(tags, list) else None,
            metadata=dict(metadata) if isinstance(metadata, Mapping) else None,
            created_at=text('createdAt'),
            extra={k: v for k, v in data.items() if k not in _DOCUMENT_KEYS},
        )


def example_preset() -> Dict[str, Any]:
    """A complete example document, for documentation and templates."""
    return {
        'name': "Example Underwater Preset",
        'description': "Professional underwater color correction with coral enhancement",
        'category': "custom",
        'creator': "Photographer Name",
        'version': CURRENT_VERSION,
        'tags': ["underwater", "coral", "tropical"],
        'adjustments': {
            'exposure': 25,
            'contrast': 15,
            'highlights': -20,
            'shadows': 30,
            'saturation': 35,
            'vibrance': 40,
            'warmth': 10,
            'clarity': 20,
            'temperature': -15,
            'tint': 5,
            'hslReds': {'hue': 5, 'saturation': 15, 'luminance': 0},
            'hslOranges': {'hue': 0, 'saturation': 20, 'luminance': 5},
            'hslYellows': {'hue': -5, 'saturation': 10, 'luminance': 0},
            'hslGreens': {'hue': 0, 'saturation': 5, 'luminance': 0},
            'hslCyans': {'hue': 0, 'saturation': 10, 'luminance': 5},
            'hslBlues': {'hue': -5, 'saturation': 15, 'luminance': 10},
            'hslPurples': {'hue': 0, 'saturation': 0, 'luminance': 0},
            'hslMagentas': {'hue': 0, 'saturation': 5, 'luminance': 0},
            'luminanceNoise': 0,
            'colorNoise': 0,
            'sharpening': 15,
            'sharpenRadius': 1.0,
            'distortion': 0,
            'chromaticAberration': 0,
            'vignette': 0,
        },
        'metadata': {
            'targetConditions': ["tropical waters", "10-30ft depth"],
            'bestUsedWith': ["coral photography", "macro shots"],
            'cameraProfiles': ["Standard", "Natural"],
            'notes': "Works best with natural lighting conditions",
        },
    }
