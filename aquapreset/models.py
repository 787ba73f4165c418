"""
Value types shared by the sidecar parsers and the preset tools.

Every type here is an immutable dataclass. Adjustment fields default to
None, which means "unspecified" rather than zero, so a parsed set can be
laid over existing edit state without touching fields it never named.
Wire keys (the camelCase names used in preset documents) live in each
field's metadata.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Union


def _adjustment(key: str):
    return field(default=None, metadata={'key': key})


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# (foreign colour suffix, AdjustmentSet field). "Aqua" is the foreign name
# for the cyan band.
HSL_CHANNELS = (
    ('Red', 'hsl_reds'),
    ('Orange', 'hsl_oranges'),
    ('Yellow', 'hsl_yellows'),
    ('Green', 'hsl_greens'),
    ('Aqua', 'hsl_cyans'),
    ('Blue', 'hsl_blues'),
    ('Purple', 'hsl_purples'),
    ('Magenta', 'hsl_magentas'),
)


@dataclass(frozen=True)
class HSLChannelAdjustment:
    """Hue/saturation/luminance shift for one colour band."""
    hue: float = 0.0
    saturation: float = 0.0
    luminance: float = 0.0

    def is_neutral(self) -> bool:
        """True when all three components are exactly zero."""
        return self.hue == 0 and self.saturation == 0 and self.luminance == 0

    def to_dict(self) -> Dict[str, float]:
        return {'hue': self.hue, 'saturation': self.saturation, 'luminance': self.luminance}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'HSLChannelAdjustment':
        values = {}
        for name in ('hue', 'saturation', 'luminance'):
            value = data.get(name, 0)
            values[name] = value if _is_number(value) else 0.0
        return cls(**values)


@dataclass(frozen=True)
class ToneCurvePoint:
    """One tone curve control point: x is the input level, y the output."""
    x: int
    y: int

    def to_dict(self) -> Dict[str, int]:
        return {'x': self.x, 'y': self.y}


@dataclass(frozen=True)
class AdjustmentSet:
    """
    Sparse set of global tone and colour adjustments.

    `texture` and `sharpness` only appear in the nested sets carried by
    local adjustments; globally the texture slider feeds `clarity`.
    `warmth` is never read from sidecars but may be authored in presets.
    """
    exposure: Optional[float] = _adjustment('exposure')
    contrast: Optional[float] = _adjustment('contrast')
    highlights: Optional[float] = _adjustment('highlights')
    shadows: Optional[float] = _adjustment('shadows')
    whites: Optional[float] = _adjustment('whites')
    blacks: Optional[float] = _adjustment('blacks')
    texture: Optional[float] = _adjustment('texture')
    clarity: Optional[float] = _adjustment('clarity')
    dehaze: Optional[float] = _adjustment('dehaze')
    vibrance: Optional[float] = _adjustment('vibrance')
    saturation: Optional[float] = _adjustment('saturation')
    temperature: Optional[float] = _adjustment('temperature')
    tint: Optional[float] = _adjustment('tint')
    warmth: Optional[float] = _adjustment('warmth')
    sharpness: Optional[float] = _adjustment('sharpness')
    distortion: Optional[float] = _adjustment('distortion')
    chromatic_aberration: Optional[float] = _adjustment('chromaticAberration')
    vignette: Optional[float] = _adjustment('vignette')
    luminance_noise: Optional[float] = _adjustment('luminanceNoise')
    color_noise: Optional[float] = _adjustment('colorNoise')
    sharpening: Optional[float] = _adjustment('sharpening')
    sharpen_radius: Optional[float] = _adjustment('sharpenRadius')
    master_curve: Optional[Tuple[ToneCurvePoint, ...]] = _adjustment('masterCurve')
    hsl_reds: Optional[HSLChannelAdjustment] = _adjustment('hslReds')
    hsl_oranges: Optional[HSLChannelAdjustment] = _adjustment('hslOranges')
    hsl_yellows: Optional[HSLChannelAdjustment] = _adjustment('hslYellows')
    hsl_greens: Optional[HSLChannelAdjustment] = _adjustment('hslGreens')
    hsl_cyans: Optional[HSLChannelAdjustment] = _adjustment('hslCyans')
    hsl_blues: Optional[HSLChannelAdjustment] = _adjustment('hslBlues')
    hsl_purples: Optional[HSLChannelAdjustment] = _adjustment('hslPurples')
    hsl_magentas: Optional[HSLChannelAdjustment] = _adjustment('hslMagentas')

    @classmethod
    def wire_key(cls, name: str) -> str:
        """Return the document key for a field name."""
        return _WIRE_KEYS[name]

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a document mapping, omitting unspecified fields."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == 'master_curve':
                value = [point.to_dict() for point in value]
            elif isinstance(value, HSLChannelAdjustment):
                value = value.to_dict()
            result[f.metadata['key']] = value
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'AdjustmentSet':
        """
        Create from a document mapping.

        Unknown keys and values of the wrong shape are ignored; legacy
        layouts should go through the upgrader first.
        """
        values = {}
        for f in fields(cls):
            value = data.get(f.metadata['key'])
            if value is None:
                continue
            if f.name == 'master_curve':
                points = _curve_from_list(value)
                if points:
                    values[f.name] = points
            elif f.name.startswith('hsl_'):
                if isinstance(value, Mapping):
                    values[f.name] = HSLChannelAdjustment.from_dict(value)
            elif _is_number(value):
                values[f.name] = value
        return cls(**values)


_WIRE_KEYS = {f.name: f.metadata['key'] for f in fields(AdjustmentSet)}


def _curve_from_list(value: Any) -> Optional[Tuple[ToneCurvePoint, ...]]:
    if not isinstance(value, (list, tuple)):
        return None
    points = []
    for item in value:
        if isinstance(item, Mapping) and _is_number(item.get('x')) and _is_number(item.get('y')):
            points.append(ToneCurvePoint(int(item['x']), int(item['y'])))
        elif isinstance(item, (list, tuple)) and len(item) == 2 and all(_is_number(v) for v in item):
            points.append(ToneCurvePoint(int(item[0]), int(item[1])))
    return tuple(points) if len(points) >= 2 else None


@dataclass(frozen=True)
class GradientAdjustment:
    """Linear graduated filter."""
    kind: ClassVar[str] = 'gradient'

    center_x: float = 0.5
    center_y: float = 0.5
    rotation: float = 0.0
    feather: float = 50.0
    adjustments: AdjustmentSet = field(default_factory=AdjustmentSet)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind,
            'data': {
                'centerX': self.center_x,
                'centerY': self.center_y,
                'rotation': self.rotation,
                'feather': self.feather,
                'adjustments': self.adjustments.to_dict(),
            }
        }


@dataclass(frozen=True)
class RadialAdjustment:
    """Elliptical radial filter."""
    kind: ClassVar[str] = 'radial'

    center_x: float = 0.5
    center_y: float = 0.5
    radius_x: float = 0.2
    radius_y: float = 0.2
    feather: float = 50.0
    adjustments: AdjustmentSet = field(default_factory=AdjustmentSet)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind,
            'data': {
                'centerX': self.center_x,
                'centerY': self.center_y,
                'radiusX': self.radius_x,
                'radiusY': self.radius_y,
                'feather': self.feather,
                'adjustments': self.adjustments.to_dict(),
            }
        }


@dataclass(frozen=True)
class BrushPoint:
    x: float = 0.0
    y: float = 0.0
    pressure: float = 1.0

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'pressure': self.pressure}


@dataclass(frozen=True)
class BrushStroke:
    points: Tuple[BrushPoint, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {'points': [point.to_dict() for point in self.points]}


@dataclass(frozen=True)
class MaskAdjustment:
    """Painted brush mask."""
    kind: ClassVar[str] = 'mask'

    brush_strokes: Tuple[BrushStroke, ...] = ()
    adjustments: AdjustmentSet = field(default_factory=AdjustmentSet)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind,
            'data': {
                'brushStrokes': [stroke.to_dict() for stroke in self.brush_strokes],
                'adjustments': self.adjustments.to_dict(),
            }
        }


LocalAdjustment = Union[GradientAdjustment, RadialAdjustment, MaskAdjustment]


@dataclass(frozen=True)
class CaptureMetadata:
    """Camera and capture details recovered from a sidecar."""
    camera: str = 'Unknown'
    lens: str = 'Unknown'
    iso: Optional[Union[float, str]] = None
    aperture: Optional[Union[float, str]] = None
    shutter_speed: Optional[Union[float, str]] = None
    focal_length: Optional[Union[float, str]] = None
    creation_date: Optional[str] = None
    modify_date: Optional[str] = None
    software: str = 'Adobe Lightroom'
    color_space: str = 'sRGB'
    process_version: str = '5.0'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'camera': self.camera,
            'lens': self.lens,
            'iso': self.iso,
            'aperture': self.aperture,
            'shutterSpeed': self.shutter_speed,
            'focalLength': self.focal_length,
            'creationDate': self.creation_date,
            'modifyDate': self.modify_date,
            'software': self.software,
            'colorSpace': self.color_space,
            'processVersion': self.process_version,
        }


@dataclass(frozen=True)
class ParsedXMPResult:
    """Everything recovered from one sidecar file."""
    adjustments: AdjustmentSet
    metadata: CaptureMetadata
    local_adjustments: Tuple[LocalAdjustment, ...]
    raw_source: str
    process_version: str

    def to_dict(self, include_source: bool = True) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'adjustments': self.adjustments.to_dict(),
            'metadata': self.metadata.to_dict(),
            'localAdjustments': [item.to_dict() for item in self.local_adjustments],
            'processVersion': self.process_version,
        }
        if include_source:
            result['rawSource'] = self.raw_source
        return result
