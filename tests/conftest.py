"""
Shared fixtures for AquaPreset tests.
"""

import pytest

SAMPLE_XMP = """<?xpacket begin="" id="W5M0MpCehiHzreSzNTczkc9d"?>
<x:xmpmeta xmlns:x="adobe:ns:meta/">
 <rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">
  <rdf:Description rdf:about=""
    xmlns:crs="http://ns.adobe.com/camera-raw-settings/1.0/"
    tiff:Model="ILCE-7M3"
    aux:Lens="FE 28mm F2"
    exif:ISOSpeedRatings="400"
    exif:FNumber="8.0"
    exif:ExposureTime="1/125"
    exif:FocalLength="28"
    xmp:CreateDate="2024-05-01T10:00:00"
    xmp:ModifyDate="2024-05-02T11:00:00"
    xmp:CreatorTool="Adobe Photoshop Lightroom Classic 13.0"
    crs:ProcessVersion="11.0"
    crs:Exposure2012="+0.50"
    crs:Contrast2012="+15"
    crs:Temperature="1000"
    crs:Tint="10"
    crs:Texture="5"
    crs:Clarity2012="20"
    crs:SharpenAmount="40"
    crs:HueAdjustmentRed="10"
    crs:SaturationAdjustmentAqua="-20"
    crs:HueAdjustmentBlue="0"
    crs:SaturationAdjustmentBlue="0"
    crs:LuminanceAdjustmentBlue="0"
    crs:ToneCurve="0,0 64,56 128,128 255,255"
    crs:GradientBasedCorrections="0.3,0.4,45,20,Exposure=&quot;0.5&quot; Contrast=&quot;10&quot;"
    crs:CircularGradientBasedCorrections="0.6,0.5,0.25,0.3,40"
    crs:PaintBasedCorrections="Dabs=&quot;0.1,0.2,0.8 0.15,0.25,0.9&quot; Exposure=&quot;-0.3&quot;"
  />
 </rdf:RDF>
</x:xmpmeta>
<?xpacket end="w"?>
"""


def wrap_attributes(*attributes: str) -> str:
    """Embed attributes in a minimal sidecar body."""
    body = "\n    ".join(attributes)
    return (
        '<x:xmpmeta xmlns:x="adobe:ns:meta/">\n'
        '  <rdf:Description rdf:about=""\n'
        f'    {body}\n'
        '  />\n'
        '</x:xmpmeta>\n'
    )


@pytest.fixture
def sample_xmp() -> str:
    return SAMPLE_XMP


@pytest.fixture
def sidecar_file(tmp_path):
    path = tmp_path / "reef.xmp"
    path.write_text(SAMPLE_XMP, encoding="utf-8")
    return path


@pytest.fixture
def valid_preset() -> dict:
    return {
        'name': 'Blue Water',
        'category': 'underwater',
        'version': '1.0.0',
        'tags': ['underwater'],
        'adjustments': {
            'exposure': 20,
            'temperature': 30,
            'hslBlues': {'hue': -5, 'saturation': 15, 'luminance': 10},
        },
    }


@pytest.fixture
def make_sidecar():
    return wrap_attributes
