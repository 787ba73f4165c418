"""
Tests for sidecar metadata, orchestration and file ingestion.
"""

import asyncio

import pytest

from aquapreset.exceptions import SidecarReadError, SidecarRejectedError
from aquapreset.models import ParsedXMPResult
from aquapreset.utils.async_processing import AsyncProcessor
from aquapreset.xmp.metadata import parse_metadata
from aquapreset.xmp.processor import (
    check_sidecar_file,
    parse_sidecar,
    process_sidecar_batch,
    process_sidecar_file,
)

MIB = 1024 * 1024


class TestMetadataParser:
    """Test capture metadata extraction and defaults."""

    def test_sample_fields(self, sample_xmp):
        metadata = parse_metadata(sample_xmp)
        assert metadata.camera == "ILCE-7M3"
        assert metadata.lens == "FE 28mm F2"
        assert metadata.iso == 400.0
        assert metadata.aperture == 8.0
        assert metadata.shutter_speed == "1/125"
        assert metadata.focal_length == 28.0
        assert metadata.creation_date == "2024-05-01T10:00:00"
        assert metadata.modify_date == "2024-05-02T11:00:00"
        assert metadata.software == "Adobe Photoshop Lightroom Classic 13.0"
        assert metadata.process_version == "11.0"

    def test_defaults(self):
        metadata = parse_metadata('', now='2025-01-01T00:00:00+00:00')
        assert metadata.camera == "Unknown"
        assert metadata.lens == "Unknown"
        assert metadata.iso is None
        assert metadata.creation_date == '2025-01-01T00:00:00+00:00'
        assert metadata.modify_date == '2025-01-01T00:00:00+00:00'
        assert metadata.software == "Adobe Lightroom"
        assert metadata.color_space == "sRGB"
        assert metadata.process_version == "5.0"

    def test_lens_falls_back_to_lens_info(self):
        assert parse_metadata('aux:LensInfo="24/1 70/1 0/0 0/0"').lens == "24/1 70/1 0/0 0/0"


class TestParseSidecar:
    """Test assembly of a full parse result."""

    def test_assembles_result(self, sample_xmp):
        result = parse_sidecar(sample_xmp)
        assert isinstance(result, ParsedXMPResult)
        assert result.raw_source == sample_xmp
        assert result.process_version == "11.0"
        assert result.adjustments.exposure == pytest.approx(50)
        assert result.adjustments.temperature == pytest.approx(20)
        assert result.adjustments.tint == pytest.approx(5)
        assert result.adjustments.clarity == 20.0
        assert len(result.adjustments.master_curve) == 4
        assert len(result.local_adjustments) == 3

    def test_sparse_adjustments(self, make_sidecar):
        data = parse_sidecar(make_sidecar('crs:Contrast2012="15"')).adjustments.to_dict()
        assert data == {'contrast': 15.0}

    def test_malformed_content_degrades(self):
        result = parse_sidecar('crs:Exposure2012="bright" crs:ToneCurve="x" crs:GradientBasedCorrections="?"')
        assert result.adjustments.is_empty()
        assert result.local_adjustments[0].center_x == 0.5

    def test_to_dict(self, sample_xmp):
        data = parse_sidecar(sample_xmp).to_dict(include_source=False)
        assert 'rawSource' not in data
        assert data['adjustments']['hslCyans'] == {'hue': 0.0, 'saturation': -20.0, 'luminance': 0.0}
        assert data['adjustments']['masterCurve'][1] == {'x': 64, 'y': 56}
        assert [item['type'] for item in data['localAdjustments']] == ['gradient', 'radial', 'mask']


class TestPreflight:
    """Test file checks made before reading."""

    def test_wrong_extension(self):
        check = check_sidecar_file("foo.txt", 500)
        assert not check.valid
        assert check.error == "File must have .xmp extension"

    def test_too_small(self):
        check = check_sidecar_file("foo.xmp", 50)
        assert not check.valid
        assert "too small" in check.error

    def test_too_large(self):
        check = check_sidecar_file("foo.xmp", 11 * MIB)
        assert not check.valid
        assert check.error == "XMP file too large (max 10MB)"

    def test_bounds_and_case(self):
        assert check_sidecar_file("FOO.XMP", 100).valid
        assert check_sidecar_file("foo.xmp", 10 * MIB).valid

    def test_limits_from_config(self):
        config = {'ingestion': {'max_bytes': 1000}}
        assert not check_sidecar_file("foo.xmp", 2000, config).valid
        assert check_sidecar_file("foo.xmp", 500, config).valid


class TestFileProcessing:
    """Test async reading and batch isolation."""

    def test_process_file(self, sidecar_file):
        result = asyncio.run(process_sidecar_file(sidecar_file))
        assert result.metadata.camera == "ILCE-7M3"

    def test_rejected_before_read(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("x" * 500)
        with pytest.raises(SidecarRejectedError):
            asyncio.run(process_sidecar_file(path))

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "broken.xmp"
        path.write_bytes(b"\xff\xfe" * 100)
        with pytest.raises(SidecarReadError):
            asyncio.run(process_sidecar_file(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(SidecarReadError):
            asyncio.run(process_sidecar_file(tmp_path / "gone.xmp"))

    def test_batch_keeps_order_and_isolates_failures(self, tmp_path, sidecar_file):
        tiny = tmp_path / "tiny.xmp"
        tiny.write_text('crs:Tint="1"')
        other = tmp_path / "other.xmp"
        other.write_text(sidecar_file.read_text().replace("ILCE-7M3", "OM-1"))

        outcomes = asyncio.run(process_sidecar_batch([sidecar_file, tiny, other], max_concurrent=2))

        assert [outcome.path for outcome in outcomes] == [sidecar_file, tiny, other]
        assert outcomes[0].ok and outcomes[2].ok
        assert isinstance(outcomes[1].error, SidecarRejectedError)
        assert outcomes[2].result.metadata.camera == "OM-1"


class TestAsyncProcessor:
    """Test thread offload and bounded concurrent mapping."""

    def test_concurrent_map_keeps_input_order(self):
        async def double(value):
            await asyncio.sleep(0.01 * (3 - value))
            return value * 2

        async def run():
            with AsyncProcessor(max_workers=2) as processor:
                return await processor.concurrent_map(double, [1, 2, 3], max_concurrent=3)

        assert asyncio.run(run()) == [2, 4, 6]

    def test_exceptions_returned_in_place(self):
        async def check(value):
            if value < 0:
                raise ValueError(value)
            return value

        async def run():
            with AsyncProcessor() as processor:
                return await processor.concurrent_map(check, [1, -1])

        first, second = asyncio.run(run())
        assert first == 1
        assert isinstance(second, ValueError)

    def test_run_in_thread_after_shutdown(self):
        processor = AsyncProcessor(max_workers=1)
        processor.shutdown()
        with pytest.raises(RuntimeError):
            asyncio.run(processor.run_in_thread(len, "abc"))
