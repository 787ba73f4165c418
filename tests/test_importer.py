"""
Tests for importing sidecar and JSON presets.
"""

import asyncio
import json

import pytest

from aquapreset.exceptions import PresetFormatError, SidecarRejectedError
from aquapreset.presets import (
    CURRENT_VERSION,
    import_preset_file,
    import_preset_files,
    preset_from_json,
    preset_from_sidecar,
)
from aquapreset.xmp import parse_sidecar


class TestPresetFromSidecar:

    def test_document_shape(self, sample_xmp):
        preset = preset_from_sidecar(parse_sidecar(sample_xmp), "reef.xmp")
        assert preset['name'] == 'reef'
        assert preset['category'] == 'imported'
        assert preset['source'] == 'xmp'
        assert preset['processVersion'] == '11.0'
        assert preset['hasLocalAdjustments'] is True
        assert len(preset['localAdjustments']) == 3
        assert preset['metadata']['camera'] == 'ILCE-7M3'
        assert preset['adjustments']['tint'] == pytest.approx(5)


class TestPresetFromJson:

    def test_fills_defaults(self):
        preset = preset_from_json('{"adjustments": {"exposure": 10}}', "deep.json")
        assert preset['name'] == 'deep'
        assert preset['description'] == 'Imported JSON preset'
        assert preset['source'] == 'json'
        assert 'createdAt' in preset

    def test_document_values_win(self):
        preset = preset_from_json('{"name": "Kelp", "category": "cold", "adjustments": {"tint": 1}}', "x.json")
        assert preset['name'] == 'Kelp'
        assert preset['category'] == 'cold'

    @pytest.mark.parametrize("text", ['{not json', '[1, 2]', '{"name": "x"}'])
    def test_rejects_bad_documents(self, text):
        with pytest.raises(PresetFormatError):
            preset_from_json(text, "bad.json")


class TestImportFiles:

    def test_xmp_import_is_upgraded_and_validated(self, sidecar_file):
        outcome = asyncio.run(import_preset_file(sidecar_file))
        assert outcome.ok
        assert outcome.preset['version'] == CURRENT_VERSION
        assert outcome.preset['tags'] == ['imported']
        assert outcome.validation.valid

    def test_json_import_upgrades_legacy_keys(self, tmp_path):
        path = tmp_path / "legacy.json"
        path.write_text(json.dumps({'name': 'Legacy', 'version': '0.2.0',
                                    'adjustments': {'hslAquas': 15}}))
        outcome = asyncio.run(import_preset_file(path))
        assert outcome.preset['adjustments'] == {'hslCyans': {'hue': 0, 'saturation': 15, 'luminance': 0}}

    def test_batch_isolates_failures(self, tmp_path, sidecar_file):
        bad_json = tmp_path / "bad.json"
        bad_json.write_text("{oops")
        notes = tmp_path / "notes.txt"
        notes.write_text("hello")
        tiny = tmp_path / "tiny.xmp"
        tiny.write_text("x")

        outcomes = asyncio.run(import_preset_files([sidecar_file, bad_json, notes, tiny]))

        assert [outcome.path for outcome in outcomes] == [sidecar_file, bad_json, notes, tiny]
        assert outcomes[0].ok
        assert isinstance(outcomes[1].error, PresetFormatError)
        assert outcomes[2].skipped
        assert isinstance(outcomes[3].error, SidecarRejectedError)

    def test_invalid_json_preset_is_not_ok(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({'name': 'Bad', 'adjustments': 'not-an-object'}))
        outcome = asyncio.run(import_preset_file(path))
        assert not outcome.ok
        assert outcome.error is None
        assert not outcome.validation.valid
        assert 'Adjustments object is required' in outcome.validation.errors

    def test_metadata_only_sidecar_is_not_ok(self, tmp_path, make_sidecar):
        path = tmp_path / "bare.xmp"
        path.write_text(make_sidecar('tiff:Model="ILCE-7M3"', 'xmp:CreatorTool="Adobe Lightroom Classic"'))
        outcome = asyncio.run(import_preset_file(path))
        assert not outcome.ok
        assert outcome.preset['adjustments'] == {}
        assert not outcome.validation.valid
