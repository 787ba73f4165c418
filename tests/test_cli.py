"""
Tests for the command line interface.
"""

import json
import logging

import pytest
from click.testing import CliRunner

from aquapreset.cli import main


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestCli:

    def setup_method(self):
        self.runner = CliRunner()

    def test_example(self):
        result = self.runner.invoke(main, ['-q', 'example'])
        assert result.exit_code == 0
        assert json.loads(result.output)['name'] == "Example Underwater Preset"

    def test_parse(self, sidecar_file):
        result = self.runner.invoke(main, ['-q', 'parse', str(sidecar_file)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data['metadata']['camera'] == 'ILCE-7M3'
        assert 'rawSource' not in data

    def test_validate_valid(self, tmp_path, valid_preset):
        path = tmp_path / "preset.json"
        path.write_text(json.dumps(valid_preset))
        result = self.runner.invoke(main, ['-q', 'validate', str(path)])
        assert result.exit_code == 0
        assert "is valid" in result.output

    def test_validate_invalid(self, tmp_path):
        path = tmp_path / "preset.json"
        path.write_text(json.dumps({'name': 'No adjustments'}))
        result = self.runner.invoke(main, ['-q', 'validate', str(path)])
        assert result.exit_code == 1

    def test_upgrade_to_file(self, tmp_path):
        source = tmp_path / "old.json"
        source.write_text(json.dumps({'name': 'Old', 'adjustments': {'hslAquas': 5}}))
        target = tmp_path / "new.json"
        result = self.runner.invoke(main, ['-q', 'upgrade', str(source), '-o', str(target)])
        assert result.exit_code == 0
        assert 'hslCyans' in json.loads(target.read_text())['adjustments']

    def test_import(self, tmp_path, sidecar_file):
        out_dir = tmp_path / "out"
        result = self.runner.invoke(main, ['-q', 'import', str(sidecar_file), '-o', str(out_dir)])
        assert result.exit_code == 0
        imported = json.loads((out_dir / "reef.json").read_text())
        assert imported['source'] == 'xmp'

    def test_import_skips_invalid_presets(self, tmp_path):
        source = tmp_path / "broken.json"
        source.write_text(json.dumps({'name': 'Bad', 'adjustments': 'not-an-object'}))
        out_dir = tmp_path / "out"
        result = self.runner.invoke(main, ['-q', 'import', str(source), '-o', str(out_dir)])
        assert result.exit_code == 1
        assert not (out_dir / "broken.json").exists()

    def test_import_keeps_presets_sharing_a_name(self, tmp_path, sidecar_file):
        other = tmp_path / "reef.json"
        other.write_text(json.dumps({'name': 'Reef JSON', 'adjustments': {'exposure': 10}}))
        out_dir = tmp_path / "out"
        result = self.runner.invoke(main, ['-q', 'import', str(sidecar_file), str(other), '-o', str(out_dir)])
        assert result.exit_code == 0
        assert sorted(p.name for p in out_dir.iterdir()) == ['reef-1.json', 'reef.json']
        assert json.loads((out_dir / "reef.json").read_text())['source'] == 'xmp'
        assert json.loads((out_dir / "reef-1.json").read_text())['name'] == 'Reef JSON'
