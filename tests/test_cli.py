"""
Tests for the local-predict command-line interface.
"""

import json

import pytest
from click.testing import CliRunner

from local_predict.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def model_file(tmp_path, scenario_model):
    path = tmp_path / "model.json"
    path.write_text(json.dumps(scenario_model))
    return path


class TestPredictCommand:
    def test_predict_by_id(self, runner, model_file):
        result = runner.invoke(cli, ["predict", str(model_file), '{"000001": 5}'])
        assert result.exit_code == 0
        output = json.loads(result.output)
        assert output["value"] == "yes"
        assert output["confidence"] == 0.9
        assert output["path"] == ["score > 3"]

    def test_predict_by_name(self, runner, model_file):
        result = runner.invoke(cli, ["predict", str(model_file), '{"score": 1}', "--by-name"])
        assert result.exit_code == 0
        assert json.loads(result.output)["value"] == "no"

    def test_invalid_args(self, runner, model_file):
        result = runner.invoke(cli, ["predict", str(model_file), "score=1"])
        assert result.exit_code == 1
        assert "ERROR:" in result.output

    def test_invalid_model(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"fields": {}}')
        result = runner.invoke(cli, ["predict", str(path), "{}"])
        assert result.exit_code == 1
        assert "no tree root" in result.output


class TestInspectCommands:
    def test_fields(self, runner, model_file):
        result = runner.invoke(cli, ["fields", str(model_file)])
        assert result.exit_code == 0
        assert "000001  numeric      score" in result.output
        assert "approved (objective)" in result.output

    def test_describe(self, runner, model_file):
        result = runner.invoke(cli, ["describe", str(model_file)])
        assert result.exit_code == 0
        assert "Objective field: 000002 (approved)" in result.output
        assert "Nodes: 3" in result.output
        assert "Depth: 2" in result.output

    def test_models_empty(self, runner, tmp_path):
        result = runner.invoke(cli, ["models", "--storage", str(tmp_path)])
        assert result.exit_code == 0
        assert "No models" in result.output

    def test_models_lists_storage(self, runner, tmp_path, scenario_model):
        (tmp_path / "abc123.json").write_text(json.dumps(scenario_model))
        result = runner.invoke(cli, ["models", "--storage", str(tmp_path)])
        assert result.exit_code == 0
        assert "model/abc123" in result.output


class TestVersion:
    def test_version(self, runner):
        from local_predict import __version__

        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
