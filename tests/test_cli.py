"""Tests for the command line entry point."""

import json
from pathlib import Path

from click.testing import CliRunner

from swaggergen.__main__ import main

PETSTORE_PATH = Path(__file__).parent / "fixtures" / "petstore.json"


class TestMain:
    def test_generates_client(self, tmp_path):
        out = tmp_path / "api"
        result = CliRunner().invoke(main, [str(PETSTORE_PATH), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert (out / "services" / "users.service.ts").exists()
        assert "Ignoring /health.get because it has no tags" in result.output

    def test_include_tags(self, tmp_path):
        out = tmp_path / "api"
        result = CliRunner().invoke(main, [str(PETSTORE_PATH), "-o", str(out), "--include-tags", "Pets"])
        assert result.exit_code == 0, result.output
        assert not (out / "services" / "users.service.ts").exists()
        assert not (out / "models" / "user.ts").exists()
        assert (out / "models" / "country.ts").exists()

    def test_keep_unused_models(self, tmp_path):
        out = tmp_path / "api"
        result = CliRunner().invoke(main, [str(PETSTORE_PATH), "-o", str(out), "--keep-unused-models"])
        assert result.exit_code == 0, result.output
        assert (out / "models" / "orphan.ts").exists()

    def test_fatal_error_exits_1(self, tmp_path):
        path = tmp_path / "swagger.json"
        path.write_text(json.dumps({
            "swagger": "2.0",
            "definitions": {"Color": {"type": "string", "enum": []}},
        }))
        result = CliRunner().invoke(main, [str(path), "-o", str(tmp_path / "api")])
        assert result.exit_code == 1
        assert "Enum Color has no possible values" in result.output
        assert not (tmp_path / "api").exists()

    def test_missing_file(self, tmp_path):
        result = CliRunner().invoke(main, [str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "doesn't exist" in result.output
