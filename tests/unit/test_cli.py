"""
Integration tests for CLI commands.

Tests the basic functionality of CLI commands and error handling.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from codeinv.cli import app

runner = CliRunner()


def _write(root: Path, relative: str, content: bytes) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


@pytest.fixture
def project(tmp_path):
    _write(tmp_path, "main.py", b"# entry\nprint('hi')\n")
    _write(tmp_path, "lib/util.ts", b"export const a = 1;\n")
    _write(tmp_path, "legacy.txt", "中文".encode("gbk"))
    _write(tmp_path, "node_modules/x.js", b"x\n")
    return tmp_path


class TestCLIHelp:
    """Test CLI help and usage information."""

    def test_main_help(self):
        """Main help should display available commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "scan" in result.stdout
        assert "types" in result.stdout
        assert "read" in result.stdout
        assert "export" in result.stdout

    def test_scan_help(self):
        result = runner.invoke(app, ["scan", "--help"])

        assert result.exit_code == 0
        assert "--ignore" in result.stdout
        assert "--no-gitignore" in result.stdout

    def test_export_help(self):
        result = runner.invoke(app, ["export", "--help"])

        assert result.exit_code == 0
        assert "--lines-per-page" in result.stdout
        assert "--keep-comments" in result.stdout


class TestScanCommand:
    def test_scan_json(self, project):
        result = runner.invoke(app, ["scan", str(project), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["success"] is True
        assert [f["relative_path"] for f in data["files"]] == [
            "legacy.txt",
            "lib/util.ts",
            "main.py",
        ]

    def test_scan_table(self, project):
        result = runner.invoke(app, ["scan", str(project)])

        assert result.exit_code == 0
        assert "main.py" in result.stdout
        assert "3 files" in result.stdout

    def test_scan_ignore_option(self, project):
        result = runner.invoke(app, ["scan", str(project), "-i", "lib", "--json"])

        data = json.loads(result.stdout)
        assert "lib/util.ts" not in [f["relative_path"] for f in data["files"]]

    def test_scan_no_gitignore(self, project):
        _write(project, ".gitignore", b"main.py\n")

        with_gitignore = json.loads(runner.invoke(app, ["scan", str(project), "--json"]).stdout)
        without = json.loads(
            runner.invoke(app, ["scan", str(project), "--no-gitignore", "--json"]).stdout
        )

        assert "main.py" not in [f["name"] for f in with_gitignore["files"]]
        assert "main.py" in [f["name"] for f in without["files"]]

    def test_scan_missing_root(self, tmp_path):
        result = runner.invoke(app, ["scan", str(tmp_path / "missing")])

        assert result.exit_code == 0
        assert "No files found" in result.stdout

    def test_scan_missing_argument(self):
        result = runner.invoke(app, ["scan"])

        # Should fail due to missing required argument
        assert result.exit_code != 0


class TestTypesCommand:
    def test_types_json(self, project, tmp_path_factory):
        other = tmp_path_factory.mktemp("other")
        _write(other, "b.py", b"x = 2\n")

        result = runner.invoke(app, ["types", str(project), str(other), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["types"][0]["ext"] == ".py"
        assert data["types"][0]["count"] == 2

    def test_types_table(self, project):
        result = runner.invoke(app, ["types", str(project)])

        assert result.exit_code == 0
        assert ".ts" in result.stdout


class TestReadCommand:
    def test_read_json(self, project):
        result = runner.invoke(app, ["read", str(project), "--json"])

        assert result.exit_code == 0
        files = {f["relative_path"]: f for f in json.loads(result.stdout)["files"]}
        assert files["legacy.txt"]["content"] == "中文"
        assert files["main.py"]["line_count"] == 2
        assert all(f["error"] is None for f in files.values())

    def test_read_table(self, project):
        result = runner.invoke(app, ["read", str(project)])

        assert result.exit_code == 0
        assert "ok" in result.stdout

    def test_read_content(self, project):
        result = runner.invoke(app, ["read", str(project), "--content"])

        assert result.exit_code == 0
        assert "export const a = 1;" in result.stdout


class TestExportCommand:
    def test_export_listing(self, project):
        result = runner.invoke(app, ["export", str(project)])

        assert result.exit_code == 0
        assert "print('hi')" in result.stdout
        assert "# entry" not in result.stdout

    def test_export_keep_comments(self, project):
        result = runner.invoke(app, ["export", str(project), "--keep-comments", "--json"])

        assert result.exit_code == 0
        assert "# entry" in json.loads(result.stdout)["lines"]

    def test_export_json_budget(self, project):
        result = runner.invoke(
            app, ["export", f"{project}:1", "--lines-per-page", "1", "--max-pages", "1", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["is_truncated"] is True
        assert data["lines"] == ["print('hi')"]

    def test_export_invalid_ratio(self, project):
        result = runner.invoke(app, ["export", f"{project}:-2"])

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_export_invalid_page_size(self, project):
        result = runner.invoke(app, ["export", str(project), "--lines-per-page", "0"])

        assert result.exit_code == 1


class TestGlobalOptions:
    def test_config_file_applied(self, project, tmp_path_factory):
        config_dir = tmp_path_factory.mktemp("config")
        config = config_dir / "codeinv.yaml"
        config.write_text("scanning:\n  custom_ignore: ['*.txt']\n", encoding="utf-8")

        result = runner.invoke(app, ["--config", str(config), "scan", str(project), "--json"])

        assert result.exit_code == 0
        names = [f["name"] for f in json.loads(result.stdout)["files"]]
        assert "legacy.txt" not in names

    def test_missing_config_file(self, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "scan", str(tmp_path)])

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_unknown_log_level(self, tmp_path):
        result = runner.invoke(app, ["--log-level", "LOUD", "scan", str(tmp_path)])

        assert result.exit_code == 1
        assert "Unknown log level" in result.stdout
