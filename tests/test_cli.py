import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from route_docgen.cli import main
from route_docgen.errors import NoRoutesError

FIXTURES = Path(__file__).parent / "fixtures"
PROJECT = FIXTURES / "project"
ALL_ROUTES = "**/routes/**/*.[jt]s"


class TestCliGenerate:
    def test_generate_all_formats(self, tmp_path):
        output_dir = tmp_path / "docs"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(PROJECT),
            "-o", str(output_dir),
            "--pattern", ALL_ROUTES,
        ])

        assert result.exit_code == 0, result.output
        for name in ("openapi.json", "openapi.yaml", "API.md", "index.html"):
            assert (output_dir / name).exists()
        assert "Routes found: 6" in result.output
        assert "Files processed: 4" in result.output

    def test_parse_warning_reported(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(PROJECT),
            "-o", str(tmp_path / "docs"),
        ])

        assert result.exit_code == 0
        assert "Warning: failed to parse" in result.output
        assert "broken.js" in result.output

    def test_single_format(self, tmp_path):
        output_dir = tmp_path / "docs"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(PROJECT),
            "-o", str(output_dir),
            "--format", "markdown",
        ])

        assert result.exit_code == 0
        assert sorted(p.name for p in output_dir.iterdir()) == ["API.md"]

    def test_title_version_server_overrides(self, tmp_path):
        config_file = tmp_path / "docs.json"
        config_file.write_text(json.dumps({"title": "From file", "description": "Shop endpoints"}))
        output_dir = tmp_path / "docs"

        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(PROJECT),
            "-o", str(output_dir),
            "-c", str(config_file),
            "--title", "Shop API",
            "--version", "3.1.0",
            "--server", "https://api.shop.test",
        ])

        assert result.exit_code == 0
        doc = json.loads((output_dir / "openapi.json").read_text(encoding="utf-8"))
        assert doc["info"] == {"title": "Shop API", "version": "3.1.0", "description": "Shop endpoints"}
        assert doc["servers"] == [{"url": "https://api.shop.test"}]

    def test_timestamp_flag(self, tmp_path):
        output_dir = tmp_path / "docs"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(PROJECT),
            "-o", str(output_dir),
            "--format", "openapi",
            "--timestamp",
        ])

        assert result.exit_code == 0
        doc = json.loads((output_dir / "openapi.json").read_text(encoding="utf-8"))
        assert "x-generated-at" in doc["info"]

    def test_no_route_files(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(tmp_path), "-o", str(tmp_path / "docs")])

        assert result.exit_code == 1
        assert "No route files found" in result.output
        assert not (tmp_path / "docs").exists()

    def test_no_routes(self, tmp_path):
        routes_dir = tmp_path / "routes"
        routes_dir.mkdir()
        (routes_dir / "helpers.js").write_text("module.exports = {};\n", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(tmp_path), "-o", str(tmp_path / "docs")])

        assert result.exit_code == 1
        assert "No routes found" in result.output
        assert not (tmp_path / "docs").exists()

    @patch("route_docgen.cli.render_documents")
    def test_render_failure_writes_nothing(self, mock_render, tmp_path):
        mock_render.side_effect = NoRoutesError("No routes to document")
        output_dir = tmp_path / "docs"

        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(PROJECT), "-o", str(output_dir), "-f", "html"])

        assert result.exit_code == 1
        assert mock_render.call_args.args[2] == ("html",)
        assert not output_dir.exists()

    def test_write_failure_leaves_no_partial_output(self, tmp_path):
        output_dir = tmp_path / "docs"
        real_write_text = Path.write_text
        calls = []

        def fail_second_write(self, *args, **kwargs):
            calls.append(self.name)
            if len(calls) == 2:
                raise OSError("disk full")
            return real_write_text(self, *args, **kwargs)

        runner = CliRunner()
        with patch.object(Path, "write_text", autospec=True, side_effect=fail_second_write):
            result = runner.invoke(main, ["generate", str(PROJECT), "-o", str(output_dir)])

        assert result.exit_code != 0
        assert isinstance(result.exception, OSError)
        assert not output_dir.exists()
        assert list(tmp_path.iterdir()) == []

    def test_existing_output_replaced_after_staging(self, tmp_path):
        output_dir = tmp_path / "docs"
        output_dir.mkdir()
        (output_dir / "API.md").write_text("stale", encoding="utf-8")
        (output_dir / "notes.txt").write_text("keep", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(PROJECT), "-o", str(output_dir), "-f", "markdown"])

        assert result.exit_code == 0
        assert (output_dir / "API.md").read_text(encoding="utf-8").startswith("# ")
        assert (output_dir / "notes.txt").read_text(encoding="utf-8") == "keep"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["docs"]

    def test_workers_option(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(PROJECT),
            "-o", str(tmp_path / "docs"),
            "--pattern", ALL_ROUTES,
            "--workers", "3",
        ])

        assert result.exit_code == 0
        assert "Routes found: 6" in result.output


class TestCliRoutes:
    def test_lists_routes(self):
        runner = CliRunner()
        result = runner.invoke(main, ["routes", str(PROJECT), "--pattern", ALL_ROUTES])

        assert result.exit_code == 0
        assert "PUT     /api/orders/:orderId" in result.output
        assert "DELETE  /users/:id" in result.output
        assert "users.js" in result.output
