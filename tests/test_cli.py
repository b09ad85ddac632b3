"""Tests for the CLI module."""

import json
import logging

import pytest
from typer.testing import CliRunner

from acres import __version__
from acres.api import Api, ResponseCache
from acres.cli import JsonFormatter, app

from conftest import API_BASE, IIIF_BASE, IMAGE_ID


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logger():
    """Remove handlers the CLI installs on the package logger."""
    yield
    logger = logging.getLogger("acres")
    logger.handlers[:] = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def invoke(runner, api, *args):
    return runner.invoke(app, ["--log-level", "WARNING", *args], obj={"api": api})


class TestGlobalOptions:
    """Tests for --version and --help."""

    def test_version_flag(self, runner):
        """Test that --version shows version and exits."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"acres {__version__}" in result.output

    def test_help_lists_commands(self, runner):
        """Test that --help lists every command."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("artwork", "artworks", "search", "manifest", "iiif", "info", "parse"):
            assert command in result.output


class TestJsonCommands:
    """Tests for commands that print API JSON."""

    def test_artwork(self, runner, api):
        """Test artwork prints the payload."""
        result = invoke(runner, api, "artwork", "27992")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["image_id"] == IMAGE_ID

    def test_artworks_with_ids(self, runner, api, fake_fetch):
        """Test --ids and --limit become query parameters."""
        result = invoke(runner, api, "artworks", "--ids", "1,3", "--limit", "2")
        assert result.exit_code == 0
        assert fake_fetch.calls == [f"{API_BASE}/artworks?ids=1,3&limit=2"]

    def test_artworks_bad_ids(self, runner, api, fake_fetch):
        """Test non-integer ids are a usage error."""
        result = invoke(runner, api, "artworks", "--ids", "1,x")
        assert result.exit_code == 2
        assert fake_fetch.calls == []

    def test_search(self, runner, api):
        """Test search prints results."""
        result = invoke(runner, api, "search", "--q", "monet", "--size", "2")
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)["data"]) == 2

    def test_search_sort_without_query(self, runner, api):
        """Test sort without query exits with a usage error."""
        result = invoke(runner, api, "search", "--q", "monet", "--sort", "title")
        assert result.exit_code == 2
        assert "sort can only be used" in result.output

    def test_manifest(self, runner, api):
        """Test manifest prints the IIIF manifest."""
        result = invoke(runner, api, "manifest", "27992")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["@type"] == "sc:Manifest"

    def test_not_found(self, runner, api):
        """Test API failures exit with status 1."""
        result = invoke(runner, api, "artwork", "1")
        assert result.exit_code == 1
        assert "could not find" in result.output

    def test_unwritable_cache(self, runner, tmp_path, fake_fetch):
        """Test a cache directory that cannot be created exits with status 1."""
        (tmp_path / "blocker").write_text("not a directory")
        cache = ResponseCache(tmp_path / "blocker" / "cache")
        api = Api(API_BASE, use_cache=True, cache=cache, fetch=fake_fetch)
        result = invoke(runner, api, "artwork", "27992")
        assert result.exit_code == 1
        assert "Error: could not write cache" in result.output
        assert "Traceback" not in result.output


class TestIiifCommands:
    """Tests for the iiif and info commands."""

    def test_iiif_default_url(self, runner, api):
        """Test the default image URL uses the 843px width."""
        result = invoke(runner, api, "iiif", "27992")
        assert result.exit_code == 0
        assert result.stdout.strip() == f"{IIIF_BASE}/{IMAGE_ID}/full/843,/0/default.jpg"

    def test_iiif_with_options(self, runner, api):
        """Test region, size, rotation, quality and format options."""
        result = invoke(
            runner,
            api,
            "iiif",
            "27992",
            "--region",
            "pct:0,0,50,50",
            "--size",
            "!400,400",
            "--rotation",
            "!90",
            "--quality",
            "gray",
            "--format",
            "png",
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == (
            f"{IIIF_BASE}/{IMAGE_ID}/pct:0,0,50,50/!400,400/!90/gray.png"
        )

    def test_iiif_invalid_size(self, runner, api):
        """Test malformed IIIF parameters exit with status 2."""
        result = invoke(runner, api, "iiif", "27992", "--size", "big")
        assert result.exit_code == 2
        assert "could not understand size specification: big" in result.output

    def test_info(self, runner, api):
        """Test info prints the image's info.json."""
        result = invoke(runner, api, "info", "27992")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["width"] == 3000


class TestParseCommand:
    """Tests for the parse command."""

    def test_parse(self, runner, api):
        """Test a URL is split into canonical components."""
        url = "http://example.org:80/iiif/abcd/pct:10.00,0,50,50/!200,200/90.0/gray.png"
        result = invoke(runner, api, "parse", url)
        assert result.exit_code == 0
        parsed = json.loads(result.stdout)
        assert parsed["url"] == "http://example.org/iiif/abcd/pct:10,0,50,50/!200,200/90/gray.png"
        assert parsed["scheme"] == "http"
        assert parsed["server"] == "example.org"
        assert parsed["prefix"] == "/iiif"
        assert parsed["identifier"] == "abcd"
        assert parsed["rotation"] == "90"
        assert parsed["info"] == "http://example.org/iiif/abcd/info.json"

    def test_parse_invalid(self, runner, api):
        """Test an unparseable URL exits with status 2."""
        result = invoke(runner, api, "parse", "https://example.org/12345/full/full/0/grey.jpg")
        assert result.exit_code == 2
        assert "quality" in result.output


class TestJsonFormatter:
    """Tests for the structured log formatter."""

    def test_extra_fields_included(self):
        """Test extra= attributes appear in the JSON line."""
        record = logging.LogRecord("acres", logging.INFO, __file__, 1, "api_get", None, None)
        record.url = "https://api.artic.edu/api/v1/artworks"
        payload = json.loads(JsonFormatter().format(record))
        assert payload["msg"] == "api_get"
        assert payload["level"] == "INFO"
        assert payload["url"] == "https://api.artic.edu/api/v1/artworks"
