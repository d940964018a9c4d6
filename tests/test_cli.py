"""Tests for CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from memorybank.cli import _resolve_root, _setup_logging, app


runner = CliRunner()

INIT_ANSWERS = [
    "--name", "Foo",
    "--description", "A demo project",
    "--architecture", "Monolith",
    "--framework", "FastAPI",
    "--language", "Python",
]


@pytest.fixture
def bank(tmp_path: Path) -> Path:
    root = tmp_path / "memory-bank"
    (root / "bar").mkdir(parents=True)
    (root / "baz" / "deep").mkdir(parents=True)
    (root / "projectBrief.md").write_text("# Demo\nA demo brief.\n")
    (root / "bar" / "auth.md").write_text("# Auth\nAuthentication flow\n")
    (root / "baz" / "deep" / "notes.md").write_text("# Notes\ntags: [x, y]\nNothing relevant\n")
    return root


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("memorybank.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("memorybank.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestResolveRoot:
    def test_explicit_absolute(self, tmp_path: Path) -> None:
        assert _resolve_root(tmp_path) == tmp_path

    def test_relative_against_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        assert _resolve_root(Path("notes")) == Path.cwd() / "notes"

    def test_default_from_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MEMORY_BANK_DIR", str(tmp_path / "bank"))

        assert _resolve_root(None) == tmp_path / "bank"


class TestInitCommand:
    """Tests for the init command."""

    def test_init_creates_bank(self, tmp_path: Path) -> None:
        destination = tmp_path / "memory-bank"

        result = runner.invoke(app, ["init", "--destination", str(destination), *INIT_ANSWERS])

        assert result.exit_code == 0, result.output
        assert "Memory Bank initialized" in result.output
        brief = (destination / "projectBrief.md").read_text()
        assert "# Foo" in brief
        assert "[PROJECT_NAME]" not in brief
        assert "Chose Monolith architecture" in (destination / "context" / "active.md").read_text()

    def test_init_prompts_for_missing_values(self, tmp_path: Path) -> None:
        destination = tmp_path / "memory-bank"

        result = runner.invoke(
            app,
            ["init", "--destination", str(destination)],
            input="Foo\nA demo\nMonolith\nFastAPI\nPython\n",
        )

        assert result.exit_code == 0, result.output
        assert "Project name" in result.output
        assert json.loads((destination / "memory-bank.json").read_text())["project"] == "Foo"

    def test_init_existing_destination_declined(self, bank: Path) -> None:
        """Declining the overwrite leaves the destination untouched and exits nonzero."""
        before = sorted(p.relative_to(bank) for p in bank.rglob("*"))

        result = runner.invoke(app, ["init", "--destination", str(bank), *INIT_ANSWERS], input="n\n")

        assert result.exit_code != 0
        assert "Initialization cancelled" in result.output
        assert sorted(p.relative_to(bank) for p in bank.rglob("*")) == before
        assert (bank / "projectBrief.md").read_text() == "# Demo\nA demo brief.\n"

    def test_init_existing_destination_confirmed(self, bank: Path) -> None:
        result = runner.invoke(app, ["init", "--destination", str(bank), *INIT_ANSWERS], input="y\n")

        assert result.exit_code == 0, result.output
        assert not (bank / "bar").exists()
        assert "# Foo" in (bank / "projectBrief.md").read_text()

    def test_init_force(self, bank: Path) -> None:
        result = runner.invoke(app, ["init", "--destination", str(bank), "--force", *INIT_ANSWERS])

        assert result.exit_code == 0, result.output
        assert (bank / "context" / "active.md").exists()

    def test_init_missing_template(self, tmp_path: Path) -> None:
        destination = tmp_path / "memory-bank"

        result = runner.invoke(
            app,
            ["init", "--destination", str(destination), "--template", str(tmp_path / "nope"), *INIT_ANSWERS],
        )

        assert result.exit_code == 1
        assert "not found" in result.output
        assert not destination.exists()


class TestUpdateCommand:
    """Tests for the update command."""

    def test_update_writes_index(self, bank: Path) -> None:
        result = runner.invoke(app, ["update", "--root", str(bank)])

        assert result.exit_code == 0, result.output
        assert "Indexed 3 files" in result.output
        assert "Found 2 categories" in result.output
        assert "Found 2 unique tags" in result.output
        index = json.loads((bank / ".index.json").read_text())
        assert index["files"]["baz/deep/notes.md"]["tags"] == ["x", "y"]
        assert index["categories"]["baz"] == ["baz/deep/notes.md"]

    def test_update_unreadable_file(self, bank: Path) -> None:
        (bank / "bar" / "broken.md").write_bytes(b"\xff\xfe")

        result = runner.invoke(app, ["update", "--root", str(bank)])

        assert result.exit_code == 1
        assert "broken.md" in result.output
        assert not (bank / ".index.json").exists()

    def test_update_missing_root(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["update", "--root", str(tmp_path / "missing")])

        assert result.exit_code == 1


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_with_results(self, bank: Path) -> None:
        result = runner.invoke(app, ["search", "auth", "--root", str(bank)])

        assert result.exit_code == 0, result.output
        assert "Found 2 matches" in result.output
        assert "bar/auth.md:1" in result.output
        assert "bar/auth.md:2" in result.output
        assert "Authentication flow" in result.output

    def test_search_no_results(self, bank: Path) -> None:
        result = runner.invoke(app, ["search", "kubernetes", "--root", str(bank)])

        assert result.exit_code == 0
        assert "No results found" in result.output

    def test_search_keeps_brackets(self, bank: Path) -> None:
        """Markup-like text in documents is printed literally."""
        result = runner.invoke(app, ["search", "tags", "--root", str(bank)])

        assert result.exit_code == 0
        assert "tags: [x, y]" in result.output

    def test_search_missing_keyword(self, bank: Path) -> None:
        result = runner.invoke(app, ["search", "--root", str(bank)])

        assert result.exit_code == 1
        assert "Usage: memory-bank search <keyword>" in result.output


class TestBrowseCommand:
    """Tests for the browse command."""

    def test_browse_category(self, bank: Path) -> None:
        result = runner.invoke(app, ["browse", "baz", "--root", str(bank)])

        assert result.exit_code == 0, result.output
        assert "📁 deep/" in result.output
        assert "📄 notes.md" in result.output
        assert "1 documents in 1 folders" in result.output

    def test_browse_unknown_category(self, bank: Path) -> None:
        """Unknown category lists the available ones and exits nonzero."""
        result = runner.invoke(app, ["browse", "foo", "--root", str(bank)])

        assert result.exit_code != 0
        assert "Category 'foo' not found" in result.output
        assert "- bar" in result.output
        assert "- baz" in result.output

    def test_browse_missing_category(self, bank: Path) -> None:
        result = runner.invoke(app, ["browse", "--root", str(bank)])

        assert result.exit_code == 1
        assert "Usage: memory-bank browse <category>" in result.output
        assert "- bar" in result.output

    def test_browse_path_outside_root(self, bank: Path) -> None:
        """A relative path is not a category, even when the directory exists."""
        (bank.parent / "outside").mkdir()
        (bank.parent / "outside" / "secret.md").write_text("# Secret\n")

        result = runner.invoke(app, ["browse", "../outside", "--root", str(bank)])

        assert result.exit_code == 1
        assert "secret.md" not in result.output
        assert "- bar" in result.output


class TestOverviewCommand:
    def test_overview(self, bank: Path) -> None:
        result = runner.invoke(app, ["overview", "--root", str(bank)])

        assert result.exit_code == 0, result.output
        assert "A demo brief." in result.output
        assert "bar/ (1 files)" in result.output
        assert "baz/ (1 files)" in result.output
        assert "baz/deep/notes.md" in result.output

    def test_overview_missing_root(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["overview", "--root", str(tmp_path / "missing")])

        assert result.exit_code == 1

    def test_overview_without_index(self, bank: Path) -> None:
        result = runner.invoke(app, ["overview", "--root", str(bank)])

        assert result.exit_code == 0, result.output
        assert "Index not built yet" in result.output

    def test_overview_after_update(self, bank: Path) -> None:
        assert runner.invoke(app, ["update", "--root", str(bank)]).exit_code == 0

        result = runner.invoke(app, ["overview", "--root", str(bank)])

        assert result.exit_code == 0, result.output
        assert "Index updated:" in result.output
        stamp = json.loads((bank / ".index.json").read_text())["updated"]
        assert stamp in result.output
