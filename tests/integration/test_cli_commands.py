"""Integration tests for CLI commands using click.testing.CliRunner.

Tests the complete CLI flow end-to-end to verify:
- Command execution and exit codes
- Output formatting and messages
- Error handling and user feedback

Note: Tests prefer semantic assertions (exit codes, file existence) over
exact string matching to be resilient to cosmetic changes.
"""

import logging
import re
import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from revtree.entrypoints.cli import cli
from tests.conftest import API_HEAD, API_V0_9, API_V1_0, run_git
from tests.helpers import (
    assert_command_failed,
    assert_command_success,
    assert_error_message,
    assert_files_created,
    assert_output_contains,
)


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's global config out of the tests and run from an empty cwd."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setattr("platform.system", lambda: "Linux")
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the logging.basicConfig(force=True) done by the cli group."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestDefaultsCommand:
    """Tests for 'revtree defaults' command."""

    def test_shows_latest_tag_and_working_tree(self, runner: CliRunner, tagged_repo: Path):
        result = runner.invoke(cli, ["defaults", "--repo", str(tagged_repo)])

        assert_command_success(result, context="revtree defaults")
        assert result.output.splitlines() == ["before: v1.0.0", "after: ."]

    def test_uses_current_directory(
        self, runner: CliRunner, tagged_repo: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.chdir(tagged_repo)

        result = runner.invoke(cli, ["defaults"])

        assert_command_success(result)
        assert_output_contains(result, "before: v1.0.0")

    def test_local_config_selects_earliest(
        self, runner: CliRunner, tagged_repo: Path, isolated_config: Path
    ):
        (isolated_config / ".revtree.toml").write_text('[tags]\nselect = "earliest"\n')

        result = runner.invoke(cli, ["defaults", "-C", str(tagged_repo)])

        assert_command_success(result)
        assert_output_contains(result, "before: v0.9.0")

    def test_no_tags(self, runner: CliRunner, git_repo: Path):
        result = runner.invoke(cli, ["defaults", "--repo", str(git_repo)])

        assert_command_failed(result)
        assert_error_message(result, hint="Hint:")
        assert_output_contains(result, "0 tags detected")

    def test_not_a_repository(self, runner: CliRunner, tmp_path: Path):
        plain = tmp_path / "plain"
        plain.mkdir()

        result = runner.invoke(cli, ["defaults", "--repo", str(plain)])

        assert_command_failed(result)
        assert_error_message(result, hint="--remote URL")

    def test_remote_clone(
        self, runner: CliRunner, tagged_repo: Path, tmp_path: Path, monkeypatch
    ):
        monkeypatch.setattr("tempfile.tempdir", str(tmp_path))

        result = runner.invoke(cli, ["defaults", "--remote", str(tagged_repo)])

        assert_command_success(result)
        assert_output_contains(result, "before: v1.0.0")

    def test_repo_and_remote_conflict(self, runner: CliRunner, tagged_repo: Path):
        result = runner.invoke(
            cli, ["defaults", "--repo", str(tagged_repo), "--remote", str(tagged_repo)]
        )

        assert_command_failed(result)
        assert_error_message(result, hint="--remote to clone")

    def test_unexpected_error_is_reported(self, runner: CliRunner, tagged_repo: Path):
        with patch(
            "revtree.adapters.factory.SessionFactory.open_local",
            side_effect=RuntimeError("boom"),
        ):
            result = runner.invoke(cli, ["defaults", "--repo", str(tagged_repo)])

        assert_command_failed(result)
        assert_output_contains(result, "Unexpected error in defaults: boom")


class TestTagsCommand:
    """Tests for 'revtree tags' command."""

    def test_lists_semver_tags_in_order(self, runner: CliRunner, tagged_repo: Path):
        run_git(tagged_repo, "tag", "v0.10.0", "v0.9.0")

        result = runner.invoke(cli, ["tags", "--repo", str(tagged_repo)])

        assert_command_success(result)
        assert result.output.splitlines() == ["v0.9.0", "v0.10.0", "v1.0.0"]

    def test_untagged_repository_prints_nothing(self, runner: CliRunner, git_repo: Path):
        result = runner.invoke(cli, ["tags", "--repo", str(git_repo)])

        assert_command_success(result)
        assert result.output == ""


class TestLsCommand:
    """Tests for 'revtree ls' command."""

    def test_root_of_working_tree(self, runner: CliRunner, tagged_repo: Path):
        result = runner.invoke(cli, ["ls", "--repo", str(tagged_repo)])

        assert_command_success(result)
        assert_output_contains(result, "README.md", "pkg/")

    def test_directory_at_revision(self, runner: CliRunner, tagged_repo: Path):
        result = runner.invoke(cli, ["ls", "pkg", "--rev", "v0.9.0", "--repo", str(tagged_repo)])

        assert_command_success(result)
        assert "api.go" in result.output
        assert "store.go" not in result.output
        assert run_git(tagged_repo, "symbolic-ref", "--short", "HEAD") == "main"

    def test_baseline(self, runner: CliRunner, tagged_repo: Path):
        result = runner.invoke(cli, ["ls", "pkg", "--baseline", "--repo", str(tagged_repo)])

        assert_command_success(result)
        assert_output_contains(result, "store.go")

    def test_missing_directory(self, runner: CliRunner, tagged_repo: Path):
        result = runner.invoke(cli, ["ls", "docs", "--repo", str(tagged_repo)])

        assert_command_failed(result)
        assert_error_message(result)
        assert_output_contains(result, "docs")


class TestCatCommand:
    """Tests for 'revtree cat' command."""

    def test_working_tree(self, runner: CliRunner, tagged_repo: Path):
        result = runner.invoke(cli, ["cat", "pkg/api.go", "--repo", str(tagged_repo)])

        assert_command_success(result)
        assert result.output == API_HEAD

    def test_at_revision_restores_branch_afterwards(self, runner: CliRunner, tagged_repo: Path):
        """Test a checkout made by one command does not leak into the next."""
        result = runner.invoke(cli, ["cat", "pkg/api.go", "-r", "v0.9.0", "-C", str(tagged_repo)])
        assert_command_success(result)
        assert result.output == API_V0_9
        assert run_git(tagged_repo, "symbolic-ref", "--short", "HEAD") == "main"

        result = runner.invoke(cli, ["cat", "pkg/api.go", "--baseline", "-C", str(tagged_repo)])
        assert_command_success(result)
        assert result.output == API_V1_0

        result = runner.invoke(cli, ["cat", "pkg/api.go", "-C", str(tagged_repo)])
        assert_command_success(result)
        assert result.output == API_HEAD

    def test_highlight_numbers_lines(self, runner: CliRunner, tagged_repo: Path):
        result = runner.invoke(
            cli, ["cat", "pkg/api.go", "-H", "-r", "v0.9.0", "-C", str(tagged_repo)]
        )

        assert_command_success(result)
        lines = re.sub(r"\x1b\[[0-9;]*m", "", result.output).splitlines()
        assert lines[0] == "   1 package api"
        assert len(lines) == len(API_V0_9.splitlines())
        assert run_git(tagged_repo, "symbolic-ref", "--short", "HEAD") == "main"

    def test_rev_and_baseline_conflict(self, runner: CliRunner, tagged_repo: Path):
        result = runner.invoke(
            cli, ["cat", "pkg/api.go", "--rev", "v0.9.0", "--baseline", "-C", str(tagged_repo)]
        )

        assert_command_failed(result)
        assert_error_message(result, hint="--baseline alone")

    def test_unknown_revision(self, runner: CliRunner, tagged_repo: Path):
        result = runner.invoke(cli, ["cat", "pkg/api.go", "--rev", "v8.0.0", "-C", str(tagged_repo)])

        assert_command_failed(result)
        assert_output_contains(result, "Unknown revision 'v8.0.0'")

    def test_dirty_repository_refuses_other_revision(self, runner: CliRunner, tagged_repo: Path):
        (tagged_repo / "pkg" / "api.go").write_text("draft\n")

        result = runner.invoke(cli, ["cat", "pkg/api.go", "-r", "v0.9.0", "-C", str(tagged_repo)])

        assert_command_failed(result)
        assert_error_message(result, hint="stash")
        assert (tagged_repo / "pkg" / "api.go").read_text() == "draft\n"

    def test_missing_file(self, runner: CliRunner, tagged_repo: Path):
        result = runner.invoke(cli, ["cat", "pkg/store.go", "-r", "v0.9.0", "-C", str(tagged_repo)])

        assert_command_failed(result)
        assert_error_message(result)
        assert_output_contains(result, "pkg/store.go")
        assert (tagged_repo / "pkg" / "store.go").exists()


class TestConfigCommands:
    """Tests for 'revtree config' commands."""

    def test_init_writes_local_config(self, runner: CliRunner, isolated_config: Path):
        result = runner.invoke(cli, ["config", "init"])

        assert_command_success(result)
        assert_files_created(isolated_config, ".revtree.toml")
        assert_output_contains(result, "Wrote")

    def test_init_refuses_to_overwrite(self, runner: CliRunner, isolated_config: Path):
        (isolated_config / ".revtree.toml").write_text("# mine\n")

        result = runner.invoke(cli, ["config", "init"])

        assert_command_failed(result)
        assert_error_message(result, hint="--force")
        assert (isolated_config / ".revtree.toml").read_text() == "# mine\n"

    def test_init_force(self, runner: CliRunner, isolated_config: Path):
        (isolated_config / ".revtree.toml").write_text("# mine\n")

        result = runner.invoke(cli, ["-q", "config", "init", "--force"])

        assert_command_success(result)
        assert result.output == ""
        assert "[tags]" in (isolated_config / ".revtree.toml").read_text()

    def test_show_reflects_local_overrides(self, runner: CliRunner, isolated_config: Path):
        (isolated_config / ".revtree.toml").write_text("[git]\nverify_remote = false\n")

        result = runner.invoke(cli, ["config", "show"])

        assert_command_success(result)
        data = tomllib.loads(result.output)
        assert data["git"] == {"executable": "git", "verify_remote": False}
        assert data["tags"] == {"select": "latest"}


def test_version_option(runner: CliRunner):
    result = runner.invoke(cli, ["--version"])

    assert_command_success(result)
    assert_output_contains(result, "revtree")


def test_debug_logging_shows_git_commands(runner: CliRunner, tagged_repo: Path):
    result = runner.invoke(cli, ["-vv", "tags", "--repo", str(tagged_repo)])

    assert_command_success(result)
    assert_output_contains(result, "Running git")
