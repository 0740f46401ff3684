"""Tests for the propfile command line."""

import pytest
from click.testing import CliRunner

from propfile.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run every command from an empty directory so no propfile.toml is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestGet:
    def test_value(self, runner, workdir):
        (workdir / "a.properties").write_text("a = 1 # note\n")
        result = runner.invoke(cli, ["get", "a.properties", "a"])
        assert result.exit_code == 0
        assert result.output == "1\n"

    def test_missing_key_fails(self, runner, workdir):
        (workdir / "a.properties").write_text("a=1\n")
        result = runner.invoke(cli, ["get", "a.properties", "zzz"])
        assert result.exit_code == 1
        assert 'property "zzz" not found' in result.output

    def test_default(self, runner, workdir):
        (workdir / "a.properties").write_text("a=1\n")
        result = runner.invoke(cli, ["get", "a.properties", "zzz", "--default", "X"])
        assert result.exit_code == 0
        assert result.output == "X\n"

    def test_env_expansion(self, runner, workdir, monkeypatch):
        monkeypatch.setenv("PROPFILE_CLI_USER", "alice")
        (workdir / "a.properties").write_text("user=${PROPFILE_CLI_USER}\n")
        assert runner.invoke(cli, ["get", "a.properties", "user"]).output == "alice\n"
        assert runner.invoke(cli, ["get", "a.properties", "user", "--raw"]).output == "${PROPFILE_CLI_USER}\n"

    def test_env_expansion_disabled_by_config(self, runner, workdir, monkeypatch):
        monkeypatch.setenv("PROPFILE_CLI_USER", "alice")
        (workdir / "propfile.toml").write_text("[propfile]\nresolve_env = false\n")
        (workdir / "a.properties").write_text("user=${PROPFILE_CLI_USER}\n")
        assert runner.invoke(cli, ["get", "a.properties", "user"]).output == "${PROPFILE_CLI_USER}\n"

    def test_missing_file(self, runner, workdir):
        result = runner.invoke(cli, ["get", "nope.properties", "a"])
        assert result.exit_code == 1
        assert "cannot read" in result.output


class TestList:
    def test_sorted(self, runner, workdir):
        (workdir / "a.properties").write_text("b=2\na=foo\\\nbar\n")
        result = runner.invoke(cli, ["list", "a.properties"])
        assert result.exit_code == 0
        assert result.output == "a=foobar\nb=2\n"


class TestEdit:
    def test_set_creates_file(self, runner, workdir):
        result = runner.invoke(cli, ["set", "new.properties", "a", "1"])
        assert result.exit_code == 0
        lines = (workdir / "new.properties").read_text().splitlines()
        assert lines[0].startswith("#")
        assert lines[1:] == ["a=1"]

    def test_set_reports_old_value(self, runner, workdir):
        (workdir / "a.properties").write_text("a=1\n")
        result = runner.invoke(cli, ["set", "a.properties", "a", "2"])
        assert result.output == "a: 1 -> 2\n"

    def test_set_empty_key(self, runner, workdir):
        result = runner.invoke(cli, ["set", "a.properties", " ", "2"])
        assert result.exit_code == 1
        assert not (workdir / "a.properties").exists()

    def test_unset(self, runner, workdir):
        (workdir / "a.properties").write_text("a=1\nb=2\n")
        result = runner.invoke(cli, ["unset", "a.properties", "a"])
        assert result.exit_code == 0
        assert (workdir / "a.properties").read_text().splitlines()[1:] == ["b=2"]

    def test_unset_missing_key(self, runner, workdir):
        (workdir / "a.properties").write_text("a=1\n")
        result = runner.invoke(cli, ["unset", "a.properties", "zzz"])
        assert result.exit_code == 0
        assert "nothing to do" in result.output
        assert (workdir / "a.properties").read_text() == "a=1\n"

    def test_format_to_output(self, runner, workdir):
        (workdir / "in.properties").write_text("# old\nz = 1\n\nbad line\na = x \\\n  y\n")
        result = runner.invoke(cli, ["format", "in.properties", "-o", "out.properties"])
        assert result.exit_code == 0
        assert "Wrote 2 pairs" in result.output
        assert (workdir / "out.properties").read_text().splitlines()[1:] == ["a=x y", "z=1"]


class TestInit:
    def test_init_twice(self, runner, workdir):
        first = runner.invoke(cli, ["init"])
        assert first.exit_code == 0
        assert (workdir / "propfile.toml").exists()
        second = runner.invoke(cli, ["init"])
        assert "already exists" in second.output
