#!/usr/bin/env python3
"""
CLI tests: run the typer app in-process with CliRunner.

Run:
    python -m pytest tests/test_cli.py -v
"""

import os
import stat
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent))

from easyfs import config as config_module  # noqa: E402
from easyfs.cli import app  # noqa: E402
from easyfs.fs import paths  # noqa: E402

runner = CliRunner()


@pytest.fixture
def workdir(monkeypatch, tmp_path):
    """Run every command from an empty directory with no config to discover."""
    monkeypatch.delenv("EASYFS_CONFIG", raising=False)
    monkeypatch.setattr(config_module, "_CONFIG_SEARCH_PATHS", [Path("./easyfs.yaml")])
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ── sizes ─────────────────────────────────────────────────────


def test_fmt(workdir):
    result = runner.invoke(app, ["fmt", "1536"])
    assert result.exit_code == 0
    assert result.output.strip() == "1.50K"


def test_fmt_suffix(workdir):
    result = runner.invoke(app, ["fmt", "2G"])
    assert result.output.strip() == "2.00G"


def test_fmt_invalid(workdir):
    result = runner.invoke(app, ["fmt", "lots"])
    assert result.exit_code == 1


def test_size(workdir):
    (workdir / "f.bin").write_bytes(b"x" * 2048)
    result = runner.invoke(app, ["size", "f.bin"])
    assert result.exit_code == 0
    assert result.output.strip() == "2.00K"


def test_size_missing(workdir):
    result = runner.invoke(app, ["size", "missing.bin"])
    assert result.exit_code == 1


# ── write / cat ───────────────────────────────────────────────


def test_write_then_cat(workdir):
    result = runner.invoke(app, ["write", "notes/today.txt", "hello"])
    assert result.exit_code == 0
    assert (workdir / "notes" / "today.txt").read_text() == "hello"

    result = runner.invoke(app, ["cat", "notes/today.txt"])
    assert result.exit_code == 0
    assert result.output == "hello"


def test_write_append(workdir):
    runner.invoke(app, ["write", "log.txt", "one\n"])
    result = runner.invoke(app, ["write", "--append", "log.txt", "two\n"])
    assert result.exit_code == 0
    assert (workdir / "log.txt").read_text() == "one\ntwo\n"


def test_write_from_stdin(workdir):
    result = runner.invoke(app, ["write", "in.txt"], input="from stdin")
    assert result.exit_code == 0
    assert (workdir / "in.txt").read_text() == "from stdin"


def test_cat_missing(workdir):
    result = runner.invoke(app, ["cat", "missing.txt"])
    assert result.exit_code == 1


# ── cp / mv / rm / mkdir / truncate ───────────────────────────


def test_cp_creates_parent(workdir):
    (workdir / "a.txt").write_text("data")
    result = runner.invoke(app, ["cp", "a.txt", "backup/a.txt"])
    assert result.exit_code == 0
    assert (workdir / "backup" / "a.txt").read_text() == "data"


def test_cp_missing_source(workdir):
    result = runner.invoke(app, ["cp", "missing.txt", "b.txt"])
    assert result.exit_code == 1


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_cp_uses_configured_file_mode(workdir):
    cfg = workdir / "easyfs.yaml"
    cfg.write_text("permissions:\n  file_mode: \"0600\"\n")
    (workdir / "a.txt").write_text("data")
    old_umask = os.umask(0)
    try:
        result = runner.invoke(app, ["cp", "a.txt", "b.txt"])
    finally:
        os.umask(old_umask)
    assert result.exit_code == 0
    assert stat.S_IMODE((workdir / "b.txt").stat().st_mode) == 0o600


def test_mv(workdir):
    (workdir / "a.txt").write_text("data")
    result = runner.invoke(app, ["mv", "a.txt", "archive/b.txt"])
    assert result.exit_code == 0
    assert not (workdir / "a.txt").exists()
    assert (workdir / "archive" / "b.txt").read_text() == "data"


def test_rm_force(workdir):
    (workdir / "tree" / "sub").mkdir(parents=True)
    (workdir / "tree" / "sub" / "f.txt").write_text("x")
    result = runner.invoke(app, ["rm", "--force", "tree"])
    assert result.exit_code == 0
    assert not (workdir / "tree").exists()


def test_rm_declined(workdir):
    (workdir / "keep.txt").write_text("x")
    result = runner.invoke(app, ["rm", "keep.txt"], input="n\n")
    assert result.exit_code == 0
    assert (workdir / "keep.txt").exists()


def test_rm_missing_is_not_an_error(workdir):
    result = runner.invoke(app, ["rm", "-f", "never.txt"])
    assert result.exit_code == 0


def test_mkdir(workdir):
    result = runner.invoke(app, ["mkdir", "a/b/c"])
    assert result.exit_code == 0
    assert (workdir / "a" / "b" / "c").is_dir()


def test_truncate(workdir):
    (workdir / "f.bin").write_bytes(b"0123456789")
    result = runner.invoke(app, ["truncate", "f.bin", "3"])
    assert result.exit_code == 0
    assert (workdir / "f.bin").read_bytes() == b"012"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_chmod(workdir):
    target = workdir / "f.txt"
    target.write_text("x")
    result = runner.invoke(app, ["chmod", "f.txt", "640"])
    assert result.exit_code == 0
    assert stat.S_IMODE(target.stat().st_mode) == 0o640


def test_chmod_missing(workdir):
    result = runner.invoke(app, ["chmod", "missing.txt", "644"])
    assert result.exit_code == 1


# ── find / slice ──────────────────────────────────────────────


def test_find(workdir):
    (workdir / "r.txt").write_bytes(b"key=value;next")
    result = runner.invoke(app, ["find", "r.txt", ";"])
    assert result.exit_code == 0
    assert result.output.strip() == "9"


def test_find_not_found(workdir):
    (workdir / "r.txt").write_bytes(b"key=value")
    result = runner.invoke(app, ["find", "r.txt", ";"])
    assert result.exit_code == 1


def test_slice_range(workdir):
    (workdir / "r.txt").write_bytes(b"key=value;next")
    result = runner.invoke(app, ["slice", "r.txt", "--start", "4", "--end", "9"])
    assert result.exit_code == 0
    assert result.output == "value"


def test_slice_until(workdir):
    (workdir / "r.txt").write_bytes(b"key=value;next")
    result = runner.invoke(app, ["slice", "r.txt", "--start", "4", "--until", ";"])
    assert result.exit_code == 0
    assert result.output == "value"


def test_slice_past_eof(workdir):
    (workdir / "r.txt").write_bytes(b"short")
    result = runner.invoke(app, ["slice", "r.txt", "--end", "100"])
    assert result.exit_code == 1


def test_slice_requires_one_bound(workdir):
    (workdir / "r.txt").write_bytes(b"short")
    result = runner.invoke(app, ["slice", "r.txt"])
    assert result.exit_code == 1


# ── ls / stat / glob ──────────────────────────────────────────


def test_ls(workdir):
    (workdir / "b.txt").write_text("b")
    (workdir / "a.txt").write_text("a")
    result = runner.invoke(app, ["ls", "."])
    assert result.exit_code == 0
    assert result.output.index("a.txt") < result.output.index("b.txt")


def test_ls_not_a_directory(workdir):
    result = runner.invoke(app, ["ls", "missing"])
    assert result.exit_code == 1


def test_stat(workdir):
    (workdir / "s.txt").write_bytes(b"x" * 1536)
    result = runner.invoke(app, ["stat", "s.txt"])
    assert result.exit_code == 0
    assert "1.50K" in result.output


def test_stat_missing(workdir):
    result = runner.invoke(app, ["stat", "missing"])
    assert result.exit_code == 1


def test_glob(workdir):
    (workdir / "one.log").write_text("1")
    (workdir / "two.log").write_text("2")
    result = runner.invoke(app, ["glob", "*.log"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["one.log", "two.log"]


# ── config ────────────────────────────────────────────────────


def test_init_config_writes_file(workdir):
    result = runner.invoke(app, ["init-config", "--output", "conf/easyfs.yaml"])
    assert result.exit_code == 0
    assert "permissions:" in (workdir / "conf" / "easyfs.yaml").read_text()


def test_config_option_applies_settings(workdir):
    cfg = workdir / "custom.yaml"
    cfg.write_text("text:\n  encoding: latin-1\n")
    result = runner.invoke(app, ["--config", str(cfg), "write", "l1.txt", "café"])
    assert result.exit_code == 0
    assert (workdir / "l1.txt").read_bytes() == b"caf\xe9"


def test_invalid_log_level(workdir):
    result = runner.invoke(app, ["--log-level", "chatty", "fmt", "1"])
    assert result.exit_code == 1


# ── home / where ──────────────────────────────────────────────


def test_home(workdir, monkeypatch):
    monkeypatch.setattr(paths, "home", lambda: "/home/tester")
    result = runner.invoke(app, ["home"])
    assert result.exit_code == 0
    assert result.output.strip() == "/home/tester"


def test_home_unresolvable(workdir, monkeypatch):
    def no_home():
        raise OSError("no home directory")

    monkeypatch.setattr(paths, "home", no_home)
    result = runner.invoke(app, ["home"])
    assert result.exit_code == 1


def test_where_reads_tmpdir(workdir, monkeypatch):
    if sys.platform == "win32":
        pytest.skip("TMPDIR is POSIX only")
    monkeypatch.setenv("TMPDIR", "/scratch/easyfs")
    monkeypatch.setattr(paths, "home", lambda: "/home/tester")
    result = runner.invoke(app, ["where"])
    assert result.exit_code == 0
    assert "/scratch/easyfs" in result.output
    assert "/home/tester" in result.output


def test_where_without_home(workdir, monkeypatch):
    def no_home():
        raise OSError("no home directory")

    monkeypatch.setattr(paths, "home", no_home)
    result = runner.invoke(app, ["where"])
    assert result.exit_code == 0
    assert "unavailable" in result.output
