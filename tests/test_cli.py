from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from pydevconf import ConfigStore, cli


@pytest.fixture
def conf(tmp_path: Path) -> Path:
    return tmp_path / "devices.conf"


def run(conf: Path, *argv: str) -> int:
    return cli.main(["--file", str(conf), "--no-sync", *argv])


def test_cli_set_and_get(conf, capsys):
    assert run(conf, "set", "Device", "Name", "Widget") == 0
    capsys.readouterr()
    assert run(conf, "get", "Device", "Name") == 0
    assert capsys.readouterr().out.strip() == "Widget"
    assert ConfigStore.load(conf).get_string("Device", "Name") == "Widget"


def test_cli_get_missing(conf, capsys):
    assert run(conf, "get", "Device", "Name") == 1
    assert run(conf, "get", "Device", "Name", "--default", "none") == 0
    assert capsys.readouterr().out.strip() == "none"


def test_cli_typed_set_and_get(conf, capsys):
    assert run(conf, "set", "Info", "Port", "0x1F", "--type", "uint16") == 0
    assert run(conf, "set", "Info", "Paired", "true", "--type", "bool") == 0
    assert conf.read_text() == "[Info]\nPort = 31\nPaired = true\n"
    capsys.readouterr()
    assert run(conf, "get", "Info", "Port", "--type", "int") == 0
    assert capsys.readouterr().out.strip() == "31"
    assert run(conf, "get", "Info", "Paired", "--type", "bool") == 0
    assert capsys.readouterr().out.strip() == "true"


def test_cli_typed_get_invalid_value(conf, capsys):
    conf.write_text("[s]\nk = 42x\n")
    assert run(conf, "get", "s", "k", "--type", "int") == 1
    assert "not a valid int" in capsys.readouterr().err
    assert run(conf, "get", "s", "k", "--type", "int", "--default", "7") == 0
    assert capsys.readouterr().out.strip() == "7"


def test_cli_set_rejects_bad_values(conf, capsys):
    assert run(conf, "set", "s", "k", "maybe", "--type", "bool") == 2
    assert run(conf, "set", "s", "k", "70000", "--type", "uint16") == 2
    assert run(conf, "set", "s", "k=v", "x") == 2
    assert run(conf, "set", "s", "k", " padded") == 2
    assert not conf.exists()


def test_cli_sections_unset_drop(conf, capsys):
    conf.write_text("# note\n[a]\nx = 1\ny = 2\n\n[b]\nz = 3\n")
    assert run(conf, "sections") == 0
    assert capsys.readouterr().out.split() == ["a", "b"]
    assert run(conf, "sections", "--comments") == 0
    assert capsys.readouterr().out.splitlines() == ["# note", "a", "b"]
    assert run(conf, "unset", "a", "x") == 0
    assert run(conf, "unset", "a", "x") == 1
    assert run(conf, "drop", "b") == 0
    assert run(conf, "drop", "b") == 1
    assert conf.read_text() == "# note\n[a]\ny = 2\n"


def test_cli_dump_sorted(conf, capsys):
    conf.write_text("[s]\nb = 2\na = 1\n")
    assert run(conf, "dump", "--sort") == 0
    assert capsys.readouterr().out == "[s]\na = 1\nb = 2\n"
    assert conf.read_text() == "[s]\nb = 2\na = 1\n"


def test_cli_path_uses_env(tmp_path: Path, monkeypatch, capsys):
    target = tmp_path / "env.conf"
    monkeypatch.setenv("PYDEVCONF_PATH", str(target))
    assert cli.main(["path"]) == 0
    assert capsys.readouterr().out.strip() == str(target.resolve())


def test_cli_unreadable_file_reports_error(tmp_path: Path, capsys):
    assert cli.main(["--file", str(tmp_path), "sections"]) == 1
    assert "unable to open" in capsys.readouterr().err


def test_cli_uncreatable_directory_reports_error(tmp_path: Path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    target = blocker / "sub" / "devices.conf"
    assert run(target, "set", "Device", "Name", "Widget") == 1
    assert "unable to create" in capsys.readouterr().err
    assert blocker.read_text() == "not a directory"


def test_cli_no_command_prints_help(capsys):
    assert cli.main([]) == 1
    assert "usage: pydevconf" in capsys.readouterr().out


def test_module_entry_point_help():
    src = Path(__file__).resolve().parents[1] / "src"
    proc = subprocess.run(
        [sys.executable, "-m", "pydevconf", "--help"],
        capture_output=True,
        text=True,
        env={**os.environ, "PYTHONPATH": str(src)},
    )
    assert proc.returncode == 0
    assert "usage: pydevconf" in proc.stdout
