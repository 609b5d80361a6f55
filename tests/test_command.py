from __future__ import annotations

import subprocess

import pytest

from arch_bootstrap.lib import command
from arch_bootstrap.lib.command import CommandError, run_cmd
from arch_bootstrap.lib.users import InvokingUser


def test_run_cmd_captures_output():
    result = run_cmd(["sh", "-c", "echo hello"])

    assert result.returncode == 0
    assert result.stdout.strip() == "hello"


def test_run_cmd_raises_with_exit_status():
    with pytest.raises(CommandError) as excinfo:
        run_cmd(["sh", "-c", "echo boom >&2; exit 3"])

    assert excinfo.value.returncode == 3
    assert "boom" in str(excinfo.value)


def test_run_cmd_unchecked_returns_failure():
    result = run_cmd(["sh", "-c", "exit 4"], check=False)

    assert result.returncode == 4


def test_missing_binary_is_command_not_found(monkeypatch, tmp_path):
    monkeypatch.setenv("PATH", str(tmp_path))

    with pytest.raises(CommandError) as excinfo:
        run_cmd(["pacman", "-Syu"])

    assert excinfo.value.returncode == 127


def test_missing_binary_unchecked(monkeypatch, tmp_path):
    monkeypatch.setenv("PATH", str(tmp_path))

    assert run_cmd(["pacman", "-Syu"], check=False).returncode == 127


def test_dry_run_does_not_execute(tmp_path):
    marker = tmp_path / "marker"

    result = run_cmd(["touch", str(marker)], dry_run=True)

    assert result.returncode == 0
    assert not marker.exists()


def test_run_as_user_drops_credentials(monkeypatch):
    seen = {}

    def fake_run(argv, **kwargs):
        seen.update(kwargs)
        return subprocess.CompletedProcess(argv, 0, stdout="", stderr="")

    monkeypatch.setattr(command.subprocess, "run", fake_run)
    alice = InvokingUser(name="alice", uid=1000, gid=1000, home="/home/alice", groups=(998, 999))

    run_cmd(["yay", "--version"], user=alice)

    assert seen["user"] == 1000
    assert seen["group"] == 1000
    assert seen["extra_groups"] == [998, 999]
    assert seen["env"]["HOME"] == "/home/alice"
    assert seen["env"]["USER"] == "alice"
    assert seen["env"]["LOGNAME"] == "alice"


def test_stream_leaves_output_attached(monkeypatch):
    seen = {}

    def fake_run(argv, **kwargs):
        seen.update(kwargs)
        return subprocess.CompletedProcess(argv, 0, stdout=None, stderr=None)

    monkeypatch.setattr(command.subprocess, "run", fake_run)

    result = run_cmd(["pacman", "-Syu"], stream=True)

    assert seen["stdout"] is None
    assert seen["stderr"] is None
    assert "user" not in seen
    assert result.stdout == ""
