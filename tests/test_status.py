"""Tests for tssh.nodes.status and tssh.nodes.ssh -- external commands."""

from __future__ import annotations

import pytest

from tssh.nodes import ssh
from tssh.nodes.errors import SSHLaunchError, StatusCommandError
from tssh.nodes.ssh import build_target, ssh_connect
from tssh.nodes.status import (
    DEFAULT_STATUS_COMMAND,
    STATUS_COMMAND_ENV,
    fetch_status,
    get_status_command,
)


class TestGetStatusCommand:
    def test_default(self, monkeypatch):
        monkeypatch.delenv(STATUS_COMMAND_ENV, raising=False)
        assert get_status_command() == list(DEFAULT_STATUS_COMMAND)

    def test_env_override_is_split(self, monkeypatch):
        monkeypatch.setenv(STATUS_COMMAND_ENV, "tailscale --socket '/tmp/ts sock' status")
        assert get_status_command() == ["tailscale", "--socket", "/tmp/ts sock", "status"]


class TestFetchStatus:
    @pytest.mark.asyncio
    async def test_returns_stdout(self):
        out = await fetch_status(["sh", "-c", "printf '100.64.0.1  a  u@  linux  -\\n'"])
        assert out == "100.64.0.1  a  u@  linux  -\n"

    @pytest.mark.asyncio
    async def test_uses_env_command(self, monkeypatch):
        monkeypatch.setenv(STATUS_COMMAND_ENV, "echo from-env")
        assert await fetch_status() == "from-env\n"

    @pytest.mark.asyncio
    async def test_non_zero_exit_carries_stderr(self):
        with pytest.raises(StatusCommandError) as exc_info:
            await fetch_status(["sh", "-c", "echo 'not logged in' >&2; exit 3"])
        assert exc_info.value.stderr == "not logged in\n"
        assert "not logged in" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_binary(self):
        with pytest.raises(StatusCommandError) as exc_info:
            await fetch_status(["tssh-no-such-binary-xyz", "status"])
        assert "Is tailscale installed" in str(exc_info.value)


class FakeProcess:
    def __init__(self, returncode: int) -> None:
        self.returncode = returncode

    async def wait(self) -> int:
        return self.returncode


class TestSSH:
    def test_build_target(self):
        assert build_target("ubuntu", "100.64.0.1") == "ubuntu@100.64.0.1"

    @pytest.mark.asyncio
    async def test_runs_ssh_with_target(self, monkeypatch):
        calls = []

        async def fake_exec(*argv, **kwargs):
            calls.append(argv)
            return FakeProcess(0)

        monkeypatch.setattr(ssh.asyncio, "create_subprocess_exec", fake_exec)
        assert await ssh_connect("ops@100.64.0.1", extra_args=["-A"]) == 0
        assert calls == [("ssh", "-A", "ops@100.64.0.1")]

    @pytest.mark.asyncio
    async def test_returns_exit_status(self, monkeypatch):
        async def fake_exec(*argv, **kwargs):
            return FakeProcess(255)

        monkeypatch.setattr(ssh.asyncio, "create_subprocess_exec", fake_exec)
        assert await ssh_connect("ops@100.64.0.1") == 255

    @pytest.mark.asyncio
    async def test_launch_failure(self, monkeypatch):
        async def fake_exec(*argv, **kwargs):
            raise FileNotFoundError(argv[0])

        monkeypatch.setattr(ssh.asyncio, "create_subprocess_exec", fake_exec)
        with pytest.raises(SSHLaunchError):
            await ssh_connect("ops@100.64.0.1", ssh_binary="no-ssh")
