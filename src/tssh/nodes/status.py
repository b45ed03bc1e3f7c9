"""Run ``tailscale status`` and capture its output."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
import subprocess
from typing import Sequence

from tssh.nodes.errors import StatusCommandError

logger = logging.getLogger(__name__)

STATUS_COMMAND_ENV = "TSSH_STATUS_COMMAND"
DEFAULT_STATUS_COMMAND: tuple[str, ...] = ("tailscale", "status")


def get_status_command() -> list[str]:
    override = os.environ.get(STATUS_COMMAND_ENV)
    if override:
        return shlex.split(override)
    return list(DEFAULT_STATUS_COMMAND)


async def fetch_status(command: Sequence[str] | None = None) -> str:
    """Run the status command and return its stdout.

    Raises :class:`StatusCommandError` if the binary cannot be started or
    exits non-zero; the captured stderr is attached to the error.
    """
    argv = list(command) if command is not None else get_status_command()
    display = " ".join(argv)
    logger.debug("Running %s", display)

    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        raise StatusCommandError(
            f"Failed to execute '{display}'. Is tailscale installed and in your PATH?"
        ) from e

    stdout_bytes, stderr_bytes = await proc.communicate()
    stderr = stderr_bytes.decode(errors="replace")

    if proc.returncode != 0:
        raise StatusCommandError(
            f"Tailscale status command failed: {stderr.strip()}. "
            "Make sure Tailscale is connected.",
            stderr=stderr,
        )

    return stdout_bytes.decode(errors="replace")
