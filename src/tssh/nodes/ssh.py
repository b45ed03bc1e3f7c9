"""SSH invocation. Shells out to the ssh binary with the terminal passed through."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Sequence

from tssh.nodes.errors import SSHLaunchError

logger = logging.getLogger(__name__)


def build_target(username: str, address: str) -> str:
    return f"{username}@{address}"


async def ssh_connect(
    target: str,
    *,
    ssh_binary: str = "ssh",
    extra_args: Sequence[str] = (),
) -> int:
    """Run an interactive ssh session to *target*. Returns the exit code."""
    argv = [ssh_binary, *extra_args, target]
    logger.debug("Running %s", " ".join(argv))

    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=sys.stdin,
            stdout=sys.stdout,
            stderr=sys.stderr,
        )
    except OSError as e:
        raise SSHLaunchError(f"Failed to execute SSH command: {e}") from e

    await proc.wait()
    return proc.returncode or 0
