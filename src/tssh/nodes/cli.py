"""CLI entry point for tssh. Uses Click for argument parsing."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from tssh.nodes.config import load_preferences, save_preferences
from tssh.nodes.errors import TsshError
from tssh.nodes.parser import has_unparsed_output, parse_status
from tssh.nodes.picker import pick_node
from tssh.nodes.render import ADDRESS_WIDTH, NAME_WIDTH
from tssh.nodes.ssh import build_target, ssh_connect
from tssh.nodes.status import fetch_status
from tssh.nodes.types import NodeRecord, Preferences
from tssh.tui.utils import pad_to_width

logger = logging.getLogger(__name__)

FALLBACK_USERNAME = "ubuntu"


def _run(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


def _has_tty() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def resolve_default_username(prefs: Preferences, node: NodeRecord) -> str:
    """Saved username, else the node's suggested user, else ``ubuntu``."""
    if prefs.default_username:
        return prefs.default_username
    suggested = node.suggested_user.rstrip("@")
    if suggested:
        return suggested
    return FALLBACK_USERNAME


def format_node_table(nodes: list[NodeRecord]) -> list[str]:
    return [
        f"{pad_to_width(node.name, NAME_WIDTH)}{pad_to_width(node.address, ADDRESS_WIDTH)}{node.status}"
        for node in nodes
    ]


@click.command()
@click.option("--user", "-u", default=None, help="Username to connect as (skips the prompt)")
@click.option("--filter", "-f", "filter_text", default="", help="Initial filter text")
@click.option("--dry-run", is_flag=True, help="Print the ssh target instead of connecting")
@click.option("--list", "list_only", is_flag=True, help="Print the node list and exit")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    help="Logging verbosity (written to stderr)",
)
def main(user, filter_text, dry_run, list_only, log_level):
    """Pick a Tailscale node interactively and ssh into it."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        exit_code = connect(
            user=user, filter_text=filter_text, dry_run=dry_run, list_only=list_only
        )
    except TsshError as e:
        raise click.ClickException(str(e)) from e
    sys.exit(exit_code)


def connect(
    *,
    user: str | None = None,
    filter_text: str = "",
    dry_run: bool = False,
    list_only: bool = False,
) -> int:
    prefs = load_preferences()

    output = _run(fetch_status())
    nodes = parse_status(output)
    logger.info("Parsed %d nodes from status output", len(nodes))

    if has_unparsed_output(output, nodes):
        click.echo(
            f"Warning: Could not parse tailscale status output. Raw output:\n{output}"
        )

    if not nodes:
        click.echo("No Tailscale nodes found. Make sure Tailscale is connected.")
        return 0

    if list_only:
        for line in format_node_table(nodes):
            click.echo(line)
        return 0

    if not _has_tty():
        click.echo("tssh: not a TTY (run in a real terminal)", err=True)
        return 1

    result = _run(
        pick_node(nodes, initial_node=prefs.last_node, initial_filter=filter_text)
    )
    if result.cancelled:
        click.echo("Cancelled.")
        return 0

    node = result.node
    changed = False

    if user:
        username = user
    else:
        username = click.prompt(
            f"Enter username for {node.name}",
            default=resolve_default_username(prefs, node),
        )
        if username != prefs.default_username:
            prefs.default_username = username
            changed = True

    if node.name != prefs.last_node:
        prefs.last_node = node.name
        changed = True

    if changed:
        save_preferences(prefs)

    target = build_target(username, node.address)
    if dry_run:
        click.echo(target)
        return 0

    click.echo(f"Connecting to {username}@{node.name}...")
    status = _run(ssh_connect(target))
    if status != 0:
        click.echo(f"SSH connection ended with non-zero status: {status}")
    return 0


if __name__ == "__main__":
    main()
