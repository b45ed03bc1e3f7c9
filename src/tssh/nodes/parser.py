"""Parse ``tailscale status`` output into node records.

The format is one peer per line::

    100.74.180.3    staging-lb-1    piotr@       linux   offline
    [address]       [hostname]      [user@]      [os]    [status]

Metadata rows (tag maps, advertised subnets) and anything else that does
not have this shape are skipped.
"""

from __future__ import annotations

import re

from tssh.nodes.types import NodeRecord

SKIP_MARKERS: tuple[str, ...] = ("tagmap", "subnet")

_NODE_LINE_RE = re.compile(r"^(\d+\.\d+\.\d+\.\d+)\s+(\S+)\s+(\S*)\s+(\S+)\s+(\S+)")


def parse_status_line(line: str) -> NodeRecord | None:
    """Parse a single status line, or return ``None`` if it is not a node."""
    if not line.strip() or any(marker in line for marker in SKIP_MARKERS):
        return None

    match = _NODE_LINE_RE.match(line)
    if not match:
        return None

    address, name, suggested_user, _os, status = match.groups()
    if not name or not address:
        return None

    return NodeRecord(
        name=name,
        address=address,
        suggested_user=suggested_user,
        status=status,
    )


def parse_status(text: str) -> list[NodeRecord]:
    """Parse the full status output, preserving line order."""
    nodes: list[NodeRecord] = []
    for line in text.splitlines():
        node = parse_status_line(line)
        if node is not None:
            nodes.append(node)
    return nodes


def has_unparsed_output(text: str, nodes: list[NodeRecord]) -> bool:
    """True when the command printed something but no node could be parsed."""
    return not nodes and bool(text.strip())
