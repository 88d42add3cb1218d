"""Show the session endpoint (CLI command)."""

from __future__ import annotations

from argparse import Namespace


def run(args: Namespace) -> None:
    """Print the port and, on named-pipe platforms, the local peer. --new regenerates first."""
    options = args.options
    port = options.new_port_number() if getattr(args, "new", False) else options.port_number()
    print(f"port: {port}")
    peer = options.local_peer()
    if peer is not None:
        print(f"local_peer: {peer}")
