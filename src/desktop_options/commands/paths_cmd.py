"""Show resolved filesystem locations (CLI command)."""

from __future__ import annotations

from argparse import Namespace


def run(args: Namespace) -> None:
    """Print one line per named path: name, strategy, path."""
    for name, entry in args.options.path_snapshot().items():
        path = entry["path"] or "(unresolved)"
        print(f"{name:<18} {entry['strategy']:<11} {path}")
