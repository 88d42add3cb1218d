"""Show every resolved option (CLI command)."""

from __future__ import annotations

import json
from argparse import Namespace


def run(args: Namespace) -> None:
    """Print settings, paths, endpoint and (unless --no-fonts) fonts as one JSON document."""
    options = args.options
    data = options.snapshot(include_fonts=getattr(args, "fonts", True))
    print(f"# Options: {options.platform.value}")
    print(json.dumps(data, indent=2))
