"""Show the selected fonts (CLI command)."""

from __future__ import annotations

from argparse import Namespace


def run(args: Namespace) -> None:
    options = args.options
    print(f"proportional: {options.proportional_font().css()}")
    print(f"fixed_width:  {options.fixed_width_font().css()}")
