"""CLI entry point: argument parsing, logging setup, Options construction and subcommand dispatch."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from desktop_options import __version__
from desktop_options.config import load_config
from desktop_options.options import RUN_DIAGNOSTICS_OPTION, Options
from desktop_options.platform import Platform
from desktop_options.storage import open_store


def setup_logging(verbose: bool = False, quiet: bool = False, config: dict | None = None) -> None:
    """
    Configure the desktop_options logger: level from --verbose/--quiet or config,
    console handler, optional file handler from config.
    """
    if config is None:
        config = load_config(None)
    log_cfg = config.get("logging") or {}
    if verbose:
        level_name = "DEBUG"
    elif quiet:
        level_name = "ERROR"
    else:
        level_name = (log_cfg.get("level") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    root = logging.getLogger("desktop_options")
    root.setLevel(level)
    if not root.handlers:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(fmt)
        root.addHandler(console)
        log_file = log_cfg.get("file")
        if log_file:
            try:
                fh = logging.FileHandler(log_file, encoding="utf-8")
                fh.setFormatter(fmt)
                root.addHandler(fh)
            except OSError:
                pass


def build_options(args: argparse.Namespace, config: dict) -> Options:
    """Open the configured store and construct the process Options from parsed arguments."""
    store = open_store(config.get("store") or {}, getattr(args, "settings", None))
    platform = Platform(args.platform) if getattr(args, "platform", None) else None
    traversal = (config.get("paths") or {}).get("docs_bundle_traversal")
    kwargs = {"docs_bundle_traversal": traversal} if traversal else {}
    options = Options(store, platform, **kwargs)
    argv = [sys.argv[0]]
    if getattr(args, "run_diagnostics", False):
        argv.append(RUN_DIAGNOSTICS_OPTION)
    options.init_from_command_line(argv)
    if getattr(args, "scripts_path", None):
        options.set_scripts_path(args.scripts_path)
    if getattr(args, "scratch_root", None):
        options.paths.set_scratch_root(args.scratch_root)
    return options


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="desktop-options",
        description="Inspect and edit desktop shell options (settings, resolved paths, fonts, session port).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument("-v", "--verbose", action="store_true", help="Verbose (DEBUG) output.")
    log_group.add_argument("-q", "--quiet", action="store_true", help="Quiet (errors only).")
    parser.add_argument("--config", type=Path, help="Tool config file (default: ~/.desktop-options/config.json).")
    parser.add_argument("--settings", type=str, help="Use a JSON settings file instead of the configured store.")
    parser.add_argument(
        "--platform",
        choices=[p.value for p in Platform],
        help="Resolve as if running on this platform (default: current).",
    )
    parser.add_argument("--scripts-path", type=Path, help="Scripts directory set by the host at startup.")
    parser.add_argument("--scratch-root", type=Path, help="Scratch root for the temp directory.")
    parser.add_argument(RUN_DIAGNOSTICS_OPTION, dest="run_diagnostics", action="store_true", help="Enable diagnostics mode.")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    p_show = subparsers.add_parser("show", help="Show every resolved option as JSON.")
    p_show.add_argument("--no-fonts", dest="fonts", action="store_false", help="Skip font detection (no Qt GUI needed).")
    p_show.set_defaults(run="show")

    p_get = subparsers.add_parser("get", help="Print one setting (stored value or default).")
    p_get.add_argument("key", help="Setting key (e.g. view.zoomLevel).")
    p_get.set_defaults(run="settings", action="get")

    p_set = subparsers.add_parser("set", help="Persist one setting.")
    p_set.add_argument("assignment", metavar="KEY=VALUE", help="Setting key and JSON or plain-string value.")
    p_set.set_defaults(run="settings", action="set")

    p_unset = subparsers.add_parser("unset", help="Remove one setting so its default applies.")
    p_unset.add_argument("key", help="Setting key.")
    p_unset.set_defaults(run="settings", action="unset")

    p_paths = subparsers.add_parser("paths", help="Show resolved filesystem locations.")
    p_paths.set_defaults(run="paths")

    p_fonts = subparsers.add_parser("fonts", help="Show selected proportional and fixed-width fonts.")
    p_fonts.set_defaults(run="fonts")

    p_port = subparsers.add_parser("port", help="Show the session port and local peer.")
    p_port.add_argument("--new", action="store_true", help="Regenerate the endpoint before printing.")
    p_port.set_defaults(run="port")

    args = parser.parse_args()
    config = load_config(args.config)
    setup_logging(verbose=args.verbose, quiet=args.quiet, config=config)

    run = getattr(args, "run", None)
    if not run:
        parser.print_help()
        sys.exit(0)

    args.options = build_options(args, config)

    if run == "show":
        from desktop_options.commands.show import run as cmd_run
    elif run == "settings":
        from desktop_options.commands.settings_cmd import run as cmd_run
    elif run == "paths":
        from desktop_options.commands.paths_cmd import run as cmd_run
    elif run == "fonts":
        from desktop_options.commands.fonts_cmd import run as cmd_run
    elif run == "port":
        from desktop_options.commands.port import run as cmd_run
    else:
        parser.print_help()
        sys.exit(0)

    cmd_run(args)
