"""Command-line front door for lazydir.

Parses CLI options, resolves the start directory, and runs the interactive
file manager. The directory the user quits in is printed on stdout so a
shell function can ``cd`` into it.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .input import DEFAULT_KEYBINDINGS, build_key_registry, format_binding, format_key_combo
from .logging_setup import configure_logging, resolve_log_path
from .runtime import run_app
from .runtime import config as runtime_config


def print_bindings() -> None:
    """Write the effective key bindings, one ``key  action`` pair per line."""
    registry = build_key_registry(runtime_config.load_keybindings())
    for combo, command in registry.items():
        sys.stdout.write(f"{format_key_combo(combo):<10} {format_binding(command)}\n")


def main(default_path: Path | None = None, argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch lazydir on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    parser = argparse.ArgumentParser(
        description="Keyboard-driven terminal file manager. Prints the final directory on exit."
    )
    parser.add_argument("path", nargs="?", default=None, help="Start directory. Defaults to current directory.")
    parser.add_argument("--style", default=None, help="Pygments style name for file previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable colour in the listing and previews.")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Append debug logs to PATH.")
    parser.add_argument("--print-bindings", action="store_true", help="Print effective key bindings and exit.")
    parser.add_argument(
        "--write-config",
        action="store_true",
        help="Write a config file with all defaults spelled out and exit.",
    )
    args = parser.parse_args(argv)

    configure_logging(resolve_log_path(args.log_file))

    if args.print_bindings:
        print_bindings()
        return
    if args.write_config:
        if not runtime_config.write_default_config(DEFAULT_KEYBINDINGS):
            raise SystemExit(f"Could not write config: {runtime_config.CONFIG_PATH}")
        sys.stdout.write(f"{runtime_config.CONFIG_PATH}\n")
        return

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path).expanduser()
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")
    # Parents are taken lexically, so history only ever holds normalized paths.
    start = Path(os.path.normpath(path.absolute()))

    try:
        final_directory = run_app(start, style=args.style, no_color=args.no_color)
    except OSError as exc:
        raise SystemExit(f"Cannot read directory {path}: {exc}") from exc
    sys.stdout.write(f"{final_directory}\n")


if __name__ == "__main__":
    main()
