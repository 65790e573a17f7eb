"""Command-line entry point.

Usage:
    # Scaffold into the current directory
    extension-scaffold

    # Scaffold a new project directory with pnpm
    extension-scaffold my-extension --package-manager pnpm

    # Only write files, never run the package manager
    extension-scaffold my-extension --skip-install
"""

from __future__ import annotations

import argparse
import logging

from extension_scaffold import __version__
from extension_scaffold.config import PACKAGE_MANAGERS, load_settings
from extension_scaffold.errors import ScaffoldError
from extension_scaffold.scaffold import scaffold

logger = logging.getLogger(__name__)


def resolve_log_level(name: str) -> int:
    # getLevelName maps known names to ints and anything else to a string.
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="extension-scaffold",
        description="Create or update a React + Vite + TypeScript browser extension project",
    )
    parser.add_argument(
        "project_dir",
        nargs="?",
        default=".",
        help="Project directory (default: current directory)",
    )
    parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Extension display name (default: project directory name)",
    )
    parser.add_argument(
        "--package-manager",
        choices=PACKAGE_MANAGERS,
        default=None,
        help="Package manager used for init/install (default: npm)",
    )
    parser.add_argument(
        "--vite-root",
        type=str,
        default=None,
        help="Value inserted as `root` in vite.config.ts (default: .)",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        default=None,
        help="Never run the package manager",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = load_settings().with_overrides(
        package_manager=args.package_manager,
        vite_root=args.vite_root,
        skip_install=args.skip_install,
    )

    level = logging.DEBUG if args.verbose else resolve_log_level(settings.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        report = scaffold(args.project_dir, settings=settings, name=args.name)
    except ScaffoldError as exc:
        logger.error("Scaffolding failed: %s", exc)
        return 1

    if report.changed:
        logger.info(
            "Done: %d target(s) changed (%d created, %d patched, %d installed)",
            len(report.changes),
            len(report.by_outcome("created")),
            len(report.by_outcome("patched")),
            len(report.by_outcome("installed")),
        )
    else:
        logger.info("Done: project already up to date")
    return 0
