from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from extension_scaffold.config import DEFAULT_INSTALL_TIMEOUT_S, parse_package_manager
from extension_scaffold.errors import PackageManagerError

logger = logging.getLogger(__name__)

# (args, cwd, timeout_s) -> None; raises on failure.
CommandRunner = Callable[[list[str], Path, int], None]

_INIT_COMMANDS: dict[str, list[str]] = {
    "npm": ["npm", "init", "-y"],
    "pnpm": ["pnpm", "init"],
    "yarn": ["yarn", "init", "-y"],
}

_ADD_COMMANDS: dict[str, list[str]] = {
    "npm": ["npm", "install"],
    "pnpm": ["pnpm", "add"],
    "yarn": ["yarn", "add"],
}


def run_command(args: list[str], cwd: Path, timeout_s: int) -> None:
    """Run ``args`` in ``cwd``; output goes straight to the terminal."""
    try:
        subprocess.run(
            args,
            cwd=str(cwd),
            env=os.environ.copy(),
            check=True,
            timeout=timeout_s,
        )
    except FileNotFoundError as exc:
        raise PackageManagerError(args, f"command not found ({args[0]})") from exc
    except subprocess.TimeoutExpired as exc:
        raise PackageManagerError(args, f"timed out after {timeout_s}s") from exc
    except subprocess.CalledProcessError as exc:
        raise PackageManagerError(args, f"exited with status {exc.returncode}") from exc


@dataclass(frozen=True)
class PackageManager:
    name: str = "npm"
    timeout_s: int = DEFAULT_INSTALL_TIMEOUT_S
    runner: CommandRunner = run_command

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", parse_package_manager(self.name))

    def init_command(self) -> list[str]:
        return list(_INIT_COMMANDS[self.name])

    def add_command(self, packages: Sequence[str]) -> list[str]:
        return [*_ADD_COMMANDS[self.name], *packages]

    def init(self, cwd: Path) -> None:
        args = self.init_command()
        logger.info("Initializing package.json: %s", " ".join(args))
        self.runner(args, cwd, self.timeout_s)

    def install(self, cwd: Path, packages: Sequence[str]) -> bool:
        """Install ``packages``; returns False without running anything if empty."""
        if not packages:
            return False
        args = self.add_command(packages)
        logger.info("Installing dependencies: %s", " ".join(args))
        self.runner(args, cwd, self.timeout_s)
        return True
