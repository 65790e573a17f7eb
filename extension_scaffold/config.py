from __future__ import annotations

import os
from dataclasses import dataclass, replace

PACKAGE_MANAGERS = ("npm", "pnpm", "yarn")

DEFAULT_PACKAGE_MANAGER = "npm"
DEFAULT_INSTALL_TIMEOUT_S = 600
DEFAULT_VITE_ROOT = "."


def _env_str(name: str) -> str:
    return str(os.environ.get(name) or "").strip()


def _env_bool(name: str, *, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    return default


def _env_int(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        return int(default)


def parse_package_manager(raw: str | None) -> str:
    v = (raw or "").strip().lower()
    return v if v in PACKAGE_MANAGERS else DEFAULT_PACKAGE_MANAGER


@dataclass(frozen=True)
class ScaffoldSettings:
    package_manager: str = DEFAULT_PACKAGE_MANAGER
    install_timeout_s: int = DEFAULT_INSTALL_TIMEOUT_S
    skip_install: bool = False
    vite_root: str = DEFAULT_VITE_ROOT
    log_level: str = "INFO"

    def with_overrides(self, **overrides: object) -> ScaffoldSettings:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "package_manager" in changes:
            changes["package_manager"] = parse_package_manager(
                str(changes["package_manager"])
            )
        return replace(self, **changes)


def load_settings() -> ScaffoldSettings:
    return ScaffoldSettings(
        package_manager=parse_package_manager(
            _env_str("EXTENSION_SCAFFOLD_PACKAGE_MANAGER")
        ),
        install_timeout_s=max(
            1,
            _env_int("EXTENSION_SCAFFOLD_INSTALL_TIMEOUT_S", DEFAULT_INSTALL_TIMEOUT_S),
        ),
        skip_install=_env_bool("EXTENSION_SCAFFOLD_SKIP_INSTALL", default=False),
        vite_root=_env_str("EXTENSION_SCAFFOLD_VITE_ROOT") or DEFAULT_VITE_ROOT,
        log_level=(_env_str("EXTENSION_SCAFFOLD_LOG_LEVEL") or "INFO").upper(),
    )
