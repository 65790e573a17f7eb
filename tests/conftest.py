import json
import sys
from pathlib import Path

import pytest

# Ensure the repo root is on sys.path so tests can import the local package.
ROOT = str(Path(__file__).resolve().parents[1])
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from extension_scaffold.package_manager import PackageManager  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_scaffold_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep developer shells from leaking settings into unit tests.
    for name in (
        "EXTENSION_SCAFFOLD_PACKAGE_MANAGER",
        "EXTENSION_SCAFFOLD_INSTALL_TIMEOUT_S",
        "EXTENSION_SCAFFOLD_SKIP_INSTALL",
        "EXTENSION_SCAFFOLD_VITE_ROOT",
        "EXTENSION_SCAFFOLD_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class FakeRunner:
    """Records package-manager commands and mimics their effect on package.json."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def __call__(self, args: list[str], cwd: Path, timeout_s: int) -> None:
        self.calls.append(list(args))
        pkg_path = Path(cwd) / "package.json"
        if args[1] == "init":
            pkg_path.write_text(
                json.dumps(
                    {"name": Path(cwd).name, "version": "1.0.0", "license": "ISC"},
                    indent=2,
                )
                + "\n",
                encoding="utf-8",
            )
            return
        pkg = json.loads(pkg_path.read_text(encoding="utf-8"))
        deps = pkg.setdefault("dependencies", {})
        for name in args[2:]:
            deps[name] = "^1.0.0"
        pkg_path.write_text(json.dumps(pkg, indent=2) + "\n", encoding="utf-8")

    @property
    def installs(self) -> list[list[str]]:
        return [c for c in self.calls if c[1] != "init"]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_pm(fake_runner: FakeRunner) -> PackageManager:
    return PackageManager(name="npm", timeout_s=5, runner=fake_runner)
