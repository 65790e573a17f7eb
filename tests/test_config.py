from __future__ import annotations

from extension_scaffold.config import ScaffoldSettings, load_settings


def test_defaults_without_env():
    assert load_settings() == ScaffoldSettings()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("EXTENSION_SCAFFOLD_PACKAGE_MANAGER", " PNPM ")
    monkeypatch.setenv("EXTENSION_SCAFFOLD_INSTALL_TIMEOUT_S", "30")
    monkeypatch.setenv("EXTENSION_SCAFFOLD_SKIP_INSTALL", "yes")
    monkeypatch.setenv("EXTENSION_SCAFFOLD_VITE_ROOT", "src")
    monkeypatch.setenv("EXTENSION_SCAFFOLD_LOG_LEVEL", "debug")
    s = load_settings()
    assert s.package_manager == "pnpm"
    assert s.install_timeout_s == 30
    assert s.skip_install is True
    assert s.vite_root == "src"
    assert s.log_level == "DEBUG"


def test_invalid_env_values_fall_back(monkeypatch):
    monkeypatch.setenv("EXTENSION_SCAFFOLD_PACKAGE_MANAGER", "bun")
    monkeypatch.setenv("EXTENSION_SCAFFOLD_INSTALL_TIMEOUT_S", "soon")
    monkeypatch.setenv("EXTENSION_SCAFFOLD_SKIP_INSTALL", "maybe")
    s = load_settings()
    assert s.package_manager == "npm"
    assert s.install_timeout_s == 600
    assert s.skip_install is False


def test_timeout_is_at_least_one_second(monkeypatch):
    monkeypatch.setenv("EXTENSION_SCAFFOLD_INSTALL_TIMEOUT_S", "0")
    assert load_settings().install_timeout_s == 1


def test_with_overrides_ignores_none():
    s = ScaffoldSettings(vite_root="src").with_overrides(
        vite_root=None, package_manager="yarn", skip_install=True
    )
    assert s.vite_root == "src"
    assert s.package_manager == "yarn"
    assert s.skip_install is True
