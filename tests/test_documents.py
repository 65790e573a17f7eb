from __future__ import annotations

import pytest

from extension_scaffold.documents import (
    REQUIRED_DEPENDENCIES,
    declared_dependencies,
    ensure_section,
    missing_dependencies,
    patch_package_json,
    patch_tsconfig,
    set_manifest_popup,
    set_section_keys,
)
from extension_scaffold.errors import DocumentError


def test_ensure_section_adds_default_copy():
    default = {"a": 1}
    out = ensure_section({}, "scripts", default)
    assert out == {"scripts": {"a": 1}}
    out["scripts"]["b"] = 2
    assert default == {"a": 1}


def test_ensure_section_keeps_existing_section():
    doc = {"scripts": {"lint": "eslint ."}}
    assert ensure_section(doc, "scripts", {"dev": "vite"}) == doc


def test_ensure_section_rejects_non_object():
    with pytest.raises(DocumentError):
        ensure_section({"scripts": "vite"}, "scripts", doc_name="package.json")


def test_set_section_keys_overwrites_only_named_keys():
    doc = {"name": "x", "scripts": {"dev": "old", "lint": "eslint ."}}
    out = set_section_keys(doc, "scripts", {"dev": "vite"})
    assert out["scripts"] == {"dev": "vite", "lint": "eslint ."}
    assert out["name"] == "x"
    # Input is not mutated.
    assert doc["scripts"]["dev"] == "old"


def test_patch_package_json_preserves_unknown_fields_and_order():
    pkg = {"name": "ext", "version": "1.0.0", "keywords": ["a"], "scripts": {"test": "vitest"}}
    out = patch_package_json(pkg)
    assert list(out)[:3] == ["name", "version", "keywords"]
    assert out["keywords"] == ["a"]
    assert out["type"] == "module"
    assert out["scripts"]["test"] == "vitest"
    assert out["scripts"]["dev"] == "vite"
    assert out["scripts"]["build"] == "tsc && vite build"


def test_patch_package_json_is_idempotent():
    once = patch_package_json({"name": "ext"})
    assert patch_package_json(once) == once


def test_dependencies_and_dev_dependencies_count_as_installed():
    pkg = {"dependencies": {"react": "^18"}, "devDependencies": {"vite": "^5"}}
    assert declared_dependencies(pkg) == {"react", "vite"}
    assert missing_dependencies(pkg) == ["react-dom", "typescript"]


def test_missing_dependencies_when_none_declared():
    assert missing_dependencies({"name": "ext"}) == list(REQUIRED_DEPENDENCIES)
    assert set(REQUIRED_DEPENDENCIES) == {"vite", "react", "react-dom", "typescript"}


def test_missing_dependencies_ignores_malformed_sections():
    assert missing_dependencies({"dependencies": ["vite"]}) == list(REQUIRED_DEPENDENCIES)


def test_patch_tsconfig_sets_jsx_and_keeps_other_options():
    out = patch_tsconfig({"compilerOptions": {"strict": False, "jsx": "preserve"}})
    assert out["compilerOptions"] == {"strict": False, "jsx": "react-jsx"}


def test_set_manifest_popup_overrides_previous_value():
    manifest = {
        "manifest_version": 3,
        "action": {"default_popup": "index.html", "default_title": "Hi"},
        "permissions": ["storage"],
    }
    out = set_manifest_popup(manifest)
    assert out["action"] == {"default_popup": "popup.html", "default_title": "Hi"}
    assert out["permissions"] == ["storage"]


def test_set_manifest_popup_creates_action_section():
    assert set_manifest_popup({"manifest_version": 3})["action"] == {
        "default_popup": "popup.html"
    }
