from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from extension_scaffold.errors import DocumentError

REQUIRED_DEPENDENCIES: tuple[str, ...] = ("vite", "react", "react-dom", "typescript")

PACKAGE_SCRIPTS: dict[str, str] = {
    "dev": "vite",
    "build": "tsc && vite build",
    "preview": "vite preview",
}

TSCONFIG_COMPILER_OPTIONS: dict[str, Any] = {
    "jsx": "react-jsx",
}

POPUP_HTML = "popup.html"


def set_keys(doc: Mapping[str, Any], values: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``doc`` with top-level ``values`` applied.

    Existing keys keep their position; new keys are appended.
    """
    out = dict(doc)
    for k, v in values.items():
        out[k] = v
    return out


def ensure_section(
    doc: Mapping[str, Any],
    section: str,
    default: Mapping[str, Any] | None = None,
    *,
    doc_name: str = "document",
) -> dict[str, Any]:
    """Return a copy of ``doc`` where ``section`` is an object.

    A missing section is added with a copy of ``default``; an existing one is
    kept as is. A non-object value is an error, never silently replaced.
    """
    out = dict(doc)
    current = out.get(section)
    if current is None:
        out[section] = dict(default or {})
    elif not isinstance(current, dict):
        raise DocumentError(doc_name, f"{section!r} must be an object")
    return out


def set_section_keys(
    doc: Mapping[str, Any],
    section: str,
    values: Mapping[str, Any],
    *,
    default: Mapping[str, Any] | None = None,
    doc_name: str = "document",
) -> dict[str, Any]:
    out = ensure_section(doc, section, default, doc_name=doc_name)
    out[section] = set_keys(out[section], values)
    return out


def declared_dependencies(pkg: Mapping[str, Any]) -> set[str]:
    # dependencies and devDependencies both count as installed.
    names: set[str] = set()
    for field in ("dependencies", "devDependencies"):
        deps = pkg.get(field)
        if isinstance(deps, dict):
            names.update(str(k) for k in deps)
    return names


def missing_dependencies(
    pkg: Mapping[str, Any], required: Iterable[str] = REQUIRED_DEPENDENCIES
) -> list[str]:
    declared = declared_dependencies(pkg)
    return [name for name in required if name not in declared]


def patch_package_json(pkg: Mapping[str, Any]) -> dict[str, Any]:
    out = set_keys(pkg, {"type": "module"})
    return set_section_keys(out, "scripts", PACKAGE_SCRIPTS, doc_name="package.json")


def patch_tsconfig(tsconfig: Mapping[str, Any]) -> dict[str, Any]:
    return set_section_keys(
        tsconfig,
        "compilerOptions",
        TSCONFIG_COMPILER_OPTIONS,
        doc_name="tsconfig.json",
    )


def set_manifest_popup(
    manifest: Mapping[str, Any], popup: str = POPUP_HTML
) -> dict[str, Any]:
    return set_section_keys(
        manifest, "action", {"default_popup": popup}, doc_name="manifest.json"
    )
