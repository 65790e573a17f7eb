"""The ordered checklist that bootstraps a browser-extension project.

Each step either creates a missing target with its default content or
applies a narrow patch to an existing one. Steps are evaluated once, in
order; the first failure aborts the run and earlier writes are kept.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from extension_scaffold import documents, templates
from extension_scaffold.config import ScaffoldSettings
from extension_scaffold.package_manager import PackageManager
from extension_scaffold.vite_config import (
    VITE_CONFIG_PATH,
    ensure_root_setting,
    render_vite_config,
)
from extension_scaffold.workspace import Outcome, Workspace, dump_json

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
TSCONFIG_JSON = "tsconfig.json"

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def package_name(name: str) -> str:
    """Turn a display name into a valid npm package name."""
    s = (name or "").strip().lower()
    s = _SLUG_RE.sub("-", s).strip("-")
    s = re.sub(r"-{2,}", "-", s)
    return s[:214] or "extension"


@dataclass(frozen=True)
class StepResult:
    step: str
    path: str
    outcome: Outcome


@dataclass
class ScaffoldReport:
    results: list[StepResult] = field(default_factory=list)

    def add(self, step: str, path: str, outcome: Outcome) -> None:
        self.results.append(StepResult(step=step, path=path, outcome=outcome))
        logger.info("%-14s %-9s %s", step, outcome, path or ".")

    def by_outcome(self, outcome: Outcome) -> list[StepResult]:
        return [r for r in self.results if r.outcome == outcome]

    @property
    def changes(self) -> list[StepResult]:
        return [r for r in self.results if r.outcome not in ("skipped", "unchanged")]

    @property
    def changed(self) -> bool:
        return bool(self.changes)


Step = tuple[str, str, Callable[[], Outcome]]


class Scaffolder:
    def __init__(
        self,
        workspace: Workspace,
        *,
        settings: ScaffoldSettings | None = None,
        package_manager: PackageManager | None = None,
        name: str | None = None,
    ) -> None:
        self.workspace = workspace
        self.settings = settings or ScaffoldSettings()
        self.package_manager = package_manager or PackageManager(
            name=self.settings.package_manager,
            timeout_s=self.settings.install_timeout_s,
        )
        self.name = (name or "").strip() or workspace.name or "extension"

    # -- package.json ------------------------------------------------------

    def init_package(self) -> Outcome:
        if self.workspace.exists(PACKAGE_JSON):
            return "skipped"
        if self.settings.skip_install:
            return self.workspace.ensure_file(
                PACKAGE_JSON,
                dump_json(
                    {
                        "name": package_name(self.name),
                        "version": "1.0.0",
                        "private": True,
                    }
                ),
            )
        self.package_manager.init(self.workspace.root)
        return "created"

    def patch_package_json(self) -> Outcome:
        before = self.workspace.read_json(PACKAGE_JSON)
        after = documents.patch_package_json(before)
        return self.workspace.write_json_if_changed(PACKAGE_JSON, before, after)

    def install_dependencies(self) -> Outcome:
        pkg = self.workspace.read_json(PACKAGE_JSON)
        missing = documents.missing_dependencies(pkg)
        if not missing:
            return "unchanged"
        if self.settings.skip_install:
            logger.warning("Skipping install of missing dependencies: %s", ", ".join(missing))
            return "skipped"
        self.package_manager.install(self.workspace.root, missing)
        return "installed"

    # -- config files ------------------------------------------------------

    def ensure_tsconfig(self) -> Outcome:
        created = self.workspace.ensure_file(TSCONFIG_JSON, templates.render_tsconfig())
        before = self.workspace.read_json(TSCONFIG_JSON, allow_comments=True)
        after = documents.patch_tsconfig(before)
        patched = self.workspace.write_json_if_changed(TSCONFIG_JSON, before, after)
        return created if created == "created" else patched

    def ensure_vite_root(self) -> Outcome:
        text = self.workspace.read_text(VITE_CONFIG_PATH)
        out = ensure_root_setting(text, self.settings.vite_root)
        if out == text:
            return "unchanged"
        return self.workspace.write_text_if_changed(VITE_CONFIG_PATH, out)

    def set_manifest_popup(self) -> Outcome:
        path = templates.MANIFEST_PATH
        before = self.workspace.read_json(path)
        after = documents.set_manifest_popup(before)
        return self.workspace.write_json_if_changed(path, before, after)

    # -- checklist ---------------------------------------------------------

    def _ensure(self, step: str, rel: str, content: str | bytes) -> Step:
        return (step, rel, lambda: self.workspace.ensure_file(rel, content))

    def _ensure_dir(self, step: str, rel: str) -> Step:
        return (step, rel, lambda: self.workspace.ensure_dir(rel))

    def steps(self) -> list[Step]:
        name = self.name
        manifest = templates.MANIFEST_PATH
        return [
            self._ensure_dir("project-dir", ""),
            ("package-init", PACKAGE_JSON, self.init_package),
            ("package-json", PACKAGE_JSON, self.patch_package_json),
            ("dependencies", PACKAGE_JSON, self.install_dependencies),
            self._ensure_dir("directories", "src"),
            self._ensure_dir("directories", "public"),
            ("tsconfig", TSCONFIG_JSON, self.ensure_tsconfig),
            self._ensure("vite-config", VITE_CONFIG_PATH, render_vite_config()),
            ("vite-root", VITE_CONFIG_PATH, self.ensure_vite_root),
            self._ensure("manifest", manifest, templates.render_manifest(name)),
            self._ensure("index-html", "index.html", templates.render_index_html(name)),
            self._ensure("main-tsx", "src/main.tsx", templates.render_main_tsx()),
            self._ensure("app-tsx", "src/App.tsx", templates.render_app_tsx(name)),
            self._ensure("icon", templates.ICON_PATH, templates.icon_png()),
            # Popup integration.
            self._ensure("popup-html", "popup.html", templates.render_popup_html(name)),
            self._ensure("popup-tsx", "src/popup.tsx", templates.render_popup_tsx()),
            self._ensure(
                "popup-component", "src/Popup.tsx", templates.render_popup_component_tsx()
            ),
            ("manifest-popup", manifest, self.set_manifest_popup),
        ]

    def run(self) -> ScaffoldReport:
        report = ScaffoldReport()
        logger.info("Scaffolding %s in %s", self.name, self.workspace.root)
        for step, path, action in self.steps():
            report.add(step, path, action())
        return report


def scaffold(
    project_dir: str,
    *,
    settings: ScaffoldSettings | None = None,
    package_manager: PackageManager | None = None,
    name: str | None = None,
) -> ScaffoldReport:
    return Scaffolder(
        Workspace.at(project_dir),
        settings=settings,
        package_manager=package_manager,
        name=name,
    ).run()
