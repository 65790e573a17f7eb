"""Canonical default contents for every file the scaffolder creates."""

from __future__ import annotations

import base64
import html
from typing import Any

from extension_scaffold.workspace import dump_json

# 1x1 transparent PNG, used until the project ships a real icon.
_ICON_PNG_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

ICON_PATH = "public/icon.png"
MANIFEST_PATH = "public/manifest.json"


def icon_png() -> bytes:
    return base64.b64decode(_ICON_PNG_B64.encode("ascii"), validate=True)


def default_tsconfig() -> dict[str, Any]:
    return {
        "compilerOptions": {
            "target": "ES2020",
            "useDefineForClassFields": True,
            "lib": ["ES2020", "DOM", "DOM.Iterable"],
            "module": "ESNext",
            "skipLibCheck": True,
            "moduleResolution": "bundler",
            "allowImportingTsExtensions": True,
            "resolveJsonModule": True,
            "isolatedModules": True,
            "noEmit": True,
            "jsx": "react-jsx",
            "strict": True,
        },
        "include": ["src"],
    }


def default_manifest(name: str) -> dict[str, Any]:
    return {
        "manifest_version": 3,
        "name": name,
        "version": "1.0.0",
        "description": f"{name} browser extension",
        "action": {
            "default_popup": "index.html",
            "default_icon": "icon.png",
        },
        "icons": {
            "128": "icon.png",
        },
    }


def render_tsconfig() -> str:
    return dump_json(default_tsconfig())


def render_manifest(name: str) -> str:
    return dump_json(default_manifest(name))


def _render_html_entry(title: str, script: str) -> str:
    return (
        "<!doctype html>\n"
        '<html lang="en">\n'
        "  <head>\n"
        '    <meta charset="UTF-8" />\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0" />\n'
        f"    <title>{html.escape(title)}</title>\n"
        "  </head>\n"
        "  <body>\n"
        '    <div id="root"></div>\n'
        f'    <script type="module" src="{script}"></script>\n'
        "  </body>\n"
        "</html>\n"
    )


def render_index_html(name: str) -> str:
    return _render_html_entry(name, "/src/main.tsx")


def render_popup_html(name: str) -> str:
    return _render_html_entry(f"{name} popup", "/src/popup.tsx")


def _render_mount(component: str) -> str:
    return (
        "import { StrictMode } from 'react';\n"
        "import { createRoot } from 'react-dom/client';\n"
        f"import {component} from './{component}';\n"
        "\n"
        "createRoot(document.getElementById('root')!).render(\n"
        "  <StrictMode>\n"
        f"    <{component} />\n"
        "  </StrictMode>,\n"
        ");\n"
    )


def render_main_tsx() -> str:
    return _render_mount("App")


def render_popup_tsx() -> str:
    return _render_mount("Popup")


def render_app_tsx(name: str) -> str:
    title = name.replace("'", "\\'")
    return (
        "export default function App() {\n"
        "  return (\n"
        "    <main>\n"
        f"      <h1>{{'{title}'}}</h1>\n"
        "      <p>Edit src/App.tsx to get started.</p>\n"
        "    </main>\n"
        "  );\n"
        "}\n"
    )


def render_popup_component_tsx() -> str:
    return (
        "import { useState } from 'react';\n"
        "\n"
        "export default function Popup() {\n"
        "  const [count, setCount] = useState(0);\n"
        "\n"
        "  return (\n"
        "    <div style={{ minWidth: 240, padding: 12 }}>\n"
        "      <h1>Popup</h1>\n"
        "      <button type=\"button\" onClick={() => setCount((c) => c + 1)}>\n"
        "        Clicked {count} times\n"
        "      </button>\n"
        "    </div>\n"
        "  );\n"
        "}\n"
    )
