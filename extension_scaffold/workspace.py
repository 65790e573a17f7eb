"""Filesystem primitives scoped to one project directory.

Every helper takes paths relative to the workspace root and is idempotent:
files are created only when missing and rewritten only when their content
would actually change.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from extension_scaffold.errors import DocumentError

logger = logging.getLogger(__name__)

Outcome = Literal["created", "skipped", "patched", "unchanged", "installed"]

# A comma followed (through whitespace and comments) by a closing bracket.
_TRAILING_COMMA_RE = re.compile(r"(?:\s|//[^\n]*|/\*[\s\S]*?\*/)*[}\]]")


def strip_jsonc(text: str) -> str:
    """Drop ``//``/``/* */`` comments and trailing commas outside of strings.

    tsconfig.json is JSON with comments; the result is plain JSON.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c == '"':
            j = i + 1
            while j < n and text[j] != '"':
                j += 2 if text[j] == "\\" else 1
            out.append(text[i : j + 1])
            i = j + 1
            continue
        if text.startswith("//", i):
            nl = text.find("\n", i)
            i = n if nl == -1 else nl
            continue
        if text.startswith("/*", i):
            close = text.find("*/", i + 2)
            i = n if close == -1 else close + 2
            continue
        if c == ",":
            m = _TRAILING_COMMA_RE.match(text, i + 1)
            if m:
                i += 1
                continue
        out.append(c)
        i += 1
    return "".join(out)


def dump_json(doc: dict[str, Any]) -> str:
    # Same shape npm writes: two-space indent, trailing newline.
    return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"


@dataclass(frozen=True)
class Workspace:
    root: Path

    @classmethod
    def at(cls, path: str | Path) -> Workspace:
        return cls(root=Path(path).expanduser().resolve())

    @property
    def name(self) -> str:
        return self.root.name

    def path(self, rel: str) -> Path:
        return self.root / rel

    def exists(self, rel: str) -> bool:
        return self.path(rel).exists()

    def ensure_dir(self, rel: str = "") -> Outcome:
        p = self.path(rel) if rel else self.root
        if p.is_dir():
            return "skipped"
        p.mkdir(parents=True, exist_ok=True)
        logger.debug("mkdir %s", p)
        return "created"

    def ensure_file(self, rel: str, content: str | bytes) -> Outcome:
        """Write ``content`` to ``rel`` only if nothing exists there yet."""
        p = self.path(rel)
        if p.exists():
            return "skipped"
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            p.write_bytes(content)
        else:
            p.write_text(content, encoding="utf-8")
        logger.debug("wrote %s (%d bytes)", p, len(content))
        return "created"

    def read_text(self, rel: str) -> str:
        return self.path(rel).read_text(encoding="utf-8")

    def write_text_if_changed(self, rel: str, text: str) -> Outcome:
        p = self.path(rel)
        if p.exists() and p.read_text(encoding="utf-8") == text:
            return "unchanged"
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
        return "patched"

    def read_json(self, rel: str, *, allow_comments: bool = False) -> dict[str, Any]:
        text = self.read_text(rel)
        if allow_comments:
            text = strip_jsonc(text)
        try:
            doc = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DocumentError(rel, f"invalid JSON ({exc})") from exc
        if not isinstance(doc, dict):
            raise DocumentError(rel, "expected a JSON object at the top level")
        return doc

    def write_json_if_changed(
        self, rel: str, before: dict[str, Any], after: dict[str, Any]
    ) -> Outcome:
        if after == before:
            return "unchanged"
        return self.write_text_if_changed(rel, dump_json(after))
