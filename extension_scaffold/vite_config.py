"""Rendering and patching of ``vite.config.ts``.

The config is JavaScript/TypeScript, so it is never parsed in full. The text
is first masked: comments become spaces and the bodies of string, template
and regex literals become ``_`` (offsets are preserved). The object literal
handed to ``defineConfig(...)`` (directly, or returned from a function
form) or a bare ``export default {...}`` is then located in the masked text,
and its top-level keys are read with a brace walker. That is enough to
answer "does the config set ``root``?" without depending on formatting.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from extension_scaffold.errors import ConfigPatchError

logger = logging.getLogger(__name__)

VITE_CONFIG_PATH = "vite.config.ts"

_ARROW_PARAMS = r"(?:async\s*)?(?:\([^()]*\)|[A-Za-z_$][\w$]*)\s*=>\s*"
_CONFIG_OPENERS = (
    re.compile(r"\bdefineConfig\(\s*\{"),
    # defineConfig(({ mode }) => ({ ... }))
    re.compile(r"\bdefineConfig\(\s*" + _ARROW_PARAMS + r"\(\s*\{"),
    re.compile(r"\bexport\s+default\s+\{"),
)
# defineConfig(({ mode }) => { ...; return { ... } })
_ARROW_BLOCK_OPENER = re.compile(r"\bdefineConfig\(\s*" + _ARROW_PARAMS + r"\{")
_RETURN_OBJECT = re.compile(r"\breturn\s*\{")

_IDENT_RE = re.compile(r"[A-Za-z_$][\w$]*")
_TRAILING_WORD_RE = re.compile(r"([A-Za-z_$][\w$]*)\s*$")
_ROOT_KEY_RE = re.compile(r"\broot\s*:")
_QUOTED_ROOT_KEY_RE = re.compile(r"""(['"])root\1\s*:""")

# A `/` after one of these starts a regex literal, not a division.
_REGEX_PRECEDERS = set("(,=:[!&|?{};+-*%<>~^")
_REGEX_KEYWORDS = {"return", "typeof", "case", "in", "of", "void", "delete", "throw", "new"}


def render_vite_config() -> str:
    return (
        "import { defineConfig } from 'vite';\n"
        "\n"
        "export default defineConfig({\n"
        "  esbuild: {\n"
        "    jsx: 'automatic',\n"
        "  },\n"
        "  build: {\n"
        "    outDir: 'dist',\n"
        "    emptyOutDir: true,\n"
        "    rollupOptions: {\n"
        "      input: {\n"
        "        main: 'index.html',\n"
        "        popup: 'popup.html',\n"
        "      },\n"
        "    },\n"
        "  },\n"
        "});\n"
    )


@dataclass(frozen=True)
class ConfigObject:
    start: int  # index of the opening brace
    end: int  # index of the matching closing brace
    keys: tuple[str, ...]


def _blank(out: list[str], text: str, start: int, end: int, fill: str) -> None:
    for k in range(start, end):
        if text[k] != "\n":
            out[k] = fill


def _skip_string(text: str, i: int) -> int:
    quote = text[i]
    j = i + 1
    while j < len(text):
        c = text[j]
        if c == "\\":
            j += 2
            continue
        if c == quote:
            return j + 1
        if c == "\n":
            break
        j += 1
    raise ConfigPatchError(f"unterminated string literal at offset {i}")


def _skip_regex(text: str, i: int) -> int:
    j = i + 1
    in_class = False
    while j < len(text):
        c = text[j]
        if c == "\\":
            j += 2
            continue
        if c == "\n":
            break
        if c == "[":
            in_class = True
        elif c == "]":
            in_class = False
        elif c == "/" and not in_class:
            j += 1
            while j < len(text) and (text[j].isalpha()):
                j += 1
            return j
        j += 1
    raise ConfigPatchError(f"unterminated regex literal at offset {i}")


def _regex_allowed(text: str, i: int, prev: str) -> bool:
    if not prev or prev in _REGEX_PRECEDERS:
        return True
    if prev.isalnum() or prev in "_$":
        m = _TRAILING_WORD_RE.search(text, 0, i)
        return bool(m) and m.group(1) in _REGEX_KEYWORDS
    return False


def _skip_template(text: str, i: int, out: list[str]) -> int:
    j = i + 1
    while j < len(text):
        c = text[j]
        if c == "\\":
            j += 2
            continue
        if c == "`":
            return j + 1
        if text.startswith("${", j):
            j = _mask_code(text, j + 2, out, until_close=True)
            continue
        j += 1
    raise ConfigPatchError(f"unterminated template literal at offset {i}")


def _mask_code(text: str, i: int, out: list[str], *, until_close: bool) -> int:
    depth = 0
    prev = ""
    n = len(text)
    while i < n:
        c = text[i]
        if text.startswith("//", i):
            nl = text.find("\n", i)
            end = n if nl == -1 else nl
            _blank(out, text, i, end, " ")
            i = end
            continue
        if text.startswith("/*", i):
            close = text.find("*/", i + 2)
            if close == -1:
                raise ConfigPatchError(f"unterminated comment at offset {i}")
            _blank(out, text, i, close + 2, " ")
            i = close + 2
            continue
        if c in "'\"":
            end = _skip_string(text, i)
            _blank(out, text, i + 1, end - 1, "_")
            i, prev = end, "_"
            continue
        if c == "`":
            end = _skip_template(text, i, out)
            _blank(out, text, i + 1, end - 1, "_")
            i, prev = end, "_"
            continue
        if c == "/" and _regex_allowed(text, i, prev):
            end = _skip_regex(text, i)
            _blank(out, text, i, end, "_")
            i, prev = end, "_"
            continue
        if until_close:
            if c == "{":
                depth += 1
            elif c == "}":
                if depth == 0:
                    return i + 1
                depth -= 1
        if not c.isspace():
            prev = c
        i += 1
    if until_close:
        raise ConfigPatchError("unterminated template expression")
    return n


def mask_code(text: str) -> str:
    """Return ``text`` with comments and literal bodies blanked, same length."""
    out = list(text)
    _mask_code(text, 0, out, until_close=False)
    return "".join(out)


def scan_object(text: str, start: int, masked: str | None = None) -> ConfigObject:
    """Collect the top-level keys of the object literal opening at ``start``."""
    code = mask_code(text) if masked is None else masked
    if code[start] != "{":
        raise ConfigPatchError(f"expected '{{' at offset {start}")

    keys: list[str] = []
    depth = 1
    expect_key = True
    i = start + 1
    n = len(code)
    while i < n:
        c = code[i]
        if c in "'\"`":
            # Delimiters survive masking; the body is blanked.
            j = code.index(c, i + 1) + 1
            if depth == 1 and expect_key:
                keys.append(text[i + 1 : j - 1])
                expect_key = False
            i = j
            continue
        if c in "{[(":
            depth += 1
            expect_key = False
        elif c in "}])":
            depth -= 1
            if depth == 0:
                return ConfigObject(start=start, end=i, keys=tuple(keys))
        elif c == "," and depth == 1:
            expect_key = True
        elif depth == 1 and expect_key and not c.isspace():
            expect_key = False
            m = _IDENT_RE.match(code, i)
            if m:
                keys.append(m.group(0))
                i = m.end()
                continue
        i += 1
    raise ConfigPatchError("unbalanced braces in config object")


def _locate_open_brace(code: str) -> int | None:
    for pattern in _CONFIG_OPENERS:
        m = pattern.search(code)
        if m:
            return m.end() - 1
    m = _ARROW_BLOCK_OPENER.search(code)
    if m:
        r = _RETURN_OBJECT.search(code, m.end())
        if r:
            return r.end() - 1
    return None


def find_config_object(text: str, masked: str | None = None) -> ConfigObject:
    code = mask_code(text) if masked is None else masked
    start = _locate_open_brace(code)
    if start is None:
        raise ConfigPatchError(
            "no config object found (expected defineConfig({...}) or export default {...})"
        )
    return scan_object(text, start, code)


def _mentions_root_key(text: str, code: str) -> bool:
    if _ROOT_KEY_RE.search(code):
        return True
    for m in _QUOTED_ROOT_KEY_RE.finditer(text):
        # Quoted key in code keeps its opening quote; inside a comment it is blanked.
        if code[m.start()] == m.group(1):
            return True
    return False


def _js_string(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def ensure_root_setting(text: str, root: str = ".") -> str:
    """Insert ``root`` as the first property of the config object if absent.

    When no config object can be located but the code already sets a
    ``root`` key, the text is returned unchanged.
    """
    code = mask_code(text)
    try:
        obj = find_config_object(text, code)
    except ConfigPatchError:
        if _mentions_root_key(text, code):
            logger.debug("config object not located; root already set, leaving as is")
            return text
        raise
    if "root" in obj.keys:
        return text

    prop = f"root: {_js_string(root)}"
    after = obj.start + 1
    rest = text[after : obj.end]

    if not rest.strip():
        # Empty object: `{}` or `{\n}`.
        return text[: obj.start] + "{ " + prop + " }" + text[obj.end + 1 :]

    if rest.lstrip(" \t").startswith(("\n", "\r\n")):
        m = re.search(r"\n([ \t]*)\S", rest)
        indent = m.group(1) if m else "  "
        return text[:after] + "\n" + indent + prop + "," + text[after:]

    return text[:after] + " " + prop + "," + text[after:]
