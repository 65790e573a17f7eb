from __future__ import annotations


class ScaffoldError(RuntimeError):
    """Base class for failures that abort a scaffold run."""


class DocumentError(ScaffoldError):
    """An existing JSON document is malformed or has an unexpected shape."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class PackageManagerError(ScaffoldError):
    """The external package manager could not be run or exited non-zero."""

    def __init__(self, args: list[str], message: str) -> None:
        super().__init__(f"{' '.join(args)}: {message}")
        self.args_list = list(args)


class ConfigPatchError(ScaffoldError):
    """The bundler config could not be patched (no config object found)."""
