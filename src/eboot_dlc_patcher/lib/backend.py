"""Binding to the external collaborators that do the real work.

Patching executables, extracting packages and reading package metadata live
outside this project.  A backend module exposes three entry points::

    async def patch_executables(exec_paths, dlc_paths, output_dir, force_in_eboot): ...
    async def extract_dlcs(image0_dir, dlc_paths): ...
    def try_parse_dlc(pkg_path) -> DlcInfo | None: ...

The two long-running entry points may also be plain functions; whatever they
return is awaited when it is awaitable.
"""

from __future__ import annotations

import asyncio
import importlib
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from ._util.logging_utils import _log_debug
from .core.config import backend_module

PATCH_ENTRY = "patch_executables"
EXTRACT_ENTRY = "extract_dlcs"
PARSE_ENTRY = "try_parse_dlc"


class BackendError(RuntimeError):
    """The collaborator backend is missing or unusable."""


@runtime_checkable
class DlcInfo(Protocol):
    """Package metadata (entitlement label, status, key) as produced by the parser."""

    def to_encoded_string(self) -> str: ...


@dataclass(frozen=True)
class ParseResult:
    """Outcome of reading one package's metadata."""

    pkg_path: str
    info: DlcInfo | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.info is not None

    @classmethod
    def success(cls, pkg_path: str, info: DlcInfo) -> ParseResult:
        return cls(pkg_path=pkg_path, info=info)

    @classmethod
    def failure(cls, pkg_path: str, reason: str) -> ParseResult:
        return cls(pkg_path=pkg_path, error=reason)


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def _wait_for(result: Any) -> Any:
    """Block until *result* completes if it is awaitable."""
    if inspect.isawaitable(result):
        return asyncio.run(_await(result))
    return result


@dataclass(frozen=True)
class Backend:
    patch_executables: Callable[[list[str], list[str], str, bool], Any]
    extract_dlcs: Callable[[str, list[str]], Any]
    try_parse_dlc: Callable[[str], DlcInfo | None]
    name: str = "<custom>"

    def run_patch(
        self, exec_paths: list[str], dlc_paths: list[str], output_dir: str, force_in_eboot: bool
    ) -> None:
        _log_debug(
            f"backend {self.name}: patch exec={len(exec_paths)} dlc={len(dlc_paths)} "
            f"output={output_dir} force={force_in_eboot}"
        )
        _wait_for(self.patch_executables(exec_paths, dlc_paths, output_dir, force_in_eboot))
        _log_debug(f"backend {self.name}: patch finished")

    def run_extract(self, image0_dir: str, dlc_paths: list[str]) -> None:
        _log_debug(f"backend {self.name}: extract dlc={len(dlc_paths)} image0={image0_dir}")
        _wait_for(self.extract_dlcs(image0_dir, dlc_paths))
        _log_debug(f"backend {self.name}: extract finished")

    def parse(self, pkg_path: str) -> ParseResult:
        """Read metadata for one package without ever raising.

        ``None`` from the parser and any exception it raises both become a
        failed result, so one bad package cannot stop a batch.
        """
        try:
            info = self.try_parse_dlc(pkg_path)
        except Exception as e:
            _log_debug(f"backend {self.name}: parse error for {pkg_path}: {e}")
            return ParseResult.failure(pkg_path, str(e) or type(e).__name__)
        if info is None:
            return ParseResult.failure(pkg_path, "no DLC metadata found")
        return ParseResult.success(pkg_path, info)


def load_backend(module_name: str | None = None) -> Backend:
    """Import the backend module and bind its entry points.

    *module_name* defaults to :func:`backend_module` (env var, then config).
    """
    name = module_name or backend_module()
    if not name:
        raise BackendError(
            "no backend configured; set EBOOT_DLC_PATCHER_BACKEND or "
            "'backend: {module: ...}' in config.yml"
        )
    try:
        module = importlib.import_module(name)
    except ImportError as e:
        raise BackendError(f"cannot import backend module '{name}': {e}") from e

    entries = {}
    for attr in (PATCH_ENTRY, EXTRACT_ENTRY, PARSE_ENTRY):
        fn = getattr(module, attr, None)
        if not callable(fn):
            raise BackendError(f"backend module '{name}' does not define {attr}()")
        entries[attr] = fn

    _log_debug(f"backend: loaded {name}")
    return Backend(name=name, **entries)
