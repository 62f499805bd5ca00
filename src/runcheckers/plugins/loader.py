# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Analyzer module loading helpers.

The analyzer is supplied either as a filesystem path (a ``.py`` file or a
package directory) or as a dotted module name. Both are resolved behind the
:class:`ModuleLoader` protocol so alternative mechanisms can be swapped in
without touching checker discovery. Installed distributions may also
contribute checkers through the ``runcheckers.checkers`` entry-point group.
"""

from __future__ import annotations

import errno
import hashlib
import importlib
import importlib.util
import os
import re
import sys
from collections.abc import Iterable, Mapping, Sequence
from importlib import metadata
from importlib.metadata import EntryPoint, EntryPoints
from pathlib import Path
from types import ModuleType
from typing import Final, Protocol, TypeAlias, cast, runtime_checkable

from ..errors import PluginLoadError
from .failures import classify_load_failure

CHECKERS_PLUGIN_GROUP: Final[str] = "runcheckers.checkers"
PACKAGE_INIT: Final[str] = "__init__.py"
_SYNTHETIC_PREFIX: Final[str] = "_runcheckers_plugin"
_IDENTIFIER_UNSAFE = re.compile(r"\W")

_EntryPointSource: TypeAlias = EntryPoints | Mapping[str, Sequence[EntryPoint]]


@runtime_checkable
class ModuleLoader(Protocol):
    """Load an analyzer module from a user-supplied reference."""

    def load(self, reference: str) -> ModuleType:
        """Return the module identified by ``reference``."""

        raise NotImplementedError


class FileModuleLoader(ModuleLoader):
    """Execute a ``.py`` file or a package directory as a module."""

    def load(self, reference: str) -> ModuleType:
        """Load the module stored at ``reference``.

        Args:
            reference: Path to a ``.py`` file or a directory containing
                ``__init__.py``.

        Returns:
            ModuleType: Executed module registered under a synthetic name.

        Raises:
            FileNotFoundError: If nothing loadable exists at ``reference``.
            ImportError: If an import spec cannot be built for the path.
        """

        path = Path(reference).expanduser()
        search_locations: list[str] | None = None
        if path.is_dir():
            location = path / PACKAGE_INIT
            if not location.is_file():
                raise FileNotFoundError(errno.ENOENT, f"no {PACKAGE_INIT} in analyzer directory", reference)
            search_locations = [str(path)]
        elif path.is_file():
            location = path
        else:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), reference)

        name = synthetic_module_name(path)
        spec = importlib.util.spec_from_file_location(name, location, submodule_search_locations=search_locations)
        if spec is None or spec.loader is None:
            raise ImportError(f"cannot build an import spec for {reference}", path=reference)
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(name, None)
            raise
        return module


class ImportModuleLoader(ModuleLoader):
    """Import an analyzer module by dotted name."""

    def load(self, reference: str) -> ModuleType:
        return importlib.import_module(reference)


def synthetic_module_name(path: Path) -> str:
    """Return a stable, importable module name for the plugin at ``path``.

    Args:
        path: Plugin file or package directory.

    Returns:
        str: Identifier unique to the resolved path.
    """

    resolved = str(path.resolve())
    digest = hashlib.sha1(resolved.encode("utf-8"), usedforsecurity=False).hexdigest()[:12]
    stem = _IDENTIFIER_UNSAFE.sub("_", path.stem) or "module"
    return f"{_SYNTHETIC_PREFIX}_{digest}_{stem}"


def looks_like_path(reference: str) -> bool:
    """Return ``True`` when ``reference`` should be treated as a filesystem path.

    Args:
        reference: Analyzer reference supplied by the user.

    Returns:
        bool: ``True`` for existing paths, strings containing a path
        separator, and names ending in ``.py``.
    """

    separators = tuple(sep for sep in (os.sep, os.altsep, "/") if sep)
    if any(sep in reference for sep in separators) or reference.endswith(".py"):
        return True
    return Path(reference).exists()


def resolve_loader(reference: str) -> ModuleLoader:
    """Return the loader suited to ``reference``."""

    return FileModuleLoader() if looks_like_path(reference) else ImportModuleLoader()


def load_analyzer_module(reference: str, *, loader: ModuleLoader | None = None) -> ModuleType:
    """Load the analyzer module named by ``reference``.

    Args:
        reference: Filesystem path or dotted module name of the analyzer.
        loader: Optional loader overriding the automatic selection.

    Returns:
        ModuleType: Loaded analyzer module.

    Raises:
        PluginLoadError: If loading fails in a recognised way. Unrecognised
            errors propagate unchanged.
    """

    active = loader or resolve_loader(reference)
    try:
        return active.load(reference)
    except Exception as exc:
        failure = classify_load_failure(exc, reference)
        if failure is None:
            raise
        raise PluginLoadError(failure) from exc


def _select_entry_points(entries: _EntryPointSource, group: str) -> Iterable[EntryPoint]:
    """Return entry points exposed under ``group`` from ``entries``.

    Args:
        entries: Raw entry-point container returned by :func:`metadata.entry_points`.
        group: Name of the entry-point group to extract.

    Returns:
        Iterable[EntryPoint]: Entry points belonging to ``group``.
    """

    if isinstance(entries, Mapping):
        return entries.get(group, ())
    if hasattr(entries, "select"):
        return entries.select(group=group)
    return ()


def load_entry_point_plugins(group: str = CHECKERS_PLUGIN_GROUP) -> tuple[object, ...]:
    """Return modules or checker classes contributed through entry points.

    Unlike optional CLI extensions, a broken checker plugin is not skipped:
    load failures are classified and raised so misconfiguration is visible.

    Args:
        group: Entry-point group to inspect.

    Returns:
        tuple[object, ...]: Loaded entry-point targets in discovery order.

    Raises:
        PluginLoadError: If an entry point fails to load in a recognised way.
    """

    entries_raw = metadata.entry_points()
    selected = _select_entry_points(cast(_EntryPointSource, entries_raw), group)

    loaded: list[object] = []
    for entry in selected:
        try:
            loaded.append(entry.load())
        except Exception as exc:
            failure = classify_load_failure(exc, entry.value)
            if failure is None:
                raise
            raise PluginLoadError(failure) from exc
    return tuple(loaded)


__all__ = [
    "CHECKERS_PLUGIN_GROUP",
    "FileModuleLoader",
    "ImportModuleLoader",
    "ModuleLoader",
    "load_analyzer_module",
    "load_entry_point_plugins",
    "looks_like_path",
    "resolve_loader",
    "synthetic_module_name",
]
