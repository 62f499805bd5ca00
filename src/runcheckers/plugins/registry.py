# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Checker discovery over loaded analyzer modules."""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Iterator
from types import ModuleType

from ..checkers import Checker, is_checker_class
from ..errors import PluginConfigurationError

_VARIADIC_KINDS = frozenset({inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD})


def exported_objects(module: ModuleType) -> Iterator[object]:
    """Yield the objects ``module`` exports, in export order.

    ``__all__`` is authoritative when present. Otherwise every public
    attribute defined by the module itself, or by one of its submodules when
    the analyzer is a package, is exported; names imported from anywhere
    else are not.

    Args:
        module: Loaded analyzer module.

    Yields:
        object: Exported attribute values.
    """

    declared = getattr(module, "__all__", None)
    if declared is not None:
        for name in declared:
            if hasattr(module, name):
                yield getattr(module, name)
        return
    for name, value in vars(module).items():
        if name.startswith("_"):
            continue
        if _defined_under(value, module.__name__):
            yield value


def _defined_under(value: object, package: str) -> bool:
    owner = getattr(value, "__module__", None)
    if not isinstance(owner, str):
        return False
    return owner == package or owner.startswith(f"{package}.")


def checker_classes(module: ModuleType) -> tuple[type[Checker], ...]:
    """Return the concrete checker classes exported by ``module``."""

    return _unique(value for value in exported_objects(module) if is_checker_class(value))


def discover(module: ModuleType) -> tuple[Checker, ...]:
    """Instantiate every checker exported by ``module``.

    Args:
        module: Loaded analyzer module.

    Returns:
        tuple[Checker, ...]: One instance per exported checker class.

    Raises:
        PluginConfigurationError: If any checker class cannot be created with
            a zero-argument call.
    """

    return tuple(instantiate(checker_cls) for checker_cls in checker_classes(module))


def discover_many(sources: Iterable[object]) -> tuple[Checker, ...]:
    """Instantiate checkers from a mix of modules and checker classes.

    Args:
        sources: Modules or checker classes, typically loaded from entry points.

    Returns:
        tuple[Checker, ...]: One instance per distinct checker class.

    Raises:
        PluginConfigurationError: If a source is neither a module nor a
            concrete checker class, or if a checker cannot be instantiated.
    """

    classes: list[type[Checker]] = []
    for source in sources:
        if inspect.ismodule(source):
            classes.extend(checker_classes(source))
        elif is_checker_class(source):
            classes.append(source)
        else:
            raise PluginConfigurationError(_describe(source), "entry point does not provide a concrete Checker")
    return tuple(instantiate(checker_cls) for checker_cls in _unique(classes))


def instantiate(checker_cls: type[Checker]) -> Checker:
    """Create ``checker_cls`` with no arguments.

    Args:
        checker_cls: Concrete checker class.

    Returns:
        Checker: New checker instance.

    Raises:
        PluginConfigurationError: If the constructor requires arguments or raises.
    """

    qualified = _describe(checker_cls)
    required = _required_parameters(checker_cls)
    if required:
        raise PluginConfigurationError(qualified, f"constructor requires arguments: {', '.join(required)}")
    try:
        return checker_cls()
    except Exception as exc:
        raise PluginConfigurationError(qualified, f"{type(exc).__name__}: {exc}") from exc


def _required_parameters(checker_cls: type[Checker]) -> list[str]:
    try:
        signature = inspect.signature(checker_cls)
    except (TypeError, ValueError):
        return []
    return [
        name
        for name, parameter in signature.parameters.items()
        if parameter.default is inspect.Parameter.empty and parameter.kind not in _VARIADIC_KINDS
    ]


def _unique(classes: Iterable[type[Checker]]) -> tuple[type[Checker], ...]:
    seen: dict[type[Checker], None] = {}
    for checker_cls in classes:
        seen.setdefault(checker_cls, None)
    return tuple(seen)


def _describe(value: object) -> str:
    if inspect.isclass(value):
        return f"{value.__module__}.{value.__qualname__}"
    return repr(value)


__all__ = ["checker_classes", "discover", "discover_many", "exported_objects", "instantiate"]
