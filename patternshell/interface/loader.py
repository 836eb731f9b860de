#!/usr/bin/env python3
# patternshell/interface/loader.py
from __future__ import annotations

"""
Dynamic command loader.

Features:
- Imports all public modules under a given package (default: 'plugins').
- A module contributes the commands it exports as COMMAND / COMMANDS.
- A subpackage with an 'entrypoint.py' contributes its own nested CommandSet.
- Argument completers are collected from COMPLETERS mappings.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import Iterable, Iterator, Mapping

from patternshell.commands import Command, CommandSet
from patternshell.errors import ConfigurationError
from .completion import CompleterLike, CompleterSet

logger = logging.getLogger(__name__)


def _commands_from_module(module: ModuleType) -> list[Command]:
    """Collect COMMAND/COMMANDS exported by a module, if present."""
    found: list[Command] = []
    obj = getattr(module, "COMMAND", None)
    if isinstance(obj, Command):
        found.append(obj)
    objs = getattr(module, "COMMANDS", None)
    if isinstance(objs, Iterable):
        found.extend(item for item in objs if isinstance(item, Command))
    return found


def _iter_plugin_modules(commands_package: str) -> Iterator[tuple[ModuleType, bool]]:
    """
    Import and yield (module, is_entrypoint) for every public module.

    Supported layouts:
      1) Plain modules: plugins/foo.py            -> plugins.foo
      2) Packages with an entrypoint: plugins/bar/entrypoint.py
                                                  -> plugins.bar.entrypoint
      3) Other packages: plugins/baz/__init__.py  -> plugins.baz
    """
    package = importlib.import_module(commands_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]
    if not package_paths:
        raise ConfigurationError(f"'{commands_package}' must be a package (folder) with modules.")

    for base_path in package_paths:
        for modinfo in pkgutil.iter_modules([base_path]):
            module_name = modinfo.name
            if module_name.startswith("_"):
                continue
            if modinfo.ispkg and (Path(base_path) / module_name / "entrypoint.py").exists():
                yield importlib.import_module(f"{commands_package}.{module_name}.entrypoint"), True
            else:
                yield importlib.import_module(f"{commands_package}.{module_name}"), False


def load_commands(commands_package: str = "plugins") -> CommandSet:
    """
    Import the plugin package and build its command set.

    Commands of plain modules become the direct commands (module order, then
    export order); each entrypoint package becomes a nested set.

    Raises:
        ModuleNotFoundError: the package does not exist.
        ConfigurationError: the name refers to a plain module, not a package.
        MalformedPatternError: a plugin exports a command with a malformed pattern.
    """
    direct: list[Command] = []
    nested: list[CommandSet] = []
    for module, is_entrypoint in _iter_plugin_modules(commands_package):
        found = _commands_from_module(module)
        logger.debug("Loaded %d command(s) from %s", len(found), module.__name__)
        if is_entrypoint:
            nested.append(CommandSet(found))
        else:
            direct.extend(found)
    return CommandSet(direct, nested)


def load_completers(commands_package: str = "plugins") -> CompleterSet:
    """Merge the COMPLETERS mappings of every plugin module; later modules win."""
    merged: dict[str, CompleterLike] = {}
    for module, _ in _iter_plugin_modules(commands_package):
        completers = getattr(module, "COMPLETERS", None)
        if isinstance(completers, Mapping):
            merged.update(completers)
    return CompleterSet(merged)
