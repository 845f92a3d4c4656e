"""Theme plugin loading.

Plugins are Python files in a ``plugins/`` directory of the site root or
the active theme. A plugin installs resource types by defining::

    def register(types: TypeRegistry) -> None:
        types.register(ResourceType(name="posts", model=PostModel))

Site plugins load before theme plugins, so a theme can redefine a type
the site registered.
"""

import importlib.util
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType

from sitestage.core.paths import PathCascade
from sitestage.core.resolver import TypeRegistry

logger = logging.getLogger(__name__)

PLUGINS_DIRNAME = "plugins"


def iter_plugin_files(cascade: PathCascade) -> Iterator[Path]:
    """Yield plugin files from the base and theme levels in cascade order.

    The system level ships no plugins and is skipped.
    """
    for level in cascade.paths():
        if level.name == "system":
            continue
        plugins_dir = level.root / PLUGINS_DIRNAME
        if not plugins_dir.is_dir():
            continue
        for path in sorted(plugins_dir.glob("*.py")):
            if path.is_file() and not path.name.startswith("_"):
                yield path


def load_module_from_path(path: Path, namespace: str = "sitestage_plugins") -> ModuleType:
    """Import a Python file as a module.

    Args:
        path: Path to the .py file
        namespace: Module name prefix for the loaded module

    Returns:
        Loaded module

    Raises:
        ImportError: If no module spec can be created for path
    """
    module_name = f"{namespace}.{path.parent.parent.name}.{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not create module spec for {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def load_plugins(cascade: PathCascade, registered: TypeRegistry) -> int:
    """Load plugins and let them register resource types.

    Errors raised by a plugin propagate: a site with a broken plugin
    cannot be built correctly.

    Args:
        cascade: Cascade to search for plugins/ directories
        registered: Registry plugins install their types into

    Returns:
        Number of plugin modules that defined register()
    """
    count = 0
    for path in iter_plugin_files(cascade):
        module = load_module_from_path(path)
        register = getattr(module, "register", None)
        if not callable(register):
            logger.debug(f"Plugin {path} defines no register(); skipped")
            continue
        register(registered)
        count += 1
        logger.info(f"Loaded plugin {path}")
    return count
