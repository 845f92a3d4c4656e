"""Global site context.

Ties configuration, the override cascade and the resource registry
together. This is the object resource models receive as their context.
"""

from sitestage.config import Config
from sitestage.core.collection import Collection
from sitestage.core.paths import PathCascade
from sitestage.core.registry import ResourceRegistry
from sitestage.core.resolver import TypeRegistry
from sitestage.plugins import load_plugins as load_plugin_modules
from sitestage.resources import default_base_types, default_registered_types


class Site:
    """Build context for one site.

    One Site lives for one build or preview run; its registry caches
    collections and companions for that run.
    """

    __slots__ = ("_cascade", "_config", "_resources")

    def __init__(
        self,
        config: Config,
        *,
        base_types: TypeRegistry | None = None,
        registered_types: TypeRegistry | None = None,
        load_plugins: bool = True,
    ) -> None:
        """Initialize site.

        Args:
            config: Application configuration
            base_types: Built-in types (default: sitestage.resources built-ins)
            registered_types: Installed types (default: types shipped with
                              sitestage); theme plugins register into it
            load_plugins: Whether to import plugins/*.py from the cascade
        """
        self._config = config
        self._cascade = PathCascade.from_config(config)

        if base_types is None:
            base_types = default_base_types()
        if registered_types is None:
            registered_types = default_registered_types()
        if load_plugins:
            load_plugin_modules(self._cascade, registered_types)

        self._resources = ResourceRegistry(self, base_types, registered_types)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def cascade(self) -> PathCascade:
        return self._cascade

    @property
    def resources(self) -> ResourceRegistry:
        return self._resources

    def collection(self, resource_name: str) -> Collection:
        """Shortcut for resources.collection()."""
        return self._resources.collection(resource_name)
