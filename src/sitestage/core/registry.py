"""Resource registry.

Discovers the resource names a site knows about and hands out one
collection (and one of each companion) per resource. Instances are
created on first request and reused for the lifetime of the registry.
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from sitestage.core.client import Client
from sitestage.core.collection import Collection
from sitestage.core.compiler import Compiler
from sitestage.core.previewer import Previewer
from sitestage.core.resolver import (
    DEFAULT_TYPE,
    ResourceType,
    ResourceTypeResolver,
    TypeRegistry,
)
from sitestage.core.view import CollectionView
from sitestage.live.watcher import Watcher

if TYPE_CHECKING:
    from sitestage.core.site import Site

logger = logging.getLogger(__name__)

# Directories under the site root that never hold a resource
IGNORED_DIRS = frozenset({"plugins"})

# Resource names that are never built as content
RESERVED_NAMES = ("theme", "compiled")


class ResourceRegistry:
    """Resolves and caches collections and companions per resource name."""

    def __init__(
        self,
        site: "Site",
        base_types: TypeRegistry,
        registered_types: TypeRegistry,
    ) -> None:
        """Initialize registry.

        Args:
            site: Global site context
            base_types: Built-in resource types
            registered_types: Installed resource types (shipped and
                              theme plugins); these win over built-ins
        """
        self._site = site
        self._base_types = base_types
        self._registered_types = registered_types
        self._resolver = ResourceTypeResolver(site.config, base_types, registered_types)
        self._instances: dict[tuple[str, str], Any] = {}

    def all(self) -> list[str]:
        """Get every known resource name except "compiled".

        Names come from discover() first, then registered(). Since
        discover() also skips dot-directories and the active theme's
        directory (the theme root sits inside the site root), neither
        shows up here unless a type of that name is registered.
        """
        names = _unique(self.discover() + self.registered())
        return [name for name in names if name != "compiled"]

    def base(self) -> list[str]:
        """Get names of built-in resource types."""
        return self._base_types.names()

    def registered(self) -> list[str]:
        """Get names of installed resource types."""
        return self._registered_types.names()

    def discover(self) -> list[str]:
        """Get resource directory names found directly under the site root.

        The plugins directory and the active theme's directory are not
        resources.
        """
        base = self._site.cascade.base
        if not base.is_dir():
            return []

        ignored = set(IGNORED_DIRS)
        if self._site.config.theme.name is not None:
            ignored.add(self._site.config.theme.name)

        return sorted(
            entry.name
            for entry in base.iterdir()
            if entry.is_dir() and entry.name not in ignored and not entry.name.startswith(".")
        )

    def acting_as_pages(self) -> list[str]:
        """Get configured resources that default to page semantics.

        A resource acts as pages when it has a directory, is not an
        installed non-page type, and is not configured to use another type.
        """
        non_page_types = [name for name in self.registered() if name not in ("pages", "posts")]
        discovered = self.discover()

        pages: list[str] = []
        for name, resource_config in self._site.config.resources.items():
            if name == "theme":
                continue
            if resource_config.use is not None and resource_config.use != DEFAULT_TYPE:
                continue
            if name in non_page_types:
                continue
            if name not in discovered:
                continue
            pages.append(name)
        return pages

    def non_pages(self) -> list[str]:
        """Get resources that are not acting as pages."""
        acting = set(self.acting_as_pages())
        return [
            name
            for name in _unique(self.discover() + self.registered())
            if name not in acting and name not in RESERVED_NAMES
        ]

    def exists(self, name: str) -> bool:
        return name in self.all()

    def resolve_type(self, resource_name: str) -> ResourceType:
        """Resolve the resource type for a name.

        Raises:
            UnknownResourceTypeError: If the configured type does not exist
        """
        return self._resolver.resolve(resource_name)

    def collection(self, resource_name: str) -> Collection:
        """Get the cached collection for a resource, creating it on first use."""

        def build(rtype: ResourceType) -> Collection:
            cls = rtype.collection or Collection
            return cls(self._site, resource_name, rtype)

        return self._load(resource_name, "collection", build)

    def collection_view(self, resource_name: str) -> CollectionView:
        collection = self.collection(resource_name)
        return self._load(
            resource_name,
            "collection_view",
            lambda rtype: (rtype.collection_view or CollectionView)(collection),
        )

    def client(self, resource_name: str, opts: dict[str, Any] | None = None) -> Client:
        """Get the cached client for a resource.

        Options only apply when the client is first created.
        """
        view = self.collection_view(resource_name)
        return self._load(
            resource_name,
            "client",
            lambda rtype: (rtype.client or Client)(view, opts or {}),
        )

    def compiler(self, resource_name: str) -> Compiler:
        view = self.collection_view(resource_name)
        return self._load(
            resource_name,
            "compiler",
            lambda rtype: (rtype.compiler or Compiler)(view),
        )

    def watcher(self, resource_name: str) -> Watcher:
        view = self.collection_view(resource_name)
        return self._load(
            resource_name,
            "watcher",
            lambda rtype: (rtype.watcher or Watcher)(view),
        )

    def previewer(self, resource_name: str) -> Previewer:
        view = self.collection_view(resource_name)
        return self._load(
            resource_name,
            "previewer",
            lambda rtype: (rtype.previewer or Previewer)(view),
        )

    def _load(self, resource_name: str, kind: str, build: Callable[[ResourceType], Any]) -> Any:
        """Return the cached instance for (resource_name, kind), building it on a miss.

        Args:
            resource_name: Resource name
            kind: Companion kind (e.g., "collection", "compiler")
            build: Factory called with the resolved type on a miss

        Returns:
            Cached instance
        """
        key = (resource_name, kind)
        instance = self._instances.get(key)
        if instance is None:
            rtype = self.resolve_type(resource_name)
            instance = build(rtype)
            self._instances[key] = instance
            logger.debug(f"Loaded {kind} for '{resource_name}' using type '{rtype.name}'")
        return instance


def _unique(names: list[str]) -> list[str]:
    """Deduplicate names preserving first occurrence order."""
    return list(dict.fromkeys(names))
