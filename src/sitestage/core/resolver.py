"""Resource type resolution.

Binds a resource name to the resource type that handles it. Types come
from two registries: the built-in types shipped with sitestage and the
types registered by theme plugins. Lookup order:

1. The resource's configured ``use`` value, theme-registered types first,
   then built-in types. An unknown ``use`` value is fatal.
2. The resource name itself, if a theme plugin registered a type by that name.
3. The built-in ``pages`` type.
"""

from collections.abc import Iterator
from dataclasses import dataclass, fields

from sitestage.config import Config

DEFAULT_TYPE = "pages"

COMPANION_KINDS = (
    "collection",
    "collection_view",
    "model",
    "model_view",
    "client",
    "compiler",
    "watcher",
    "previewer",
)


class UnknownResourceTypeError(Exception):
    """A resource is configured to use a type that does not exist.

    The build cannot continue without a handler for the resource, so callers
    are expected to stop and report the message rather than recover.
    """

    def __init__(self, resource: str, type_name: str) -> None:
        self.resource = resource
        self.type_name = type_name
        super().__init__(
            f"'{resource}' resource set to use:'{type_name}' in sitestage.toml "
            f"but resource type '{type_name}' does not exist.",
        )


@dataclass(frozen=True)
class ResourceType:
    """Capability descriptor for a resource type.

    Lists the classes a type supplies for each companion kind. Kinds left
    as None fall back to the generic implementations.
    """

    name: str
    collection: type | None = None
    collection_view: type | None = None
    model: type | None = None
    model_view: type | None = None
    client: type | None = None
    compiler: type | None = None
    watcher: type | None = None
    previewer: type | None = None

    def supplies(self, kind: str) -> bool:
        """Check whether this type provides its own class for a companion kind.

        Raises:
            ValueError: If kind is not a companion kind
        """
        if kind not in COMPANION_KINDS:
            raise ValueError(f"Unknown companion kind: {kind}")
        return getattr(self, kind) is not None

    def supplied(self) -> list[str]:
        """Get companion kinds this type provides."""
        return [f.name for f in fields(self) if f.name != "name" and getattr(self, f.name) is not None]


class TypeRegistry:
    """Ordered mapping of type name to ResourceType."""

    __slots__ = ("_types",)

    def __init__(self, types: list[ResourceType] | None = None) -> None:
        self._types: dict[str, ResourceType] = {}
        for rtype in types or []:
            self.register(rtype)

    def register(self, rtype: ResourceType) -> ResourceType:
        """Register a type, replacing any earlier type with the same name.

        Returns:
            The registered type
        """
        self._types[rtype.name] = rtype
        return rtype

    def get(self, name: str) -> ResourceType | None:
        return self._types.get(name)

    def names(self) -> list[str]:
        """Get registered type names in registration order."""
        return list(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[ResourceType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)


class ResourceTypeResolver:
    """Decides which resource type handles a resource name."""

    def __init__(self, config: Config, base: TypeRegistry, registered: TypeRegistry) -> None:
        """Initialize resolver.

        Args:
            config: Site configuration (source of per-resource ``use`` values)
            base: Built-in resource types; must contain the default type
            registered: Types registered by theme plugins
        """
        if DEFAULT_TYPE not in base:
            raise ValueError(f"Built-in types must include '{DEFAULT_TYPE}'")
        self._config = config
        self._base = base
        self._registered = registered

    def resolve(self, resource_name: str) -> ResourceType:
        """Resolve the resource type for a resource name.

        Args:
            resource_name: Resource name (e.g., "posts")

        Returns:
            Theme-registered, built-in or default pages ResourceType

        Raises:
            UnknownResourceTypeError: If the configured ``use`` value names
                no known type
        """
        type_name = self._config.resource(resource_name).use
        if type_name is not None:
            rtype = self._registered.get(type_name) or self._base.get(type_name)
            if rtype is None:
                raise UnknownResourceTypeError(resource_name, type_name)
            return rtype

        registered = self._registered.get(resource_name)
        if registered is not None:
            return registered

        return self._base.get(DEFAULT_TYPE)  # type: ignore[return-value]
