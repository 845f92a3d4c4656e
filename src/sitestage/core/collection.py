"""Resource collections.

A Collection discovers the files of one resource across the override
cascade, filters them, and merges them into a single dictionary keyed by
content id. Per-file processing is delegated to the resource type's model.
"""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from sitestage.config import ResourceConfig
from sitestage.core.discovery import FileDiscovery, FilePredicate
from sitestage.core.resolver import ResourceType
from sitestage.core.types import FilePointer, Namespace, PathLevel, to_namespace

if TYPE_CHECKING:
    from sitestage.core.site import Site

logger = logging.getLogger(__name__)


class Collection:
    """Discovers, filters and merges all files of one resource.

    Subclasses may override ``glob`` to narrow the files considered.
    """

    # Every file in all child directories
    glob = "**/*"

    def __init__(
        self,
        site: "Site",
        resource_name: str,
        resource_type: ResourceType | None = None,
    ) -> None:
        """Initialize collection.

        Args:
            site: Global site context
            resource_name: Resource this collection serves (e.g., "posts")
            resource_type: Resolved type; resolved through the site's
                           registry when omitted
        """
        self._site = site
        self._resource_name = resource_name
        self._resource_type = resource_type or site.resources.resolve_type(resource_name)
        self._discovery = FileDiscovery(site.cascade)

    @property
    def site(self) -> "Site":
        return self._site

    @property
    def resource_name(self) -> str:
        return self._resource_name

    @property
    def resource_type(self) -> ResourceType:
        return self._resource_type

    @property
    def namespace(self) -> Namespace:
        """Directory segment searched under each cascade root."""
        return to_namespace(self._resource_name)

    @property
    def config(self) -> ResourceConfig:
        return self._site.config.resource(self._resource_name)

    def paths(self) -> list[PathLevel]:
        """Get the cascade levels searched for this resource."""
        return self._site.cascade.paths()

    def has_paths(self) -> bool:
        """Check whether any cascade level has a directory for this resource."""
        return self._site.cascade.has_any_path(self.namespace)

    def files(
        self,
        id: str | Iterable[str] | None = None,
        predicate: FilePredicate | None = None,
    ) -> list[FilePointer]:
        """Collect file pointers for this resource.

        An id can be found once per cascade level, so several pointers may
        share the same id. They are returned lowest precedence first.

        Prefer passing predicate to generate(); this is the low-level call.

        Args:
            id: Single id or ids to collect instead of every file
            predicate: Custom validity check called with (id, collection);
                       replaces the default check entirely

        Returns:
            FilePointers in cascade order
        """
        return self._discovery.files(
            self.namespace,
            self._resource_name,
            id,
            glob=self.glob,
            excludes=self.config.exclude,
            predicate=predicate,
            collection=self,
        )

    def generate(
        self,
        id: str | Iterable[str] | None = None,
        predicate: FilePredicate | None = None,
    ) -> dict[str, Any]:
        """Generate the data dictionary for this resource.

        Later cascade levels overwrite earlier ones on id collision, so a
        theme file replaces a base or system file with the same id.

        Args:
            id: Single id or ids to generate instead of every file
            predicate: Custom validity check called with (id, collection).
                       Example, only ids starting with "a":
                       ``generate(predicate=lambda id, c: id.startswith("a"))``

        Returns:
            Dictionary of generated records {id: record}; empty when no
            files are found
        """
        result: dict[str, Any] = {}
        for pointer in self.files(id, predicate):
            model = self.load_model(pointer)
            if model is None:
                result[pointer.id] = pointer
            else:
                result.update(model.generate())

        logger.info(f"{self._resource_name}: {len(result)} processed")
        return result

    def get(self, pointer_id: str) -> Any:
        """Get the cascade-merged record for one id.

        Runs a full generation so the merge applies exactly as it does for
        the whole resource.

        Returns:
            Record, or None if no level defines the id
        """
        return self.generate().get(pointer_id)

    def find(self, pointer: FilePointer) -> Any:
        """Load the model for a single pointer without generating the rest.

        Returns:
            Model instance, or None if the resource type has no model
        """
        return self.load_model(pointer)

    def load_model(self, pointer: FilePointer) -> Any:
        model = self._resource_type.model
        if model is None:
            return None
        return model(self._site, pointer)

    def load_model_view(self, pointer: FilePointer) -> Any:
        """Wrap the model for a pointer in the type's model view.

        Returns:
            ModelView instance, the bare model if the type has no view,
            or None if the type has no model
        """
        model = self.load_model(pointer)
        if model is None or self._resource_type.model_view is None:
            return model
        return self._resource_type.model_view(self._site, model)

    def load_collection_view(self) -> Any:
        return self._site.resources.collection_view(self._resource_name)

    def load_client(self, opts: dict[str, Any] | None = None) -> Any:
        return self._site.resources.client(self._resource_name, opts)

    def load_compiler(self) -> Any:
        return self._site.resources.compiler(self._resource_name)

    def load_watcher(self) -> Any:
        return self._site.resources.watcher(self._resource_name)

    def load_previewer(self) -> Any:
        return self._site.resources.previewer(self._resource_name)
