"""Collection views.

Read-only presentation layer over a collection, handed to templates and
to the other companions (client, compiler, watcher, previewer).
"""

from typing import Any

from sitestage.core.collection import Collection
from sitestage.core.types import Namespace


class CollectionView:
    """Generic view used when a resource type does not supply its own."""

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    @property
    def collection(self) -> Collection:
        return self._collection

    @property
    def resource_name(self) -> str:
        return self._collection.resource_name

    @property
    def namespace(self) -> Namespace:
        return self._collection.namespace

    def ids(self) -> list[str]:
        """Get generated ids in sorted order."""
        return sorted(self._collection.generate())

    def all(self) -> list[Any]:
        """Get generated records ordered by id."""
        data = self._collection.generate()
        return [data[key] for key in sorted(data)]

    def get(self, pointer_id: str) -> Any:
        return self._collection.get(pointer_id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.resource_name!r})"
