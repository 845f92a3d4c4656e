"""Command-line client for a resource.

Backs the ``files``/``generate`` style CLI commands. Resource types can
supply their own client to add commands such as scaffolding new files.
"""

from typing import Any

from sitestage.core.types import FilePointer
from sitestage.core.view import CollectionView


class Client:
    """Generic client used when a resource type does not supply its own."""

    def __init__(self, collection_view: CollectionView, opts: dict[str, Any]) -> None:
        """Initialize client.

        Args:
            collection_view: View over the resource's collection
            opts: Command options (e.g., {"verbose": True})
        """
        self._view = collection_view
        self._opts = opts

    @property
    def opts(self) -> dict[str, Any]:
        return self._opts

    def list(self) -> list[str]:
        """List generated ids."""
        return self._view.ids()

    def show(self, pointer_id: str) -> dict[str, Any] | None:
        """Get a JSON-serializable record for one id.

        Returns:
            Record dict, or None if the id does not exist
        """
        record = self._view.get(pointer_id)
        if record is None:
            return None
        return to_json(record)


def to_json(record: Any) -> Any:
    """Convert a generated record into JSON-serializable data."""
    if isinstance(record, FilePointer):
        return record.to_dict()
    if isinstance(record, dict):
        return {key: to_json(value) for key, value in record.items()}
    if isinstance(record, list):
        return [to_json(item) for item in record]
    if isinstance(record, (str, int, float, bool)) or record is None:
        return record
    return str(record)
