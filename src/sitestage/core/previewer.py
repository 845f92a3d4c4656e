"""Preview lookups.

Maps a URL-like path from a preview request to the generated record
that should be shown for it.
"""

from typing import Any

from sitestage.core.view import CollectionView


class Previewer:
    """Generic previewer used when a resource type does not supply its own."""

    def __init__(self, collection_view: CollectionView) -> None:
        self._view = collection_view

    def lookup(self, path: str) -> Any:
        """Resolve a path to a generated record.

        Handles the index.md convention for directories.

        Args:
            path: Path relative to the resource (e.g., "guide" or "/guide/")

        Returns:
            Record, or None if nothing matches
        """
        data = self._view.collection.generate()
        for candidate in self._candidates(path):
            if candidate in data:
                return data[candidate]
        return None

    def _candidates(self, path: str) -> list[str]:
        """Ids tried in order for a path."""
        normalized = path.strip("/")
        if not normalized:
            return ["index.md", "index.html"]
        return [
            normalized,
            f"{normalized}.md",
            f"{normalized}.html",
            f"{normalized}/index.md",
            f"{normalized}/index.html",
        ]
