"""Generic resource compiler.

Copies the winning file of every id to the output directory:

    compiled/
    ├── .gitignore
    ├── media/
    │   └── logo.png            # from theme/media/logo.png if present,
    │                           # else base/ or system/
    └── layouts/
        └── default.html
"""

import logging
import shutil
from pathlib import Path

from sitestage.core.types import FilePointer
from sitestage.core.view import CollectionView

logger = logging.getLogger(__name__)


class Compiler:
    """Generic compiler used when a resource type does not supply its own."""

    _GITIGNORE_CONTENT = "# Ignore everything in this directory\n*\n"

    def __init__(self, collection_view: CollectionView) -> None:
        self._view = collection_view

    def winners(self) -> dict[str, FilePointer]:
        """Get the highest-precedence pointer for each id."""
        winners: dict[str, FilePointer] = {}
        for pointer in self._view.collection.files():
            winners[pointer.id] = pointer
        return winners

    def run(self, output_dir: Path) -> list[Path]:
        """Copy the resource's files into output_dir/<namespace>/.

        Args:
            output_dir: Root output directory (e.g., compiled/)

        Returns:
            Written file paths, sorted by id
        """
        winners = self.winners()
        if not winners:
            return []

        self._ensure_output_dir(output_dir)
        target_dir = output_dir / self._view.namespace

        written: list[Path] = []
        for pointer_id in sorted(winners):
            target = target_dir / pointer_id
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(winners[pointer_id].realpath, target)
            written.append(target)

        logger.info(f"{self._view.resource_name}: compiled {len(written)} files to {target_dir}")
        return written

    def _ensure_output_dir(self, output_dir: Path) -> None:
        """Create output directory with .gitignore if it doesn't exist."""
        if not output_dir.exists():
            output_dir.mkdir(parents=True, exist_ok=True)
            gitignore_path = output_dir / ".gitignore"
            gitignore_path.write_text(self._GITIGNORE_CONTENT, encoding="utf-8")
