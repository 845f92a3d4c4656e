"""File watching for development mode.

Monitors the cascade roots for changes and routes each changed file to
the watcher of the resource that owns it.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any

from watchfiles import Change, watch

from sitestage.core.view import CollectionView

if TYPE_CHECKING:
    from sitestage.core.site import Site

logger = logging.getLogger(__name__)


class Watcher:
    """Generic watcher used when a resource type does not supply its own."""

    def __init__(self, collection_view: CollectionView) -> None:
        self._view = collection_view

    def match(self, path: str) -> bool:
        """Check whether a changed path belongs to this resource.

        Args:
            path: Path relative to a cascade root (e.g., "posts/hello.md")

        Returns:
            True if path is inside the resource's namespace
        """
        parts = PurePosixPath(path).parts
        return len(parts) > 1 and parts[0] == self._view.namespace

    def update(self, path: str) -> tuple[str, Any]:
        """Regenerate the id affected by a change.

        Args:
            path: Path relative to a cascade root (e.g., "posts/hello.md")

        Returns:
            Tuple of (id, cascade-merged record or None if the id is gone)
        """
        pointer_id = PurePosixPath(path).relative_to(self._view.namespace).as_posix()
        return pointer_id, self._view.get(pointer_id)


@dataclass
class WatchEvent:
    """A change routed to a resource."""

    resource: str
    id: str
    change: Change
    record: Any


class WatchManager:
    """Watches cascade roots and dispatches changes to resource watchers."""

    def __init__(self, site: "Site", watch_patterns: list[str] | None = None) -> None:
        """Initialize the watch manager.

        Args:
            site: Global site context
            watch_patterns: Glob patterns to watch (default: ["**/*"])
        """
        self._site = site
        self._watch_patterns = watch_patterns or ["**/*"]

    def roots(self) -> list[Path]:
        """Get existing cascade roots, highest precedence first."""
        return [level.root for level in reversed(self._site.cascade.paths()) if level.root.is_dir()]

    def run(self, **kwargs: Any) -> Iterator[WatchEvent]:
        """Watch for file changes and yield routed events.

        Args:
            **kwargs: Passed to watchfiles.watch (e.g., stop_event)

        Yields:
            WatchEvent for each change that a resource watcher claims
        """
        roots = self.roots()
        if not roots:
            return
        for changes in watch(*roots, **kwargs):
            for change_type, path_str in sorted(changes, key=lambda c: c[1]):
                yield from self.dispatch(change_type, Path(path_str))

    def dispatch(self, change_type: Change, path: Path) -> list[WatchEvent]:
        """Route one filesystem change to the resources that claim it.

        Args:
            change_type: watchfiles change kind
            path: Absolute path of the changed file

        Returns:
            Events for every resource whose watcher matched
        """
        relative = self._to_relative(path)
        if relative is None or not self._matches_patterns(relative):
            return []

        events: list[WatchEvent] = []
        registry = self._site.resources
        for name in registry.all():
            watcher = registry.watcher(name)
            if not watcher.match(relative):
                continue
            pointer_id, record = watcher.update(relative)
            logger.info(f"{name}: {change_type.name} {pointer_id}")
            events.append(WatchEvent(resource=name, id=pointer_id, change=change_type, record=record))
        return events

    def _to_relative(self, path: Path) -> str | None:
        """Convert an absolute path to a path relative to its cascade root.

        Theme and base roots may be nested (the theme usually lives inside
        the site root), so the most specific root wins.
        """
        for root in self.roots():
            try:
                return path.relative_to(root).as_posix()
            except ValueError:
                continue
        return None

    def _matches_patterns(self, relative: str) -> bool:
        """Check if a relative path matches any watch pattern."""
        candidate = PurePosixPath(relative)
        return any(candidate.match(pattern) for pattern in self._watch_patterns)
