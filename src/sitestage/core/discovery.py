"""File discovery across the override cascade.

Collects candidate files for a resource namespace from every cascade
level. Files are returned level by level in precedence order so that
merging them front to back lets higher levels overwrite lower ones.
"""

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path, PurePosixPath
from typing import Any

from sitestage.core.paths import PathCascade
from sitestage.core.types import FilePointer, Namespace

logger = logging.getLogger(__name__)

# Receives (id, collection); returns whether the candidate is kept
FilePredicate = Callable[[str, Any], bool]


def valid_file(namespace_dir: Path, file_id: str, excludes: Sequence[re.Pattern[str]] = ()) -> bool:
    """Check whether a candidate file should be processed.

    Args:
        namespace_dir: Namespace directory on one cascade level
        file_id: Candidate path relative to namespace_dir
        excludes: Compiled exclusion patterns, searched in file_id

    Returns:
        False for missing paths, directories, ids with a hidden part
        (".DS_Store", "sub/.cache/x") and excluded ids
    """
    path = namespace_dir / file_id
    if not path.exists():
        return False
    if path.is_dir():
        return False
    if any(part.startswith(".") for part in PurePosixPath(file_id).parts):
        return False
    return not any(regex.search(file_id) for regex in excludes)


class FileDiscovery:
    """Lists candidate files for a namespace on every cascade level."""

    def __init__(self, cascade: PathCascade) -> None:
        self._cascade = cascade

    def files(
        self,
        namespace: Namespace,
        resource_name: str,
        ids: str | Iterable[str] | None = None,
        *,
        glob: str = "**/*",
        excludes: Iterable[str] = (),
        predicate: FilePredicate | None = None,
        collection: Any = None,
    ) -> list[FilePointer]:
        """Collect file pointers for a namespace.

        Each id may be found on several levels; one pointer is returned per
        level that has it.

        Args:
            namespace: Directory segment searched under each root
            resource_name: Resource recorded on each pointer
            ids: Single id or ids to look up instead of globbing
            glob: Pattern listing candidates when ids is None
            excludes: Regular expressions rejecting matching ids
            predicate: Replaces the default validity check; called with
                       (id, collection)
            collection: Passed through to predicate

        Returns:
            FilePointers in cascade order, sorted by id within a level
            when globbing, in caller order when ids are given
        """
        compiled = [re.compile(pattern) for pattern in excludes]
        pointers: list[FilePointer] = []

        requested: list[str] | None = None
        if isinstance(ids, str):
            requested = [ids]
        elif ids is not None:
            requested = list(ids)

        for level in self._cascade.paths():
            namespace_dir = level.root / namespace
            if not namespace_dir.is_dir():
                continue

            if requested is None:
                candidates = _list_ids(namespace_dir, glob)
            else:
                candidates = requested

            found = 0
            for file_id in candidates:
                if predicate is not None:
                    keep = predicate(file_id, collection)
                else:
                    keep = valid_file(namespace_dir, file_id, compiled)
                if not keep:
                    continue

                pointers.append(
                    FilePointer(
                        id=file_id,
                        realpath=(namespace_dir / file_id).resolve(),
                        resource=resource_name,
                    ),
                )
                found += 1

            logger.debug(f"{resource_name}: {found} files on {level.name} level")

        return pointers


def _list_ids(namespace_dir: Path, glob: str) -> list[str]:
    """List paths matching glob as sorted POSIX ids relative to namespace_dir."""
    return sorted(path.relative_to(namespace_dir).as_posix() for path in namespace_dir.glob(glob))
