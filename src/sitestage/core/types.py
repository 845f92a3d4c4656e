"""Core type definitions."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import NewType

# Directory segment searched for under each cascade root (e.g., "posts")
# Distinct from the resource name to catch un-normalized lookups
Namespace = NewType("Namespace", str)

# Lower-to-upper ("BlogPosts") and acronym-to-word ("HTMLPages") boundaries
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_namespace(resource_name: str) -> Namespace:
    """Normalize a resource name to its snake_case namespace.

    Args:
        resource_name: Resource name (e.g., "MyPosts", "my-posts", "HTMLPages")

    Returns:
        Namespace (e.g., "my_posts")
    """
    underscored = _CAMEL_BOUNDARY_RE.sub("_", resource_name)
    return Namespace(underscored.replace("-", "_").lower())


@dataclass(frozen=True)
class PathLevel:
    """One level of the override cascade."""

    name: str
    root: Path


@dataclass(frozen=True)
class FilePointer:
    """Identity of one candidate content file.

    The id is the path relative to the namespace directory and is the
    key used when merging cascade levels.
    """

    id: str
    realpath: Path
    resource: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "realpath": str(self.realpath),
            "resource": self.resource,
        }
