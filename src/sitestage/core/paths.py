"""Override cascade roots.

Resources are looked up under three roots, lowest precedence first:
system defaults bundled with sitestage, the site's base directory,
and the active theme directory when a theme is configured.
"""

from pathlib import Path

from sitestage.config import Config
from sitestage.core.types import Namespace, PathLevel


class PathCascade:
    """Ordered override roots for the current build context."""

    __slots__ = ("_system", "_base", "_theme")

    def __init__(self, system: Path, base: Path, theme: Path | None = None) -> None:
        """Initialize cascade.

        Args:
            system: Built-in defaults root
            base: Site root
            theme: Active theme root, None when no theme is configured
        """
        self._system = system
        self._base = base
        self._theme = theme

    @classmethod
    def from_config(cls, config: Config) -> "PathCascade":
        """Build the cascade from path and theme configuration."""
        return cls(config.paths.system, config.paths.base, config.theme_dir)

    @property
    def base(self) -> Path:
        """Site root."""
        return self._base

    def paths(self) -> list[PathLevel]:
        """Get cascade levels in precedence order (system, base, theme)."""
        levels = [
            PathLevel(name="system", root=self._system),
            PathLevel(name="base", root=self._base),
        ]
        if self._theme is not None:
            levels.append(PathLevel(name="theme", root=self._theme))
        return levels

    def has_any_path(self, namespace: Namespace) -> bool:
        """Check whether any cascade level has a directory for namespace.

        Args:
            namespace: Resource namespace

        Returns:
            False when no level has the directory, so the resource has
            nothing to process
        """
        return any((level.root / namespace).is_dir() for level in self.paths())
