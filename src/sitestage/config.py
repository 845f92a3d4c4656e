"""Configuration management for Sitestage.

Supports TOML configuration format with auto-discovery.
"""

import logging
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from sitestage.assets import get_system_dir

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "sitestage.toml"


@dataclass
class PathsConfig:
    """Cascade root configuration."""

    base: Path = field(default_factory=lambda: Path("."))
    system: Path = field(default_factory=get_system_dir)


@dataclass
class ThemeConfig:
    """Active theme configuration."""

    name: str | None = None


@dataclass
class CompileConfig:
    """Compilation output configuration."""

    output_dir: Path = field(default_factory=lambda: Path("compiled"))


@dataclass
class LiveReloadConfig:
    """Watch mode configuration."""

    enabled: bool = True
    watch_patterns: list[str] | None = None


@dataclass
class ResourceConfig:
    """Per-resource configuration."""

    use: str | None = None
    exclude: list[str] = field(default_factory=list)
    options: dict[str, object] = field(default_factory=dict)


@dataclass
class Config:
    """Application configuration."""

    paths: PathsConfig
    theme: ThemeConfig
    compile: CompileConfig
    live_reload: LiveReloadConfig
    resources: dict[str, ResourceConfig] = field(default_factory=dict)
    config_path: Path | None = None

    @property
    def theme_dir(self) -> Path | None:
        """Root of the active theme, or None when no theme is configured."""
        if self.theme.name is None:
            return None
        return self.paths.base / self.theme.name

    def resource(self, name: str) -> ResourceConfig:
        """Get configuration for a resource.

        Args:
            name: Resource name

        Returns:
            ResourceConfig, empty when the resource is not configured
        """
        return self.resources.get(name) or ResourceConfig()

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for sitestage.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            paths=PathsConfig(),
            theme=ThemeConfig(),
            compile=CompileConfig(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        config_dir = path.parent

        paths = cls._parse_paths(data.get("paths"), config_dir)
        theme = cls._parse_theme(data.get("theme"))
        compile_config = cls._parse_compile(data.get("compile"), paths.base)
        live_reload = cls._parse_live_reload(data.get("live_reload"))
        resources = cls._parse_resources(data.get("resources"))

        return cls(
            paths=paths,
            theme=theme,
            compile=compile_config,
            live_reload=live_reload,
            resources=resources,
            config_path=path,
        )

    @classmethod
    def _parse_paths(cls, data: object, config_dir: Path) -> PathsConfig:
        """Parse paths configuration section.

        Args:
            data: Raw paths section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            PathsConfig instance
        """
        if data is None:
            return PathsConfig(base=config_dir)

        if not isinstance(data, dict):
            raise ValueError("paths section must be a dictionary")

        base = data.get("base", ".")
        if not isinstance(base, str):
            raise ValueError("paths.base must be a string")
        base_path = config_dir / base

        system = data.get("system")
        if system is None:
            return PathsConfig(base=base_path)
        if not isinstance(system, str):
            raise ValueError("paths.system must be a string")

        return PathsConfig(base=base_path, system=config_dir / system)

    @classmethod
    def _parse_theme(cls, data: object) -> ThemeConfig:
        if data is None:
            return ThemeConfig()

        if not isinstance(data, dict):
            raise ValueError("theme section must be a dictionary")

        name = data.get("name")
        if name is not None and not isinstance(name, str):
            raise ValueError("theme.name must be a string")

        return ThemeConfig(name=name)

    @classmethod
    def _parse_compile(cls, data: object, base_dir: Path) -> CompileConfig:
        """Parse compile configuration section.

        Args:
            data: Raw compile section data
            base_dir: Site root (output_dir is relative to it)

        Returns:
            CompileConfig instance
        """
        if data is None:
            return CompileConfig(output_dir=base_dir / "compiled")

        if not isinstance(data, dict):
            raise ValueError("compile section must be a dictionary")

        output_dir = data.get("output_dir", "compiled")
        if not isinstance(output_dir, str):
            raise ValueError("compile.output_dir must be a string")

        return CompileConfig(output_dir=base_dir / output_dir)

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section.

        Args:
            data: Raw live_reload section data

        Returns:
            LiveReloadConfig instance
        """
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        watch_patterns_raw = data.get("watch_patterns")
        watch_patterns: list[str] | None = None
        if watch_patterns_raw is not None:
            if not isinstance(watch_patterns_raw, list):
                raise ValueError("live_reload.watch_patterns must be a list")
            watch_patterns = []
            for item in watch_patterns_raw:
                if not isinstance(item, str):
                    raise ValueError("live_reload.watch_patterns items must be strings")
                watch_patterns.append(item)

        return LiveReloadConfig(enabled=enabled, watch_patterns=watch_patterns)

    @classmethod
    def _parse_resources(cls, data: object) -> dict[str, ResourceConfig]:
        """Parse resources configuration section.

        A resource entry that is not a table is reported and treated as
        empty so the remaining resources still build.

        Args:
            data: Raw resources section data

        Returns:
            Mapping of resource name to ResourceConfig
        """
        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ValueError("resources section must be a dictionary")

        resources: dict[str, ResourceConfig] = {}
        for name, entry in data.items():
            if not isinstance(entry, dict):
                logger.error(
                    f"'{name}' config key in {CONFIG_FILENAME} is a "
                    f"{type(entry).__name__}; it needs to be a table.",
                )
                resources[name] = ResourceConfig()
                continue
            resources[name] = cls._parse_resource(name, entry)

        return resources

    @classmethod
    def _parse_resource(cls, name: str, data: dict[str, object]) -> ResourceConfig:
        """Parse a single resources.<name> table.

        Args:
            name: Resource name
            data: Raw resource table

        Returns:
            ResourceConfig instance
        """
        use = data.get("use")
        if use is not None and not isinstance(use, str):
            raise ValueError(f"resources.{name}.use must be a string")

        exclude_raw = data.get("exclude", [])
        if isinstance(exclude_raw, str):
            exclude_raw = [exclude_raw]
        if not isinstance(exclude_raw, list):
            raise ValueError(f"resources.{name}.exclude must be a list")
        exclude: list[str] = []
        for item in exclude_raw:
            if not isinstance(item, str):
                raise ValueError(f"resources.{name}.exclude items must be strings")
            exclude.append(item)

        options = {k: v for k, v in data.items() if k not in ("use", "exclude")}

        return ResourceConfig(use=use, exclude=exclude, options=options)

    def with_overrides(
        self,
        *,
        base_dir: Path | None = None,
        theme: str | None = None,
        output_dir: Path | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            base_dir: Override paths.base
            theme: Override theme.name
            output_dir: Override compile.output_dir

        Returns:
            New Config instance with overrides applied
        """
        paths = self.paths
        if base_dir is not None:
            paths = replace(self.paths, base=base_dir)

        theme_config = self.theme
        if theme is not None:
            theme_config = replace(self.theme, name=theme)

        compile_config = self.compile
        if output_dir is not None:
            compile_config = replace(self.compile, output_dir=output_dir)

        return replace(
            self,
            paths=paths,
            theme=theme_config,
            compile=compile_config,
        )
