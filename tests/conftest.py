"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
from sitestage.config import (
    CompileConfig,
    Config,
    LiveReloadConfig,
    PathsConfig,
    ResourceConfig,
    ThemeConfig,
)
from sitestage.core.site import Site

THEME_NAME = "twitter"

WriteFile = Callable[..., Path]


@pytest.fixture
def system_dir(tmp_path: Path) -> Path:
    """Create the system cascade root."""
    path = tmp_path / "system"
    path.mkdir(exist_ok=True)
    return path


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Create the site (base) cascade root."""
    path = tmp_path / "site"
    path.mkdir(exist_ok=True)
    return path


@pytest.fixture
def theme_dir(site_dir: Path) -> Path:
    """Create the theme cascade root inside the site root."""
    path = site_dir / THEME_NAME
    path.mkdir(exist_ok=True)
    return path


@pytest.fixture
def test_config(tmp_path: Path, system_dir: Path, site_dir: Path, theme_dir: Path) -> Config:
    """Create a test configuration with tmp_path cascade roots.

    The theme is active; tests that need resource configuration replace
    the resources mapping.
    """
    return Config(
        paths=PathsConfig(base=site_dir, system=system_dir),
        theme=ThemeConfig(name=THEME_NAME),
        compile=CompileConfig(output_dir=tmp_path / "compiled"),
        live_reload=LiveReloadConfig(enabled=False),
    )


@pytest.fixture
def make_site(test_config: Config) -> Callable[..., Site]:
    """Build a Site from the test config with per-test resource configuration."""

    def factory(resources: dict[str, ResourceConfig] | None = None, **kwargs: object) -> Site:
        test_config.resources = resources or {}
        return Site(test_config, **kwargs)  # type: ignore[arg-type]

    return factory


@pytest.fixture
def write_file() -> WriteFile:
    """Write a file, creating parent directories."""

    def write(path: Path, content: str = "") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return write
