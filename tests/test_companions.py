"""Tests for the generic companions: view, client, compiler and previewer."""

from collections.abc import Callable
from pathlib import Path

import pytest
from sitestage.config import ResourceConfig
from sitestage.core.client import to_json
from sitestage.core.site import Site
from sitestage.core.types import FilePointer

WriteFile = Callable[..., Path]


@pytest.fixture
def media_site(
    make_site: Callable[..., Site],
    system_dir: Path,
    site_dir: Path,
    theme_dir: Path,
    write_file: WriteFile,
) -> Site:
    """Site with an "assets" media resource spread over all levels."""
    write_file(system_dir / "assets" / "logo.png", "system-logo")
    write_file(system_dir / "assets" / "style.css", "system-style")
    write_file(site_dir / "assets" / "img" / "photo.jpg", "base-photo")
    write_file(theme_dir / "assets" / "logo.png", "theme-logo")
    return make_site({"assets": ResourceConfig(use="media")})


class TestCollectionView:
    """Tests for CollectionView."""

    def test__ids__sorted(self, media_site: Site) -> None:
        """Ids are listed in sorted order."""
        view = media_site.resources.collection_view("assets")

        assert view.ids() == ["img/photo.jpg", "logo.png", "style.css"]

    def test__all__records_ordered_by_id(self, media_site: Site, theme_dir: Path) -> None:
        """Records follow id order and reflect the cascade."""
        view = media_site.resources.collection_view("assets")

        records = view.all()

        assert [r.id for r in records] == ["img/photo.jpg", "logo.png", "style.css"]
        assert records[1].realpath == (theme_dir / "assets" / "logo.png").resolve()

    def test__naming(self, media_site: Site) -> None:
        """View exposes the resource name and namespace."""
        view = media_site.resources.collection_view("assets")

        assert view.resource_name == "assets"
        assert view.namespace == "assets"
        assert repr(view) == "CollectionView('assets')"


class TestClient:
    """Tests for Client."""

    def test__list(self, media_site: Site) -> None:
        """List delegates to the view ids."""
        assert media_site.resources.client("assets").list() == ["img/photo.jpg", "logo.png", "style.css"]

    def test__show__pointer_as_dict(self, media_site: Site, theme_dir: Path) -> None:
        """Show converts pointers to plain data."""
        record = media_site.resources.client("assets").show("logo.png")

        assert record == {
            "id": "logo.png",
            "realpath": str((theme_dir / "assets" / "logo.png").resolve()),
            "resource": "assets",
        }

    def test__show__missing__returns_none(self, media_site: Site) -> None:
        """Show returns None for unknown ids."""
        assert media_site.resources.client("assets").show("missing.png") is None

    def test__to_json__nested(self, tmp_path: Path) -> None:
        """Nested structures are converted recursively."""
        pointer = FilePointer(id="a", realpath=tmp_path / "a", resource="x")

        result = to_json({"items": [pointer, 1, None], "path": tmp_path})

        assert result == {
            "items": [{"id": "a", "realpath": str(tmp_path / "a"), "resource": "x"}, 1, None],
            "path": str(tmp_path),
        }


class TestCompiler:
    """Tests for the generic Compiler."""

    def test__winners__highest_level_per_id(self, media_site: Site, system_dir: Path, theme_dir: Path) -> None:
        """Each id maps to its highest-precedence file."""
        winners = media_site.resources.compiler("assets").winners()

        assert winners["logo.png"].realpath == (theme_dir / "assets" / "logo.png").resolve()
        assert winners["style.css"].realpath == (system_dir / "assets" / "style.css").resolve()

    def test__run__copies_winners(self, media_site: Site, tmp_path: Path) -> None:
        """Winning files are copied under output/<namespace>/."""
        output_dir = tmp_path / "compiled"

        written = media_site.resources.compiler("assets").run(output_dir)

        assert written == [
            output_dir / "assets" / "img" / "photo.jpg",
            output_dir / "assets" / "logo.png",
            output_dir / "assets" / "style.css",
        ]
        assert (output_dir / "assets" / "logo.png").read_text(encoding="utf-8") == "theme-logo"
        assert (output_dir / "assets" / "img" / "photo.jpg").read_text(encoding="utf-8") == "base-photo"

    def test__run__creates_gitignore(self, media_site: Site, tmp_path: Path) -> None:
        """A fresh output directory gets a .gitignore."""
        output_dir = tmp_path / "compiled"

        media_site.resources.compiler("assets").run(output_dir)

        assert (output_dir / ".gitignore").read_text(encoding="utf-8") == "# Ignore everything in this directory\n*\n"

    def test__run__keeps_existing_output_dir(self, media_site: Site, tmp_path: Path) -> None:
        """An existing output directory is reused as is."""
        output_dir = tmp_path / "out"
        output_dir.mkdir()

        media_site.resources.compiler("assets").run(output_dir)

        assert not (output_dir / ".gitignore").exists()

    def test__run__nothing_to_compile(self, make_site: Callable[..., Site], tmp_path: Path) -> None:
        """No files means no output directory."""
        output_dir = tmp_path / "compiled"

        written = make_site().resources.compiler("posts").run(output_dir)

        assert written == []
        assert not output_dir.exists()


class TestPreviewer:
    """Tests for the generic Previewer."""

    @pytest.fixture
    def docs_site(self, make_site: Callable[..., Site], site_dir: Path, write_file: WriteFile) -> Site:
        write_file(site_dir / "docs" / "index.md", "# Home")
        write_file(site_dir / "docs" / "about.md", "# About")
        write_file(site_dir / "docs" / "contact.html", "<h1>Contact</h1>")
        write_file(site_dir / "docs" / "guide" / "index.md", "# Guide")
        write_file(site_dir / "docs" / "raw.txt", "raw")
        return make_site({"docs": ResourceConfig(use="media")})

    @pytest.mark.parametrize(
        ("path", "expected_id"),
        [
            ("/", "index.md"),
            ("", "index.md"),
            ("/about", "about.md"),
            ("about.md", "about.md"),
            ("/contact", "contact.html"),
            ("/guide/", "guide/index.md"),
            ("raw.txt", "raw.txt"),
        ],
    )
    def test__lookup__resolves_path(self, docs_site: Site, path: str, expected_id: str) -> None:
        """Paths map to ids using extension and index conventions."""
        record = docs_site.resources.previewer("docs").lookup(path)

        assert record.id == expected_id

    def test__lookup__missing__returns_none(self, docs_site: Site) -> None:
        """Unknown paths return None."""
        assert docs_site.resources.previewer("docs").lookup("/nope") is None
