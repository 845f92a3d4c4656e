"""Tests for the shipped resource types."""

from collections.abc import Callable
from pathlib import Path

import pytest
from sitestage.core.site import Site
from sitestage.core.types import FilePointer
from sitestage.resources import default_base_types, default_registered_types
from sitestage.resources.layouts import LayoutModel
from sitestage.resources.pages import PageModel, PageModelView

WriteFile = Callable[..., Path]


class TestPageModel:
    """Tests for PageModel."""

    @pytest.mark.parametrize(
        ("resource", "pointer_id", "expected"),
        [
            ("pages", "index.md", "/"),
            ("pages", "about.md", "/about"),
            ("pages", "guide/index.md", "/guide"),
            ("pages", "guide/setup.md", "/guide/setup"),
            ("posts", "hello.md", "/posts/hello"),
            ("posts", "index.md", "/posts/"),
            ("BlogPosts", "first.html", "/blog_posts/first"),
        ],
    )
    def test__url(
        self,
        make_site: Callable[..., Site],
        tmp_path: Path,
        resource: str,
        pointer_id: str,
        expected: str,
    ) -> None:
        """URLs drop the suffix and index, prefixed by namespace outside pages."""
        pointer = FilePointer(id=pointer_id, realpath=tmp_path / pointer_id, resource=resource)

        assert PageModel(make_site(), pointer).url() == expected

    def test__title__from_heading(
        self,
        make_site: Callable[..., Site],
        site_dir: Path,
        write_file: WriteFile,
    ) -> None:
        """Markdown pages take the first H1 as title."""
        path = write_file(site_dir / "posts" / "hello.md", "intro\n\n# Hello World #\n\n# Second\n")
        pointer = FilePointer(id="hello.md", realpath=path, resource="posts")

        assert PageModel(make_site(), pointer).title() == "Hello World"

    def test__title__from_file_name(
        self,
        make_site: Callable[..., Site],
        site_dir: Path,
        write_file: WriteFile,
    ) -> None:
        """Without a heading the title comes from the file name."""
        path = write_file(site_dir / "posts" / "getting-started_now.html", "<p>hi</p>")
        pointer = FilePointer(id="getting-started_now.html", realpath=path, resource="posts")

        assert PageModel(make_site(), pointer).title() == "Getting Started Now"

    def test__title__undecodable_bytes(
        self,
        make_site: Callable[..., Site],
        site_dir: Path,
    ) -> None:
        """A non-UTF-8 page still generates; bad bytes become replacement characters."""
        path = site_dir / "posts" / "cafe.md"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"# Caf\xe9\n")

        result = make_site().collection("posts").generate()

        assert result["cafe.md"]["title"] == "Caf�"

    def test__generate__page_record(
        self,
        make_site: Callable[..., Site],
        site_dir: Path,
        write_file: WriteFile,
    ) -> None:
        """Collections of pages produce records with url and title."""
        path = write_file(site_dir / "posts" / "hello.md", "# Hello")

        result = make_site().collection("posts").generate()

        assert result == {
            "hello.md": {
                "id": "hello.md",
                "realpath": str(path.resolve()),
                "resource": "posts",
                "url": "/posts/hello",
                "title": "Hello",
            },
        }

    def test__model_view(
        self,
        make_site: Callable[..., Site],
        site_dir: Path,
        write_file: WriteFile,
    ) -> None:
        """Collections wrap page models in PageModelView."""
        path = write_file(site_dir / "pages" / "about.md", "# About us\n\nText")
        pointer = FilePointer(id="about.md", realpath=path.resolve(), resource="pages")

        view = make_site().collection("pages").load_model_view(pointer)

        assert isinstance(view, PageModelView)
        assert view.id == "about.md"
        assert view.title == "About us"
        assert view.url == "/about"
        assert view.content == "# About us\n\nText"


class TestLayoutModel:
    """Tests for LayoutModel."""

    def test__generate__includes_content(
        self,
        make_site: Callable[..., Site],
        system_dir: Path,
        write_file: WriteFile,
    ) -> None:
        """Layout records carry the template text."""
        path = write_file(system_dir / "layouts" / "default.html", "<html>{{ content }}</html>")
        pointer = FilePointer(id="default.html", realpath=path, resource="layouts")

        result = LayoutModel(make_site(), pointer).generate()

        assert result["default.html"]["content"] == "<html>{{ content }}</html>"

    def test__theme_layout_overrides_system(
        self,
        make_site: Callable[..., Site],
        system_dir: Path,
        theme_dir: Path,
        write_file: WriteFile,
    ) -> None:
        """Layouts resolve through the installed type without configuration."""
        write_file(system_dir / "layouts" / "default.html", "system")
        write_file(theme_dir / "layouts" / "default.html", "theme")

        record = make_site().collection("layouts").get("default.html")

        assert record["content"] == "theme"


class TestDefaultTypes:
    """Tests for the default type registries."""

    def test__fresh_registries(self) -> None:
        """Each call returns a new registry so plugins never leak between sites."""
        assert default_base_types().names() == ["pages", "media"]
        assert default_registered_types().names() == ["layouts", "partials"]
        assert default_registered_types() is not default_registered_types()
