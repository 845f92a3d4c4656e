"""Pages resource type.

The default type: any resource without an explicit type is built as
pages. Each file becomes one page record with a URL and a title.
"""

import re
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

from sitestage.core.resolver import ResourceType
from sitestage.core.types import FilePointer, to_namespace

if TYPE_CHECKING:
    from sitestage.core.site import Site

H1_RE = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)


class PageModel:
    """Turns one page file into a page record."""

    def __init__(self, site: "Site", pointer: FilePointer) -> None:
        self._site = site
        self._pointer = pointer

    @property
    def pointer(self) -> FilePointer:
        return self._pointer

    def content(self) -> str:
        """Read the page source; undecodable bytes become U+FFFD."""
        return self._pointer.realpath.read_text(encoding="utf-8", errors="replace")

    def generate(self) -> dict[str, dict[str, Any]]:
        """Generate the page record.

        Returns:
            Single-entry dict {id: record}
        """
        pointer = self._pointer
        return {
            pointer.id: {
                **pointer.to_dict(),
                "url": self.url(),
                "title": self.title(),
            },
        }

    def url(self) -> str:
        """Build the page URL.

        Pages of the "pages" resource live at the site root, other
        resources are prefixed with their namespace.

        Returns:
            URL path (e.g., "/about", "/posts/hello", "/guide" for guide/index.md)
        """
        doc_path = str(PurePosixPath(self._pointer.id).with_suffix(""))

        if doc_path == "index":
            doc_path = ""
        elif doc_path.endswith("/index"):
            doc_path = doc_path.removesuffix("/index")

        prefix = "" if self._pointer.resource == "pages" else f"/{to_namespace(self._pointer.resource)}"
        return f"{prefix}/{doc_path}" if doc_path else f"{prefix}/"

    def title(self) -> str:
        """Extract the title from the first H1, falling back to the file name."""
        if self._pointer.realpath.suffix == ".md":
            match = H1_RE.search(self.content())
            if match:
                return match.group(1)
        stem = PurePosixPath(self._pointer.id).stem
        return stem.replace("-", " ").replace("_", " ").title()


class PageModelView:
    """Template-facing view over a page model."""

    def __init__(self, site: "Site", model: PageModel) -> None:
        self._site = site
        self._model = model

    @property
    def id(self) -> str:
        return self._model.pointer.id

    @property
    def title(self) -> str:
        return self._model.title()

    @property
    def url(self) -> str:
        return self._model.url()

    @property
    def content(self) -> str:
        return self._model.content()


PAGES = ResourceType(name="pages", model=PageModel, model_view=PageModelView)
