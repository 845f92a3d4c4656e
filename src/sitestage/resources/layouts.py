"""Layouts resource type."""

from typing import TYPE_CHECKING, Any

from sitestage.core.resolver import ResourceType
from sitestage.core.types import FilePointer

if TYPE_CHECKING:
    from sitestage.core.site import Site


class LayoutModel:
    """Reads a layout template."""

    def __init__(self, site: "Site", pointer: FilePointer) -> None:
        self._site = site
        self._pointer = pointer

    def generate(self) -> dict[str, dict[str, Any]]:
        return {
            self._pointer.id: {
                **self._pointer.to_dict(),
                "content": self._pointer.realpath.read_text(encoding="utf-8"),
            },
        }


LAYOUTS = ResourceType(name="layouts", model=LayoutModel)
