"""Resource types shipped with sitestage.

Built-in types are generic behaviors a resource can opt into with
``use``. Installed types bind to the resource of the same name without
configuration; theme plugins add to and override them.
"""

from sitestage.core.resolver import ResourceType, TypeRegistry
from sitestage.resources.layouts import LAYOUTS
from sitestage.resources.pages import PAGES

# Partial templates, kept as plain pointers
PARTIALS = ResourceType(name="partials")

# Static files copied through by the generic compiler
MEDIA = ResourceType(name="media")


def default_base_types() -> TypeRegistry:
    """Create the built-in type registry."""
    return TypeRegistry([PAGES, MEDIA])


def default_registered_types() -> TypeRegistry:
    """Create the installed type registry before plugins are loaded."""
    return TypeRegistry([LAYOUTS, PARTIALS])


__all__ = [
    "LAYOUTS",
    "MEDIA",
    "PAGES",
    "PARTIALS",
    "default_base_types",
    "default_registered_types",
]
