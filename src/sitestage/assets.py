"""Asset discovery for bundled system defaults.

Locates the system cascade level bundled into the sitestage package.
"""

from importlib.resources import files
from pathlib import Path


def get_system_dir() -> Path:
    """Return path to the bundled system defaults.

    Returns:
        Path to the directory holding built-in resource files
        (e.g., system/layouts/default.html).

    Raises:
        FileNotFoundError: If system defaults are not bundled.
    """
    system = files("sitestage").joinpath("system")
    if not system.is_dir():
        msg = "Bundled system defaults not found. Reinstall sitestage."
        raise FileNotFoundError(msg)
    return Path(str(system))
