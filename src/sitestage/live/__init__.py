"""Development mode file watching."""

from sitestage.live.watcher import Watcher, WatchEvent, WatchManager

__all__ = ["WatchEvent", "WatchManager", "Watcher"]
