"""Sitestage - resource resolution core for static sites."""

__version__ = "0.1.0"
