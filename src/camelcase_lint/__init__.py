"""Camel-case naming lint for type-like declarations."""

__version__ = "0.3.0"
