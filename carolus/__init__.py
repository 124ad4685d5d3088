"""Carolus: index a local movie and TV library and resolve playable files."""

__version__ = "0.1.0"
