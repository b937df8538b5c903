"""charforge - build tabletop characters and sync them with a remote store."""

__version__ = "0.1.0"
