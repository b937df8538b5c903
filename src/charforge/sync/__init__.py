"""Remote store synchronization for single characters."""

from charforge.sync.client import CharacterPayload, LoadResponse, RemoteSyncClient

__all__ = [
    "CharacterPayload",
    "LoadResponse",
    "RemoteSyncClient",
]
