"""State/store layer.

Two stores follow the same pattern: immutable in-memory state replaced on
every change, plus durable key-value persistence through a
:class:`autoconnex.storage.StorageAdapter`.
"""

from autoconnex.state.draft import DraftStore
from autoconnex.state.listings import ListingStore

__all__ = ["DraftStore", "ListingStore"]
