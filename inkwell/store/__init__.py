"""Document store collaborators."""

from inkwell.store.base import DocumentStore
from inkwell.store.local_store import LocalStore

__all__ = ["DocumentStore", "LocalStore"]
