"""Adapters - I/O implementations of ports."""

from .file_store import FileTaskStore
from .supabase_api import SupabaseAdapter, SupabaseError, AuthenticationError

__all__ = [
    "FileTaskStore",
    "SupabaseAdapter",
    "SupabaseError",
    "AuthenticationError",
]
