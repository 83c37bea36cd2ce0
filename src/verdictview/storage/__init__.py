"""VerdictView Storage Layer - Ephemeral session slots."""

from verdictview.storage.session import SessionStore

__all__ = ["SessionStore"]
