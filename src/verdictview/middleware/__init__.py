"""HTTP middleware."""

from verdictview.middleware.auth import APITokenMiddleware

__all__ = ["APITokenMiddleware"]
