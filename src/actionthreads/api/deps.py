"""Centralized FastAPI dependency definitions for the API layer.

Routers should import dependencies from here instead of directly from
their underlying implementation modules. This provides:

* A stable import surface (refactors in lower layers don't ripple up)
* Easier test overrides via ``app.dependency_overrides[deps.get_current_user]``
  and ``app.dependency_overrides[deps.get_summarizer]``

Add new dependency callables here as the API grows.
"""

from actionthreads.db.session import get_db
from actionthreads.core.auth import get_current_user
from actionthreads.core.modelhub import get_summarizer

__all__ = ["get_db", "get_current_user", "get_summarizer"]
