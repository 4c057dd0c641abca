"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from linkmeta.api import app

    uvicorn linkmeta.api:app --reload
"""

from linkmeta.api.app import app

__all__ = ["app"]
