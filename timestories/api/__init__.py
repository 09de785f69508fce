"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from timestories.api import app

    uvicorn timestories.api:app --port 3000
"""

from timestories.api.app import app

__all__ = ["app"]
