"""
Application context.

``AppContext`` bundles everything a request needs from process-level
configuration: the settings (signing secret, token lifetime) and the
``Database``.  It is built by ``create_app`` and stored on
``app.state.ctx``; endpoints obtain it through the ``get_context``
dependency instead of importing module-level globals.
"""

from dataclasses import dataclass

from fastapi import Request

from .config import Settings
from .db import Database


@dataclass
class AppContext:
    settings: Settings
    db: Database

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls(settings=settings, db=Database(settings.database_url))


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context attached to the running app."""
    return request.app.state.ctx
