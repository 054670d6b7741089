"""
Endpoint modules.

Each module defines an ``APIRouter`` for one area (auth, hives, crops,
export, sync, admin); ``api/router.py`` aggregates them.
"""
