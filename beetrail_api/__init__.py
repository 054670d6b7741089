"""
Top-level package for the BeeTrail API.

All functionality lives in submodules under ``app``; the application
object is importable as ``beetrail_api.app.main:app``.
"""

__all__ = []
