"""
Pydantic schema definitions for API payloads.

Field names are snake_case in Python and camelCase on the wire
(``hiveId``, ``floweringStart`` ...) through aliases.  Schemas are kept
apart from the SQLite rows so the API representation can evolve
independently of the tables.
"""
