"""
Application package.

The service is split into ``core`` (configuration, database, security,
errors), ``schemas`` (request/response models), ``services`` (business
logic over SQLite) and ``api`` (FastAPI routers).  Use
``main.create_app`` to build an application instance.
"""
