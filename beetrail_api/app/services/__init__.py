"""
Service layer.

Each service wraps the ``Database`` from the application context and
encapsulates the business rules for one domain, so API handlers only
translate HTTP input and output.
"""
