"""
Pydantic schema definitions for API payloads.

Schemas are separated from the ``Student`` entity to decouple the
JSON representation (camelCase, nulls omitted) from persistence.
"""
