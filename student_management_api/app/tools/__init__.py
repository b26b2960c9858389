"""
Agent tool adapter.

Exposes the student service as Model Context Protocol tools served by
``FastMCP``.  Tools contain no business logic: they parse arguments,
call ``StudentService`` and serialize the result.
"""
