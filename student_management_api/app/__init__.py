"""
Application package initializer.

The project is split into small layers: ``core`` (configuration,
logging, database plumbing and the error taxonomy), ``models`` (the
student entity), ``repositories`` (persistence), ``services``
(business rules), ``schemas`` (API payloads) and two presentation
adapters, the HTTP routers in ``api`` and the agent tools in ``tools``.
Both adapters delegate to the same ``StudentService``.
"""

from .main import app  # noqa: F401
