"""
Endpoint subpackage for API v1.

Each module defines an ``APIRouter``; they are aggregated in
``router.py`` at the package level.
"""
