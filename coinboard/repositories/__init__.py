"""
Persistence adapters.

Services depend on ``unit_of_work`` and the repository it yields rather than
touching SQLAlchemy sessions directly.
"""

from .sql_repository import SQLRepository, unit_of_work

__all__ = ["SQLRepository", "unit_of_work"]
