"""
Persistence adapters.

Services depend on these repositories instead of touching SQLAlchemy
sessions directly.
"""
