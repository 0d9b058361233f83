"""
Service layer abstraction.

Each service encapsulates business logic for a domain and depends
only on a ``CatalogStore``.  Swapping the SQLite backend for the
in-memory one (or a test double) needs no change in API handlers.
"""
