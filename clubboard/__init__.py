"""
Club submission board.

This package provides a FastAPI application that collects student club
submissions, deduplicates them by name, and serves the running list and
count, with a storage abstraction so the same logic runs against
Postgres in production and an in-memory store in tests.
"""

__version__ = "0.1.0"
