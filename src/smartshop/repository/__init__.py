"""
Repository - the single seam the application depends on

Pattern: Repository Pattern. Callers receive ``Result`` values, never raw
transport objects or exceptions for expected failures.
"""

from smartshop.repository.base import BaseRepository
from smartshop.repository.remote import RemoteRepository

__all__ = ["BaseRepository", "RemoteRepository"]
