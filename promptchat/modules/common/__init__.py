"""Shared abstractions used across domain modules."""

from .pagination import PageRequest, Pagination

__all__ = ["PageRequest", "Pagination"]
