"""Infrastructure layer implementations."""

from matinv.infrastructure import storage

__all__ = ["storage"]
