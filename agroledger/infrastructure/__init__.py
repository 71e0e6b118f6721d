"""Infrastructure layer implementations."""

from agroledger.infrastructure import storage

__all__ = ["storage"]
