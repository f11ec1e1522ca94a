"""Exceptions raised by the DAOs.

Driver and ORM errors are wrapped in the kind matching the failed operation;
the original error stays reachable through ``__cause__``.
"""

from __future__ import annotations


class DaoException(Exception):
    """Base class for data-access errors."""


class FetchException(DaoException):
    """Raised when a read fails or the requested entity does not exist."""


class StoreException(DaoException):
    """Raised when an insert fails."""


class UpdateException(DaoException):
    """Raised when an update fails."""


class DeleteException(DaoException):
    """Raised when a delete fails."""


__all__ = [
    "DaoException",
    "FetchException",
    "StoreException",
    "UpdateException",
    "DeleteException",
]
