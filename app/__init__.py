"""
App package - Application configuration and core utilities.
Contains settings and the ledger exception taxonomy.
"""

from app.config import settings
from app.exceptions import (
    LedgerError,
    ServiceValidationError,
    NotFoundError,
    StoreError,
    PersistenceError,
    NutritionLookupError,
    MissingCredentialError,
    InvalidResponseError,
    DecodingFailedError,
)

__all__ = [
    "settings",
    "LedgerError",
    "ServiceValidationError",
    "NotFoundError",
    "StoreError",
    "PersistenceError",
    "NutritionLookupError",
    "MissingCredentialError",
    "InvalidResponseError",
    "DecodingFailedError",
]
