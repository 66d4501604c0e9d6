from typing import Any, Mapping, Optional


class LedgerError(Exception):
    """Base class for errors raised by the meal ledger.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, ids)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Ledger error"
    default_code = "LEDGER_ERROR"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(LedgerError):
    """Raised when input data is invalid or a precondition for a service call is not met.

    Negative nutrient values and empty meal names are rejected with this error
    before any store call is made. http_status is 400.
    """

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class NotFoundError(LedgerError):
    """Raised when a requested meal was not found. http_status is 404."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class StoreError(LedgerError):
    """Raised by the entity store when an insert, update, delete or query fails."""

    http_status = 500
    default_message = "Entity store failure"
    default_code = "STORE_ERROR"


class PersistenceError(StoreError):
    """Raised by a repository after a failed write has been rolled back.

    The previously committed state is unchanged when this is raised.
    """

    default_message = "Could not persist change"
    default_code = "PERSISTENCE_ERROR"


class NutritionLookupError(LedgerError):
    """Base class for nutrition lookup failures. Never retried automatically."""

    http_status = 502
    default_message = "Nutrition lookup failed"
    default_code = "NUTRITION_LOOKUP_ERROR"


class MissingCredentialError(NutritionLookupError):
    """No API key is configured for the lookup service."""

    http_status = 503
    default_message = "Nutrition lookup API key is not configured"
    default_code = "MISSING_CREDENTIAL"


class InvalidResponseError(NutritionLookupError):
    """The transport returned no usable payload (including timeouts)."""

    default_message = "Nutrition lookup returned no usable response"
    default_code = "INVALID_RESPONSE"


class DecodingFailedError(NutritionLookupError):
    """The reply could not be parsed into exactly four integers."""

    default_message = "Could not decode nutrition estimate"
    default_code = "DECODING_FAILED"
