"""
Exceptions raised by the barangay core.

The API layer maps each of these to an HTTP status in ``api/main.py``.
"""

from typing import Optional, Sequence


class BarangayError(Exception):
    """Base class for all barangay core errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ============================================================================
# Validation
# ============================================================================

class InvalidFieldError(BarangayError):
    """A submitted form field has a value that cannot be accepted"""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class MissingFieldError(InvalidFieldError):
    """A required form field is absent or blank"""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(field, message or f"{field.replace('_', ' ').capitalize()} is required")


class RecordValidationError(BarangayError, ValueError):
    """A stored row does not fit its record type"""


# ============================================================================
# Identity
# ============================================================================

class NotAuthenticatedError(BarangayError):
    """A write was attempted without a signed-in user"""


class AuthenticationError(BarangayError):
    """Sign-in failed or the session token is not valid"""


# ============================================================================
# Persistence
# ============================================================================

class GatewayError(BarangayError):
    """The row store failed"""

    retryable = True


class GatewayReadError(GatewayError):
    """A select against the row store failed"""


class GatewayWriteError(GatewayError):
    """An insert, update or upsert against the row store failed"""


class DuplicateKeyError(GatewayWriteError):
    """A write violated a unique key"""

    def __init__(self, message: str, collection: str = "", keys: Sequence[str] = ()):
        super().__init__(message)
        self.collection = collection
        self.keys = tuple(keys)


class RecordNotFoundError(BarangayError):
    """No row matched the requested id"""
