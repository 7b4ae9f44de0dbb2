class HajjGuideError(Exception):
    """Base exception for store and business rule failures."""


class StoreUnavailable(HajjGuideError):
    """Raised when the store connection cannot be opened or was lost."""


class DuplicateKey(HajjGuideError):
    """Raised when a primary key is already present."""


class ForeignKeyMissing(HajjGuideError):
    """Raised when a referenced pilgrim, admin or resource does not exist."""


class UniquenessViolation(HajjGuideError):
    """Raised on a secondary uniqueness conflict (one medical profile per pilgrim)."""


class IntegrityViolation(HajjGuideError):
    """Raised when a delete would orphan dependent rows."""


class CapacityExceeded(HajjGuideError):
    """Raised when an accommodation is already full."""


class NotFound(HajjGuideError):
    """Raised by update/delete when the target row is absent.

    Reads never raise this; they return None.
    """


class InvalidInput(HajjGuideError):
    """Raised when input data is invalid or violates domain rules."""


ValidationError = InvalidInput


class AuthenticationError(HajjGuideError):
    """Raised when login credentials are invalid."""


class AuthorizationError(HajjGuideError):
    """Raised when a session lacks permission for an action."""
