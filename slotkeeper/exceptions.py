"""Error taxonomy shared by the scheduling core, services and API layer."""


class SlotkeeperError(Exception):
    """Base error. Carries the HTTP status the API layer renders it with."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(SlotkeeperError):
    """Malformed availability configuration. Fatal at startup."""

    code = "config_error"


class ValidationError(SlotkeeperError):
    """User-correctable booking request."""

    status_code = 422
    code = "validation_error"


class PastDateError(ValidationError):
    code = "past_date"


class DayNotAvailableError(ValidationError):
    code = "day_not_available"


class OutsideBusinessHoursError(ValidationError):
    code = "outside_business_hours"


class InvalidStatusError(ValidationError):
    code = "invalid_status"


class SlotConflictError(SlotkeeperError):
    """The slot is already held by a non-canceled appointment."""

    status_code = 409
    code = "slot_conflict"


class StoreUnavailableError(SlotkeeperError):
    """The appointment store timed out or could not be reached. Retryable."""

    status_code = 503
    code = "store_unavailable"


class NotFoundError(SlotkeeperError):
    status_code = 404
    code = "not_found"


class BookingIndexIntegrityError(SlotkeeperError):
    """Two non-canceled appointments share one slot instant."""

    code = "booking_index_integrity"
