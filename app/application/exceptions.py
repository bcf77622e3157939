from __future__ import annotations


class CatalogUnavailableError(RuntimeError):
    """Raised when the catalog backend cannot be reached or answers with an error."""
    pass


class FieldValidationError(ValueError):
    """Raised with field-scoped messages so callers can render them in place."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = dict(errors)


class CapacityExceededError(RuntimeError):
    """Raised when a theory session has no spot left for another participant."""

    def __init__(self, available_spots: int, message: str | None = None) -> None:
        self.available_spots = max(0, available_spots)
        super().__init__(message or f"No spots available (only {self.available_spots} left)")


class InvalidTransitionError(RuntimeError):
    """Raised when an event does not belong to the current wizard step."""
    pass


class BookingRejectedError(RuntimeError):
    """Raised when the booking backend refuses to create a booking. The message is user-facing."""
    pass


class DraftNotFoundError(LookupError):
    pass


class TermsNotAcceptedError(RuntimeError):
    pass
