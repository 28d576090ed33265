class TrackerError(Exception):
    """Base class for tracker errors."""


class ValidationError(TrackerError):
    """Raised when user input is out of domain. State is left unmodified."""


class RecordNotFoundError(TrackerError):
    """Raised when an edit or delete targets an id that isn't in the store."""
