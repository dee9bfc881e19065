"""Domain exceptions raised by services and translated by the API layer"""

from typing import Optional


class AdminError(Exception):
    """Base class for admin service errors"""


class FormValidationError(AdminError):
    """Form input failed client-side validation (submit is gated)"""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))


class ActionFailed(AdminError):
    """A user action failed upstream; message is the fixed user-facing text"""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class ConfirmationRequired(AdminError):
    """A destructive action was requested without explicit confirmation"""

    def __init__(self, prompt: str, affected_sites: int):
        self.prompt = prompt
        self.affected_sites = affected_sites
        super().__init__(prompt)


class UndoExpired(AdminError):
    """The undo action does not exist or was already used"""


class UpstreamError(AdminError):
    """Campground API answered with an error status"""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Upstream returned {status_code}: {detail}")


class UpstreamUnavailable(AdminError):
    """Campground API could not be reached"""


class NotFound(AdminError):
    """Requested entity is not in the campground's collection"""
