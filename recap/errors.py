"""
Error taxonomy for the Recap service.

Each error carries the HTTP status the API answers with.
"""


class RecapError(Exception):
    """Base class for all errors surfaced to API callers."""
    status_code = 500

    def __init__(self, message: str = None):
        self.message = message or self.__class__.__doc__ or "Error"
        super().__init__(self.message)

    def to_dict(self):
        return {"message": self.message}


class ValidationFailed(RecapError):
    """Malformed or missing request fields."""
    status_code = 400


class Unauthenticated(RecapError):
    """Authentication required."""
    status_code = 401


class NotFoundOrForbidden(RecapError):
    """Resource not found."""
    status_code = 404


class Conflict(RecapError):
    """Resource already exists."""
    status_code = 409


class UpstreamFailure(RecapError):
    """An external collaborator failed."""
    status_code = 500


class GenerationFailed(UpstreamFailure):
    """Failed to generate summary."""


class ExtractionFailed(UpstreamFailure):
    """Failed to process file."""


class ExportFailed(UpstreamFailure):
    """Failed to export summary."""


class DeliveryFailed(UpstreamFailure):
    """Failed to send email."""
