"""
Error taxonomy shared by the catalog client, the services and the HTTP layer.

Every error carries the HTTP status it maps to at the request boundary, where
it is rendered once as ``{"error": message}``.
"""

from typing import Optional


class ApiError(Exception):
    """Base class for errors that translate directly into an HTTP response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(ApiError):
    """Missing or invalid request input."""

    status_code = 400


class NotFoundError(ApiError):
    """Unknown identifier, locally or upstream."""

    status_code = 404


class UpstreamError(ApiError):
    """The remote catalog answered with a non-success status or a bad payload."""

    status_code = 500

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        *,
        transient: Optional[bool] = None
    ) -> None:
        super().__init__(message)
        self.status = status
        self._transient = transient

    @property
    def transient(self) -> bool:
        """Whether a retry could reasonably succeed."""
        if self._transient is not None:
            return self._transient
        if self.status is None:
            return False
        return self.status == 429 or self.status >= 500


class UpstreamTimeoutError(UpstreamError):
    """The remote catalog did not answer within the configured timeout."""

    status_code = 504

    @property
    def transient(self) -> bool:
        return True


class InternalError(ApiError):
    """Unexpected failure inside this service."""

    status_code = 500
