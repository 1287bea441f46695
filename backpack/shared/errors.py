"""Errors surfaced to the user as blocking alerts."""

from .models import ErrorKind


class ServiceError(Exception):
    """A remote service call could not complete."""

    kind: ErrorKind = ErrorKind.CONNECTION_FAILED


class ConnectionFailed(ServiceError):
    """Network, HTTP status or payload failure."""

    kind = ErrorKind.CONNECTION_FAILED


class MissingApiKey(ServiceError):
    """No API key configured for the service."""

    kind = ErrorKind.MISSING_API_KEY
