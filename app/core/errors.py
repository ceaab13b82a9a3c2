"""
Domain errors raised by the version history services.

Routes translate these into HTTP responses; services never return partial
results when one of these is raised.
"""


class VersioningError(Exception):
    """Base class for version history errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(VersioningError):
    """Resume or version is missing, owned by someone else, or soft-deleted."""

    status_code = 404


class InvalidOperationError(VersioningError):
    """Operation would break a version history rule (e.g. deleting the last version)."""

    status_code = 400


class VersionConflictError(VersioningError):
    """Version number could not be assigned after the configured retries."""

    status_code = 409
