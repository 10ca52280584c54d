"""
Client Evaluation Exceptions
============================

Domain errors raised by the evaluation services and storage layer.
Each error carries the HTTP status the API reports it with.
"""


class ServiceError(Exception):
    """Base exception for client evaluation operations."""

    status_code: int = 500

    def __init__(self, message: str = "Server error"):
        self.message = message
        super().__init__(message)


class ValidationError(ServiceError):
    """Required input missing or malformed. Nothing was written."""

    status_code = 400


class AuthenticationError(ServiceError):
    """Unknown user or wrong password."""

    status_code = 400


class NotFoundError(ServiceError):
    """Referenced document does not exist."""

    status_code = 404

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found: {resource_id}")


class ConflictError(ServiceError):
    """Unique key violation or a write that lost a version race."""

    status_code = 409


class StorageError(ServiceError):
    """Persistence layer failure. Not retried by the core."""

    status_code = 500

    def __init__(self, message: str = "Storage failure"):
        super().__init__(message)


class VersionConflictError(ConflictError):
    """The document changed between read and write."""

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} was modified concurrently, retry the update")
