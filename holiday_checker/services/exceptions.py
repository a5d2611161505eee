"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class LookupServiceError(ServiceError):
    """Raised when the remote lookup service fails or is misconfigured."""
