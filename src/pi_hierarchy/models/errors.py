"""Error types raised across the hierarchy pipeline."""


class HierarchyError(Exception):
    """Base class for every error raised by pi_hierarchy."""
    pass


class ValidationError(HierarchyError):
    """Raised when a required input (PI, squad, issue key, field id) is missing or empty."""
    pass


class ConfigurationError(HierarchyError):
    """Raised when a field name is absent from the Field Directory or settings are incomplete."""
    pass


class RequestError(HierarchyError):
    """
    Raised when a Jira call returns a non-success status or fails in transport.

    Attributes:
        status_code: HTTP status of the failed response, None for transport failures
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
