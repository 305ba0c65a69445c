"""
Custom exceptions for facet estimation.

Only configuration problems are raised as library exceptions. Failures of
collaborators (search backend, permission predicate) propagate unchanged
so callers see exactly what the failing call raised.
"""


class FacetsError(Exception):
    """Base exception for all facet estimation errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(FacetsError):
    """Raised when facet sampling configuration is invalid."""

    def __init__(self, field: str, reason: str, value: str | None = None):
        details = {"field": field, "reason": reason}
        if value is not None:
            details["value"] = value
        super().__init__(f"Invalid configuration for {field}: {reason}", details)
        self.field = field
        self.reason = reason
        self.value = value
