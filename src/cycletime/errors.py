"""Custom exception types for the PR cycle-time metrics generator."""


class MetricsError(Exception):
    """Base exception for all recoverable metrics generator errors."""


class ConfigurationError(MetricsError):
    """Raised when runtime configuration values are missing or invalid."""


class InputError(MetricsError):
    """Raised when an exported pull request file cannot be read or decoded."""


class DataValidationError(MetricsError):
    """Raised when pull request payloads do not match the expected GraphQL shape."""
