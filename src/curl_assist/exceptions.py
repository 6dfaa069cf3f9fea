"""Custom exceptions for curl-assist."""


class CurlAssistError(Exception):
    """Base exception for all curl-assist errors."""
    pass


class EnvironmentFileError(CurlAssistError):
    """Raised when an environment file cannot be read or parsed."""
    pass
