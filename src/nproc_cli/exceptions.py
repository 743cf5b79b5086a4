class NprocError(Exception):
    """Base exception for nproc errors."""


class CpuQueryError(NprocError):
    """Raised when the operating system refuses to report a CPU count."""

    def __init__(self, operation: str, reason: object):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation}: {reason}")


class ConfigurationError(NprocError):
    """Raised when a settings file cannot be read or parsed."""
