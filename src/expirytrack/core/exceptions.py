"""expirytrack custom exceptions."""

from __future__ import annotations


class ExpiryTrackError(Exception):
    """Base class for errors raised by expirytrack."""


class ExpiryTrackConfigError(ExpiryTrackError):
    """Raised when configuration is missing or invalid."""

    def __init__(self, message: str, config_path: str = None, section: str = None):
        self.config_path = config_path
        self.section = section
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.config_path:
            msg += f" (config: {self.config_path})"
        if self.section:
            msg += f" (section: {self.section})"
        return msg


class InvalidEvaluationInstant(ExpiryTrackError, TypeError):
    """Raised when the classifier is handed something that is not an instant."""

    def __init__(self, value, argument: str = "now"):
        self.value = value
        self.argument = argument
        super().__init__(f"{argument} must be a datetime or date, got {type(value).__name__}")
