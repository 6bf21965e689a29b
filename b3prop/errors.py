"""b3prop error hierarchy and exceptions."""

from __future__ import annotations


class B3PropError(Exception):
    """Base exception for all b3prop errors."""
    
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(B3PropError):
    """Raised when configuration is invalid or cannot be loaded."""
    pass


class ValidationError(B3PropError):
    """Raised when validation fails."""
    pass


class MalformedIdentifierError(ValidationError):
    """Raised when a trace or span id is not a hexadecimal string."""
    pass
