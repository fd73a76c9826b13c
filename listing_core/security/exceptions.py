"""
Security-related exceptions for the listing core.
"""


class SecurityException(Exception):
    """Base exception for security-related errors."""
    pass


class RateLimitExceeded(SecurityException):
    """Raised when a rate-limited action is attempted too often."""
    
    def __init__(self, message="Rate limit exceeded", retry_after=60):
        super().__init__(message)
        self.message = message
        self.retry_after = retry_after


class InvalidInput(SecurityException):
    """Raised when input cannot be parsed."""
    pass


class SecurityViolation(SecurityException):
    """Raised when strict sanitization finds executable content in input."""
    pass
