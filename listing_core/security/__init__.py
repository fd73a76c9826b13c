"""
Security module for the listing core.

This module provides:
- Fixed-window rate limiting
- Plain-text, rich-text and filename sanitization
- Flask helpers for rate-limited views
- Exception handling for security violations
"""

from .rate_limiting import (
    RateLimiter,
    RateLimitPolicy,
    RateLimitRecord,
    RateLimitResult,
    check_rate_limit,
    get_rate_limit_reset,
    get_default_limiter,
    format_wait_message,
    parse_limit,
    parse_period,
    should_bypass_rate_limit
)
from .sanitizer import sanitize_plain_text, sanitize_rich_text, sanitize_filename
from .middleware import init_app, rate_limited, get_client_ip
from .exceptions import SecurityException, RateLimitExceeded, InvalidInput, SecurityViolation

__all__ = [
    'RateLimiter',
    'RateLimitPolicy',
    'RateLimitRecord',
    'RateLimitResult',
    'check_rate_limit',
    'get_rate_limit_reset',
    'get_default_limiter',
    'format_wait_message',
    'parse_limit',
    'parse_period',
    'should_bypass_rate_limit',
    'sanitize_plain_text',
    'sanitize_rich_text',
    'sanitize_filename',
    'init_app',
    'rate_limited',
    'get_client_ip',
    'SecurityException',
    'RateLimitExceeded',
    'InvalidInput',
    'SecurityViolation'
]
