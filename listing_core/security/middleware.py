"""
Flask helpers for applying the rate limiter to views.
"""
import logging
from functools import wraps
from typing import Callable, Optional

from flask import current_app, jsonify, request

from listing_core.security.exceptions import RateLimitExceeded, SecurityViolation


logger = logging.getLogger(__name__)
security_logger = logging.getLogger('security')

EXTENSION_NAME = 'listing_core'


def init_app(app, core=None):
    """
    Attach a ValidationCore to a Flask app.

    Registers JSON error handlers: RateLimitExceeded becomes a 429 response
    with a Retry-After header and SecurityViolation a 403.
    """
    if core is None:
        from listing_core.core import ValidationCore
        core = ValidationCore()

    app.extensions[EXTENSION_NAME] = core

    @app.errorhandler(RateLimitExceeded)
    def handle_rate_limit_exceeded(error):
        security_logger.warning(f"Rate limit exceeded: {error} - IP: {get_client_ip(request)}")
        response = jsonify({
            'error': 'Rate Limit Exceeded',
            'message': str(error),
            'retry_after': error.retry_after,
            'status_code': 429
        })
        response.status_code = 429
        response.headers['Retry-After'] = str(error.retry_after)
        return response

    @app.errorhandler(SecurityViolation)
    def handle_security_violation(error):
        security_logger.warning(f"Security violation: {error} - IP: {get_client_ip(request)}")
        return jsonify({
            'error': 'Security Violation',
            'message': 'Request blocked for security reasons',
            'status_code': 403
        }), 403

    logger.info("Rate limiting initialized for Flask app")
    return core


def get_core():
    """Return the ValidationCore attached to the current app."""
    try:
        return current_app.extensions[EXTENSION_NAME]
    except KeyError:
        raise RuntimeError("listing_core is not initialized, call init_app(app) first")


def get_client_ip(req) -> str:
    """Extract client IP from request, considering proxies."""
    # Check X-Forwarded-For header first
    if req.headers.get('X-Forwarded-For'):
        # Take the first IP in the chain
        ips = req.headers['X-Forwarded-For'].split(',')
        return ips[0].strip()

    headers_to_check = [
        'X-Real-IP',
        'CF-Connecting-IP',
        'True-Client-IP'
    ]

    for header in headers_to_check:
        if req.headers.get(header):
            return req.headers[header].strip()

    # Fall back to remote_addr
    return req.remote_addr or '127.0.0.1'


def rate_limited(policy: str, key_func: Optional[Callable[[], str]] = None,
                 action_name: Optional[str] = None):
    """
    Decorator applying a named rate limit policy to a view.

    Args:
        policy: Policy name, e.g. 'login'
        key_func: Returns the caller key; defaults to the client IP. The
            default trusts X-Forwarded-For, which clients can forge, so
            pass a key_func (e.g. the account email) unless every request
            comes through a proxy that overwrites that header
        action_name: Action named in the wait message
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            key = key_func() if key_func else get_client_ip(request)
            get_core().hit(policy, key, action_name)
            return f(*args, **kwargs)

        return wrapper
    return decorator
