"""
Authentication helpers for the listing core.
"""

from .errors import translate_auth_error

__all__ = ['translate_auth_error']
