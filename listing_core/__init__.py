"""
Input validation, document checksum and rate limiting core for the
listing platform.
"""

from listing_core.auth import translate_auth_error
from listing_core.core import ValidationCore, create_core
from listing_core.security import (
    RateLimiter,
    check_rate_limit,
    get_rate_limit_reset,
    sanitize_plain_text,
    sanitize_rich_text,
    sanitize_filename
)
from listing_core.validation import (
    validate_email,
    validate_phone,
    format_phone,
    validate_cep,
    format_cep,
    validate_creci,
    validate_url,
    validate_property_code,
    validate_file_size,
    validate_file_type,
    validate_cpf,
    validate_cnpj,
    check_password_strength
)

__version__ = '1.0.0'

__all__ = [
    'translate_auth_error',
    'ValidationCore',
    'create_core',
    'RateLimiter',
    'check_rate_limit',
    'get_rate_limit_reset',
    'sanitize_plain_text',
    'sanitize_rich_text',
    'sanitize_filename',
    'validate_email',
    'validate_phone',
    'format_phone',
    'validate_cep',
    'format_cep',
    'validate_creci',
    'validate_url',
    'validate_property_code',
    'validate_file_size',
    'validate_file_type',
    'validate_cpf',
    'validate_cnpj',
    'check_password_strength'
]
