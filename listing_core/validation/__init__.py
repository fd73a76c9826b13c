"""
Validation module for the listing core.

This module provides:
- CPF and CNPJ check digit validation
- Password strength scoring
- Email, phone, CEP, CRECI, URL and upload validation
"""

from .formats import (
    only_digits,
    validate_email,
    validate_phone,
    format_phone,
    validate_cep,
    format_cep,
    validate_creci,
    parse_url,
    validate_url,
    validate_property_code,
    validate_file_size,
    validate_file_type
)
from .documents import validate_cpf, validate_cnpj, validate_document, format_cpf, format_cnpj
from .password import PasswordAssessment, PasswordStrength, check_password_strength

__all__ = [
    'only_digits',
    'validate_email',
    'validate_phone',
    'format_phone',
    'validate_cep',
    'format_cep',
    'validate_creci',
    'parse_url',
    'validate_url',
    'validate_property_code',
    'validate_file_size',
    'validate_file_type',
    'validate_cpf',
    'validate_cnpj',
    'validate_document',
    'format_cpf',
    'format_cnpj',
    'PasswordAssessment',
    'PasswordStrength',
    'check_password_strength'
]
