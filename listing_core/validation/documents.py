"""
CPF and CNPJ validation.

Both documents end in two check digits computed with a modulo 11 weighted
sum over the preceding digits.
"""
import re
from typing import Optional

from listing_core.validation.formats import only_digits


CPF_LENGTH = 11
CNPJ_LENGTH = 14

# Repeated digits pass the checksum but are never issued
INVALID_CPF_SEQUENCES = frozenset(str(digit) * CPF_LENGTH for digit in range(10))
INVALID_CNPJ_SEQUENCES = frozenset(str(digit) * CNPJ_LENGTH for digit in range(10))


def _cpf_check_digit(digits: str) -> int:
    # Weights run from len(digits) + 1 down to 2
    weight = len(digits) + 1
    total = sum(int(digit) * (weight - index) for index, digit in enumerate(digits))

    check = 11 - (total % 11)
    return 0 if check > 9 else check


def _cnpj_check_digit(digits: str) -> int:
    # Weights cycle 2..9 starting from the rightmost digit
    total = 0
    weight = 2
    for digit in reversed(digits):
        total += int(digit) * weight
        weight = 2 if weight == 9 else weight + 1

    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def validate_cpf(cpf: Optional[str]) -> bool:
    """
    Validate a CPF (Brazilian individual taxpayer ID).

    Args:
        cpf: CPF with or without punctuation, e.g. '111.444.777-35'

    Returns:
        True if the CPF has 11 digits and both check digits match
    """
    if not cpf:
        return False

    cleaned = only_digits(cpf)

    if len(cleaned) != CPF_LENGTH:
        return False

    if cleaned in INVALID_CPF_SEQUENCES:
        return False

    if _cpf_check_digit(cleaned[:9]) != int(cleaned[9]):
        return False

    return _cpf_check_digit(cleaned[:10]) == int(cleaned[10])


def validate_cnpj(cnpj: Optional[str]) -> bool:
    """
    Validate a CNPJ (Brazilian company taxpayer ID).

    Args:
        cnpj: CNPJ with or without punctuation, e.g. '11.444.777/0001-61'

    Returns:
        True if the CNPJ has 14 digits and both check digits match
    """
    if not cnpj:
        return False

    cleaned = only_digits(cnpj)

    if len(cleaned) != CNPJ_LENGTH:
        return False

    if cleaned in INVALID_CNPJ_SEQUENCES:
        return False

    if _cnpj_check_digit(cleaned[:12]) != int(cleaned[12]):
        return False

    return _cnpj_check_digit(cleaned[:13]) == int(cleaned[13])


def validate_document(document: Optional[str]) -> bool:
    """Validate a CPF or CNPJ depending on how many digits it has."""
    cleaned = only_digits(document)

    if len(cleaned) == CPF_LENGTH:
        return validate_cpf(cleaned)
    elif len(cleaned) == CNPJ_LENGTH:
        return validate_cnpj(cleaned)

    return False


def format_cpf(value: Optional[str]) -> str:
    """
    Mask a CPF as 123.456.789-09 while it is being typed.

    Partial input is masked as far as it goes and digits past the eleventh
    are dropped.
    """
    masked = only_digits(value)
    masked = re.sub(r'(\d{3})(\d)', r'\1.\2', masked, count=1)
    masked = re.sub(r'(\d{3})(\d)', r'\1.\2', masked, count=1)
    masked = re.sub(r'(\d{3})(\d{1,2})', r'\1-\2', masked, count=1)
    return re.sub(r'(-\d{2})\d+?$', r'\1', masked, count=1)


def format_cnpj(value: Optional[str]) -> str:
    """Format a 14-digit CNPJ as 11.444.777/0001-61, else return the input."""
    if not value:
        return ''

    cleaned = only_digits(value)
    if len(cleaned) != CNPJ_LENGTH:
        return value

    return f"{cleaned[:2]}.{cleaned[2:5]}.{cleaned[5:8]}/{cleaned[8:12]}-{cleaned[12:]}"
