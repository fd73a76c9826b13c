"""
Format validators and formatters for contact, address and upload fields.
"""
import re
import logging
from typing import Iterable, Optional, Union
from urllib.parse import urlsplit, SplitResult

from listing_core.security.exceptions import InvalidInput


logger = logging.getLogger(__name__)


EMAIL_PATTERN = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')
PHONE_PATTERN = re.compile(r'[1-9]{2}9?[0-9]{8}')
CEP_PATTERN = re.compile(r'[0-9]{8}')
CRECI_PATTERN = re.compile(r'[0-9]{4,6}(-[FJTP])?', re.IGNORECASE)
PROPERTY_CODE_PATTERN = re.compile(r'[0-9]{3,10}')
SCHEME_PATTERN = re.compile(r'[a-zA-Z][a-zA-Z0-9+.-]*')

# Schemes that must carry a host, e.g. 'http://' alone is not a URL
HIERARCHICAL_SCHEMES = {'http', 'https', 'ftp', 'ws', 'wss'}

_NON_DIGITS = re.compile(r'[^0-9]')


def only_digits(value: Optional[str]) -> str:
    """Return only the digit characters of a value."""
    if value is None:
        return ''
    return _NON_DIGITS.sub('', str(value))


def validate_email(email: Optional[str]) -> bool:
    """Check the local@domain.tld shape of an email address."""
    if not email:
        return False
    return EMAIL_PATTERN.fullmatch(email.lower()) is not None


def validate_phone(phone: Optional[str]) -> bool:
    """
    Check a Brazilian phone number.

    Accepts 10 digits (landline) or 11 digits (mobile with the leading 9)
    after removing punctuation, e.g. '(11) 98765-4321' or '(11) 8765-4321'.
    """
    if not phone:
        return False
    return PHONE_PATTERN.fullmatch(only_digits(phone)) is not None


def format_phone(phone: Optional[str]) -> str:
    """Format a phone number as (11) 98765-4321 or (11) 8765-4321."""
    if not phone:
        return ''

    cleaned = only_digits(phone)

    if len(cleaned) == 11:
        return f"({cleaned[:2]}) {cleaned[2:7]}-{cleaned[7:]}"
    elif len(cleaned) == 10:
        return f"({cleaned[:2]}) {cleaned[2:6]}-{cleaned[6:]}"

    return phone


def validate_cep(cep: Optional[str]) -> bool:
    """Check a CEP in 12345-678 or 12345678 form."""
    if not cep:
        return False
    return CEP_PATTERN.fullmatch(only_digits(cep)) is not None


def format_cep(cep: Optional[str]) -> str:
    if not cep:
        return ''

    cleaned = only_digits(cep)
    if len(cleaned) == 8:
        return f"{cleaned[:5]}-{cleaned[5:]}"

    return cep


def validate_creci(creci: Optional[str]) -> bool:
    """Check a CRECI license number: 4 to 6 digits, optionally -F, -J, -T or -P."""
    if not creci:
        return False
    return CRECI_PATTERN.fullmatch(creci) is not None


def parse_url(url: Optional[str]) -> SplitResult:
    """
    Parse an absolute URL.

    Whitespace is allowed in the path, query and fragment, which browsers
    percent-encode, but not in the scheme or host. Schemes without an
    authority such as 'mailto:' need nothing after the colon.

    Raises:
        InvalidInput: If the value is not a well-formed absolute URL
    """
    if not url or not isinstance(url, str):
        raise InvalidInput("URL must be a non-empty string")

    try:
        parsed = urlsplit(url.strip())
        # Accessing the port validates it
        parsed.port
    except ValueError as e:
        raise InvalidInput(f"Malformed URL: {e}")

    if not parsed.scheme or not SCHEME_PATTERN.fullmatch(parsed.scheme):
        raise InvalidInput("URL must have a scheme")

    if any(char.isspace() for char in parsed.netloc):
        raise InvalidInput("URL host must not contain whitespace")

    if parsed.scheme.lower() in HIERARCHICAL_SCHEMES and not parsed.hostname:
        raise InvalidInput(f"{parsed.scheme} URL must have a host")

    return parsed


def validate_url(url: Optional[str]) -> bool:
    try:
        parse_url(url)
    except InvalidInput as e:
        logger.debug(f"Rejected URL {url!r}: {e}")
        return False
    return True


def validate_property_code(code: Union[str, int, None]) -> bool:
    """Check a numeric property code of 3 to 10 digits."""
    if code is None or isinstance(code, bool):
        return False
    return PROPERTY_CODE_PATTERN.fullmatch(str(code)) is not None


def validate_file_size(size: Union[int, float], max_mb: Union[int, float] = 5) -> bool:
    """Check a file size in bytes against a limit in megabytes."""
    return size <= max_mb * 1024 * 1024


def validate_file_type(filename: Optional[str], allowed: Iterable[str]) -> bool:
    """Check that the extension after the last '.' is one of ``allowed``."""
    if not filename or '.' not in filename:
        return False

    extension = filename.rsplit('.', 1)[1].lower()
    return bool(extension) and extension in set(allowed)
