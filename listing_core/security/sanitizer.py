"""
Markup and filename sanitization for user-supplied text.
"""
import re
import html
import logging
import unicodedata
from typing import Optional

from bs4 import BeautifulSoup, Comment

from listing_core.security.exceptions import SecurityViolation


logger = logging.getLogger(__name__)
security_logger = logging.getLogger('security')


# Elements removed together with everything inside them
DROPPED_TAGS = ['script', 'style', 'iframe', 'object', 'embed', 'noscript', 'template']

RICH_TEXT_TAGS = {'b', 'i', 'em', 'strong', 'a', 'p', 'br', 'ul', 'li', 'ol'}
RICH_TEXT_ATTRIBUTES = {'href', 'target'}

DANGEROUS_PROTOCOLS = ('javascript:', 'vbscript:', 'data:')

_UNSAFE_FILENAME_CHARS = re.compile(r'[^a-zA-Z0-9.-]')
_URL_SPACING = re.compile(r'[\s\x00-\x1f]+')


def _parse(value: str, strict: bool = False) -> BeautifulSoup:
    """
    Parse a fragment and drop script-like elements and comments.

    Raises:
        SecurityViolation: If ``strict`` and the fragment holds script-like elements
    """
    soup = BeautifulSoup(value, 'html.parser')

    dropped = soup.find_all(DROPPED_TAGS)
    if dropped and strict:
        security_logger.warning(f"Rejected input with {len(dropped)} executable element(s)")
        raise SecurityViolation(f"Input contains <{dropped[0].name}> content")

    for tag in dropped:
        tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    if dropped:
        security_logger.warning(f"Removed {len(dropped)} executable element(s) from input")

    return soup


def sanitize_plain_text(value: Optional[str], strict: bool = False) -> str:
    """
    Strip all markup from user input.

    Args:
        value: Raw user input
        strict: Raise instead of silently dropping script-like elements

    Returns:
        Text content with every tag and attribute removed, HTML-escaped so
        it stays inert wherever it is rendered

    Raises:
        SecurityViolation: Only in strict mode
    """
    if not value:
        return ''

    soup = _parse(str(value).strip(), strict)
    return html.escape(soup.get_text(), quote=False)


def sanitize_rich_text(value: Optional[str], strict: bool = False) -> str:
    """
    Keep a small set of formatting tags, remove everything else.

    Disallowed tags are unwrapped so their text survives. Only ``href`` and
    ``target`` attributes are kept, and links using a script or data
    protocol lose their ``href``.

    In strict mode script-like elements and unsafe links raise
    SecurityViolation instead.
    """
    if not value:
        return ''

    soup = _parse(str(value), strict)

    for tag in soup.find_all(True):
        if tag.name not in RICH_TEXT_TAGS:
            tag.unwrap()
            continue

        tag.attrs = {
            name: attr for name, attr in tag.attrs.items()
            if name in RICH_TEXT_ATTRIBUTES
        }

        href = tag.attrs.get('href')
        if href is not None and _is_dangerous_href(href):
            if strict:
                raise SecurityViolation(f"Unsafe link target: {href[:100]}")
            security_logger.warning(f"Removed unsafe link target: {href[:100]}")
            del tag.attrs['href']

    return str(soup)


def _is_dangerous_href(href: str) -> bool:
    normalized = _URL_SPACING.sub('', html.unescape(href)).lower()
    return normalized.startswith(DANGEROUS_PROTOCOLS)


def sanitize_filename(name: Optional[str]) -> str:
    """
    Make a filename safe for storage paths and URLs.

    Accents are stripped, anything outside ``[a-zA-Z0-9.-]`` becomes ``_``
    and the result is lower-cased.
    """
    if not name:
        return ''

    normalized = unicodedata.normalize('NFD', str(name))
    normalized = ''.join(char for char in normalized if unicodedata.category(char) != 'Mn')

    return _UNSAFE_FILENAME_CHARS.sub('_', normalized).lower()
