"""Company name normalization utilities.

This module provides the canonical form used to compare company names when
checking for duplicate accounts. Names are compared only after normalization,
so "Acme Trading 2" and "acme-trading" land on the same key.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Characters removed outright before whitespace is collapsed
_STRIP_CHARS = re.compile(r"[-_.@!$%]")
_WHITESPACE = re.compile(r"\s+")
# Space separated digit groups ("ACME 2 3") are removed together
_TRAILING_DIGITS = re.compile(r"[0-9\s]+$")


def normalize_company_name(name: str) -> str:
    """Normalize a company name for duplicate matching.

    Applies the following transformations in order:
    1. Convert to uppercase
    2. Remove the characters ``- _ . @ ! $ %``
    3. Collapse runs of whitespace to a single space and trim
    4. Remove a trailing run of digits (e.g. "ACME 2" -> "ACME")
    5. Trim again

    Args:
        name: The raw company name as typed by the user

    Returns:
        The normalized name, or an empty string for empty input

    Examples:
        >>> normalize_company_name("Acme Corp.   123")
        'ACME CORP'
        >>> normalize_company_name("  globex-holdings ")
        'GLOBEXHOLDINGS'
    """
    if not name:
        return ""

    normalized = name.upper()
    normalized = _STRIP_CHARS.sub("", normalized)
    normalized = _WHITESPACE.sub(" ", normalized).strip()
    normalized = _TRAILING_DIGITS.sub("", normalized)
    normalized = normalized.strip()

    logger.debug(f"Normalized company name: {name!r} -> {normalized!r}")
    return normalized
