"""Blocking validation rules for account names and contact details."""

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# Legal-entity abbreviations that must be spelled out in full
DISALLOWED_ABBREVIATIONS = frozenset(['INC', 'CORP', 'LTD', 'CO', 'LLC'])

# Placeholder values users type when they don't know the company
RESERVED_NAMES = frozenset(['NONE', 'N/A', 'OTHER'])

MIN_NAME_LENGTH = 3

NAME_TOO_SHORT = "Company Name must be at least 3 characters."
NAME_INVALID = "Company Name Invalid."
NAME_NEEDS_DOCUMENTS = "Company names starting with # require supporting documents."
NAME_HAS_ABBREVIATION = (
    "Company name cannot contain abbreviations like INC, CORP, LTD, etc. "
    "Please use full words."
)

_EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]{2,}$', re.IGNORECASE)
_EMAIL_PLACEHOLDERS = frozenset(['none', 'n/a', 'na'])


def has_disallowed_abbreviation(normalized: str) -> bool:
    """Check whether a normalized name contains a disallowed abbreviation.

    Only whole tokens count, so "ACME CORP" is rejected while
    "ACME CORPORATION" is not.
    """
    return any(word in DISALLOWED_ABBREVIATIONS for word in normalized.upper().split())


def validate_company_name(normalized: str) -> Optional[str]:
    """Apply the blocking rules to a normalized company name.

    Rules are checked in order and the first failure wins:
    1. Minimum length of 3 characters
    2. Reserved placeholder values (NONE, N/A, OTHER)
    3. Leading '#', which needs supporting documents
    4. Disallowed legal-entity abbreviations

    Args:
        normalized: Company name already passed through normalize_company_name

    Returns:
        The error message to show the user, or None if the name may be searched
    """
    if len(normalized) < MIN_NAME_LENGTH:
        error = NAME_TOO_SHORT
    elif normalized in RESERVED_NAMES:
        error = NAME_INVALID
    elif normalized.startswith('#'):
        error = NAME_NEEDS_DOCUMENTS
    elif has_disallowed_abbreviation(normalized):
        error = NAME_HAS_ABBREVIATION
    else:
        return None

    logger.debug(f"Rejected company name {normalized!r}: {error}")
    return error


def is_valid_email(email: str) -> bool:
    """Check an email address entered on the account form."""
    if not email:
        return False

    if email.strip().lower() in _EMAIL_PLACEHOLDERS:
        return False

    return bool(_EMAIL_PATTERN.fullmatch(email))
