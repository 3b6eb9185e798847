"""Utility functions and helpers."""

from .normalization import normalize_company_name
from .validation import has_disallowed_abbreviation, validate_company_name, is_valid_email
from .matching import (
    Candidate,
    DuplicateMatch,
    DuplicateVerdict,
    DUPLICATE_THRESHOLD,
    levenshtein,
    find_duplicates
)
from .uuid import generate_uuid

__all__ = [
    'normalize_company_name',
    'has_disallowed_abbreviation',
    'validate_company_name',
    'is_valid_email',
    'Candidate',
    'DuplicateMatch',
    'DuplicateVerdict',
    'DUPLICATE_THRESHOLD',
    'levenshtein',
    'find_duplicates',
    'generate_uuid'
]
