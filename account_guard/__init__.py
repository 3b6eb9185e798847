"""Company account name checks and duplicate detection."""

from .utils import normalize_company_name, has_disallowed_abbreviation, find_duplicates, levenshtein
from .services import check_company_name, DebouncedChecker

__all__ = [
    'normalize_company_name',
    'has_disallowed_abbreviation',
    'find_duplicates',
    'levenshtein',
    'check_company_name',
    'DebouncedChecker'
]
