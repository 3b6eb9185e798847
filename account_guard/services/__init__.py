"""
Services for checking and saving accounts.
"""

from .search import AccountSearch, SearchResult, DuplicateSearchError
from .directory import OwnerDirectory
from .checker import CheckResult, DebouncedChecker, check_company_name, SEARCH_FAILED
from .accounts import (
    AccountForm,
    UserDetails,
    AccountValidationError,
    prepare_submission,
    save_account
)

__all__ = [
    'AccountSearch',
    'SearchResult',
    'DuplicateSearchError',
    'OwnerDirectory',
    'CheckResult',
    'DebouncedChecker',
    'check_company_name',
    'SEARCH_FAILED',
    'AccountForm',
    'UserDetails',
    'AccountValidationError',
    'prepare_submission',
    'save_account'
]
