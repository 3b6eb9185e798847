"""Candidate search for duplicate account detection.

The search casts a wide net in SQL and leaves the final decision to
find_duplicates, which compares normalized names in Python.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db.models import Account
from ..utils.matching import Candidate, DUPLICATE_THRESHOLD, levenshtein

logger = logging.getLogger(__name__)


class DuplicateSearchError(RuntimeError):
    """Raised when the candidate search cannot be completed."""


@dataclass
class SearchResult:
    """Accounts that may duplicate a searched name."""
    exists: bool = False
    companies: List[Candidate] = field(default_factory=list)


class AccountSearch:
    """Searches stored accounts for names close to a normalized name."""

    def __init__(self, session: Session, limit: int = 50):
        """Initialize the search.

        Args:
            session: Database session used for queries
            limit: Maximum number of candidate accounts returned, closest first
        """
        self.session = session
        self.limit = limit

    def search(self, normalized_name: str) -> SearchResult:
        """Return candidate accounts for a normalized company name.

        A stored account is a candidate when its normalized name is within
        DUPLICATE_THRESHOLD characters of the searched length, or when it
        starts with the same first word. Candidates are ranked by edit
        distance before the limit is applied, so a cap on the number of
        rows never drops the closest names.

        Args:
            normalized_name: Name already passed through normalize_company_name

        Returns:
            SearchResult with the candidate accounts

        Raises:
            DuplicateSearchError: If the database query fails
        """
        if not normalized_name:
            return SearchResult()

        stored_name = Account.normalized_name
        first_word = normalized_name.split()[0]

        try:
            rows = (
                self.session.query(Account.company_name, Account.normalized_name, Account.referenceid)
                .filter(or_(
                    func.abs(func.length(stored_name) - len(normalized_name)) <= DUPLICATE_THRESHOLD,
                    stored_name.like(f"{first_word}%")
                ))
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Duplicate search failed for {normalized_name!r}: {str(e)}")
            raise DuplicateSearchError(f"Failed to search accounts: {str(e)}") from e

        ranked = sorted(rows, key=lambda row: (levenshtein(normalized_name, row.normalized_name), row.company_name))
        companies = [
            Candidate(company_name=row.company_name, owner_referenceid=row.referenceid)
            for row in ranked[:self.limit]
        ]
        logger.debug(
            f"Search for {normalized_name!r} matched {len(rows)} accounts, returning {len(companies)} candidates"
        )
        return SearchResult(exists=bool(companies), companies=companies)
