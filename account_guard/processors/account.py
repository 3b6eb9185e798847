"""Batch duplicate checking for files of proposed accounts."""
from typing import Any, Dict, List, Optional, Tuple
import pandas as pd
from sqlalchemy.orm import Session

from ..db.session import SessionManager
from ..services.checker import SEARCH_FAILED, check_company_name
from ..services.directory import OwnerDirectory
from ..services.search import AccountSearch, SearchResult
from ..utils.matching import Candidate
from .base import BaseProcessor
from .error_tracker import ErrorTracker


class _FileAwareSearch:
    """Adds accounts from earlier rows of the same file to the stored candidates."""

    def __init__(self, search: AccountSearch, earlier_rows: List[Candidate]):
        self.inner = search
        self.earlier_rows = earlier_rows

    def search(self, normalized_name: str) -> SearchResult:
        result = self.inner.search(normalized_name)
        companies = result.companies + list(self.earlier_rows)
        return SearchResult(exists=bool(companies), companies=companies)


class AccountCheckProcessor(BaseProcessor):
    """Checks every proposed account name in a file for rule failures and duplicates."""

    NAME_COLUMNS = ['Company Name', 'company_name']
    OWNER_COLUMNS = ['Owner', 'referenceid']

    def __init__(
        self,
        config: Dict[str, Any],
        owner_referenceid: Optional[str] = None,
        batch_size: int = 100,
        error_limit: int = 1000,
        search_limit: int = 50,
        debug: bool = False
    ):
        """Initialize the account check processor.

        Args:
            config: Configuration dictionary containing database_url
            owner_referenceid: Owner used for rows without an owner column value
            batch_size: Number of records to process per batch
            error_limit: Maximum number of errors before stopping
            search_limit: Maximum candidates returned per search
            debug: Enable debug logging
        """
        session_manager = SessionManager(config['database_url'])
        super().__init__(session_manager, batch_size, error_limit, debug)
        self.owner_referenceid = owner_referenceid
        self.search_limit = search_limit
        self.error_tracker = ErrorTracker()
        self.accepted: List[Candidate] = []

        self.stats.names_checked = 0
        self.stats.names_rejected = 0
        self.stats.duplicates_found = 0
        self.stats.search_failures = 0

    def _column(self, df_columns, options: List[str]) -> Optional[str]:
        return next((column for column in options if column in df_columns), None)

    def validate_data(self, df: pd.DataFrame) -> Tuple[List[str], List[str]]:
        """Validate data before processing.

        Args:
            df: DataFrame to validate

        Returns:
            Tuple of (critical_issues, warnings)
        """
        critical_issues = []
        warnings = []

        name_column = self._column(df.columns, self.NAME_COLUMNS)
        if name_column is None:
            critical_issues.append("Missing required column: Company Name")
            return critical_issues, warnings

        owner_column = self._column(df.columns, self.OWNER_COLUMNS)
        if owner_column is None and not self.owner_referenceid:
            critical_issues.append("Missing Owner column and no default owner given")
            return critical_issues, warnings

        empty_names = df[df[name_column].isna() | (df[name_column].astype(str).str.strip() == '')]
        if not empty_names.empty:
            warnings.append(
                f"Found {len(empty_names)} rows with an empty company name. "
                f"First few row numbers: {', '.join(map(str, empty_names.index[:3]))}"
            )

        return critical_issues, warnings

    def _row_owner(self, row: pd.Series, owner_column: Optional[str]) -> str:
        if owner_column and pd.notna(row.get(owner_column)) and str(row[owner_column]).strip():
            return str(row[owner_column]).strip()
        return self.owner_referenceid or ''

    def _process_batch(self, session: Session, batch_df: pd.DataFrame) -> pd.DataFrame:
        """Check a batch of proposed accounts.

        Args:
            session: Database session for this batch
            batch_df: DataFrame containing the batch data

        Returns:
            Batch with normalized_name, check_error and duplicate_count columns added
        """
        name_column = self._column(batch_df.columns, self.NAME_COLUMNS)
        owner_column = self._column(batch_df.columns, self.OWNER_COLUMNS)
        search = _FileAwareSearch(AccountSearch(session, self.search_limit), self.accepted)
        directory = OwnerDirectory(session)

        normalized_names = []
        errors = []
        duplicate_counts = []

        for index, row in batch_df.iterrows():
            raw = row[name_column]
            raw = '' if pd.isna(raw) else str(raw)
            owner = self._row_owner(row, owner_column)

            result = check_company_name(raw, search, owner, directory)
            self.stats.names_checked += 1

            if result.error == SEARCH_FAILED:
                self.stats.search_failures += 1
                self.stats.total_errors += 1
                self.error_tracker.add_error('SEARCH_FAILED', result.error, {'row': index, 'company_name': raw})
            elif result.verdict.is_duplicate:
                self.stats.duplicates_found += 1
                self.error_tracker.add_error('DUPLICATE', result.error, {'row': index, 'company_name': raw})
            elif result.error:
                self.stats.names_rejected += 1
                self.error_tracker.add_error('INVALID_NAME', result.error, {'row': index, 'company_name': raw})
            else:
                self.accepted.append(Candidate(company_name=result.normalized_name, owner_referenceid=owner))

            if self.debug:
                self.logger.debug(f"Row {index}: {raw!r} -> {result.normalized_name!r} {result.error or 'OK'}")

            normalized_names.append(result.normalized_name)
            errors.append(result.error)
            duplicate_counts.append(len(result.verdict.matches))

        batch_df['normalized_name'] = normalized_names
        batch_df['check_error'] = errors
        batch_df['duplicate_count'] = duplicate_counts
        return batch_df
