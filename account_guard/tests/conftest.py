"""Shared test fixtures and utilities."""

from datetime import datetime, timedelta

import pytest

from ..db.models import Account, Agent
from ..db.session import SessionManager
from ..services.search import DuplicateSearchError, SearchResult


class RecordingSearch:
    """Search stub that records every query it receives."""

    def __init__(self, companies=None, fail=False):
        self.companies = list(companies or [])
        self.fail = fail
        self.calls = []

    def search(self, normalized_name):
        self.calls.append(normalized_name)
        if self.fail:
            raise DuplicateSearchError("connection refused")
        return SearchResult(exists=bool(self.companies), companies=list(self.companies))


@pytest.fixture
def database_url(tmp_path):
    """SQLite database file private to the test."""
    return f"sqlite:///{tmp_path / 'accounts.db'}"


@pytest.fixture
def session_manager(database_url):
    """Session manager with all tables created."""
    manager = SessionManager(database_url)
    manager.create_tables()
    return manager


@pytest.fixture
def session(session_manager):
    """Create a test database session."""
    session = session_manager.get_session()
    yield session
    session.close()


@pytest.fixture
def seeded_session(session):
    """Session with two agents and three committed accounts."""
    now = datetime.utcnow()
    session.add_all([
        Agent(referenceid='U1', firstname='Maria', lastname='Santos'),
        Agent(referenceid='U2', firstname='Juan', lastname='Cruz'),
        Account(id='acc-1', company_name='ACME TRADING', referenceid='U1', date_created=now - timedelta(days=2)),
        Account(id='acc-2', company_name='GLOBEX HOLDINGS', referenceid='U2', date_created=now - timedelta(days=1)),
        Account(id='acc-3', company_name='Acme Industrial Supply', referenceid='U2', date_created=now),
    ])
    session.commit()
    return session
