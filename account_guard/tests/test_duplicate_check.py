"""Tests for the company name check flow and the debounced checker."""

import functools
import threading
import time

import pytest

from ..db.models import Account
from ..db.session import SessionManager
from ..services.checker import SEARCH_FAILED, CheckResult, DebouncedChecker, check_company_name
from ..services.directory import OwnerDirectory
from ..services.search import AccountSearch, DuplicateSearchError
from ..utils.matching import Candidate
from ..utils.validation import NAME_HAS_ABBREVIATION, NAME_INVALID, NAME_TOO_SHORT
from .conftest import RecordingSearch


def test_short_name_never_reaches_search():
    search = RecordingSearch()
    result = check_company_name("AB", search, "U1")
    assert result.error == NAME_TOO_SHORT
    assert result.blocks_submission
    assert not result.searched
    assert search.calls == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Acme Corp", NAME_HAS_ABBREVIATION),
        ("n/a", NAME_INVALID),
        ("AB 12", NAME_TOO_SHORT),
    ],
)
def test_rejected_names_skip_search(raw, expected):
    search = RecordingSearch()
    assert check_company_name(raw, search, "U1").error == expected
    assert search.calls == []


def test_edit_mode_skips_all_checks():
    search = RecordingSearch()
    result = check_company_name("AB", search, "U1", mode='edit')
    assert result.error == ''
    assert not result.blocks_submission
    assert search.calls == []


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        check_company_name("Acme Trading", RecordingSearch(), "U1", mode='delete')


def test_search_receives_normalized_name():
    search = RecordingSearch([Candidate("ACME TRADING", "U1")])
    result = check_company_name("acme  tradng.", search, "U2")
    assert search.calls == ["ACME TRADNG"]
    assert result.searched
    assert result.verdict.is_duplicate
    assert result.error == 'Duplicate company owned by another TSA: "U1"'


def test_search_failure_reports_generic_message():
    search = RecordingSearch([Candidate("ACME TRADING", "U1")], fail=True)
    result = check_company_name("Acme Trading", search, "U2")
    assert result.error == SEARCH_FAILED
    assert not result.verdict.is_duplicate
    assert result.verdict.matches == []


def test_no_candidates_is_clean():
    result = check_company_name("Globex Holdings", RecordingSearch(), "U1")
    assert result.error == ''
    assert result.searched
    assert result.normalized_name == "GLOBEX HOLDINGS"


def test_account_search_prefilters_candidates(seeded_session):
    result = AccountSearch(seeded_session).search("ACME TRADNG")
    names = {company.company_name for company in result.companies}
    assert result.exists
    assert names == {"ACME TRADING", "Acme Industrial Supply"}


def test_account_search_limit_keeps_closest_names(seeded_session):
    result = AccountSearch(seeded_session, limit=1).search("ACME TRADNG")
    assert [company.company_name for company in result.companies] == ["ACME TRADING"]


def test_duplicate_found_beyond_limit_of_similar_names(seeded_session):
    seeded_session.add_all([
        Account.create({'company_name': f"AAA FILLER {n:02d}", 'referenceid': 'U2'})
        for n in range(60)
    ])
    seeded_session.add(Account.create({'company_name': "ZETA TRADING", 'referenceid': 'U1'}))
    seeded_session.commit()

    result = check_company_name(
        "Zeta Tradng",
        AccountSearch(seeded_session, limit=50),
        "U2",
        OwnerDirectory(seeded_session)
    )

    assert result.verdict.is_duplicate
    assert result.error == 'Duplicate company owned by another TSA: "Maria Santos"'
    assert [match.company_name for match in result.verdict.matches] == ["ZETA TRADING"]


def test_stored_punctuation_does_not_hide_duplicate(session):
    session.add(Account.create({'company_name': "A.C.M.E. Trading", 'referenceid': 'U1'}))
    session.commit()

    result = check_company_name("Acme Tradng", AccountSearch(session), "U2")

    assert result.verdict.is_duplicate
    assert result.error == 'Duplicate company owned by another TSA: "U1"'


def test_renamed_account_is_searched_by_new_name(seeded_session):
    account = seeded_session.get(Account, 'acc-2')
    account.company_name = "Initech Systems"
    seeded_session.commit()

    assert account.normalized_name == "INITECH SYSTEMS"
    result = AccountSearch(seeded_session, limit=1).search("INITECH SYSTEM")
    assert [company.company_name for company in result.companies] == ["Initech Systems"]


def test_account_search_without_candidates(seeded_session):
    result = AccountSearch(seeded_session).search("UMBRELLA")
    assert not result.exists
    assert result.companies == []


def test_account_search_wraps_database_errors(database_url):
    # No tables created on this database
    manager = SessionManager(database_url)
    session = manager.get_session()
    try:
        with pytest.raises(DuplicateSearchError):
            AccountSearch(session).search("ACME TRADING")
    finally:
        session.close()


def test_check_against_database_names_other_owner(seeded_session):
    result = check_company_name(
        "Acme Tradng",
        AccountSearch(seeded_session),
        "U2",
        OwnerDirectory(seeded_session)
    )
    assert result.error == 'Duplicate company owned by another TSA: "Maria Santos"'
    assert [match.owner_name for match in result.verdict.matches] == ["Maria Santos"]


def test_check_against_database_owned_by_self(seeded_session):
    result = check_company_name(
        "Acme Trading 2",
        AccountSearch(seeded_session),
        "U1",
        OwnerDirectory(seeded_session)
    )
    assert result.error == 'Possible duplicate detected (owned by you): "ACME TRADING"'


def test_owner_directory_display_names(seeded_session):
    directory = OwnerDirectory(seeded_session)
    assert directory.names() == {'U1': 'Maria Santos', 'U2': 'Juan Cruz'}
    assert directory.display_name('U9') == 'U9'


def _checker(results, delay):
    check = functools.partial(check_company_name, search=RecordingSearch(), current_owner_id='U1')
    return DebouncedChecker(check, results.append, delay=delay)


def test_debounced_checker_only_checks_latest_value():
    results = []
    checker = _checker(results, delay=10)
    checker.submit("A")
    checker.submit("Ac")
    checker.submit("Acme Trading")

    result = checker.flush()

    assert result is not None
    assert [r.company_name for r in results] == ["Acme Trading"]
    assert checker.last_result is result
    assert checker.flush() is None


def test_debounced_checker_runs_after_delay():
    done = threading.Event()
    results = []

    def on_result(result):
        results.append(result)
        done.set()

    check = functools.partial(check_company_name, search=RecordingSearch(), current_owner_id='U1')
    checker = DebouncedChecker(check, on_result, delay=0.01)
    checker.submit("Globex Holdings")

    assert done.wait(2)
    assert results[0].normalized_name == "GLOBEX HOLDINGS"


def test_debounced_checker_discards_stale_result():
    started = threading.Event()
    release = threading.Event()
    results = []

    def check(raw):
        if raw == "Slow Name":
            started.set()
            release.wait(2)
        return CheckResult(company_name=raw)

    checker = DebouncedChecker(check, results.append, delay=0)
    checker.submit("Slow Name")
    assert started.wait(2)

    checker.delay = 10
    checker.submit("Fast Name")
    release.set()
    checker.flush()

    assert [r.company_name for r in results] == ["Fast Name"]
    checker.cancel()


def test_debounced_checker_cancel_drops_pending():
    results = []
    checker = _checker(results, delay=10)
    checker.submit("Acme Trading")
    checker.cancel()
    assert checker.flush() is None
    assert results == []


def test_debounced_checker_flush_waits_for_running_check():
    started = threading.Event()
    results = []

    def check(raw):
        started.set()
        time.sleep(0.1)
        return CheckResult(company_name=raw)

    checker = DebouncedChecker(check, results.append, delay=0)
    checker.submit("Last Name")
    assert started.wait(2)

    result = checker.flush()
    checker.cancel()

    assert result is not None
    assert result.company_name == "Last Name"
    assert [r.company_name for r in results] == ["Last Name"]
