"""Tests for preparing and saving account forms."""

import pytest

from ..db.models import Account
from ..services.accounts import (
    AccountForm,
    AccountValidationError,
    UserDetails,
    prepare_submission,
    save_account,
)
from ..services.directory import OwnerDirectory
from ..services.search import AccountSearch
from .conftest import RecordingSearch

USER = UserDetails(referenceid='U1', tsm='T1', manager='M1')


def test_prepare_submission_cleans_form():
    form = AccountForm(
        company_name="Acme Trading 2",
        contact_person=[" Juan Cruz ", ""],
        contact_number=["0917 123 4567", "  "],
        email_address=["juan@acme.com", " "],
        status='Active'
    )

    data = prepare_submission(form, USER)

    assert data['company_name'] == "ACME TRADING"
    assert data['contact_person'] == ["Juan Cruz"]
    assert data['contact_number'] == ["0917 123 4567"]
    assert data['email_address'] == ["juan@acme.com"]
    assert data['referenceid'] == 'U1'
    assert data['tsm'] == 'T1'
    assert data['manager'] == 'M1'
    assert data['status'] == 'Pending'
    assert 'id' not in data


def test_prepare_submission_keeps_status_on_edit():
    form = AccountForm(company_name="Acme Trading", status='Active', id='acc-1')
    data = prepare_submission(form, USER, mode='edit')
    assert data['status'] == 'Active'
    assert data['id'] == 'acc-1'


def test_invalid_email_blocks_submission():
    form = AccountForm(company_name="Acme Trading", email_address=["juan@acme.com", "juan@acme"])
    with pytest.raises(AccountValidationError, match="Invalid email address: juan@acme"):
        prepare_submission(form, USER)


@pytest.mark.parametrize(
    "field, value",
    [
        ('industry', 'SPACE_TOURISM'),
        ('type_client', 'WALK IN'),
        ('region', 'Region XX'),
    ],
)
def test_unknown_option_blocks_submission(field, value):
    form = AccountForm(company_name="Acme Trading", **{field: value})
    with pytest.raises(AccountValidationError):
        prepare_submission(form, USER)


def test_placeholder_options_are_allowed():
    data = prepare_submission(AccountForm(company_name="Acme Trading"), USER)
    assert data['industry'] == 'Choose Industry'
    assert data['type_client'] == 'Choose Type Client'


def test_save_account_creates_record(seeded_session):
    form = AccountForm(
        company_name="Umbrella Health",
        email_address=["info@umbrella.ph"],
        industry='HEALTHCARE_AND_SERVICES',
        region='NCR'
    )

    account = save_account(seeded_session, form, USER, AccountSearch(seeded_session))
    seeded_session.commit()

    stored = seeded_session.get(Account, account.id)
    assert stored.company_name == "UMBRELLA HEALTH"
    assert stored.referenceid == 'U1'
    assert stored.email_address == ["info@umbrella.ph"]
    assert stored.status == 'Pending'


def test_save_account_blocks_duplicates(seeded_session):
    form = AccountForm(company_name="Acme Tradng")
    user = UserDetails(referenceid='U2')

    with pytest.raises(AccountValidationError, match='owned by another TSA: "Maria Santos"'):
        save_account(
            seeded_session, form, user,
            AccountSearch(seeded_session),
            OwnerDirectory(seeded_session)
        )

    assert seeded_session.query(Account).count() == 3


def test_save_account_blocks_rule_failures_without_search(session):
    search = RecordingSearch()
    with pytest.raises(AccountValidationError, match="abbreviations"):
        save_account(session, AccountForm(company_name="Acme Corp"), USER, search)
    assert search.calls == []


def test_save_account_edit_updates_existing(seeded_session):
    form = AccountForm(company_name="Acme Trading Group", id='acc-1', status='Active')

    save_account(seeded_session, form, USER, AccountSearch(seeded_session), mode='edit')
    seeded_session.commit()

    account = seeded_session.get(Account, 'acc-1')
    assert account.company_name == "ACME TRADING GROUP"
    assert account.status == 'Active'
    assert seeded_session.query(Account).count() == 3


def test_save_account_edit_requires_existing_account(session):
    form = AccountForm(company_name="Acme Trading", id='missing')
    with pytest.raises(AccountValidationError, match="Account not found"):
        save_account(session, form, USER, RecordingSearch(), mode='edit')
