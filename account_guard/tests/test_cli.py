"""End-to-end tests for the account-guard CLI."""

import json
import logging

import pytest
from click.testing import CliRunner

from ..cli.main import cli


@pytest.fixture
def run(database_url):
    """Invoke the CLI against the test database."""
    runner = CliRunner()

    def invoke(*args, input=None, **env):
        environment = {'DATABASE_URL': database_url, 'DEBOUNCE_SECONDS': '10'}
        environment.update(env)
        return runner.invoke(cli, list(args), input=input, env=environment)

    yield invoke
    # setup_logging bound a handler to the runner's closed stderr
    logging.getLogger().handlers.clear()


@pytest.fixture
def populated(run):
    """Database with one agent and one account owned by them."""
    assert run('init-db').exit_code == 0
    assert run('agents', 'add', 'U1', 'Maria', 'Santos').exit_code == 0
    result = run('accounts', 'add', 'Acme Trading', '--owner', 'U1', '--email', 'sales@acme.ph')
    assert result.exit_code == 0, result.output
    assert "Created account ACME TRADING" in result.output
    return run


def test_connection(run):
    result = run('test-connection')
    assert result.exit_code == 0
    assert "Successfully connected" in result.output


def test_missing_database_url(run):
    result = run('test-connection', DATABASE_URL=None)
    assert result.exit_code == 1
    assert "DATABASE_URL" in result.output


def test_check_reports_duplicate_owned_by_other_agent(populated):
    result = populated('check', 'Acme Tradng', '--owner', 'U2')
    assert result.exit_code == 1
    assert 'Duplicate company owned by another TSA: "Maria Santos"' in result.output
    assert "ACME TRADING (agent: Maria Santos, distance: 1)" in result.output


def test_check_rejects_short_name(populated):
    result = populated('check', 'AB', '--owner', 'U1')
    assert result.exit_code == 1
    assert "at least 3 characters" in result.output


def test_check_accepts_new_name(populated):
    result = populated('check', 'Globex Holdings', '--owner', 'U1')
    assert result.exit_code == 0
    assert "Status:       OK" in result.output


def test_check_edit_mode_skips_rules(populated):
    result = populated('check', 'AB', '--owner', 'U1', '--mode', 'edit')
    assert result.exit_code == 0


def test_check_json_output(populated):
    result = populated('check', 'Umbrella Health', '--owner', 'U1', OUTPUT_FORMAT='json')
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data['normalized_name'] == "UMBRELLA HEALTH"
    assert data['verdict']['is_duplicate'] is False


def test_add_rejects_abbreviation(populated):
    result = populated('accounts', 'add', 'Globex Corp', '--owner', 'U1')
    assert result.exit_code == 1
    assert "abbreviations" in result.output


def test_add_rejects_invalid_email(populated):
    result = populated('accounts', 'add', 'Globex Holdings', '--owner', 'U1', '--email', 'none')
    assert result.exit_code == 1
    assert "Invalid email address: none" in result.output


def test_list_accounts(populated):
    result = populated('accounts', 'list', '--owner', 'U1')
    assert result.exit_code == 0
    assert "ACME TRADING (U1, Pending)" in result.output


def test_watch_reports_only_latest_value(populated):
    result = populated('watch', '--owner', 'U2', input="A\nAc\nAcme Tradng\n")
    assert result.exit_code == 0
    assert result.output.count("Company name:") == 1
    assert "Company name: Acme Tradng" in result.output
    assert "Maria Santos" in result.output


def test_check_file(populated, tmp_path):
    csv_path = tmp_path / 'proposed.csv'
    csv_path.write_text(
        "Company Name,Owner\n"
        "Acme Tradng,U2\n"
        "NONE,U2\n"
        "Umbrella Health,U2\n"
    )
    output_path = tmp_path / 'results.json'

    result = populated('accounts', 'check-file', str(csv_path), '--output', str(output_path))

    assert result.exit_code == 0, result.output
    assert "Names Checked: 3" in result.output
    assert "Duplicates Found: 1" in result.output
    assert "Names Rejected: 1" in result.output

    saved = json.loads(output_path.read_text())
    assert saved['stats']['names_checked'] == 3
    assert [row['check_error'] for row in saved['rows']][2] == ''
