"""
Account commands for the account-guard CLI.
Handles name checks, account creation, listing and batch checks of files.
"""

import functools
import json
from pathlib import Path
from typing import List, Optional, TextIO

import click
import pandas as pd

from ...cli.base import BaseCommand, FileInputCommand, command_error_handler
from ...cli.config import Config
from ...db.models import Account
from ...processors.account import AccountCheckProcessor
from ...services.accounts import AccountForm, AccountValidationError, UserDetails, save_account
from ...services.checker import CheckResult, DebouncedChecker, check_company_name
from ...services.directory import OwnerDirectory
from ...services.search import AccountSearch


def format_result(result: CheckResult) -> str:
    """Render a check result as human-readable lines."""
    lines = [f"Company name: {result.company_name}"]
    if result.normalized_name:
        lines.append(f"Normalized:   {result.normalized_name}")

    if result.error:
        lines.append(f"Error:        {result.error}")
    else:
        lines.append("Status:       OK")

    if result.verdict.matches:
        lines.append("Possible duplicate companies:")
        for match in result.verdict.matches:
            lines.append(f"  - {match.company_name} (agent: {match.owner_name}, distance: {match.distance})")
    return "\n".join(lines)


class CheckNameCommand(BaseCommand):
    """Command to check a single company name."""

    def __init__(self, config: Config, name: str, owner: str, mode: str = 'create'):
        super().__init__(config)
        self.name = name
        self.owner = owner
        self.mode = mode

    @command_error_handler
    def execute(self) -> CheckResult:
        """Run the check and print the verdict."""
        with self.get_session() as session:
            search = AccountSearch(session, self.config.search_limit)
            result = check_company_name(
                self.name, search, self.owner, OwnerDirectory(session), self.mode
            )

        self.emit(format_result(result), result.to_dict())
        return result


class WatchNamesCommand(BaseCommand):
    """Command that checks names as they are typed, one value per input line.

    Each line replaces the previous value, the same way each keystroke
    replaces the text of the form field. Only results for the latest value
    are printed.
    """

    def __init__(self, config: Config, owner: str, stream: TextIO):
        super().__init__(config)
        self.owner = owner
        self.stream = stream

    @command_error_handler
    def execute(self) -> Optional[CheckResult]:
        """Feed input lines to a debounced checker until end of input."""
        with self.get_session() as session:
            check = functools.partial(
                check_company_name,
                search=AccountSearch(session, self.config.search_limit),
                current_owner_id=self.owner,
                directory=OwnerDirectory(session)
            )
            checker = DebouncedChecker(
                check,
                lambda result: self.emit(format_result(result), result.to_dict()),
                delay=self.config.debounce_seconds
            )
            try:
                for line in self.stream:
                    checker.submit(line.rstrip('\n'))
                checker.flush()
            finally:
                checker.cancel()

        return checker.last_result


class AddAccountCommand(BaseCommand):
    """Command to check and save a new account."""

    def __init__(self, config: Config, form: AccountForm, user: UserDetails):
        super().__init__(config)
        self.form = form
        self.user = user

    @command_error_handler
    def execute(self) -> None:
        """Save the account if its name passes every check."""
        try:
            with self.session_manager as session:
                search = AccountSearch(session, self.config.search_limit)
                account = save_account(session, self.form, self.user, search, OwnerDirectory(session))
                account_id, company_name = account.id, account.company_name
        except AccountValidationError as e:
            raise click.ClickException(str(e))

        click.secho(f"Created account {company_name} ({account_id})", fg='green')


class ListAccountsCommand(BaseCommand):
    """Command to list the most recent accounts."""

    def __init__(self, config: Config, owner: Optional[str] = None, limit: int = 10):
        super().__init__(config)
        self.owner = owner
        self.limit = limit

    @command_error_handler
    def execute(self) -> None:
        """Execute the command."""
        with self.get_session() as session:
            query = session.query(Account)
            if self.owner:
                query = query.filter(Account.referenceid == self.owner)
            total_count = query.count()
            accounts = query.order_by(Account.date_created.desc()).limit(self.limit).all()
            rows = [
                {
                    'id': account.id,
                    'company_name': account.company_name,
                    'referenceid': account.referenceid,
                    'status': account.status,
                    'date_created': account.date_created
                }
                for account in accounts
            ]

        if not rows:
            click.echo("No accounts found in database")
            return

        lines = [f"Most recent {len(rows)} of {total_count} accounts:"]
        lines.extend(f"  - {row['company_name']} ({row['referenceid']}, {row['status']})" for row in rows)
        self.emit("\n".join(lines), {'total': total_count, 'accounts': rows})


class CheckFileCommand(FileInputCommand):
    """Command to check a CSV file of proposed accounts."""

    def __init__(self, config: Config, input_file: Path, output_file: Optional[Path] = None,
                 owner: Optional[str] = None):
        super().__init__(config, input_file, output_file)
        self.owner = owner

    @command_error_handler
    def execute(self) -> dict:
        """Execute the command."""
        if not self.validate():
            raise click.Abort()

        self.logger.info(f"Checking {self.input_file} for invalid and duplicate names...")
        df = pd.read_csv(self.input_file, dtype=str, skipinitialspace=True)

        processor = AccountCheckProcessor(
            {'database_url': self.config.database_url},
            owner_referenceid=self.owner,
            batch_size=self.config.batch_size,
            error_limit=self.config.error_limit,
            search_limit=self.config.search_limit,
            debug=self.debug
        )
        processed_df = processor.process(df)
        stats = processor.get_stats()
        processor.error_tracker.log_summary(self.logger)

        click.echo("\nAccount Check Summary:")
        click.echo(f"Names Checked: {stats['names_checked']}")
        click.echo(f"Names Rejected: {stats['names_rejected']}")
        click.echo(f"Duplicates Found: {stats['duplicates_found']}")
        click.echo(f"Search Failures: {stats['search_failures']}")
        click.echo(f"Failed Batches: {stats['failed_batches']}")

        results = {
            'stats': stats,
            'errors': processor.error_tracker.get_summary(),
            'rows': processed_df.fillna('').to_dict(orient='records')
        }
        if self.output_file:
            with open(self.output_file, 'w') as f:
                json.dump(results, f, indent=2, default=str)
            click.echo(f"\nDetailed results saved to {self.output_file}")

        return results


def build_form(name: str, contacts: List[str], phones: List[str], emails: List[str], **fields) -> AccountForm:
    """Build an account form from CLI options."""
    return AccountForm(
        company_name=name,
        contact_person=list(contacts) or [''],
        contact_number=list(phones) or [''],
        email_address=list(emails) or [''],
        **{key: value for key, value in fields.items() if value is not None}
    )


__all__ = [
    'CheckNameCommand',
    'WatchNamesCommand',
    'AddAccountCommand',
    'ListAccountsCommand',
    'CheckFileCommand',
    'build_form',
    'format_result'
]
