"""
Core CLI implementation for the account-guard package.
"""

import click
from pathlib import Path

from .config import Config
from .logging import setup_logging, get_logger
from ..commands.accounts import (
    CheckNameCommand,
    WatchNamesCommand,
    AddAccountCommand,
    ListAccountsCommand,
    CheckFileCommand,
    build_form
)
from ..commands.agents import AddAgentCommand
from ..commands.utils import TestConnectionCommand, InitDbCommand
from ..services.accounts import UserDetails, INDUSTRY_OPTIONS, REGION_OPTIONS, TYPE_CLIENT_OPTIONS

@click.group()
@click.option('--debug', is_flag=True, help='Enable detailed debug output')
@click.option('--env-file', type=click.Path(exists=True, dir_okay=False, path_type=Path), help='Load settings from this .env file')
@click.pass_context
def cli(ctx, debug: bool, env_file: Path | None):
    """Account name checks and duplicate detection."""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    try:
        config = Config.from_env(env_file)
        config.validate()
    except ValueError as e:
        click.secho(f"Error initializing configuration: {str(e)}", fg='red', err=True)
        ctx.exit(1)

    setup_logging(debug=debug, level=config.log_level)
    ctx.obj['config'] = config

    logger = get_logger('cli')
    if debug:
        logger.debug(f"Using database: {config.database_url}")

@cli.command('init-db')
@click.pass_obj
def init_db(obj):
    """Create the account and agent tables."""
    InitDbCommand(obj['config']).execute()

@cli.command('test-connection')
@click.pass_obj
def test_connection(obj):
    """Test database connectivity"""
    TestConnectionCommand(obj['config']).execute()

@cli.command()
@click.argument('name')
@click.option('--owner', required=True, help='Reference id of the agent entering the account')
@click.option('--mode', type=click.Choice(['create', 'edit']), default='create', show_default=True)
@click.pass_context
def check(ctx, name: str, owner: str, mode: str):
    """Check a company name for invalid values and duplicates."""
    result = CheckNameCommand(ctx.obj['config'], name, owner, mode).execute()
    if result.blocks_submission:
        ctx.exit(1)

@cli.command()
@click.option('--owner', required=True, help='Reference id of the agent entering the account')
@click.pass_obj
def watch(obj, owner: str):
    """Check names read from stdin as they change, one value per line."""
    WatchNamesCommand(obj['config'], owner, click.get_text_stream('stdin')).execute()

# Account Commands Group
@cli.group()
def accounts():
    """Account management commands"""
    pass

@accounts.command('add')
@click.argument('name')
@click.option('--owner', required=True, help='Reference id of the owning agent')
@click.option('--tsm', default='', help='Reference id of the territory sales manager')
@click.option('--manager', default='', help='Reference id of the manager')
@click.option('--contact', 'contacts', multiple=True, help='Contact person (repeatable)')
@click.option('--phone', 'phones', multiple=True, help='Contact number (repeatable)')
@click.option('--email', 'emails', multiple=True, help='Email address (repeatable)')
@click.option('--address', default=None)
@click.option('--delivery-address', default=None)
@click.option('--region', type=click.Choice(REGION_OPTIONS), default=None)
@click.option('--type-client', type=click.Choice(TYPE_CLIENT_OPTIONS), default=None)
@click.option('--industry', type=click.Choice(INDUSTRY_OPTIONS), default=None)
@click.option('--company-group', default=None)
@click.pass_obj
def add_account(obj, name: str, owner: str, tsm: str, manager: str, contacts, phones, emails,
                address, delivery_address, region, type_client, industry, company_group):
    """Check a new account and save it."""
    form = build_form(
        name, contacts, phones, emails,
        address=address,
        delivery_address=delivery_address,
        region=region,
        type_client=type_client,
        industry=industry,
        company_group=company_group
    )
    user = UserDetails(referenceid=owner, tsm=tsm, manager=manager)
    AddAccountCommand(obj['config'], form, user).execute()

@accounts.command('list')
@click.option('--owner', default=None, help='Only show accounts owned by this agent')
@click.option('--limit', type=int, default=10, help='Number of most recent accounts to show')
@click.pass_obj
def list_accounts(obj, owner: str | None, limit: int):
    """List the most recent accounts."""
    ListAccountsCommand(obj['config'], owner, limit).execute()

@accounts.command('check-file')
@click.argument('file', type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path))
@click.option('--owner', default=None, help='Owner for rows without an Owner column value')
@click.option('--output', type=click.Path(file_okay=True, dir_okay=False, path_type=Path), help='Save check results to file')
@click.pass_obj
def check_file(obj, file: Path, owner: str | None, output: Path | None):
    """Check a CSV file of proposed accounts for invalid and duplicate names."""
    CheckFileCommand(obj['config'], file, output, owner).execute()

# Agent Commands Group
@cli.group()
def agents():
    """Owner directory commands"""
    pass

@agents.command('add')
@click.argument('referenceid')
@click.argument('firstname')
@click.argument('lastname', default='')
@click.pass_obj
def add_agent(obj, referenceid: str, firstname: str, lastname: str):
    """Add an agent or update their name."""
    AddAgentCommand(obj['config'], referenceid, firstname, lastname).execute()
