# payday_ledger/cli.py
import functools
import logging
import os
from dataclasses import dataclass
from datetime import datetime

import click
from dotenv import load_dotenv

from payday_ledger.config import load_config
from payday_ledger.engine import BudgetEngine
from payday_ledger.errors import LedgerError
from payday_ledger.outputs import get_output
from payday_ledger.storage import JsonFileStore
from payday_ledger.utils import format_amount, parse_timestamp


@dataclass
class AppContext:
    config: dict
    engine: BudgetEngine

    def fmt(self, value):
        return format_amount(value, self.config.get('currency', 'CHF'))


def ledger_errors(func):
    """Report engine validation failures as a clean CLI error."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LedgerError as exc:
            raise click.ClickException(str(exc)) from exc
    return wrapper


def _parse_when(value):
    if value is None:
        return datetime.now()
    try:
        return parse_timestamp(value)
    except ValueError as exc:
        raise click.BadParameter(f"Not an ISO date/time: {value}") from exc


@click.group()
@click.option(
    '--config', 'config_path',
    default='config.yaml',
    type=click.Path(dir_okay=False),
    help='Path to config.yaml (defaults are used when it does not exist)'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file, e.g. setting PAYDAY_LEDGER_STATE'
)
@click.option(
    '--log-level', 'log_level',
    default=None,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    help='Logging level (default: $PAYDAY_LEDGER_LOG or WARNING)'
)
@click.option(
    '--no-tick', is_flag=True, default=False,
    help='Do not seal finished periods before running the command (the tick command never auto-ticks)'
)
@click.pass_context
@ledger_errors
def main(ctx, config_path, env_file, log_level, no_tick):
    """
    Track spending against a budget that rolls over on payday. Finished
    periods are sealed into archives before each command runs.
    """
    if env_file:
        load_dotenv(env_file)
    logging.basicConfig(
        level=(log_level or os.getenv('PAYDAY_LEDGER_LOG', 'WARNING')).upper()
    )

    cfg = load_config(config_path)
    engine = BudgetEngine.load(
        JsonFileStore(cfg['state_path']),
        default_payday=int(cfg['payday']),
    )
    ctx.obj = AppContext(config=cfg, engine=engine)

    # `tick` seals against its own --now
    if not no_tick and ctx.invoked_subcommand != 'tick':
        for record in engine.tick(datetime.now()):
            click.echo(f"Archived {record.label} ({len(record.transactions)} transaction(s)).")


@main.command()
@click.argument('amount', type=float)
@click.pass_obj
@ledger_errors
def budget(app, amount):
    """Set the budget for the current period."""
    app.engine.set_budget(amount)
    click.echo(f"Budget set to {app.fmt(amount)}.")


@main.command()
@click.argument('day', type=int)
@click.pass_obj
@ledger_errors
def payday(app, day):
    """Set the day of month (1-28) that starts a new period."""
    app.engine.set_payday(day)
    click.echo(f"Payday set to day {day}.")


@main.command()
@click.argument('description')
@click.argument('amount', type=float)
@click.option('--category', '-c', required=True, help='Registered category name')
@click.option('--date', 'when', default=None, help='ISO timestamp (default: now)')
@click.pass_obj
@ledger_errors
def add(app, description, amount, category, when):
    """Record a spending entry."""
    tx = app.engine.add_transaction(description, amount, category, _parse_when(when))
    click.echo(f"Added {tx.id}: {tx.description} {app.fmt(tx.amount)} [{tx.category}]")


@main.command()
@click.argument('tx_id')
@click.pass_obj
@ledger_errors
def remove(app, tx_id):
    """Delete a spending entry by id."""
    app.engine.remove_transaction(tx_id)
    click.echo(f"Removed {tx_id}.")


@main.command(name='list')
@click.option('--search', default='', help='Text to look for in description or category')
@click.option('--category', '-c', default=None, help='Only this category')
@click.pass_obj
def list_transactions(app, search, category):
    """List live transactions, newest first."""
    txs = app.engine.filter_transactions(search, category)
    if not txs:
        click.echo("No entries.")
        return
    for tx in txs:
        click.echo(
            f"{tx.id}  {tx.timestamp:%Y-%m-%d %H:%M}  {tx.category}  "
            f"{tx.description}  {app.fmt(tx.amount)}"
        )


@main.command()
@click.confirmation_option(prompt='Delete all live transactions?')
@click.pass_obj
def clear(app):
    """Delete every live transaction without archiving it."""
    app.engine.clear_transactions()
    click.echo("History cleared.")


@main.group()
def category():
    """Manage categories."""


@category.command(name='add')
@click.argument('name')
@click.pass_obj
@ledger_errors
def category_add(app, name):
    created = app.engine.create_category(name)
    click.echo(f"Category '{created}' added.")


@category.command(name='rename')
@click.argument('old_name')
@click.argument('new_name')
@click.pass_obj
@ledger_errors
def category_rename(app, old_name, new_name):
    app.engine.rename_category(old_name, new_name)
    click.echo(f"Category '{old_name}' renamed to '{new_name.strip()}'.")


@category.command(name='delete')
@click.argument('name')
@click.pass_obj
@ledger_errors
def category_delete(app, name):
    app.engine.delete_category(name)
    click.echo(f"Category '{name}' deleted.")


@category.command(name='list')
@click.pass_obj
def category_list(app):
    for name in app.engine.categories:
        click.echo(name)


@main.command()
@click.option('--now', default=None, help='Reference time (ISO); default: now')
@click.pass_obj
def tick(app, now):
    """Seal finished periods."""
    sealed = app.engine.tick(_parse_when(now))
    for record in sealed:
        click.echo(f"Archived {record.label} ({len(record.transactions)} transaction(s)).")
    if not sealed:
        click.echo(f"Nothing to archive; current period {app.engine.last_archived_period_id}.")


@main.command()
@click.pass_obj
def summary(app):
    """Show budget, spending and what is left."""
    threshold = float(app.config.get('low_remaining_threshold', 200))
    info = app.engine.summary(threshold)
    click.echo(f"Budget:    {app.fmt(info['budget'])}")
    click.echo(f"Spent:     {app.fmt(info['spent'])}")
    click.echo(f"Remaining: {app.fmt(info['balance'])}")
    if info['low_remaining']:
        click.echo(f"Warning: less than {app.fmt(threshold)} left.")
    for cat, share in app.engine.percentages_by_category().items():
        click.echo(f"  {cat}: {share * 100:.1f}%")


@main.command()
@click.option('--now', default=None, help='Reference time (ISO); default: now')
@click.pass_obj
def saved(app, now):
    """Show the amount saved per period for the live ledger."""
    for row in app.engine.saved_per_period(_parse_when(now)):
        click.echo(f"{row['label']}: {app.fmt(row['saved'])}")


@main.command()
@click.pass_obj
def archives(app):
    """List sealed periods."""
    rows = app.engine.archive_overview()
    if not rows:
        click.echo("No archives yet.")
        return
    for row in rows:
        click.echo(
            f"{row['period']}  {row['label']}  budget {app.fmt(row['budget'])}  "
            f"spent {app.fmt(row['spent'])}  saved {app.fmt(row['saved'])}"
        )


@main.command()
@click.argument('output_format', type=click.Choice(['csv', 'html']))
@click.pass_obj
def export(app, output_format):
    """Export the live transactions."""
    try:
        outputter = get_output(output_format, app.config)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    path = outputter.write(list(app.engine.transactions))
    if path is None:
        click.echo("No data to export.")
    else:
        click.echo(f"Exported to {path}.")
