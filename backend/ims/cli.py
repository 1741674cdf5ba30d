# Overview: Flask CLI command groups for login, reports, and maintenance against the remote API.

# backend/ims/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
# - Commands other than login need a token: --token or IMS_API_TOKEN.
#
# Session:
# - python -m flask auth login --pin 1234
#   Log in with a PIN and print the session token.
#
# Reports:
# - python -m flask reports dashboard
#   Stock added, sold, returned, and remaining totals.
# - python -m flask reports monthly [--category <folder id>]
#   Monthly report for all folders or one folder.
# - python -m flask reports search --start 2026-10-01 --end 2026-10-31 [--status sold]
#   Totals and matching boxes for a date range (default: current month).
#
# Maintenance:
# - python -m flask maintenance clear-data --yes
#   Delete every sale, box, and folder on the remote API.

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import remote_api
from .models import STATUS_FILTERS
from .services import auth_service, maintenance_service, reporting_service
from .services.api_client import RemoteApiError
from .time_utils import current_month_range
from .validation import ValidationError, validate_date_range


token_option = click.option(
    "--token",
    envvar="IMS_API_TOKEN",
    required=True,
    help="Session token (or set IMS_API_TOKEN)",
)


def _fail(message: str):
    click.echo(f"FAIL {message}", err=True)
    raise SystemExit(1)


def _echo_totals(totals: dict):
    for key, value in totals.items():
        click.echo(f"   {key:<16} {value}")


@click.group("auth")
def auth_group():
    """Session commands."""


@auth_group.command("login")
@click.option("--pin", prompt=True, hide_input=True, help="4 to 6 digit PIN")
@with_appcontext
def login(pin):
    """Log in with a PIN and print the session token."""
    try:
        data = auth_service.login_with_pin(remote_api.client(), pin)
    except (ValidationError, RemoteApiError) as e:
        _fail(str(e))
    click.echo(data["token"])


@click.group("reports")
def reports_group():
    """Dashboard, monthly report, and search."""


@reports_group.command("dashboard")
@token_option
@with_appcontext
def dashboard(token):
    """Show dashboard totals."""
    try:
        stats = reporting_service.dashboard_stats(remote_api.client(token))
    except RemoteApiError as e:
        _fail(e.message)
    _echo_totals(stats)


@reports_group.command("monthly")
@token_option
@click.option("--category", default="all", help="Folder id, or 'all'")
@with_appcontext
def monthly(token, category):
    """Show the monthly report."""
    try:
        data = reporting_service.fetch_report_data(
            remote_api.client(token),
            limit=current_app.config["REPORTS_PRODUCT_LIMIT"],
        )
    except RemoteApiError as e:
        _fail(e.message)
    report = reporting_service.monthly_report(data, category_filter=category)
    click.echo(f"{report['title']} report - {report['scope']}")
    _echo_totals(report["display"])


@reports_group.command("search")
@token_option
@click.option("--start", default=None, help="YYYY-MM-DD (default: first of this month)")
@click.option("--end", default=None, help="YYYY-MM-DD (default: end of this month)")
@click.option("--category", default="all", help="Folder id, or 'all'")
@click.option("--status", type=click.Choice(STATUS_FILTERS), default="all")
@with_appcontext
def search(token, start, end, category, status):
    """Totals and boxes for a date range."""
    default_start, default_end = current_month_range()
    try:
        start, end = validate_date_range(start or default_start, end or default_end)
        data = reporting_service.fetch_search_data(
            remote_api.client(token), start_date=start, end_date=end
        )
    except (ValidationError, RemoteApiError) as e:
        _fail(str(e))
    results = reporting_service.search_results(
        data, category_filter=category, status_filter=status
    )
    click.echo(f"{results['found']} boxes between {start} and {end}")
    _echo_totals(results["display"])
    for item in results["items"]:
        click.echo(f"   - {item['name']} (sold {item['sold']}, returned {item['returned']}, stock {item['stock']})")


@click.group("maintenance")
def maintenance_group():
    """Bulk maintenance commands."""


@maintenance_group.command("clear-data")
@token_option
@click.option("--yes", is_flag=True, help="Confirm deleting all remote data")
@with_appcontext
def clear_data(token, yes):
    """Delete every sale, box, and folder."""
    if not yes:
        _fail("Refusing to clear data without --yes")
    try:
        result = maintenance_service.clear_all_data(
            remote_api.client(token),
            logger=current_app.logger,
            sale_limit=current_app.config["CLEAR_DATA_SALE_LIMIT"],
            product_limit=current_app.config["CLEAR_DATA_PRODUCT_LIMIT"],
        )
    except RemoteApiError as e:
        _fail(e.message)
    for kind, counts in result.items():
        status = "PASS" if counts["failed"] == 0 else "WARN"
        click.echo(f"{status} {kind}: {counts['deleted']} deleted, {counts['failed']} failed")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(auth_group)
    app.cli.add_command(reports_group)
    app.cli.add_command(maintenance_group)
