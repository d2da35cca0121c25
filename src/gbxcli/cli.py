"""
Main CLI interface for gbx-cli

Provides the command-line interface using Click framework with rich terminal UI.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import click
import structlog
from rich.panel import Panel

from . import __author__, __version__
from .core.api import DEFAULT_LOGS_DIR, GlobalBlackboxClient
from .core.config import APIConfig, ConfigStore, load_settings
from .core.errors import GBXError, LocalIOError
from .core.models import LogDownloadRequest, LogQuery
from .ui.banner import display_welcome_banner
from .ui.formatting import RichFormatter
from .ui.interactive import SignupWizard
from .utils.logging import setup_logging
from .utils.validation import MAX_LOG_LIMIT, clamp_limit, parse_date

logger = structlog.get_logger(__name__)

ClientFactory = Callable[[Optional[str]], GlobalBlackboxClient]


@dataclass
class AppContext:
    """Dependencies shared by every command, built once at start-up"""
    settings: APIConfig
    store: ConfigStore
    formatter: RichFormatter
    client_factory: ClientFactory

    @classmethod
    def build(cls, settings: Optional[APIConfig] = None) -> "AppContext":
        settings = settings or load_settings()
        settings.user_agent = f"gbx-cli/{__version__}"

        def client_factory(api_key: Optional[str]) -> GlobalBlackboxClient:
            return GlobalBlackboxClient(settings, api_key=api_key)

        return cls(
            settings=settings,
            store=ConfigStore(settings.config_dir),
            formatter=RichFormatter(),
            client_factory=client_factory,
        )


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.pass_context
def main(ctx, verbose: bool, debug: bool):
    """gbx is the CLI tool to interact with Global Blackbox services

    Sign up, manage your account, and interact with Global Blackbox
    services through a command-line interface.
    """
    if ctx.obj is None:
        try:
            ctx.obj = AppContext.build()
        except GBXError as e:
            click.echo(f"Configuration error: {e.message}", err=True)
            sys.exit(1)

    app: AppContext = ctx.obj
    log_level = "DEBUG" if debug else ("INFO" if verbose else app.settings.log_level)
    setup_logging(log_level)


def _fail(app: AppContext, error: GBXError):
    logger.debug("Command failed", kind=error.kind.value)
    app.formatter.display_error(error)
    sys.exit(1)


@main.command()
@click.option('--email', help='Email address for the account')
@click.option('--plan', type=click.Choice(['single-region', 'all-continents', 'worldwide']),
              help='Subscription plan')
@click.option('--region', help='Region code for the single-region plan (e.g., sao-paulo.americas)')
@click.option('--targets', help='Number of probe targets to monitor')
@click.option('--yes', '-y', 'assume_yes', is_flag=True, help='Skip the plan confirmation')
@click.pass_obj
def signup(app: AppContext, email: Optional[str], plan: Optional[str], region: Optional[str],
           targets: Optional[str], assume_yes: bool):
    """Sign up for a Global Blackbox account"""
    try:
        signup_command(app, email, plan, region, targets, assume_yes)
    except GBXError as e:
        _fail(app, e)


@main.group()
def logs():
    """Retrieve and download logs from Global Blackbox"""


@logs.command('list')
@click.option('--region', '-r', required=True, help='Region code (e.g., london.europe)')
@click.option('--target_domain', '-t', 'target_domain', required=True, help='Target domain (e.g., booking.com)')
@click.option('--date', '-d', 'date_str', required=True, help='Date in YYYY-MM-DD format')
@click.option('--limit', '-l', default=10, show_default=True, type=int,
              help=f'Number of log files to retrieve (max {MAX_LOG_LIMIT})')
@click.pass_obj
def logs_list(app: AppContext, region: str, target_domain: str, date_str: str, limit: int):
    """List available log files"""
    try:
        logs_list_command(app, region, target_domain, date_str, limit)
    except GBXError as e:
        _fail(app, e)


@logs.command('download')
@click.option('--fileName', '-f', 'file_name', required=True, help='Name of the log file to download')
@click.option('--region', '-r', required=True, help='Region code (e.g., london.europe)')
@click.option('--target_domain', '-t', 'target_domain', required=True, help='Target domain (e.g., booking.com)')
@click.option('--date', '-d', 'date_str', required=True, help='Date in YYYY-MM-DD format')
@click.option('--output-dir', '-o', type=click.Path(file_okay=False, path_type=Path),
              default=DEFAULT_LOGS_DIR, show_default=True, help='Directory to save the file in')
@click.option('--overwrite', is_flag=True, help='Replace the file if it already exists')
@click.pass_obj
def logs_download(app: AppContext, file_name: str, region: str, target_domain: str, date_str: str,
                  output_dir: Path, overwrite: bool):
    """Download a specific log file"""
    try:
        logs_download_command(app, file_name, region, target_domain, date_str, output_dir, overwrite)
    except GBXError as e:
        _fail(app, e)


@main.command('config-info')
@click.pass_obj
def config_info(app: AppContext):
    """Show the stored account configuration"""
    try:
        app.formatter.display_config(app.store.path, app.store.load())
    except GBXError as e:
        _fail(app, e)


@main.command()
@click.pass_obj
def version(app: AppContext):
    """Show version information"""
    app.formatter.console.print(Panel.fit(
        f"[bold]gbx-cli[/bold]\n"
        f"Version: [green]{__version__}[/green]\n"
        f"Author: [cyan]{__author__}[/cyan]\n"
        f"API: [yellow]{app.settings.base_url}[/yellow]\n"
        f"Python: [yellow]{sys.version.split()[0]}[/yellow]",
        title="Version Information"
    ))


def signup_command(app: AppContext, email: Optional[str], plan: Optional[str], region: Optional[str],
                   targets: Optional[str], assume_yes: bool):
    """Collect details, sign up, then persist the issued credentials"""
    formatter = app.formatter
    display_welcome_banner(formatter.console, __version__)
    formatter.display_pricing_info()

    request = SignupWizard(formatter).collect(
        email=email,
        plan=plan,
        region=region,
        targets=targets,
        assume_yes=assume_yes,
    )

    formatter.display_notice("\nSubmitting your sign-up request...")
    with app.client_factory(None) as client:
        response = client.signup(request)

    saved_to = None
    save_error = None
    try:
        saved_to = app.store.save(response.to_config())
    except LocalIOError as e:
        save_error = e

    formatter.display_signup_result(response, saved_to=saved_to, save_error=save_error)


def logs_list_command(app: AppContext, region: str, target_domain: str, date_str: str, limit: int):
    """List log files for a region, target domain and date"""
    day = parse_date(date_str)
    if limit > MAX_LOG_LIMIT:
        app.formatter.display_notice(f"Limit cannot exceed {MAX_LOG_LIMIT}. Setting limit to {MAX_LOG_LIMIT}.")
    query = LogQuery(region=region, target_domain=target_domain, date=day, limit=clamp_limit(limit))

    api_key = app.store.get_api_key()
    with app.client_factory(api_key) as client:
        files = client.list_logs(query)

    app.formatter.display_log_files(query, files)


def logs_download_command(app: AppContext, file_name: str, region: str, target_domain: str, date_str: str,
                          output_dir: Path, overwrite: bool):
    """Download one log file into ``output_dir``"""
    request = LogDownloadRequest(
        file_name=file_name,
        region=region,
        target_domain=target_domain,
        date=parse_date(date_str),
    )

    api_key = app.store.get_api_key()
    with app.client_factory(api_key) as client:
        path = client.save_log(request, directory=output_dir, overwrite=overwrite)

    app.formatter.display_download(path)


if __name__ == "__main__":
    main()
