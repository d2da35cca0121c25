"""
Rich Formatting for gbx-cli

Renders sign-up results, log listings, downloads and errors.
"""

from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.errors import GBXError, ServerError
from ..core.models import Config, LogQuery, PlanName, SignupResponse
from ..core.plans import PLAN_DETAILS, PLANS_DOC_URL, PRICING_INFO, SUPPORT_EMAIL
from ..utils.helpers import mask_secret


class RichFormatter:
    """
    Rich terminal formatter for gbx-cli
    """

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

        self.colors = {
            "title": "bold bright_white",
            "label": "bold grey62",
            "muted": "italic grey62",
            "error": "bold red",
            "warning": "bold yellow",
            "success": "bold green",
        }

    def display_pricing_info(self):
        """Show how pricing works and where to read about plans"""
        self.console.print(f"[{self.colors['label']}]Pricing Structure:[/]\n")
        self.console.print(PRICING_INFO, highlight=False)
        self.console.print()
        self.console.print(
            f"[{self.colors['muted']}]For more information on subscription plans, visit: {PLANS_DOC_URL}[/]\n"
        )

    def display_plan_details(self, plan_name: PlanName):
        self.console.print(Panel(
            PLAN_DETAILS[plan_name],
            title=f"[{self.colors['label']}]Selected Plan Details[/]",
            border_style="grey50",
            padding=(0, 1),
        ))

    def display_signup_result(
        self,
        response: SignupResponse,
        saved_to: Optional[Path] = None,
        save_error: Optional[GBXError] = None,
    ):
        """Show the new account, where credentials went and what to do next"""
        table = Table(title="Sign-Up Successful!", show_header=False, title_style=self.colors["success"])
        table.add_column("Field", style=self.colors["label"])
        table.add_column("Value")

        table.add_row("Account ID", escape(response.account_id))
        table.add_row("API Key", escape(response.api_key))
        table.add_row("Stripe URL", escape(response.stripe_url))
        table.add_row("Plan Name", response.plan.name.value)
        if response.plan.region:
            table.add_row("Region", escape(response.plan.region))
        if response.target_count is not None:
            table.add_row("Number of Targets", str(response.target_count))
        self.console.print(table)

        if save_error is not None:
            self.display_warning(save_error.message)
        elif saved_to is not None:
            self.console.print(f"\nAPI key has been saved to {escape(str(saved_to))}")

        self.console.print(f"\n[{self.colors['title']}]Next Steps:[/]")
        self.console.print("1. Complete Subscription Payment by visiting the Stripe URL provided.")
        self.console.print("2. Secure your API Key for authenticating your Prometheus scrape jobs.")
        self.console.print(
            "3. Configure Prometheus with your account details. "
            "Refer to the Prometheus Configuration documentation for guidance.\n"
        )
        self.console.print(f"[{self.colors['muted']}]For support, contact {SUPPORT_EMAIL}[/]")

    def display_log_files(self, query: LogQuery, files: List[str]):
        if not files:
            self.console.print("No log files found for the given parameters.")
            return

        self.console.print(
            f"\n[{self.colors['label']}]Available log files for {escape(query.region)}, "
            f"target domain {escape(query.target_domain)}, and date {query.date.isoformat()}:[/]\n"
        )
        for i, name in enumerate(files, start=1):
            self.console.print(f"{i}. {escape(name)}", highlight=False)
        self.console.print()

    def display_download(self, path: Path):
        self.console.print(
            f"\n[{self.colors['success']}]Success[/]: {escape(path.name)} has been downloaded "
            f"to the '{escape(str(path.parent))}' directory.\n"
        )

    def display_config(self, path: Path, config: Config):
        """Show the stored account config with the API key masked"""
        table = Table(title="Configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Config Path", str(path))
        table.add_row("Account ID", escape(config.account_id))
        table.add_row("API Key", mask_secret(config.api_key))
        table.add_row("Plan", config.plan.name.value)
        if config.plan.region:
            table.add_row("Region", escape(config.plan.region))
        if config.target_count is not None:
            table.add_row("Number of Targets", str(config.target_count))
        self.console.print(table)

    def display_notice(self, message: str):
        self.console.print(message, style="grey62")

    def display_warning(self, message: str):
        self.err_console.print(f"[{self.colors['warning']}]Warning[/]: {escape(message)}", highlight=False)

    def display_error(self, error: GBXError):
        message = error.message
        if isinstance(error, ServerError) and error.body is None:
            message = f"{message} (no details returned)"
        self.err_console.print(f"[{self.colors['error']}]Error[/]: {escape(message)}", highlight=False)
