"""
Interactive sign-up for gbx-cli

Asks for whatever the command line did not provide and turns the answers
into a validated SignupRequest.
"""

from typing import Callable, Optional, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from ..core.errors import ValidationError
from ..core.models import Plan, PlanName, SignupRequest
from ..utils.logging import get_logger
from ..utils.validation import validate_email, validate_region, validate_target_count
from .formatting import RichFormatter

logger = get_logger(__name__)

T = TypeVar("T")


class SignupWizard:
    """
    Collects sign-up details, re-asking until each answer passes validation
    """

    def __init__(self, formatter: RichFormatter, console: Optional[Console] = None):
        self.formatter = formatter
        self.console = console or formatter.console

    def _ask_until_valid(self, label: str, validator: Callable[[str], T]) -> T:
        while True:
            answer = Prompt.ask(label, console=self.console)
            try:
                return validator(answer)
            except ValidationError as e:
                self.console.print(f"[red]{escape(e.message)}[/red]")

    def prompt_email(self) -> str:
        return self._ask_until_valid("Enter your email address", validate_email)

    def prompt_plan(self) -> PlanName:
        choice = Prompt.ask(
            "Select a subscription plan",
            choices=[plan.value for plan in PlanName],
            console=self.console,
        )
        return PlanName(choice)

    def confirm_plan(self, plan_name: PlanName) -> bool:
        self.formatter.display_plan_details(plan_name)
        return Confirm.ask("Do you want to proceed with this plan?", default=True, console=self.console)

    def prompt_region(self) -> str:
        return self._ask_until_valid("Enter your desired region (e.g., sao-paulo.americas)", validate_region)

    def prompt_target_count(self) -> int:
        return self._ask_until_valid(
            "Enter the number of probe targets you wish to monitor",
            validate_target_count,
        )

    def collect(
        self,
        email: Optional[str] = None,
        plan: Optional[str] = None,
        region: Optional[str] = None,
        targets: Optional[str] = None,
        assume_yes: bool = False,
    ) -> SignupRequest:
        """
        Build a SignupRequest. Values passed in are validated as-is and raise
        ValidationError; missing values are prompted for.
        """
        email = validate_email(email) if email is not None else self.prompt_email()

        if plan is not None:
            plan_name = PlanName.parse(plan)
            if not assume_yes and not self.confirm_plan(plan_name):
                raise ValidationError("sign-up cancelled: plan not confirmed", {"field": "plan", "value": plan})
        else:
            while True:
                plan_name = self.prompt_plan()
                if assume_yes or self.confirm_plan(plan_name):
                    break
                self.console.print("\n[grey50]Let's re-select your subscription plan.[/grey50]\n")

        if plan_name is PlanName.SINGLE_REGION:
            region = validate_region(region) if region is not None else self.prompt_region()
        elif region is not None:
            raise ValidationError(
                f"--region only applies to the {PlanName.SINGLE_REGION.value} plan",
                {"field": "region", "value": region},
            )

        target_count = validate_target_count(targets) if targets is not None else self.prompt_target_count()

        logger.debug("Sign-up details collected", plan=plan_name.value, target_count=target_count)
        return SignupRequest(
            email=email,
            plan=Plan(name=plan_name, region=region),
            target_count=target_count,
        )
