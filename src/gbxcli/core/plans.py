"""
Plan catalogue for gbx-cli

Descriptions and region codes shown while signing up. The service decides
which plans and regions are valid; nothing here is used to reject input.
"""

from typing import Dict, List, Tuple

from .models import PlanName

PLANS_DOC_URL = "https://docs.globalblackbox.io/plans/"
SUPPORT_EMAIL = "support@globalblackbox.io"

PRICING_INFO = """- Available plans: single-region, all-continents, or worldwide.
- Number of targets: The number of endpoints you wish to monitor.

The total cost is determined by the combination of your selected plan and the number of targets. \
Detailed pricing information is available during the subscription process via the Stripe payment link."""

# continent -> [(country, region code)]
REGIONS: Dict[str, List[Tuple[str, str]]] = {
    "Americas": [
        ("Brazil", "sao-paulo.americas"),
        ("Canada", "canada.americas"),
        ("Canada", "calgary.americas"),
        ("United States", "northern-virginia.americas"),
        ("United States", "ohio.americas"),
        ("United States", "northern-california.americas"),
        ("United States", "oregon.americas"),
    ],
    "Africa": [
        ("South Africa", "cape-town.africa"),
    ],
    "Asia": [
        ("Japan", "tokyo.asia"),
        ("Japan", "osaka.asia"),
        ("Hong Kong", "hong-kong.asia"),
        ("India", "hyderabad.asia"),
        ("India", "mumbai.asia"),
        ("Indonesia", "jakarta.asia"),
        ("Malaysia", "malaysia.asia"),
        ("South Korea", "seoul.asia"),
        ("Singapore", "singapore.asia"),
    ],
    "Oceania": [
        ("Australia", "melbourne.oceania"),
        ("Australia", "sydney.oceania"),
    ],
    "Europe": [
        ("United Kingdom", "london.europe"),
        ("Germany", "frankfurt.europe"),
        ("Ireland", "ireland.europe"),
        ("Italy", "milan.europe"),
        ("France", "paris.europe"),
        ("Spain", "spain.europe"),
        ("Sweden", "stockholm.europe"),
        ("Switzerland", "zurich.europe"),
    ],
    "Middle East": [
        ("Israel", "tel-aviv.middle-east"),
        ("Bahrain", "bahrain.middle-east"),
        ("United Arab Emirates", "uae.middle-east"),
    ],
}

ALL_CONTINENTS_REGIONS: Dict[str, List[str]] = {
    "Americas": ["northern-california.americas", "sao-paulo.americas"],
    "Africa": ["cape-town.africa"],
    "Asia": ["singapore.asia"],
    "Oceania": ["melbourne.oceania"],
    "Europe": ["paris.europe"],
    "Middle East": ["uae.middle-east"],
}


def _format_regions() -> str:
    lines = []
    for continent, regions in REGIONS.items():
        lines.append(f"{continent}:")
        lines.extend(f"- {country} ({code})" for country, code in regions)
    return "\n".join(lines)


def _format_all_continents() -> str:
    lines = []
    for continent, codes in ALL_CONTINENTS_REGIONS.items():
        lines.append(f"  - {continent}:")
        lines.extend(f"      - {code}" for code in codes)
    return "\n".join(lines)


PLAN_DETAILS: Dict[PlanName, str] = {
    PlanName.SINGLE_REGION: f"""Single-Region Plan:

Description: Access to one probe per minute per target in a single region of your choice.
Ideal For: Monitoring services critical in a specific geographic location.
7-Day Free Trial: This plan includes a 7-day free trial period.

Example Usage:
- Monitoring up to 10 targets primarily used by customers in São Paulo, Brazil.
- Selecting the sao-paulo.americas region during sign-up.

Available regions:
{_format_regions()}""",

    PlanName.ALL_CONTINENTS: f"""All-Continents Plan:

Description: Access to one strategically selected region on each continent.
Ideal For: Ensuring global availability and performance across major continents.

Included Regions:
{_format_all_continents()}

Number of Targets: Select the number of targets you wish to monitor across these regions.""",

    PlanName.WORLDWIDE: """Worldwide Plan:

Description: Full access to all available regions across the globe.
Ideal For: Comprehensive monitoring for services with a worldwide user base.

Number of Targets: Select the number of targets you wish to monitor across all regions.""",
}
