"""
Data models for gbx-cli

Shapes exchanged with the Global Blackbox service and persisted to disk.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Type

from .errors import ConfigParseError, DecodeError, GBXError, ValidationError
from ..utils.validation import (
    MAX_LOG_LIMIT,
    parse_date,
    validate_email,
    validate_file_name,
    validate_region,
    validate_target_count,
)


class PlanName(Enum):
    """Subscription tiers offered by the service"""
    SINGLE_REGION = "single-region"
    ALL_CONTINENTS = "all-continents"
    WORLDWIDE = "worldwide"

    @classmethod
    def parse(cls, value: Any) -> "PlanName":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            choices = ", ".join(plan.value for plan in cls)
            raise ValidationError(
                f"unknown plan '{value}' (expected one of: {choices})",
                {"field": "plan", "value": value},
            )


@dataclass
class Plan:
    """A subscription plan; region only applies to single-region"""
    name: PlanName
    region: Optional[str] = None

    def __post_init__(self):
        self.name = PlanName.parse(self.name)
        if self.name is PlanName.SINGLE_REGION:
            self.region = validate_region(self.region)
        elif self.region is not None and str(self.region).strip():
            raise ValidationError(
                f"region is only allowed for the {PlanName.SINGLE_REGION.value} plan",
                {"field": "region", "value": self.region},
            )
        else:
            self.region = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name.value}
        if self.region is not None:
            data["region"] = self.region
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Plan":
        if not isinstance(data, dict):
            raise ValidationError("plan must be a mapping", {"field": "plan", "value": data})
        return cls(name=data.get("name"), region=data.get("region"))


@dataclass
class SignupRequest:
    """Body of the sign-up call"""
    email: str
    plan: Plan
    target_count: Optional[int] = None

    def __post_init__(self):
        self.email = validate_email(self.email)
        if self.target_count is not None:
            self.target_count = validate_target_count(self.target_count)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "email": self.email,
            "plan": self.plan.to_dict(),
        }
        if self.target_count is not None:
            payload["number_of_targets"] = self.target_count
        return payload


@dataclass
class Config:
    """Credentials and subscription details stored locally after signup"""
    api_key: str
    account_id: str
    plan: Plan
    target_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "api_key": self.api_key,
            "account_id": self.account_id,
            "plan": self.plan.to_dict(),
        }
        if self.target_count is not None:
            data["number_of_targets"] = self.target_count
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        if not isinstance(data, dict):
            raise ConfigParseError("config file does not contain a mapping")
        # a blank `api_key:` loads as None; get_api_key reports it as empty
        api_key = "" if data.get("api_key") is None else _require_str(data, "api_key", ConfigParseError)
        return cls(
            api_key=api_key,
            account_id=_require_str(data, "account_id", ConfigParseError),
            plan=_parse_plan(data.get("plan"), ConfigParseError),
            target_count=_optional_int(data, "number_of_targets", ConfigParseError),
        )


@dataclass
class SignupResponse:
    """Account details returned by a successful sign-up"""
    api_key: str
    account_id: str
    stripe_url: str
    plan: Plan
    target_count: Optional[int] = None

    @classmethod
    def from_payload(cls, data: Any) -> "SignupResponse":
        if not isinstance(data, dict):
            raise DecodeError("sign-up response is not a JSON object", {"body": data})
        return cls(
            api_key=_require_str(data, "api-key", DecodeError),
            account_id=_require_str(data, "account-id", DecodeError),
            stripe_url=str(data.get("stripe-url") or ""),
            plan=_parse_plan(data.get("plan"), DecodeError),
            target_count=_optional_int(data, "number_of_targets", DecodeError),
        )

    def to_config(self) -> Config:
        return Config(
            api_key=self.api_key,
            account_id=self.account_id,
            plan=self.plan,
            target_count=self.target_count,
        )


@dataclass
class LogQuery:
    """Parameters for listing log files"""
    region: str
    target_domain: str
    date: date
    limit: int = 10

    def __post_init__(self):
        self.region = validate_region(self.region)
        self.target_domain = _require_text(self.target_domain, "target_domain")
        self.date = parse_date(self.date)
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise ValidationError("limit must be an integer", {"field": "limit", "value": self.limit})
        if not 1 <= self.limit <= MAX_LOG_LIMIT:
            raise ValidationError(
                f"limit must be between 1 and {MAX_LOG_LIMIT}",
                {"field": "limit", "value": self.limit},
            )

    def to_params(self) -> Dict[str, str]:
        return {
            "region": self.region,
            "target_domain": self.target_domain,
            "date": self.date.isoformat(),
            "limit": str(self.limit),
        }


@dataclass
class LogDownloadRequest:
    """Parameters for downloading a single log file"""
    file_name: str
    region: str
    target_domain: str
    date: date

    def __post_init__(self):
        self.file_name = validate_file_name(self.file_name)
        self.region = validate_region(self.region)
        self.target_domain = _require_text(self.target_domain, "target_domain")
        self.date = parse_date(self.date)

    def to_params(self) -> Dict[str, str]:
        return {
            "region": self.region,
            "target_domain": self.target_domain,
            "date": self.date.isoformat(),
        }


def _require_text(value: Any, field_name: str) -> str:
    text = (value or "").strip() if isinstance(value, str) else ""
    if not text:
        raise ValidationError(f"{field_name} cannot be empty", {"field": field_name, "value": value})
    return text


def _require_str(data: Dict[str, Any], key: str, error_cls: Type[GBXError]) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise error_cls(f"missing or invalid '{key}'", {"field": key, "value": value})
    return value


def _optional_int(data: Dict[str, Any], key: str, error_cls: Type[GBXError]) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise error_cls(f"invalid '{key}'", {"field": key, "value": value})
    return value


def _parse_plan(data: Any, error_cls: Type[GBXError]) -> Plan:
    try:
        return Plan.from_dict(data)
    except ValidationError as e:
        raise error_cls(f"invalid plan: {e.message}", {"field": "plan", "value": data}) from e
