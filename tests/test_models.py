from datetime import date

import pytest

from gbxcli.core.errors import ConfigParseError, DecodeError, ValidationError
from gbxcli.core.models import (
    Config,
    LogDownloadRequest,
    LogQuery,
    Plan,
    PlanName,
    SignupRequest,
    SignupResponse,
)


class TestPlan:
    def test_single_region_requires_region(self):
        with pytest.raises(ValidationError):
            Plan(name=PlanName.SINGLE_REGION)
        with pytest.raises(ValidationError):
            Plan(name=PlanName.SINGLE_REGION, region="   ")

    def test_region_rejected_for_other_plans(self):
        with pytest.raises(ValidationError):
            Plan(name=PlanName.WORLDWIDE, region="london.europe")

    def test_empty_region_becomes_absent(self):
        plan = Plan(name=PlanName.ALL_CONTINENTS, region="")
        assert plan.region is None
        assert plan.to_dict() == {"name": "all-continents"}

    def test_accepts_plan_name_strings(self):
        plan = Plan(name="single-region", region="tokyo.asia")
        assert plan.name is PlanName.SINGLE_REGION
        assert plan.to_dict() == {"name": "single-region", "region": "tokyo.asia"}

    def test_unknown_plan_name(self):
        with pytest.raises(ValidationError, match="unknown plan"):
            Plan(name="enterprise")


class TestSignupRequest:
    def test_payload_with_target_count(self):
        request = SignupRequest(
            email=" ops@example.com ",
            plan=Plan(name=PlanName.SINGLE_REGION, region="london.europe"),
            target_count=5,
        )
        assert request.to_payload() == {
            "email": "ops@example.com",
            "plan": {"name": "single-region", "region": "london.europe"},
            "number_of_targets": 5,
        }

    def test_payload_without_target_count(self):
        request = SignupRequest(email="ops@example.com", plan=Plan(name=PlanName.WORLDWIDE))
        assert request.to_payload() == {"email": "ops@example.com", "plan": {"name": "worldwide"}}

    @pytest.mark.parametrize("email", ["opsexample.com", "ops@examplecom", ""])
    def test_rejects_bad_email(self, email):
        with pytest.raises(ValidationError):
            SignupRequest(email=email, plan=Plan(name=PlanName.WORLDWIDE), target_count=1)

    def test_rejects_non_positive_target_count(self):
        with pytest.raises(ValidationError):
            SignupRequest(email="ops@example.com", plan=Plan(name=PlanName.WORLDWIDE), target_count=0)


class TestSignupResponse:
    def test_from_payload(self):
        response = SignupResponse.from_payload({
            "api-key": "key_1",
            "account-id": "acc_1",
            "stripe-url": "https://checkout.stripe.com/c/pay/abc",
            "plan": {"name": "single-region", "region": "paris.europe"},
            "number_of_targets": 3,
        })
        assert response.api_key == "key_1"
        assert response.account_id == "acc_1"
        assert response.plan == Plan(name=PlanName.SINGLE_REGION, region="paris.europe")
        assert response.target_count == 3

    def test_target_count_is_optional(self):
        response = SignupResponse.from_payload({
            "api-key": "key_1",
            "account-id": "acc_1",
            "stripe-url": "https://checkout.stripe.com/c/pay/abc",
            "plan": {"name": "worldwide"},
        })
        assert response.target_count is None
        assert response.to_config() == Config(
            api_key="key_1",
            account_id="acc_1",
            plan=Plan(name=PlanName.WORLDWIDE),
        )

    @pytest.mark.parametrize("payload", [
        [],
        {"account-id": "acc_1", "plan": {"name": "worldwide"}},
        {"api-key": "key_1", "account-id": "acc_1"},
        {"api-key": "key_1", "account-id": "acc_1", "plan": {"name": "single-region"}},
        {"api-key": "key_1", "account-id": "acc_1", "plan": {"name": "worldwide"}, "number_of_targets": "ten"},
    ])
    def test_malformed_payload(self, payload):
        with pytest.raises(DecodeError):
            SignupResponse.from_payload(payload)


class TestConfig:
    def test_to_dict_omits_absent_fields(self):
        config = Config(api_key="k", account_id="a", plan=Plan(name=PlanName.WORLDWIDE))
        assert config.to_dict() == {"api_key": "k", "account_id": "a", "plan": {"name": "worldwide"}}

    def test_from_dict_rejects_bad_shapes(self):
        with pytest.raises(ConfigParseError):
            Config.from_dict("just a string")
        with pytest.raises(ConfigParseError):
            Config.from_dict({"api_key": "k", "account_id": "a", "plan": {"name": "galactic"}})


class TestLogQuery:
    def test_params(self):
        query = LogQuery(region="london.europe", target_domain="booking.com", date="2024-10-01", limit=20)
        assert query.date == date(2024, 10, 1)
        assert query.to_params() == {
            "region": "london.europe",
            "target_domain": "booking.com",
            "date": "2024-10-01",
            "limit": "20",
        }

    @pytest.mark.parametrize("limit", [0, 51, 75])
    def test_limit_out_of_range(self, limit):
        with pytest.raises(ValidationError):
            LogQuery(region="london.europe", target_domain="booking.com", date="2024-10-01", limit=limit)

    def test_target_domain_required(self):
        with pytest.raises(ValidationError):
            LogQuery(region="london.europe", target_domain=" ", date="2024-10-01")


def test_download_request_params_have_no_limit():
    request = LogDownloadRequest(
        file_name="probe-0001.log",
        region="london.europe",
        target_domain="booking.com",
        date=date(2024, 10, 1),
    )
    assert request.to_params() == {
        "region": "london.europe",
        "target_domain": "booking.com",
        "date": "2024-10-01",
    }
