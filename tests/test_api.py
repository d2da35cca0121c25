import io
import json
import os
from datetime import date

import httpx
import pytest

from gbxcli.core.api import API_KEY_HEADER
from gbxcli.core.errors import (
    DecodeError,
    EmptyCredentialError,
    ErrorKind,
    LocalIOError,
    NetworkError,
    ServerError,
)
from gbxcli.core.models import LogDownloadRequest, LogQuery, Plan, PlanName, SignupRequest
from gbxcli.utils.validation import clamp_limit

from .conftest import API_KEY

SIGNUP_OK = {
    "api-key": "key_new",
    "stripe-url": "https://checkout.stripe.com/c/pay/cs_test_1",
    "account-id": "acc_new",
    "plan": {"name": "single-region", "region": "sao-paulo.americas"},
    "number_of_targets": 10,
}


def _query(limit=10):
    return LogQuery(region="london.europe", target_domain="booking.com", date=date(2024, 10, 1), limit=limit)


def _download(file_name="probe-0001.log"):
    return LogDownloadRequest(
        file_name=file_name,
        region="london.europe",
        target_domain="booking.com",
        date=date(2024, 10, 1),
    )


class TestSignup:
    def _request(self):
        return SignupRequest(
            email="ops@example.com",
            plan=Plan(name=PlanName.SINGLE_REGION, region="sao-paulo.americas"),
            target_count=10,
        )

    def test_posts_json_without_api_key(self, service, make_client):
        service.respond_with(lambda request: httpx.Response(200, json=SIGNUP_OK))

        with make_client() as client:
            response = client.signup(self._request())

        sent = service.last_request
        assert sent.method == "POST"
        assert sent.url.path == "/sign-up"
        assert API_KEY_HEADER not in sent.headers
        assert json.loads(sent.content) == {
            "email": "ops@example.com",
            "plan": {"name": "single-region", "region": "sao-paulo.americas"},
            "number_of_targets": 10,
        }
        assert response.api_key == "key_new"
        assert response.stripe_url == "https://checkout.stripe.com/c/pay/cs_test_1"
        assert response.target_count == 10

    def test_server_error_keeps_json_body(self, service, make_client):
        body = {"error": "email already registered", "code": "conflict"}
        service.respond_with(lambda request: httpx.Response(409, json=body))

        with make_client() as client, pytest.raises(ServerError) as exc:
            client.signup(self._request())

        assert exc.value.kind is ErrorKind.SERVER
        assert exc.value.status_code == 409
        assert exc.value.body == body
        assert exc.value.detail["body"] == body

    def test_server_error_without_json_uses_status_line(self, service, make_client):
        service.respond_with(lambda request: httpx.Response(500, text="<html>oops</html>"))

        with make_client() as client, pytest.raises(ServerError) as exc:
            client.signup(self._request())

        assert exc.value.status_code == 500
        assert exc.value.body is None
        assert exc.value.status_line == "500 Internal Server Error"
        assert "500 Internal Server Error" in str(exc.value)

    def test_success_status_must_be_exactly_200(self, service, make_client):
        service.respond_with(lambda request: httpx.Response(201, json=SIGNUP_OK))

        with make_client() as client, pytest.raises(ServerError):
            client.signup(self._request())

    def test_undecodable_success_body(self, service, make_client):
        service.respond_with(lambda request: httpx.Response(200, text="not json"))

        with make_client() as client, pytest.raises(DecodeError):
            client.signup(self._request())

    @pytest.mark.parametrize("plan", [
        {"name": "single-region", "region": 7},
        {"name": "single-region", "region": ["sao-paulo.americas"]},
    ])
    def test_non_text_region_in_response(self, service, make_client, plan):
        service.respond_with(lambda request: httpx.Response(200, json={**SIGNUP_OK, "plan": plan}))

        with make_client() as client, pytest.raises(DecodeError) as exc:
            client.signup(self._request())
        assert exc.value.kind is ErrorKind.DECODE

    def test_network_failure(self, service, make_client):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        service.respond_with(refuse)

        with make_client() as client, pytest.raises(NetworkError) as exc:
            client.signup(self._request())
        assert exc.value.kind is ErrorKind.NETWORK


class TestListLogs:
    def test_sends_query_and_header(self, service, make_client):
        service.respond_with(lambda request: httpx.Response(200, json={"logs": ["b.log", "a.log", "c.log"]}))

        with make_client(API_KEY) as client:
            files = client.list_logs(_query(limit=20))

        sent = service.last_request
        assert sent.method == "GET"
        assert sent.url.path == "/logs"
        assert dict(sent.url.params) == {
            "region": "london.europe",
            "target_domain": "booking.com",
            "date": "2024-10-01",
            "limit": "20",
        }
        assert sent.headers[API_KEY_HEADER] == API_KEY
        assert API_KEY not in str(sent.url)
        assert files == ["b.log", "a.log", "c.log"]

    def test_clamped_limit_goes_out_as_fifty(self, service, make_client):
        service.respond_with(lambda request: httpx.Response(200, json={"logs": []}))

        with make_client(API_KEY) as client:
            client.list_logs(_query(limit=clamp_limit(75)))

        assert service.last_request.url.params["limit"] == "50"

    def test_empty_listing_is_not_an_error(self, service, make_client):
        service.respond_with(lambda request: httpx.Response(200, json={"logs": []}))

        with make_client(API_KEY) as client:
            assert client.list_logs(_query()) == []

    @pytest.mark.parametrize("body", [{"files": []}, {"logs": "a.log"}, {"logs": [1, 2]}, ["a.log"]])
    def test_unexpected_shape(self, service, make_client, body):
        service.respond_with(lambda request: httpx.Response(200, json=body))

        with make_client(API_KEY) as client, pytest.raises(DecodeError):
            client.list_logs(_query())

    def test_requires_api_key(self, service, make_client):
        with make_client() as client, pytest.raises(EmptyCredentialError):
            client.list_logs(_query())
        assert service.calls == 0

    def test_forbidden(self, service, make_client):
        service.respond_with(lambda request: httpx.Response(403, json={"message": "Forbidden"}))

        with make_client(API_KEY) as client, pytest.raises(ServerError) as exc:
            client.list_logs(_query())
        assert exc.value.status_code == 403
        assert exc.value.body == {"message": "Forbidden"}


class TestDownloadLog:
    def test_streams_byte_identical_copy(self, service, make_client):
        payload = os.urandom(200_000)
        service.respond_with(lambda request: httpx.Response(200, content=payload))
        destination = io.BytesIO()

        with make_client(API_KEY) as client:
            written = client.download_log(_download(), destination)

        sent = service.last_request
        assert sent.url.path == "/logs/probe-0001.log"
        assert dict(sent.url.params) == {
            "region": "london.europe",
            "target_domain": "booking.com",
            "date": "2024-10-01",
        }
        assert sent.headers[API_KEY_HEADER] == API_KEY
        assert written == len(payload)
        assert destination.getvalue() == payload

    def test_file_name_is_escaped_in_path(self, service, make_client):
        service.respond_with(lambda request: httpx.Response(200, content=b"x"))

        with make_client(API_KEY) as client:
            client.download_log(_download("probe 0001.log"), io.BytesIO())

        assert service.last_request.url.path == "/logs/probe 0001.log"

    def test_save_log_writes_into_directory(self, service, make_client, tmp_path):
        service.respond_with(lambda request: httpx.Response(200, content=b"line 1\nline 2\n"))

        with make_client(API_KEY) as client:
            path = client.save_log(_download(), directory=tmp_path / "logs")

        assert path == tmp_path / "logs" / "probe-0001.log"
        assert path.read_bytes() == b"line 1\nline 2\n"

    def test_empty_body_creates_empty_file(self, service, make_client, tmp_path):
        service.respond_with(lambda request: httpx.Response(200, content=b""))

        with make_client(API_KEY) as client:
            path = client.save_log(_download(), directory=tmp_path)

        assert path.exists()
        assert path.read_bytes() == b""

    def test_server_error_leaves_no_file(self, service, make_client, tmp_path):
        service.respond_with(lambda request: httpx.Response(404, json={"message": "log not found"}))

        with make_client(API_KEY) as client, pytest.raises(ServerError) as exc:
            client.save_log(_download(), directory=tmp_path)

        assert exc.value.status_code == 404
        assert exc.value.body == {"message": "log not found"}
        assert not (tmp_path / "probe-0001.log").exists()

    def test_existing_file_is_kept_without_overwrite(self, service, make_client, tmp_path):
        service.respond_with(lambda request: httpx.Response(200, content=b"fresh"))
        existing = tmp_path / "probe-0001.log"
        existing.write_bytes(b"original")

        with make_client(API_KEY) as client, pytest.raises(LocalIOError):
            client.save_log(_download(), directory=tmp_path)
        assert existing.read_bytes() == b"original"

        with make_client(API_KEY) as client:
            client.save_log(_download(), directory=tmp_path, overwrite=True)
        assert existing.read_bytes() == b"fresh"

    def test_network_failure(self, service, make_client, tmp_path):
        def drop(request):
            raise httpx.ReadTimeout("timed out", request=request)

        service.respond_with(drop)

        with make_client(API_KEY) as client, pytest.raises(NetworkError):
            client.save_log(_download(), directory=tmp_path)

    def test_requires_api_key(self, service, make_client):
        with make_client() as client, pytest.raises(EmptyCredentialError):
            client.download_log(_download(), io.BytesIO())
        assert service.calls == 0
