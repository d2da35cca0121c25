"""
Global Blackbox API Client for gbx-cli

Handles sign-up, listing log files and downloading log files. Every
operation classifies failures the same way: transport problems become
NetworkError, non-200 answers become ServerError and malformed 200 bodies
become DecodeError.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Dict, Iterator, List, Optional
from urllib.parse import quote

import httpx
import structlog

from .config import APIConfig
from .errors import (
    DecodeError,
    EmptyCredentialError,
    LocalIOError,
    NetworkError,
    ServerError,
)
from .models import LogDownloadRequest, LogQuery, SignupRequest, SignupResponse

logger = structlog.get_logger(__name__)

API_KEY_HEADER = "x-api-key"
DEFAULT_LOGS_DIR = Path("logs")
CHUNK_SIZE = 64 * 1024


class GlobalBlackboxClient:
    """
    Synchronous client for the Global Blackbox service.

    The API key is only sent as a header on authenticated calls; it never
    appears in a URL or in a log event.
    """

    def __init__(
        self,
        config: APIConfig,
        api_key: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config
        self._api_key = api_key
        self.client = httpx.Client(
            base_url=config.base_url,
            headers={
                "User-Agent": config.user_agent,
                "Accept": "application/json",
            },
            timeout=httpx.Timeout(config.timeout),
            transport=transport,
        )
        logger.debug("Global Blackbox client initialized", base_url=config.base_url)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the HTTP client"""
        self.client.close()

    def _auth_headers(self) -> Dict[str, str]:
        if not self._api_key or not self._api_key.strip():
            raise EmptyCredentialError("an API key is required for this operation")
        return {API_KEY_HEADER: self._api_key}

    def _send(self, operation: str, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.error("Request failed", operation=operation, error=str(e))
            raise NetworkError(f"failed to execute HTTP request: {e}", {"operation": operation}) from e

        logger.info("Request completed", operation=operation, status=response.status_code)
        if response.status_code != httpx.codes.OK:
            raise _server_error(operation, response)
        return response

    def signup(self, request: SignupRequest) -> SignupResponse:
        """Create an account; no API key exists yet so none is sent"""
        response = self._send("sign-up", "POST", "/sign-up", json=request.to_payload())
        payload = _decode_json("sign-up", response)
        result = SignupResponse.from_payload(payload)
        logger.info("Sign-up succeeded", account_id=result.account_id, plan=result.plan.name.value)
        return result

    def list_logs(self, query: LogQuery) -> List[str]:
        """List log file names in the order the service returns them"""
        response = self._send(
            "list logs",
            "GET",
            "/logs",
            params=query.to_params(),
            headers=self._auth_headers(),
        )
        payload = _decode_json("list logs", response)

        if not isinstance(payload, dict) or not isinstance(payload.get("logs"), list):
            raise DecodeError("failed to parse API response: missing 'logs' array", {"body": payload})
        logs = payload["logs"]
        if not all(isinstance(name, str) for name in logs):
            raise DecodeError("failed to parse API response: 'logs' must contain strings", {"body": payload})

        logger.info("Listed log files", count=len(logs), region=query.region)
        return list(logs)

    @contextmanager
    def open_log_stream(self, request: LogDownloadRequest) -> Iterator[Iterator[bytes]]:
        """
        Start a download and yield the body as chunks.

        Raises ServerError before yielding when the service refuses, so the
        caller only creates its destination once the body is on its way.
        """
        headers = self._auth_headers()
        url = f"/logs/{quote(request.file_name, safe='')}"
        try:
            with self.client.stream("GET", url, params=request.to_params(), headers=headers) as response:
                logger.info("Request completed", operation="download log", status=response.status_code)
                if response.status_code != httpx.codes.OK:
                    response.read()
                    raise _server_error("download log", response)
                yield _iter_body(response)
        except httpx.RequestError as e:
            logger.error("Request failed", operation="download log", error=str(e))
            raise NetworkError(f"failed to execute HTTP request: {e}", {"operation": "download log"}) from e

    def download_log(self, request: LogDownloadRequest, destination: BinaryIO) -> int:
        """Stream a log file into a writable binary file; returns bytes written"""
        written = 0
        with self.open_log_stream(request) as chunks:
            for chunk in chunks:
                try:
                    destination.write(chunk)
                except OSError as e:
                    raise LocalIOError(f"failed to write to file: {e}", {"file_name": request.file_name}) from e
                written += len(chunk)

        logger.info("Downloaded log file", file_name=request.file_name, bytes=written)
        return written

    def save_log(
        self,
        request: LogDownloadRequest,
        directory: Path = DEFAULT_LOGS_DIR,
        overwrite: bool = False,
    ) -> Path:
        """Download a log file into ``directory`` under its own name"""
        directory = Path(directory)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LocalIOError(f"failed to create logs directory: {e}", {"path": str(directory)}) from e

        target = directory / request.file_name
        mode = "wb" if overwrite else "xb"

        with self.open_log_stream(request) as chunks:
            try:
                f = open(target, mode)
            except FileExistsError as e:
                raise LocalIOError(
                    f"{target} already exists (use --overwrite to replace it)",
                    {"path": str(target)},
                ) from e
            except OSError as e:
                raise LocalIOError(f"failed to create file: {e}", {"path": str(target)}) from e

            written = 0
            with f:
                for chunk in chunks:
                    try:
                        f.write(chunk)
                    except OSError as e:
                        raise LocalIOError(f"failed to write to file: {e}", {"path": str(target)}) from e
                    written += len(chunk)

        logger.info("Saved log file", path=str(target), bytes=written)
        return target


def _iter_body(response: httpx.Response) -> Iterator[bytes]:
    for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
        if chunk:
            yield chunk


def _status_line(response: httpx.Response) -> str:
    return f"{response.status_code} {response.reason_phrase}".strip()


def _server_error(operation: str, response: httpx.Response) -> ServerError:
    body: Any
    try:
        body = response.json()
    except ValueError:
        body = None
    logger.warning("Service returned an error", operation=operation, status=response.status_code)
    return ServerError(operation, response.status_code, _status_line(response), body)


def _decode_json(operation: str, response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(f"failed to decode {operation} response: {e}", {"operation": operation}) from e
