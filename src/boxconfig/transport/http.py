"""GraphQL-over-HTTP transport using httpx."""

from __future__ import annotations

import contextlib
import time
from typing import Any

import httpx

from boxconfig._version import __version__
from boxconfig.config import ClientConfig
from boxconfig.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BoxConfigError,
    ConnectionError,
    GraphQLError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TimeoutError,
    ValidationError,
)
from boxconfig.transport.retry import retry_async
from boxconfig.utils.logging import logger

API_KEY_HEADER = "ApiKey"


def _error_message(response: httpx.Response, body: Any) -> str:
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            messages = [str(e.get("message")) for e in errors if isinstance(e, dict) and e.get("message")]
            if messages:
                return "\n".join(messages)
        if "detail" in body:
            return str(body["detail"])
    return f"HTTP {response.status_code}"


def _retry_after(header: str | None) -> float | None:
    """Seconds to wait from a Retry-After header; HTTP-date values are ignored."""
    if not header:
        return None
    try:
        return float(header)
    except ValueError:
        return None


def _raise_for_status(response: httpx.Response) -> None:
    """Map HTTP status codes to boxconfig exceptions with actionable suggestions."""
    if response.is_success:
        return
    body: dict[str, Any] | None = None
    with contextlib.suppress(Exception):
        body = response.json()
    request_id: str | None = response.headers.get("X-Request-ID")
    msg = _error_message(response, body)
    if response.status_code == 401:
        raise AuthenticationError(
            msg,
            status_code=401,
            response_body=body,
            request_id=request_id,
            suggestion="Set STASHBOX_API_KEY env var or pass api_key= to the client",
        )
    if response.status_code == 403:
        raise AuthorizationError(
            msg,
            status_code=403,
            response_body=body,
            request_id=request_id,
            suggestion="Editing the server configuration requires an admin account",
        )
    if response.status_code == 404:
        raise NotFoundError(
            msg,
            status_code=404,
            response_body=body,
            request_id=request_id,
            suggestion="Check STASHBOX_BASE_URL and STASHBOX_GRAPHQL_PATH",
        )
    if response.status_code in (400, 422):
        raise ValidationError(
            msg,
            status_code=response.status_code,
            response_body=body,
            request_id=request_id,
            suggestion="Check that the server version supports these configuration fields",
        )
    if response.status_code == 429:
        retry_after = _retry_after(response.headers.get("Retry-After"))
        raise RateLimitError(
            msg,
            status_code=429,
            response_body=body,
            retry_after=retry_after,
            request_id=request_id,
            suggestion="Reduce request frequency or wait for Retry-After",
        )
    if response.status_code >= 500:
        raise ServerError(
            msg,
            status_code=response.status_code,
            response_body=body,
            request_id=request_id,
            suggestion="Server error; retry later or check server logs",
        )
    raise BoxConfigError(
        msg,
        status_code=response.status_code,
        response_body=body,
        request_id=request_id,
    )


class AsyncHTTPTransport:
    """Asynchronous GraphQL transport for the stash-box API."""

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._client: httpx.AsyncClient | None = None

    def _build_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"boxconfig/{__version__}",
        }
        if self._config.api_key:
            headers[API_KEY_HEADER] = self._config.api_key
        return headers

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                headers=self._build_headers(),
                http2=True,
                limits=httpx.Limits(
                    max_connections=10,
                    max_keepalive_connections=5,
                    keepalive_expiry=30.0,
                ),
            )
        return self._client

    async def _do_request(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables
        if operation_name:
            payload["operationName"] = operation_name
        start = time.perf_counter()
        try:
            response = await self.client.request(
                method="POST",
                url=self._config.graphql_path,
                json=payload,
            )
        except httpx.ConnectError as e:
            raise ConnectionError(f"Failed to connect to {self._config.base_url}: {e}") from e
        except httpx.TimeoutException as e:
            raise TimeoutError(f"Request timed out after {self._config.timeout}s: {e}") from e
        _raise_for_status(response)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "graphql_request",
            operation=operation_name,
            status=response.status_code,
            elapsed_ms=round(elapsed_ms),
        )
        body = response.json()
        if not isinstance(body, dict):
            raise BoxConfigError(
                "Malformed GraphQL response", status_code=response.status_code
            )
        errors = body.get("errors")
        if errors:
            raise GraphQLError(
                errors if isinstance(errors, list) else [{"message": str(errors)}],
                status_code=response.status_code,
                response_body=body,
                request_id=response.headers.get("X-Request-ID"),
            )
        data = body.get("data")
        if not isinstance(data, dict):
            raise BoxConfigError(
                "GraphQL response has no data", status_code=response.status_code, response_body=body
            )
        return data

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        operation_name: str | None = None,
        retry: bool = True,
    ) -> dict[str, Any]:
        """Execute a GraphQL operation and return its ``data`` object.

        Only idempotent operations should pass ``retry=True``; mutations
        are sent exactly once.
        """
        if not retry:
            return await self._do_request(query, variables, operation_name)
        return await retry_async(
            self._config,
            self._do_request,
            query,
            variables,
            operation_name,
        )

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
