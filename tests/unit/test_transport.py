"""Tests for the GraphQL transport (mocked httpx)."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

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
from boxconfig.transport.http import API_KEY_HEADER, AsyncHTTPTransport


def _response(status_code: int = 200, body=None, headers=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.json.return_value = body if body is not None else {}
    response.headers = headers or {}
    return response


def _transport(config: ClientConfig, response=None, error=None) -> AsyncHTTPTransport:
    transport = AsyncHTTPTransport(config)
    mock_client = MagicMock()
    mock_client.is_closed = False
    mock_client.request = AsyncMock(return_value=response, side_effect=error)
    transport._client = mock_client
    return transport


def test_build_headers_includes_api_key(mock_config: ClientConfig) -> None:
    headers = AsyncHTTPTransport(mock_config)._build_headers()
    assert headers[API_KEY_HEADER] == "test-key"
    assert headers["User-Agent"].startswith("boxconfig/")


def test_build_headers_without_api_key() -> None:
    headers = AsyncHTTPTransport(ClientConfig())._build_headers()
    assert API_KEY_HEADER not in headers


@pytest.mark.asyncio
async def test_execute_posts_query_and_returns_data(mock_config: ClientConfig) -> None:
    transport = _transport(mock_config, _response(body={"data": {"getConfig": {"title": "x"}}}))
    data = await transport.execute("query { getConfig { title } }", operation_name="GetConfig")

    assert data == {"getConfig": {"title": "x"}}
    call_kwargs = transport._client.request.call_args.kwargs
    assert call_kwargs["method"] == "POST"
    assert call_kwargs["url"] == "/graphql"
    assert call_kwargs["json"] == {
        "query": "query { getConfig { title } }",
        "operationName": "GetConfig",
    }


@pytest.mark.asyncio
async def test_execute_sends_variables(mock_config: ClientConfig) -> None:
    transport = _transport(mock_config, _response(body={"data": {"updateConfig": {}}}))
    await transport.execute("mutation", {"input": {"title": "x"}}, retry=False)
    assert transport._client.request.call_args.kwargs["json"]["variables"] == {
        "input": {"title": "x"}
    }


@pytest.mark.asyncio
async def test_graphql_errors_raise(mock_config: ClientConfig) -> None:
    body = {"errors": [{"message": "duplicate key", "path": ["updateConfig"]}], "data": None}
    transport = _transport(mock_config, _response(body=body))
    with pytest.raises(GraphQLError) as exc_info:
        await transport.execute("mutation", retry=False)
    assert exc_info.value.message == "duplicate key"
    assert exc_info.value.errors == body["errors"]


@pytest.mark.asyncio
async def test_missing_data_raises(mock_config: ClientConfig) -> None:
    transport = _transport(mock_config, _response(body={"data": None}))
    with pytest.raises(BoxConfigError, match="no data"):
        await transport.execute("query")


@pytest.mark.parametrize(
    ("status", "exc_type"),
    [
        (401, AuthenticationError),
        (403, AuthorizationError),
        (404, NotFoundError),
        (422, ValidationError),
        (500, ServerError),
        (503, ServerError),
        (418, BoxConfigError),
    ],
)
@pytest.mark.asyncio
async def test_status_mapping(mock_config: ClientConfig, status: int, exc_type) -> None:
    transport = _transport(mock_config, _response(status, body={"errors": [{"message": "nope"}]}))
    with pytest.raises(exc_type) as exc_info:
        await transport.execute("query")
    assert exc_info.value.status_code == status
    assert exc_info.value.message == "nope"


@pytest.mark.asyncio
async def test_rate_limit_reads_retry_after(mock_config: ClientConfig) -> None:
    transport = _transport(mock_config, _response(429, headers={"Retry-After": "2"}))
    with pytest.raises(RateLimitError) as exc_info:
        await transport.execute("query")
    assert exc_info.value.retry_after == 2.0
    assert exc_info.value.message == "HTTP 429"


@pytest.mark.asyncio
async def test_rate_limit_ignores_http_date_retry_after(mock_config: ClientConfig) -> None:
    headers = {"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"}
    transport = _transport(mock_config, _response(429, headers=headers))
    with pytest.raises(RateLimitError) as exc_info:
        await transport.execute("query")
    assert exc_info.value.retry_after is None


@pytest.mark.asyncio
async def test_connect_error_mapped(mock_config: ClientConfig) -> None:
    transport = _transport(mock_config, error=httpx.ConnectError("refused"))
    with pytest.raises(ConnectionError, match="Failed to connect"):
        await transport.execute("query")


@pytest.mark.asyncio
async def test_timeout_mapped(mock_config: ClientConfig) -> None:
    transport = _transport(mock_config, error=httpx.ReadTimeout("slow"))
    with pytest.raises(TimeoutError, match="timed out"):
        await transport.execute("query")


@pytest.mark.asyncio
async def test_mutation_not_retried(mock_config: ClientConfig) -> None:
    config = mock_config.model_copy(update={"max_retries": 3, "retry_delay": 0.0})
    transport = _transport(config, _response(503))
    with pytest.raises(ServerError):
        await transport.execute("mutation", retry=False)
    assert transport._client.request.await_count == 1


@pytest.mark.asyncio
async def test_query_retried_on_server_error() -> None:
    config = ClientConfig(max_retries=2, retry_delay=0.0)
    transport = _transport(config, _response(503))
    with pytest.raises(ServerError):
        await transport.execute("query")
    assert transport._client.request.await_count == 3


@pytest.mark.asyncio
async def test_close_closes_client(mock_config: ClientConfig) -> None:
    transport = _transport(mock_config)
    transport._client.aclose = AsyncMock()
    await transport.close()
    transport._client.aclose.assert_awaited_once()
