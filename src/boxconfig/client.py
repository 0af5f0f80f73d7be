"""Asynchronous GraphQL client for the stash-box configuration API."""

from __future__ import annotations

import contextlib
from typing import Any

from pydantic import BaseModel

from boxconfig.config import ClientConfig
from boxconfig.exceptions import BoxConfigError
from boxconfig.fields import STASHBOX_SCHEMA
from boxconfig.schema import ConfigSchema
from boxconfig.transport import AsyncHTTPTransport
from boxconfig.utils.logging import logger

CONFIG_INPUT_TYPE = "ConfigInput"


def build_get_config_query(schema: ConfigSchema) -> str:
    selection = " ".join(schema.names)
    return f"query GetConfig {{ getConfig {{ {selection} }} }}"


def build_update_config_mutation(schema: ConfigSchema) -> str:
    selection = " ".join(schema.names)
    return (
        f"mutation UpdateConfig($input: {CONFIG_INPUT_TYPE}!) "
        f"{{ updateConfig(input: $input) {{ {selection} }} }}"
    )


class AsyncStashBoxClient:
    """Asynchronous client for reading and replacing the server configuration.

    Usage:
        async with AsyncStashBoxClient(api_key="...") as client:
            record = await client.get_config()
            record = await client.update_config(record.model_copy(update={"title": "Box"}))
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        *,
        config: ClientConfig | None = None,
        schema: ConfigSchema = STASHBOX_SCHEMA,
        transport: AsyncHTTPTransport | None = None,
    ) -> None:
        if config is not None:
            self._config = config
        else:
            overrides = {"api_key": api_key, "base_url": base_url}
            self._config = ClientConfig(**{k: v for k, v in overrides.items() if v is not None})
        self._schema = schema
        self._transport = transport or AsyncHTTPTransport(self._config)
        self._get_query = build_get_config_query(schema)
        self._update_mutation = build_update_config_mutation(schema)
        self._closed = False

    def __del__(self) -> None:
        if not getattr(self, "_closed", True):
            with contextlib.suppress(Exception):
                logger.warning(
                    "client_not_closed",
                    hint="use 'async with' or call close() to avoid connection leaks",
                )

    async def __aenter__(self) -> AsyncStashBoxClient:
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()
        self._closed = True

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def schema(self) -> ConfigSchema:
        return self._schema

    async def get_config(self) -> BaseModel:
        """Fetch the current configuration record."""
        data = await self._transport.execute(self._get_query, operation_name="GetConfig")
        return self._record_from(data, "getConfig")

    async def update_config(self, record: BaseModel) -> BaseModel:
        """Replace the whole configuration with ``record``.

        Every declared field is sent. The mutation is never retried; a
        failure surfaces as the transport's exception.
        """
        payload = self._schema.to_payload(record)
        data = await self._transport.execute(
            self._update_mutation,
            {"input": payload},
            operation_name="UpdateConfig",
            retry=False,
        )
        logger.info("config_updated", fields=len(payload))
        return self._record_from(data, "updateConfig")

    def _record_from(self, data: dict[str, Any], key: str) -> BaseModel:
        payload = data.get(key)
        if not isinstance(payload, dict):
            raise BoxConfigError(f"Server returned no configuration for {key}")
        return self._schema.from_payload(payload)
