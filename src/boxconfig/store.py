"""Configuration store port.

The form controller only talks to the server through this protocol, so
any object with these two coroutines can stand in for the GraphQL client.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class ConfigStore(Protocol):
    """Remote configuration store."""

    async def get_config(self) -> BaseModel:
        """Read the current configuration record. Idempotent."""

    async def update_config(self, record: BaseModel) -> BaseModel:
        """Replace the whole configuration; return the stored record."""
