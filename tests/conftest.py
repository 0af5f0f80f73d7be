"""Shared test fixtures for boxconfig."""

from __future__ import annotations

import asyncio
import os
from typing import Any
from unittest.mock import AsyncMock

import pytest
import structlog
from pydantic import BaseModel

from boxconfig.config import ClientConfig
from boxconfig.fields import STASHBOX_SCHEMA


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch):
    """Keep STASHBOX_* vars from a developer .env out of unit tests."""
    for key in list(os.environ):
        if key.startswith("STASHBOX_"):
            monkeypatch.delenv(key, raising=False)
    yield
    structlog.reset_defaults()


# --- Configuration Fixtures ---


@pytest.fixture
def mock_config() -> ClientConfig:
    """Config for unit tests (no real server)."""
    return ClientConfig(
        api_key="test-key",
        base_url="http://mock-server:9998",
        max_retries=0,
    )


# --- Payload Helpers ---


def make_config_payload(**overrides: Any) -> dict[str, Any]:
    """Create a getConfig payload with every field set."""
    payload: dict[str, Any] = {
        "title": "Stash-Box",
        "host_url": "https://box.example.com",
        "require_invite": True,
        "require_activation": True,
        "activation_expiry": 7200,
        "email_cooldown": 300,
        "default_user_roles": ["READ", "VOTE", "EDIT"],
        "vote_promotion_threshold": 10,
        "vote_application_threshold": 3,
        "voting_period": 345600,
        "min_destructive_voting_period": 172800,
        "vote_cron_interval": "5m",
        "guidelines_url": "https://box.example.com/guidelines",
        "edit_update_limit": 1,
        "require_scene_draft": False,
        "require_tag_role": False,
        "email_host": "smtp.example.com",
        "email_port": 25,
        "email_user": "mailer",
        "email_password": "hunter2-secret",
        "email_from": "noreply@example.com",
        "image_location": "/data/images",
        "image_backend": "file",
        "image_jpeg_quality": 75,
        "image_max_size": 1280,
        "image_resizing_enabled": True,
        "image_resizing_cache_path": "/data/cache",
        "image_resizing_min_size": 512,
        "s3_endpoint": "",
        "s3_bucket": "",
        "s3_access_key": "",
        "s3_secret": "",
        "s3_max_dimension": 0,
        "postgres_max_open_conns": 0,
        "postgres_max_idle_conns": 0,
        "postgres_conn_max_lifetime": 0,
        "phash_distance": 0,
        "favicon_path": "",
        "draft_time_limit": 86400,
        "profiler_port": 0,
        "user_log_file": "",
        "csp": "default-src 'self'",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_payload():
    """Factory fixture for getConfig payloads with overrides."""
    return make_config_payload


@pytest.fixture
def config_payload() -> dict[str, Any]:
    return make_config_payload()


@pytest.fixture
def sample_record(config_payload: dict[str, Any]) -> BaseModel:
    return STASHBOX_SCHEMA.from_payload(config_payload)


# --- Store Fakes ---


class FakeStore:
    """In-memory ConfigStore with call recording.

    ``update_config`` echoes the record back unless ``update_error`` is set.
    Set ``hold_updates`` to park update calls until ``release()``.
    """

    def __init__(self, record: BaseModel) -> None:
        self.record = record
        self.get_config = AsyncMock(side_effect=self._get)
        self.update_config = AsyncMock(side_effect=self._update)
        self.load_error: Exception | None = None
        self.update_error: Exception | None = None
        self.hold_updates = False
        self._gate = asyncio.Event()
        self.in_flight = 0
        self.max_in_flight = 0

    async def _get(self) -> BaseModel:
        if self.load_error is not None:
            raise self.load_error
        return self.record

    async def _update(self, record: BaseModel) -> BaseModel:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.hold_updates:
                await self._gate.wait()
            if self.update_error is not None:
                raise self.update_error
            self.record = record
            return record
        finally:
            self.in_flight -= 1

    def release(self) -> None:
        self._gate.set()


@pytest.fixture
def store(sample_record: BaseModel) -> FakeStore:
    return FakeStore(sample_record)
