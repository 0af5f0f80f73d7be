"""Client configuration for boxconfig."""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

# Load .env so STASHBOX_* vars are available before Pydantic runs
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the stash-box GraphQL client.

    Parameters can be set directly, via environment variables, or
    via a .env file. Environment variables use the STASHBOX_ prefix.

    Env vars:
        STASHBOX_BASE_URL: Base URL of the stash-box server
        STASHBOX_GRAPHQL_PATH: Path of the GraphQL endpoint
        STASHBOX_API_KEY: API key sent in the ApiKey header
        STASHBOX_TIMEOUT: Request timeout in seconds
        STASHBOX_MAX_RETRIES: Maximum retry attempts for reads
        STASHBOX_RETRY_DELAY: Base delay between retries in seconds
        STASHBOX_MAX_RETRY_DELAY: Cap for the backoff delay in seconds
        STASHBOX_VERIFY_SSL: Verify SSL certificates (true/false)
    """

    base_url: str = Field(
        default="http://localhost:9998",
        description="Base URL of the stash-box server",
    )
    graphql_path: str = Field(default="/graphql", description="GraphQL endpoint path")
    api_key: str | None = Field(default=None, description="API key for authentication")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    max_retries: int = Field(default=3, description="Maximum retry attempts (reads only)")
    retry_delay: float = Field(
        default=1.0,
        description="Base delay between retries (seconds)",
    )
    max_retry_delay: float = Field(
        default=60.0,
        description="Maximum delay for backoff (seconds); caps exponential backoff",
    )
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")

    @model_validator(mode="before")
    @classmethod
    def load_from_env(cls, values: Any) -> Any:
        """Load unset values from environment variables."""
        if not isinstance(values, dict):
            return values
        env_map = {
            "base_url": "STASHBOX_BASE_URL",
            "graphql_path": "STASHBOX_GRAPHQL_PATH",
            "api_key": "STASHBOX_API_KEY",
            "timeout": "STASHBOX_TIMEOUT",
            "max_retries": "STASHBOX_MAX_RETRIES",
            "retry_delay": "STASHBOX_RETRY_DELAY",
            "max_retry_delay": "STASHBOX_MAX_RETRY_DELAY",
            "verify_ssl": "STASHBOX_VERIFY_SSL",
        }
        for field, env_var in env_map.items():
            if field not in values or values[field] is None:
                env_val = os.environ.get(env_var)
                if env_val is not None:
                    if field == "verify_ssl":
                        values[field] = env_val.strip().lower() in ("1", "true", "yes")
                    else:
                        values[field] = env_val
        return values

    @model_validator(mode="after")
    def validate_and_normalize(self) -> ClientConfig:
        """Normalize URLs and validate numeric fields."""
        self.base_url = self.base_url.rstrip("/")
        if not (self.base_url.startswith("http://") or self.base_url.startswith("https://")):
            raise ValueError("base_url must start with http:// or https://")
        if not self.graphql_path.startswith("/"):
            self.graphql_path = "/" + self.graphql_path
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must be >= 0")
        if self.max_retry_delay < self.retry_delay:
            raise ValueError("max_retry_delay must be >= retry_delay")
        return self

    @property
    def graphql_url(self) -> str:
        return self.base_url + self.graphql_path
