"""boxconfig: view and edit a stash-box server configuration."""

from boxconfig._version import __version__
from boxconfig.client import AsyncStashBoxClient
from boxconfig.config import ClientConfig
from boxconfig.controller import ConfigFormController, SubmitStatus, UpdateResult
from boxconfig.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BoxConfigError,
    ConnectionError,
    FormNotReady,
    GraphQLError,
    InvalidField,
    LoadFailure,
    NotFoundError,
    RateLimitError,
    RemoteFailure,
    ServerError,
    SubmitInProgress,
    TimeoutError,
    ValidationError,
)
from boxconfig.fields import CONFIG_FIELDS, STASHBOX_SCHEMA, ConfigRecord
from boxconfig.form import FormState
from boxconfig.schema import ConfigSchema, FieldKind, FieldSpec
from boxconfig.store import ConfigStore
from boxconfig.utils.logging import configure_logging

__all__ = [
    "CONFIG_FIELDS",
    "STASHBOX_SCHEMA",
    "AsyncStashBoxClient",
    "AuthenticationError",
    "AuthorizationError",
    "BoxConfigError",
    "ClientConfig",
    "ConfigFormController",
    "ConfigRecord",
    "ConfigSchema",
    "ConfigStore",
    "ConnectionError",
    "FieldKind",
    "FieldSpec",
    "FormNotReady",
    "FormState",
    "GraphQLError",
    "InvalidField",
    "LoadFailure",
    "NotFoundError",
    "RateLimitError",
    "RemoteFailure",
    "ServerError",
    "SubmitInProgress",
    "SubmitStatus",
    "TimeoutError",
    "UpdateResult",
    "ValidationError",
    "__version__",
    "configure_logging",
]
