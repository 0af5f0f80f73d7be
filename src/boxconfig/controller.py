"""Form controller: load, edit, validate, submit and report.

One controller instance is one editing session. It owns the form state and
the submission state machine::

    IDLE --submit--> SUBMITTING --> SUCCEEDED | FAILED --edit/submit--> IDLE

Invalid input goes straight from IDLE to FAILED without a remote call.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from boxconfig.exceptions import (
    BoxConfigError,
    FormNotReady,
    InvalidField,
    LoadFailure,
    RemoteFailure,
    SubmitInProgress,
)
from boxconfig.fields import STASHBOX_SCHEMA
from boxconfig.form import FormState
from boxconfig.schema import ConfigSchema
from boxconfig.store import ConfigStore
from boxconfig.utils.logging import logger

SUCCESS_MESSAGE = (
    "Configuration updated successfully! Please restart the server for changes to take effect."
)
UPDATE_FAILED_MESSAGE = "Failed to update configuration"
LOAD_FAILED_MESSAGE = "Failed to load configuration"


class SubmitStatus(StrEnum):
    """Submission state of the form."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of one submit attempt.

    ``record`` is set on success, ``error`` on failure. ``message`` is the
    text to show the operator either way.
    """

    record: BaseModel | None = None
    error: BoxConfigError | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None and self.record is not None


def _message_of(exc: BaseException) -> str | None:
    """Return the human-readable text of an exception, if it has any."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message.strip():
        return message
    text = str(exc)
    return text if text.strip() else None


class ConfigFormController:
    """Orchestrates one configuration editing session against a store."""

    def __init__(self, store: ConfigStore, schema: ConfigSchema = STASHBOX_SCHEMA) -> None:
        self._store = store
        self._schema = schema
        self._status = SubmitStatus.IDLE
        self._loading = False
        self._closed = False
        self._record: BaseModel | None = None
        self._form: FormState | None = None
        self._success_message: str | None = None
        self._error_message: str | None = None
        self._invalid_fields: set[str] = set()

    # --- State ---

    @property
    def schema(self) -> ConfigSchema:
        return self._schema

    @property
    def status(self) -> SubmitStatus:
        return self._status

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def loaded(self) -> bool:
        return self._record is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def record(self) -> BaseModel | None:
        """Last record loaded from or accepted by the server."""
        return self._record

    @property
    def form(self) -> FormState | None:
        """Snapshot of the active form. Changes go through :meth:`edit`."""
        return self._form.copy() if self._form is not None else None

    @property
    def success_message(self) -> str | None:
        return self._success_message

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def invalid_fields(self) -> frozenset[str]:
        return frozenset(self._invalid_fields)

    @property
    def can_submit(self) -> bool:
        """Whether the submit control should be enabled."""
        return (
            not self._closed
            and not self._loading
            and self._form is not None
            and self._status is not SubmitStatus.SUBMITTING
        )

    def _clear_messages(self) -> None:
        self._success_message = None
        self._error_message = None
        self._invalid_fields.clear()

    def _ensure_editable(self) -> FormState:
        if self._closed:
            raise FormNotReady("The editing session is closed")
        if self._loading:
            raise FormNotReady("Configuration is still loading")
        if self._form is None:
            raise FormNotReady("Configuration has not been loaded")
        if self._status is SubmitStatus.SUBMITTING:
            raise FormNotReady("A configuration update is in flight")
        return self._form

    # --- Operations ---

    async def load(self) -> FormState:
        """Read the configuration and build a fresh form from it.

        Raises:
            LoadFailure: the read failed. No form is available afterwards.
            FormNotReady: closed, already loading or a submission is in flight.
        """
        if self._closed:
            raise FormNotReady("The editing session is closed")
        if self._loading:
            raise FormNotReady("Configuration is already loading")
        if self._status is SubmitStatus.SUBMITTING:
            raise FormNotReady("A configuration update is in flight")

        self._loading = True
        try:
            record = await self._store.get_config()
        except Exception as e:
            logger.warning("config_load_failed", error=type(e).__name__, detail=_message_of(e))
            if not self._closed:
                self._record = None
                self._form = None
            raise LoadFailure(_message_of(e) or LOAD_FAILED_MESSAGE) from e
        finally:
            self._loading = False

        form = self._schema.to_form_state(record)
        if self._closed:
            logger.debug("late_result_dropped", operation="load")
            return form
        self._record = record
        self._form = form
        self._status = SubmitStatus.IDLE
        self._clear_messages()
        logger.info("config_loaded", fields=len(form))
        return form.copy()

    def edit(self, name: str, value: Any) -> None:
        """Set one field of the active form.

        Raises:
            KeyError: ``name`` is not a configuration field.
            FormNotReady: the form is not interactable.
        """
        form = self._ensure_editable()
        form[name] = value
        self._invalid_fields.discard(name)
        if self._status in (SubmitStatus.SUCCEEDED, SubmitStatus.FAILED):
            self._status = SubmitStatus.IDLE

    async def submit(self, edited: FormState | None = None) -> UpdateResult:
        """Validate the form and send the full configuration to the server.

        ``edited`` defaults to the controller's own form. Conversion errors
        and remote errors are reported in the returned result, never raised.
        Cancelling the caller while the update is pending marks the attempt
        FAILED and re-raises the cancellation.

        Raises:
            SubmitInProgress: another submission has not resolved yet.
            FormNotReady: nothing was loaded, or the session is closed.
        """
        if self._status is SubmitStatus.SUBMITTING:
            raise SubmitInProgress("A configuration update is already in flight")
        form = self._ensure_editable()
        if edited is not None:
            form = edited

        self._clear_messages()

        try:
            record = self._schema.to_record(form)
        except InvalidField as e:
            self._status = SubmitStatus.FAILED
            self._invalid_fields.add(e.field)
            logger.info("config_submit_invalid", field=e.field)
            return UpdateResult(error=e, message=e.message)

        self._status = SubmitStatus.SUBMITTING
        try:
            saved = await self._store.update_config(record)
        except asyncio.CancelledError:
            if not self._closed:
                self._status = SubmitStatus.FAILED
                self._error_message = UPDATE_FAILED_MESSAGE
            logger.warning("config_update_cancelled")
            raise
        except Exception as e:
            failure = RemoteFailure(_message_of(e) or UPDATE_FAILED_MESSAGE, cause=e)
            result = UpdateResult(error=failure, message=failure.message)
            if self._closed:
                logger.debug("late_result_dropped", operation="submit")
                return result
            self._status = SubmitStatus.FAILED
            self._error_message = failure.message
            logger.warning("config_update_failed", error=type(e).__name__)
            return result

        result = UpdateResult(record=saved, message=SUCCESS_MESSAGE)
        if self._closed:
            logger.debug("late_result_dropped", operation="submit")
            return result
        self._status = SubmitStatus.SUCCEEDED
        self._record = saved
        self._form = self._schema.to_form_state(saved)
        self._success_message = SUCCESS_MESSAGE
        return result

    def close(self) -> None:
        """End the session. Results that resolve afterwards are dropped."""
        self._closed = True
