"""Exception hierarchy for boxconfig."""

from __future__ import annotations

from typing import Any


class BoxConfigError(Exception):
    """Base exception for all boxconfig errors.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code (if from HTTP response).
        response_body: Raw server response dict (if available).
        request_id: Server request ID for support debugging.
        suggestion: Actionable suggestion for the operator.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: dict[str, Any] | None = None,
        request_id: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        full_message = message
        if suggestion:
            full_message += f"\n  Suggestion: {suggestion}"
        if request_id:
            full_message += f"\n  Request ID: {request_id}"
        super().__init__(full_message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.request_id = request_id
        self.suggestion = suggestion

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, status_code={self.status_code})"
        )


# --- Transport errors ---


class AuthenticationError(BoxConfigError):
    """Raised when authentication fails (401)."""

    pass


class AuthorizationError(BoxConfigError):
    """Raised when authorization fails (403)."""

    pass


class NotFoundError(BoxConfigError):
    """Raised when the GraphQL endpoint is not found (404)."""

    pass


class ValidationError(BoxConfigError):
    """Raised when the server rejects the request as malformed (400/422)."""

    pass


class RateLimitError(BoxConfigError):
    """Raised when rate limit is exceeded (429)."""

    def __init__(
        self,
        message: str,
        *,
        retry_after: float | None = None,
        status_code: int | None = None,
        response_body: dict[str, Any] | None = None,
        request_id: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(
            message,
            status_code=status_code,
            response_body=response_body,
            request_id=request_id,
            suggestion=suggestion,
        )
        self.retry_after = retry_after


class ServerError(BoxConfigError):
    """Raised when the server returns 5xx error."""

    pass


class GraphQLError(BoxConfigError):
    """Raised when a GraphQL response carries an ``errors`` array.

    ``errors`` holds the raw error objects; ``message`` joins their
    messages with newlines.
    """

    def __init__(
        self,
        errors: list[dict[str, Any]],
        *,
        status_code: int | None = None,
        response_body: dict[str, Any] | None = None,
        request_id: str | None = None,
    ) -> None:
        messages = [str(e.get("message", "")) for e in errors if isinstance(e, dict)]
        super().__init__(
            "\n".join(m for m in messages if m) or "GraphQL request failed",
            status_code=status_code,
            response_body=response_body,
            request_id=request_id,
        )
        self.errors = errors


class BoxConfigConnectionError(BoxConfigError):
    """Raised when unable to connect to the stash-box server.

    Note: This is the boxconfig exception, not Python's builtin ConnectionError.
    """

    pass


class BoxConfigTimeoutError(BoxConfigError):
    """Raised when a request times out.

    Note: This is the boxconfig exception, not Python's builtin TimeoutError.
    """

    pass


# Short aliases for use inside the package
ConnectionError = BoxConfigConnectionError
TimeoutError = BoxConfigTimeoutError


# --- Form errors ---


class InvalidField(BoxConfigError):
    """A form value could not be converted to its field's type.

    Raised while turning form state into a record; never reaches the server.
    """

    def __init__(self, field: str, value: Any = None, reason: str | None = None) -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid value for {field}{detail}")
        self.field = field
        self.value = value

    def __repr__(self) -> str:
        return f"InvalidField(field={self.field!r})"


class RemoteFailure(BoxConfigError):
    """The configuration update was rejected or could not be delivered."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class LoadFailure(BoxConfigError):
    """The configuration could not be read; there is nothing to edit."""

    pass


class FormNotReady(BoxConfigError):
    """The form is not interactable (not loaded, loading, submitting or closed)."""

    pass


class SubmitInProgress(BoxConfigError):
    """A submission is already in flight."""

    pass


__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "BoxConfigConnectionError",
    "BoxConfigError",
    "BoxConfigTimeoutError",
    "ConnectionError",
    "FormNotReady",
    "GraphQLError",
    "InvalidField",
    "LoadFailure",
    "NotFoundError",
    "RateLimitError",
    "RemoteFailure",
    "ServerError",
    "SubmitInProgress",
    "TimeoutError",
    "ValidationError",
]
