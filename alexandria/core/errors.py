"""
Domain exception hierarchy.

Services raise these exceptions; the server layer maps each of them to an
HTTP response through its ``status_code`` (see
``alexandria.server.exception_handlers``).
"""

from __future__ import annotations

from typing import Any, Optional


class AlexandriaError(Exception):
    """Base class for all expected, client-facing errors."""

    status_code: int = 400

    def __init__(self, message: str, error: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.error = error

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class NotFoundError(AlexandriaError):
    """A referenced resource does not exist (404)."""

    status_code = 404


class ConflictError(AlexandriaError):
    """The resource already exists or the relation is already present (409)."""

    status_code = 409


class BusinessRuleError(AlexandriaError):
    """The request is well-formed but violates a business rule (400)."""

    status_code = 400


class PermissionDeniedError(AlexandriaError):
    """The caller is authenticated but not allowed to act (403)."""

    status_code = 403


class AuthenticationError(AlexandriaError):
    """Missing or invalid credentials (401)."""

    status_code = 401


class InvalidTransitionError(ConflictError):
    """A payment status transition is not allowed by the ledger state machine."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            f"Cannot move payment from '{current}' to '{target}'",
            error={"current_status": current, "target_status": target},
        )
        self.current = current
        self.target = target


class GatewayError(AlexandriaError):
    """The payment gateway rejected a call or could not be reached (500)."""

    status_code = 500


class SignatureError(AlexandriaError):
    """A webhook payload carried a missing or wrong signature (400)."""

    status_code = 400

    def __init__(self, message: str = "Invalid signature", error: Optional[Any] = None) -> None:
        super().__init__(message, error)
