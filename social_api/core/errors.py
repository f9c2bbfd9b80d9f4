"""
Error taxonomy shared by services and the HTTP boundary.

Every exception carries the HTTP status and a stable code; the app turns them
into JSON responses so no failure leaves a route unconverted.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for failures the API reports to clients."""

    status_code = 500
    code = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    code = "validation_error"
    default_message = "Invalid input"


class DuplicateEmailError(ServiceError):
    status_code = 400
    code = "duplicate_email"
    default_message = "Email is already registered"


class InvalidCredentialsError(ServiceError):
    status_code = 400
    code = "invalid_credentials"
    default_message = "Invalid login credentials"


class UnauthorizedError(ServiceError):
    status_code = 401
    code = "unauthorized"
    default_message = "Not authorized"


class InvalidTokenError(UnauthorizedError):
    code = "invalid_token"
    default_message = "Invalid token"


class ExpiredTokenError(InvalidTokenError):
    code = "expired_token"
    default_message = "Token has expired"


class ForbiddenError(ServiceError):
    status_code = 403
    code = "forbidden"
    default_message = "You can only modify your own account"


class NotFoundError(ServiceError):
    status_code = 404
    code = "not_found"
    default_message = "Account not found"


class SelfFollowRejectedError(ServiceError):
    status_code = 400
    code = "self_follow"
    default_message = "You cannot follow yourself"


class SelfUnfollowRejectedError(ServiceError):
    status_code = 400
    code = "self_unfollow"
    default_message = "You cannot unfollow yourself"


class CredentialError(ServiceError):
    """Stored credential could not be processed (corrupt or unsupported hash)."""


class ConfigurationError(ServiceError, RuntimeError):
    """Required process configuration is missing (e.g. the signing secret in prod)."""
