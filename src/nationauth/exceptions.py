"""Exception hierarchy for nationauth.

All exceptions inherit from :class:`NationAuthError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`nationauth.exit_codes`.
The CLI entry point catches ``NationAuthError`` and exits with that code.

Subclass hierarchy::

    NationAuthError (exit 1)
    +-- ProfileError          (exit 1)
    +-- NotSupportedError     (exit 2)
    +-- AuthError             (exit 3)
    |   +-- NoCredentialError
    |   +-- BadPinError
    |   +-- BadAuthError
    +-- AccountNotFoundError  (exit 4)
    +-- RequestFailedError    (exit 5)
    +-- TransportError        (exit 6)
    +-- SchemaError           (exit 7)
"""

from __future__ import annotations

from nationauth.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_NOT_FOUND,
    EXIT_NOT_SUPPORTED,
    EXIT_REQUEST_FAILED,
    EXIT_SCHEMA_ERROR,
)


class NationAuthError(Exception):
    """Base exception for all nationauth errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ProfileError(NationAuthError):
    """Raised when the profile document cannot be read or written.

    A missing profile file is not an error; it loads as an empty profile.
    """

    exit_code = EXIT_GENERIC_FAILURE


class NotSupportedError(NationAuthError):
    """Raised by operations that are declared but not implemented yet."""

    exit_code = EXIT_NOT_SUPPORTED


class AuthError(NationAuthError):
    """Base class for authentication failures."""

    exit_code = EXIT_AUTH_FAILURE


class NoCredentialError(AuthError):
    """Raised when a nation has no usable credential; nothing was sent."""


class BadPinError(AuthError):
    """Raised when the server rejected the session pin that was sent.

    Recoverable by retrying with the autologin or password.  Only surfaced
    when that retry is disabled or was not possible.
    """


class BadAuthError(AuthError):
    """Raised when the server rejected the autologin or password that was sent.

    The stored credential is left untouched; the user has to supply a new one.
    """


class AccountNotFoundError(NationAuthError):
    """Raised when the requested nation is not present in the profile."""

    exit_code = EXIT_NOT_FOUND


class RequestFailedError(NationAuthError):
    """Raised for any non-success status that is not an auth rejection.

    Args:
        status: The HTTP status code returned by the server.
    """

    exit_code = EXIT_REQUEST_FAILED

    def __init__(self, status: int, message: str | None = None):
        super().__init__(message or f"HTTP {status}")
        self.status = status


class TransportError(NationAuthError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused)."""

    exit_code = EXIT_CONNECTION_ERROR


class SchemaError(NationAuthError):
    """Raised when a response body does not conform to the payload schema."""

    exit_code = EXIT_SCHEMA_ERROR
