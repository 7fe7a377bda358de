"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~nationauth.exceptions.NationAuthError` subclass.

Example::

    $ nationauth ping testlandia
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the stored credentials were rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (including profile read/write failures)."""

EXIT_NOT_SUPPORTED = 2
"""The command exists but is not implemented yet."""

EXIT_AUTH_FAILURE = 3
"""No credential was available, or the server rejected the one sent."""

EXIT_NOT_FOUND = 4
"""The requested nation is not in the profile."""

EXIT_REQUEST_FAILED = 5
"""The API answered with a status that is neither success nor auth rejection."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_SCHEMA_ERROR = 7
"""The API response body did not match the expected payload schema."""
