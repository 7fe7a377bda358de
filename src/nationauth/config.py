"""Configuration with XDG paths, atomic writes, and precedence resolution.

This module handles the persistent and environmental configuration of
nationauth:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.nationauth/`` on macOS and Windows.  See :func:`get_data_dir`.
* **Profile location** -- :func:`resolve_profile_path` picks the profile
  document from the CLI flag, ``NATIONAUTH_PROFILE``, or the default
  ``<data dir>/profile.json``.
* **Client settings** -- :func:`resolve_client_config` merges CLI flags,
  environment variables, and defaults into a
  :class:`~nationauth.models.ClientConfig`.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) so a crash never leaves a half-written profile.
"""

from __future__ import annotations

import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from nationauth.models import ClientConfig

_APP_NAME = "nationauth"
_PROFILE_FILENAME = "profile.json"

ENV_PROFILE = "NATIONAUTH_PROFILE"
ENV_USER_AGENT = "NATIONAUTH_USER_AGENT"
ENV_BASE_URL = "NATIONAUTH_BASE_URL"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_data_dir() -> Path:
    """Return the data directory (profile, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/nationauth/`` (default
    ``~/.local/share/nationauth/``).  On macOS/Windows: ``~/.nationauth/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def default_profile_path() -> Path:
    return get_data_dir() / _PROFILE_FILENAME


def resolve_profile_path(cli_path: Optional[str] = None) -> Path:
    """Resolve the profile document path.

    Precedence (high to low): CLI flag, ``NATIONAUTH_PROFILE``, default.
    """
    if cli_path:
        return Path(cli_path).expanduser()
    env_path = os.environ.get(ENV_PROFILE)
    if env_path:
        return Path(env_path).expanduser()
    return default_profile_path()


# --- Atomic file writes ---


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.  On any failure
    the temp file is removed and the previous contents of *path* survive.

    Args:
        path: Destination file.
        data: Full new contents.
        mode: Permission bits applied to the temp file before any content
            is written (e.g. ``0o600`` for secrets).
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        if mode is not None:
            os.chmod(tmp_path, mode)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Precedence resolution ---


def resolve_client_config(
    cli_user_agent: Optional[str] = None,
    cli_base_url: Optional[str] = None,
) -> ClientConfig:
    """Resolve the transport configuration.

    Precedence (high to low):
        1. CLI flags (``cli_user_agent``, ``cli_base_url``)
        2. Environment variables (``NATIONAUTH_USER_AGENT``, ``NATIONAUTH_BASE_URL``)
        3. :class:`~nationauth.models.ClientConfig` defaults
    """
    overrides: dict[str, str] = {}

    env_user_agent = os.environ.get(ENV_USER_AGENT)
    if cli_user_agent:
        overrides["user_agent"] = cli_user_agent
    elif env_user_agent:
        overrides["user_agent"] = env_user_agent

    env_base_url = os.environ.get(ENV_BASE_URL)
    if cli_base_url:
        overrides["base_url"] = cli_base_url
    elif env_base_url:
        overrides["base_url"] = env_base_url

    return ClientConfig(**overrides)
