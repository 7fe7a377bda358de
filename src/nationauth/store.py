"""Persistent profile store.

The profile is a single JSON document holding every nation and its
credential set::

    {
      "nations": [
        {
          "name": "testlandia",
          "credentials": {
            "password": null,
            "autologin": "abc123",
            "pin": {"value": 1234567, "timestamp": "2024-01-01T12:00:00Z"}
          }
        }
      ]
    }

Saving always rewrites the whole document atomically with ``0o600``
permissions, since it contains secrets.  A missing file loads as an empty
profile; any other read failure raises
:class:`~nationauth.exceptions.ProfileError`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from nationauth.config import atomic_write, resolve_profile_path
from nationauth.exceptions import ProfileError
from nationauth.models import Profile

logger = logging.getLogger(__name__)

_FILE_MODE = 0o600


class ProfileStore:
    """Load and save the profile document at *path*.

    The store is passed explicitly into every operation; nothing about the
    profile is held in module-level state.

    Args:
        path: Location of the profile document.

    Example::

        store = ProfileStore(Path("~/nation.json").expanduser())
        profile = store.load()
        profile.find("testlandia").credentials.pin = None
        store.save(profile)
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @classmethod
    def default(cls, cli_path: Optional[str] = None) -> ProfileStore:
        """Create a store at the resolved profile location."""
        return cls(resolve_profile_path(cli_path))

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Profile:
        """Read the profile from disk.

        Returns:
            The stored :class:`~nationauth.models.Profile`, or an empty one
            if the file does not exist.

        Raises:
            ProfileError: If the file exists but cannot be read or parsed.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No profile at %s, starting empty", self._path)
            return Profile()
        except OSError as exc:
            raise ProfileError(f"Cannot read profile at {self._path}: {exc}") from exc

        try:
            return Profile.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise ProfileError(f"Invalid profile at {self._path}: {exc}") from exc

    def save(self, profile: Profile) -> None:
        """Overwrite the profile document with *profile*.

        Raises:
            ProfileError: If the file cannot be written.
        """
        data = profile.model_dump(mode="json")
        text = json.dumps(data, indent=2) + "\n"
        try:
            atomic_write(self._path, text, mode=_FILE_MODE)
        except OSError as exc:
            raise ProfileError(f"Cannot write profile at {self._path}: {exc}") from exc
        logger.debug("Saved profile with %d nation(s) to %s", len(profile.nations), self._path)
