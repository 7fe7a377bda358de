"""Tests for credential selection."""

from __future__ import annotations

from datetime import timedelta

import pytest

from nationauth.auth.selector import (
    NO_CREDENTIAL,
    Credential,
    CredentialKind,
    NoCredential,
    select_credential,
)
from nationauth.models import Credentials

from conftest import fresh_pin


class TestPriority:
    def test_password_only_selects_password(self) -> None:
        selection = select_credential(Credentials(password="pw"))
        assert selection == Credential(CredentialKind.PASSWORD, "pw")

    def test_autologin_beats_password(self) -> None:
        selection = select_credential(Credentials(password="pw", autologin="al"))
        assert selection == Credential(CredentialKind.AUTOLOGIN, "al")

    def test_valid_pin_beats_everything(self) -> None:
        creds = Credentials(password="pw", autologin="al", pin=fresh_pin(4242))
        assert select_credential(creds) == Credential(CredentialKind.PIN, "4242")

    def test_expired_pin_is_skipped(self) -> None:
        creds = Credentials(autologin="al", pin=fresh_pin(age=timedelta(hours=2)))
        assert select_credential(creds).kind is CredentialKind.AUTOLOGIN

    def test_expired_pin_alone_yields_no_credential(self) -> None:
        creds = Credentials(pin=fresh_pin(age=timedelta(hours=5)))
        assert select_credential(creds) == NO_CREDENTIAL

    def test_empty_set_yields_no_credential(self) -> None:
        assert isinstance(select_credential(Credentials()), NoCredential)


class TestExclude:
    def test_exclude_pin_falls_back_to_autologin(self) -> None:
        creds = Credentials(autologin="al", pin=fresh_pin())
        selection = select_credential(creds, exclude=CredentialKind.PIN)
        assert selection == Credential(CredentialKind.AUTOLOGIN, "al")

    def test_exclude_pin_falls_back_to_password(self) -> None:
        creds = Credentials(password="pw", pin=fresh_pin())
        selection = select_credential(creds, exclude=CredentialKind.PIN)
        assert selection == Credential(CredentialKind.PASSWORD, "pw")

    def test_exclude_autologin(self) -> None:
        creds = Credentials(password="pw", autologin="al")
        selection = select_credential(creds, exclude=CredentialKind.AUTOLOGIN)
        assert selection.kind is CredentialKind.PASSWORD

    def test_exclude_only_kind_reports_exclusion(self) -> None:
        selection = select_credential(Credentials(pin=fresh_pin()), exclude=CredentialKind.PIN)
        assert selection == NoCredential(excluded=CredentialKind.PIN)

    @pytest.mark.parametrize("exclude", [None, CredentialKind.PIN])
    def test_selection_does_not_mutate(self, exclude: CredentialKind | None) -> None:
        creds = Credentials(password="pw", autologin="al", pin=fresh_pin())
        before = creds.model_copy(deep=True)
        select_credential(creds, exclude=exclude)
        assert creds == before


def test_credential_repr_hides_value() -> None:
    assert "hunter2" not in repr(Credential(CredentialKind.PASSWORD, "hunter2"))
