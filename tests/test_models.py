"""Tests for pins, credential sets and profiles."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from nationauth.exceptions import AccountNotFoundError
from nationauth.models import (
    PIN_LIFETIME,
    ClientConfig,
    Credentials,
    Nation,
    Pin,
    Profile,
    canonical_name,
)

from conftest import fresh_pin

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestPin:
    def test_valid_when_fresh(self) -> None:
        pin = Pin(value=1, timestamp=NOW - timedelta(minutes=1))
        assert pin.valid(NOW) is True

    def test_valid_just_before_expiry(self) -> None:
        pin = Pin(value=1, timestamp=NOW - PIN_LIFETIME + timedelta(seconds=1))
        assert pin.valid(NOW) is True

    @pytest.mark.parametrize("age", [PIN_LIFETIME, PIN_LIFETIME + timedelta(seconds=1), timedelta(days=3)])
    def test_invalid_from_two_hours(self, age: timedelta) -> None:
        pin = Pin(value=1, timestamp=NOW - age)
        assert pin.valid(NOW) is False

    def test_naive_timestamp_treated_as_utc(self) -> None:
        pin = Pin(value=1, timestamp=datetime(2024, 5, 1, 11, 0))
        assert pin.valid(NOW) is True
        assert pin.valid(NOW + timedelta(hours=1)) is False

    def test_defaults_to_current_time(self) -> None:
        assert fresh_pin().valid() is True
        assert fresh_pin(age=timedelta(hours=3)).valid() is False

    def test_rejects_negative_value(self) -> None:
        with pytest.raises(ValueError):
            Pin(value=-1, timestamp=NOW)


class TestCredentials:
    def test_empty_set_is_unusable(self) -> None:
        assert Credentials().is_usable() is False

    @pytest.mark.parametrize(
        "fields",
        [{"password": "pw"}, {"autologin": "al"}, {"pin": Pin(value=1, timestamp=NOW)}],
    )
    def test_any_single_field_is_usable(self, fields: dict) -> None:
        assert Credentials(**fields).is_usable() is True

    def test_renewed_autologin_clears_password(self) -> None:
        creds = Credentials(password="hunter2")
        changed = creds.apply_renewal(autologin="token")
        assert changed is True
        assert creds.autologin == "token"
        assert creds.password is None

    def test_renewed_autologin_replaces_old_token(self) -> None:
        creds = Credentials(password="hunter2", autologin="old")
        creds.apply_renewal(autologin="new")
        assert creds.autologin == "new"
        assert creds.password is None

    def test_renewed_pin_replaces_old_pin(self) -> None:
        old = Pin(value=1, timestamp=NOW - timedelta(hours=1))
        new = Pin(value=2, timestamp=NOW)
        creds = Credentials(autologin="al", pin=old)
        creds.apply_renewal(pin=new)
        assert creds.pin == new
        assert creds.autologin == "al"

    def test_no_renewal_is_a_no_op(self) -> None:
        creds = Credentials(password="pw", pin=Pin(value=3, timestamp=NOW))
        before = creds.model_copy(deep=True)
        assert creds.apply_renewal() is False
        assert creds == before

    def test_same_values_report_unchanged(self) -> None:
        pin = Pin(value=3, timestamp=NOW)
        creds = Credentials(autologin="al", pin=pin)
        assert creds.apply_renewal(autologin="al", pin=pin) is False

    def test_invalidate_pin_keeps_other_credentials(self) -> None:
        creds = Credentials(password="pw", autologin="al", pin=Pin(value=3, timestamp=NOW))
        assert creds.invalidate_pin() is True
        assert creds.pin is None
        assert creds.password == "pw"
        assert creds.autologin == "al"

    def test_invalidate_missing_pin(self) -> None:
        assert Credentials(password="pw").invalidate_pin() is False

    def test_repr_hides_secrets(self) -> None:
        text = repr(Credentials(password="hunter2", autologin="s3cret"))
        assert "hunter2" not in text
        assert "s3cret" not in text


class TestProfile:
    def test_canonical_name(self) -> None:
        assert canonical_name("  The Grand Duchy ") == "the_grand_duchy"

    def test_find_ignores_case_and_spaces(self) -> None:
        profile = Profile(nations=[Nation(name="Grand Duchy")])
        assert profile.find("grand_duchy").name == "Grand Duchy"
        assert profile.find("GRAND DUCHY").name == "Grand Duchy"

    def test_find_missing_raises(self) -> None:
        with pytest.raises(AccountNotFoundError, match="nowhere"):
            Profile().find("nowhere")

    def test_rejects_duplicate_names(self) -> None:
        with pytest.raises(ValidationError, match="duplicate nation"):
            Profile(nations=[Nation(name="Grand Duchy"), Nation(name="grand_duchy")])


class TestClientConfig:
    def test_defaults(self) -> None:
        config = ClientConfig()
        assert config.base_url == "https://www.nationstates.net/cgi-bin/api.cgi"
        assert config.api_version == 11
        assert config.verify_ssl is True
