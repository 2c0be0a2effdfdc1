from __future__ import annotations

import pytest

from mockbanker.validator import ValidationDispatcher


@pytest.fixture
def dispatcher() -> ValidationDispatcher:
    return ValidationDispatcher()


@pytest.mark.parametrize("value", ["", "   ", "\t\n"])
def test_blank_input_gives_no_verdict(dispatcher, value):
    assert dispatcher.validate("iban", value) is None


@pytest.mark.parametrize(
    "tag,value,country,message",
    [
        ("iban", "  DE89 3704 0044 0532 0130 00 ", None, "Valid IBAN"),
        ("card", "4111111111111111", None, "Valid Credit Card (Luhn check passed)"),
        ("swift", "DEUTDEFF", None, "Valid SWIFT/BIC format"),
        ("lei", "213800D1EI4B9WTWWD28", None, "Valid LEI code"),
        ("bank", "111000025 12345678", "US", "Valid Bank Account for selected country"),
        ("company", "552008443", "FR", "Valid Company ID for selected country"),
        ("tax_id", "36574261809", None, "Valid Tax ID for selected country"),
        ("id", "36805280109", None, "Valid ID (male / 1968-05-28)"),
    ],
)
def test_valid_values(dispatcher, tag, value, country, message):
    verdict = dispatcher.validate(tag, value, country)
    assert verdict.valid
    assert verdict.message == message


@pytest.mark.parametrize(
    "tag,value,country,message",
    [
        ("iban", "DE00370400440532013000", None, "Invalid IBAN checksum or format"),
        ("card", "4111111111111112", None, "Invalid Credit Card (Luhn check failed)"),
        ("vat", "DE000000000", None, "Invalid VAT number format"),
        ("passport", "12", "EE", "Invalid Passport format"),
        ("id", "36805280108", "EE", "Invalid ID for selected country"),
        ("id", "hello", "EE", "Could not parse ID"),
    ],
)
def test_invalid_values(dispatcher, tag, value, country, message):
    verdict = dispatcher.validate(tag, value, country)
    assert not verdict.valid
    assert verdict.message == message


@pytest.mark.parametrize(
    "tag,category",
    [
        ("bank", "Bank Account"),
        ("company", "Company ID"),
        ("driver_license", "Driver's License"),
        ("passport", "Passport"),
        ("tax_id", "Tax ID"),
        ("id", "Personal ID"),
    ],
)
def test_unsupported_country(dispatcher, tag, category):
    verdict = dispatcher.validate(tag, "12345678", "ZZ")
    assert not verdict.valid
    assert verdict.message == f"{category} validation not supported for this country"


def test_country_is_normalised(dispatcher):
    assert dispatcher.validate("company", "552008443", " fr ").valid


def test_unknown_tag_is_invalid_not_an_error(dispatcher):
    verdict = dispatcher.validate("crypto", "abc")
    assert not verdict.valid
    assert "crypto" in verdict.message


def test_registry_errors_become_verdicts(dispatcher, monkeypatch):
    def boom(self, value, country=None):
        raise RuntimeError("kaput")

    monkeypatch.setattr("mockbanker.registries.lei.LeiRegistry.check", boom)

    verdict = dispatcher.validate("lei", "213800D1EI4B9WTWWD28")

    assert not verdict.valid
    assert "kaput" in verdict.message
