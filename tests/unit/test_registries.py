from __future__ import annotations

import random
import re

import pytest

from mockbanker.domain.models import GenerationOptions
from mockbanker.registries import (
    BankAccountRegistry,
    CompanyIdRegistry,
    CreditCardRegistry,
    DriverLicenseRegistry,
    IbanRegistry,
    IdentifierRegistry,
    LeiRegistry,
    PassportRegistry,
    PersonalIdRegistry,
    SwiftRegistry,
    TaxIdRegistry,
    VatRegistry,
)
from mockbanker.registries._support import complete, random_date
from mockbanker.registries.credit_card import BRANDS
from mockbanker.registries.iban import format_iban, generate_iban, validate_iban
from mockbanker.registries.lei import LOUS

DEFAULT_OPTIONS = GenerationOptions()
SAMPLES = 10

ALL_REGISTRIES = [
    IbanRegistry,
    PersonalIdRegistry,
    BankAccountRegistry,
    CreditCardRegistry,
    SwiftRegistry,
    CompanyIdRegistry,
    DriverLicenseRegistry,
    PassportRegistry,
    TaxIdRegistry,
    VatRegistry,
    LeiRegistry,
]


@pytest.mark.parametrize("registry_cls", ALL_REGISTRIES)
def test_registries_implement_contract(registry_cls):
    registry = registry_cls()
    options = registry.list_options()

    assert isinstance(registry, IdentifierRegistry)
    assert options
    assert options == registry.list_options()
    assert len({option.code for option in options}) == len(options)


@pytest.mark.parametrize("registry_cls", ALL_REGISTRIES)
def test_generation_is_reproducible(registry_cls):
    registry = registry_cls()
    selector = registry.list_options()[0].code

    first = [registry.generate(selector, DEFAULT_OPTIONS, random.Random(7)) for _ in range(3)]
    second = [registry.generate(selector, DEFAULT_OPTIONS, random.Random(7)) for _ in range(3)]

    assert first == second


@pytest.mark.parametrize("registry_cls", ALL_REGISTRIES)
def test_unsupported_selector_yields_nothing(registry_cls, rng):
    assert registry_cls().generate("ZZ", DEFAULT_OPTIONS, rng) is None


class TestIban:
    def test_known_iban_validates(self):
        assert validate_iban("DE89 3704 0044 0532 0130 00")
        assert not validate_iban("DE89370400440532013001")

    def test_generated_iban_passes_and_formats_in_blocks(self, rng):
        for _ in range(SAMPLES):
            row = IbanRegistry().generate("DE", DEFAULT_OPTIONS, rng)
            assert row.valid
            assert row.raw.startswith("DE")
            assert len(row.raw) == 22
            assert re.fullmatch(r"([A-Z0-9]{4} )*[A-Z0-9]{1,4}", row.formatted)
            assert row.formatted.replace(" ", "") == row.raw
            assert row.display(spaces=False) == row.raw

    def test_random_country_is_supported(self, rng):
        code = generate_iban(None, rng)
        assert code[:2] in {option.code for option in IbanRegistry().list_options()}
        assert validate_iban(code)

    def test_format_iban(self):
        assert format_iban("GB82WEST12345698765432") == "GB82 WEST 1234 5698 7654 32"


class TestPersonalId:
    @pytest.mark.parametrize("country", ["BG", "EE", "FI", "LT", "PL"])
    @pytest.mark.parametrize("gender", ["male", "female"])
    def test_generated_code_decodes_requested_fields(self, country, gender, rng):
        options = GenerationOptions(gender=gender, year=1987)
        registry = PersonalIdRegistry()
        for _ in range(SAMPLES):
            row = registry.generate(country, options, rng)
            assert row.valid
            assert row.gender == gender
            assert row.dob.startswith("1987-")
            assert registry.validate(country, row.code) is True

    @pytest.mark.parametrize("country,year", [("EE", 2003), ("PL", 2015), ("BG", 1885), ("FI", 2001)])
    def test_other_centuries(self, country, year, rng):
        row = PersonalIdRegistry().generate(country, GenerationOptions(year=year), rng)
        assert row.valid
        assert row.dob.startswith(f"{year}-")

    def test_year_outside_range_fails(self, rng):
        assert PersonalIdRegistry().generate("EE", GenerationOptions(year=1700), rng) is None

    def test_parse_known_estonian_code(self):
        row = PersonalIdRegistry().parse("EE", "36805280109")
        assert row.valid
        assert row.gender == "male"
        assert row.dob == "1968-05-28"

    def test_parse_rejects_malformed(self):
        registry = PersonalIdRegistry()
        assert registry.parse("EE", "abc") is None
        assert registry.parse("XX", "36805280109") is None

    def test_validate_unsupported_country_is_none(self):
        assert PersonalIdRegistry().validate("US", "123") is None


class TestBankAccount:
    def test_us_rows_carry_valid_routing(self, rng):
        from stdnum.us import rtn

        registry = BankAccountRegistry()
        for _ in range(SAMPLES):
            row = registry.generate("US", DEFAULT_OPTIONS, rng)
            assert row.valid
            assert rtn.is_valid(row.routing)
            assert registry.validate("US", f"{row.routing} {row.account}")
            assert row.display() == f"{row.account} ({row.routing})"

    def test_norwegian_account(self, rng):
        registry = BankAccountRegistry()
        row = registry.generate("NO", DEFAULT_OPTIONS, rng)
        assert row.valid
        assert len(row.account) == 11
        assert row.routing == row.account[:4]

    def test_bad_routing_is_rejected(self):
        assert not BankAccountRegistry().validate("US", "111000026 12345678")

    def test_unsupported_country(self):
        registry = BankAccountRegistry()
        assert registry.validate("DE", "12345678") is None
        assert not registry.supports("DE")
        assert registry.supports(" us ")


class TestCreditCard:
    @pytest.mark.parametrize("brand", sorted(BRANDS))
    def test_brand_prefix_length_and_luhn(self, brand, rng):
        row = CreditCardRegistry().generate(brand, DEFAULT_OPTIONS, rng)
        spec = BRANDS[brand]
        assert row.valid
        assert len(row.number) == spec.length
        assert row.number.startswith(spec.prefixes)
        assert row.brand == spec.label

    def test_known_numbers(self):
        registry = CreditCardRegistry()
        assert registry.validate("4111 1111 1111 1111")
        assert not registry.validate("4111111111111112")
        assert not registry.validate("41111")

    def test_brands_are_listed(self):
        assert [option.code for option in CreditCardRegistry().list_brands()] == list(BRANDS)


class TestSwift:
    def test_generated_bic_layout(self, rng):
        for _ in range(SAMPLES):
            row = SwiftRegistry().generate("FI", DEFAULT_OPTIONS, rng)
            assert row.valid
            assert row.code[4:6] == "FI"
            assert row.code[:4] == row.bank
            assert len(row.code) in (8, 11)

    def test_known_bic(self):
        assert SwiftRegistry().validate("DEUTDEFF")
        assert not SwiftRegistry().validate("DEUT")


class TestCountryScopedFormats:
    @pytest.mark.parametrize("registry_cls", [CompanyIdRegistry, DriverLicenseRegistry, PassportRegistry])
    def test_every_country_round_trips(self, registry_cls, rng):
        registry = registry_cls()
        for option in registry.list_options():
            row = registry.generate(option.code, DEFAULT_OPTIONS, rng)
            assert row.valid, option.code
            assert registry.validate(option.code, row.code) is True

    def test_us_driver_license_carries_state(self, rng):
        row = DriverLicenseRegistry().generate("US", DEFAULT_OPTIONS, rng)
        assert row.state in {"CA", "FL", "IL", "NY", "TX"}

    def test_german_passport_prefix(self, rng):
        row = PassportRegistry().generate("DE", DEFAULT_OPTIONS, rng)
        assert row.code.startswith("C")
        assert len(row.code) == 9

    def test_known_french_siren(self):
        assert CompanyIdRegistry().validate("FR", "552 008 443")
        assert not CompanyIdRegistry().validate("FR", "552008442")


class TestTaxId:
    @pytest.mark.parametrize(
        "country,holder,name",
        [("BR", "individual", "CPF"), ("BR", "company", "CNPJ"), ("PT", "company", "NIF"), ("IN", "company", "PAN")],
    )
    def test_holder_type_selects_scheme(self, country, holder, name, rng):
        row = TaxIdRegistry().generate(country, GenerationOptions(holder_type=holder), rng)
        assert row.valid
        assert row.name == name
        assert row.holder_type == holder

    def test_pan_holder_letter(self, rng):
        row = TaxIdRegistry().generate("IN", GenerationOptions(holder_type="individual"), rng)
        assert row.code[3] == "P"

    def test_holder_type_not_encoded(self, rng):
        assert TaxIdRegistry().generate("DE", GenerationOptions(holder_type="company"), rng) is None

    def test_known_german_idnr(self):
        assert TaxIdRegistry().validate("DE", "36 574 261 809")


class TestVatAndLei:
    def test_every_vat_country(self, rng):
        registry = VatRegistry()
        for option in registry.list_options():
            row = registry.generate(option.code, DEFAULT_OPTIONS, rng)
            assert row.valid, option.code
            assert row.code.startswith(option.code)
            assert row.country_code == option.code

    def test_lei_uses_country_lou(self, rng):
        for lou, country in LOUS.items():
            row = LeiRegistry().generate(country, DEFAULT_OPTIONS, rng)
            assert row.valid
            assert row.code.startswith(lou + "00")
            assert len(row.code) == 20

    def test_lei_random_and_known(self, rng):
        row = LeiRegistry().generate(None, DEFAULT_OPTIONS, rng)
        assert row.lou in LOUS
        assert LeiRegistry().validate("213800D1EI4B9WTWWD28")
        assert not LeiRegistry().validate("213800D1EI4B9WTWWD29")


class TestSupport:
    def test_complete_returns_none_when_nothing_fits(self):
        assert complete(lambda check: "1" + check, lambda value: False) is None

    def test_complete_searches_in_order(self):
        assert complete(lambda check: "7" + check, lambda value: value.endswith("3")) == "73"

    def test_random_date_respects_year(self, rng):
        assert random_date(rng, 2000, (1900, 2099)).year == 2000
        assert random_date(rng, 1800, (1900, 2099)) is None
