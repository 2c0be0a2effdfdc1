"""
IBAN registry (ISO 13616, mod-97 check digits).

BBAN bodies are drawn from each country's published structure; the two check
digits come from `stdnum.iban.calc_check_digits` and validity from
`stdnum.iban.is_valid`, which also enforces the per-country BBAN layout.
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional

from stdnum import iban as stdnum_iban

from mockbanker.domain.models import DomainOption, GenerationOptions
from mockbanker.domain.rows import IbanRow
from mockbanker.registries._support import ALNUM, DIGITS, LETTERS, Pattern, compact, draw_pattern
from mockbanker.registries.abstract import CountryFreeRegistry
from mockbanker.registries.countries import country_name, sorted_by_name

BBAN_STRUCTURES: Dict[str, Pattern] = {
    "AT": ((DIGITS, 5), (DIGITS, 11)),
    "CH": ((DIGITS, 5), (ALNUM, 12)),
    "DE": ((DIGITS, 8), (DIGITS, 10)),
    "DK": ((DIGITS, 4), (DIGITS, 9), (DIGITS, 1)),
    "FI": ((DIGITS, 3), (DIGITS, 11)),
    "GB": ((LETTERS, 4), (DIGITS, 6), (DIGITS, 8)),
    "IE": ((LETTERS, 4), (DIGITS, 6), (DIGITS, 8)),
    "LI": ((DIGITS, 5), (ALNUM, 12)),
    "LU": ((DIGITS, 3), (ALNUM, 13)),
    "NL": ((LETTERS, 4), (DIGITS, 10)),
}


def supported_countries() -> List[str]:
    """IBAN countries, ordered by country name."""
    return sorted_by_name(BBAN_STRUCTURES)


def generate_iban(country: Optional[str], rng: random.Random) -> Optional[str]:
    """Raw (unspaced) IBAN for `country`, or a random supported country."""
    if country is None:
        country = rng.choice(sorted(BBAN_STRUCTURES))
    country = country.upper()
    structure = BBAN_STRUCTURES.get(country)
    if structure is None:
        return None
    bban = draw_pattern(rng, structure)
    check = stdnum_iban.calc_check_digits(f"{country}00{bban}")
    return f"{country}{check}{bban}"


def validate_iban(value: str) -> bool:
    return stdnum_iban.is_valid(compact(value))


def format_iban(value: str) -> str:
    """Group into 4-character blocks separated by single spaces."""
    return stdnum_iban.format(compact(value))


class IbanRegistry(CountryFreeRegistry):
    name = "iban"

    def list_options(self) -> List[DomainOption]:
        return [
            DomainOption(code=code, label=country_name(code))
            for code in supported_countries()
        ]

    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[IbanRow]:
        code = generate_iban(selector, rng)
        if code is None:
            return None
        return IbanRow(raw=code, formatted=format_iban(code), valid=validate_iban(code))

    def validate(self, value: str) -> bool:
        return validate_iban(value)


__all__ = [
    "BBAN_STRUCTURES",
    "IbanRegistry",
    "supported_countries",
    "generate_iban",
    "validate_iban",
    "format_iban",
]
