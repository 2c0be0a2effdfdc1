"""
Legal Entity Identifier registry (ISO 17442).

A LEI is a 4-character LOU prefix, two reserved zeros, a 12-character entity
part and two ISO 7064 mod 97-10 check digits.
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional

from stdnum import lei
from stdnum.iso7064 import mod_97_10

from mockbanker.domain.models import DomainOption, GenerationOptions
from mockbanker.domain.rows import LeiRow
from mockbanker.registries._support import ALNUM, compact, draw
from mockbanker.registries.abstract import CountryFreeRegistry
from mockbanker.registries.countries import country_name

# LOU prefix -> country of the issuing operating unit
LOUS: Dict[str, str] = {
    "5299": "DE",
    "9695": "FR",
    "2138": "GB",
    "8156": "IT",
    "5493": "US",
}


def generate_lei(lou: str, rng: random.Random) -> str:
    body = f"{lou}00{draw(rng, ALNUM, 12)}"
    return body + mod_97_10.calc_check_digits(body)


def validate_lei(value: str) -> bool:
    return lei.is_valid(compact(value))


class LeiRegistry(CountryFreeRegistry):
    name = "lei"

    def list_options(self) -> List[DomainOption]:
        return [
            DomainOption(code=country, label=country_name(country), description=f"LOU {lou}")
            for lou, country in LOUS.items()
        ]

    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[LeiRow]:
        if selector is None:
            lou = rng.choice(sorted(LOUS))
        else:
            matches = [prefix for prefix, country in LOUS.items() if country == selector.upper()]
            if not matches:
                return None
            lou = matches[0]
        code = generate_lei(lou, rng)
        return LeiRow(code=code, lou=lou, country_code=LOUS[lou], valid=validate_lei(code))

    def validate(self, value: str) -> bool:
        return validate_lei(value)


__all__ = ["LOUS", "LeiRegistry", "generate_lei", "validate_lei"]
