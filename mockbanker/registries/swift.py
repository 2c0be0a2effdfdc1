"""
SWIFT/BIC registry (ISO 9362): 4-letter institution, country, location and
an optional 3-character branch.
"""

from __future__ import annotations

import random
from typing import List, Optional

from stdnum import bic

from mockbanker.domain.models import DomainOption, GenerationOptions
from mockbanker.domain.rows import SwiftRow
from mockbanker.registries._support import ALNUM, LETTERS, compact, draw
from mockbanker.registries.abstract import CountryFreeRegistry
from mockbanker.registries.countries import country_name
from mockbanker.registries.iban import supported_countries

# A "0" in the second location character marks a test BIC.
_LOCATION_TAIL = ALNUM.replace("0", "")


def validate_bic(value: str) -> bool:
    return bic.is_valid(compact(value))


class SwiftRegistry(CountryFreeRegistry):
    name = "swift"

    def list_options(self) -> List[DomainOption]:
        return [DomainOption(code=code, label=country_name(code)) for code in supported_countries()]

    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[SwiftRow]:
        countries = supported_countries()
        country = selector.upper() if selector else rng.choice(countries)
        if country not in countries:
            return None
        bank = draw(rng, LETTERS, 4)
        location = rng.choice(ALNUM) + rng.choice(_LOCATION_TAIL)
        branch = rng.choice(("", "XXX", draw(rng, ALNUM, 3)))
        code = f"{bank}{country}{location}{branch}"
        return SwiftRow(code=code, bank=bank, country=country, location=location, valid=validate_bic(code))

    def validate(self, value: str) -> bool:
        return validate_bic(value)


__all__ = ["SwiftRegistry", "validate_bic"]
