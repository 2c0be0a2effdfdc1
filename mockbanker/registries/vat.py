"""
EU VAT number registry. Values carry their ISO country prefix, so validation
needs no separately chosen country (`stdnum.eu.vat`).
"""

from __future__ import annotations

import random
from typing import Callable, Dict, List, Optional

from stdnum import luhn
from stdnum.eu import vat

from mockbanker.domain.models import DomainOption, GenerationOptions
from mockbanker.domain.rows import VatRow
from mockbanker.registries._support import DIGITS, compact, complete, draw, first_valid
from mockbanker.registries.abstract import CountryFreeRegistry
from mockbanker.registries.countries import country_name

_MAX_DRAWS = 20


def validate_vat(value: str) -> bool:
    return vat.is_valid(compact(value))


def _suffix(prefix: str, width: int = 1) -> Callable[[random.Random, str], Optional[str]]:
    """Builder for numbers whose check digits trail a random body."""

    def build(rng: random.Random, body: str) -> Optional[str]:
        return complete(lambda check: f"{prefix}{body}{check}", validate_vat, width=width)

    return build


def _fr(rng: random.Random, body: str) -> Optional[str]:
    # FR keys precede a Luhn-valid SIREN.
    siren = body + luhn.calc_check_digit(body)
    return complete(lambda key: f"FR{key}{siren}", validate_vat, width=2)


# country -> (body generator, completion)
_BUILDERS: Dict[str, tuple] = {
    "AT": (lambda rng: draw(rng, DIGITS, 7), _suffix("ATU")),
    "BE": (lambda rng: "0" + str(rng.randint(1, 9)) + draw(rng, DIGITS, 6), _suffix("BE", width=2)),
    "DE": (lambda rng: str(rng.randint(1, 9)) + draw(rng, DIGITS, 7), _suffix("DE")),
    "DK": (lambda rng: str(rng.randint(1, 9)) + draw(rng, DIGITS, 6), _suffix("DK")),
    "EE": (lambda rng: "10" + draw(rng, DIGITS, 6), _suffix("EE")),
    "FI": (lambda rng: draw(rng, DIGITS, 7), _suffix("FI")),
    "FR": (lambda rng: str(rng.randint(1, 9)) + draw(rng, DIGITS, 7), _fr),
    "PL": (lambda rng: str(rng.randint(1, 9)) + draw(rng, DIGITS, 8), _suffix("PL")),
}


def generate_vat(country: str, rng: random.Random) -> Optional[str]:
    builder = _BUILDERS.get(country.upper())
    if builder is None:
        return None
    make_body, finish = builder
    return first_valid(_MAX_DRAWS, lambda: finish(rng, make_body(rng)))


class VatRegistry(CountryFreeRegistry):
    name = "vat"

    def list_options(self) -> List[DomainOption]:
        return [DomainOption(code=code, label=country_name(code)) for code in _BUILDERS]

    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[VatRow]:
        country = selector.upper() if selector else rng.choice(sorted(_BUILDERS))
        code = generate_vat(country, rng)
        if code is None:
            return None
        return VatRow(
            code=code,
            country_code=country,
            country_name=country_name(country),
            valid=validate_vat(code),
        )

    def validate(self, value: str) -> bool:
        return validate_vat(value)


__all__ = ["VatRegistry", "generate_vat", "validate_vat"]
