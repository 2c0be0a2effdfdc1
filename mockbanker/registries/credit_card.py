"""
Credit card registry: brand IIN prefixes plus a Luhn check digit.
"""

from __future__ import annotations

import random
from typing import Dict, List, NamedTuple, Optional, Tuple

from stdnum import luhn

from mockbanker.domain.models import DomainOption, GenerationOptions
from mockbanker.domain.rows import CreditCardRow
from mockbanker.registries._support import DIGITS, compact, draw
from mockbanker.registries.abstract import CountryFreeRegistry


class Brand(NamedTuple):
    label: str
    prefixes: Tuple[str, ...]
    length: int


BRANDS: Dict[str, Brand] = {
    "visa": Brand("Visa", ("4",), 16),
    "mastercard": Brand("Mastercard", ("51", "52", "53", "54", "55", "2221", "2720"), 16),
    "amex": Brand("American Express", ("34", "37"), 15),
    "discover": Brand("Discover", ("6011", "644", "65"), 16),
    "jcb": Brand("JCB", ("3528", "3550", "3589"), 16),
    "diners": Brand("Diners Club", ("300", "305", "36", "38"), 14),
}


def generate_card(brand_id: str, rng: random.Random) -> Optional[str]:
    brand = BRANDS.get(brand_id.lower())
    if brand is None:
        return None
    prefix = rng.choice(brand.prefixes)
    body = prefix + draw(rng, DIGITS, brand.length - len(prefix) - 1)
    return body + luhn.calc_check_digit(body)


def validate_card(value: str) -> bool:
    number = compact(value)
    return number.isdigit() and 12 <= len(number) <= 19 and luhn.is_valid(number)


class CreditCardRegistry(CountryFreeRegistry):
    name = "credit_card"

    def list_options(self) -> List[DomainOption]:
        return [DomainOption(code=code, label=brand.label) for code, brand in BRANDS.items()]

    def list_brands(self) -> List[DomainOption]:
        return self.list_options()

    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[CreditCardRow]:
        brand_id = selector or rng.choice(list(BRANDS))
        number = generate_card(brand_id, rng)
        if number is None:
            return None
        return CreditCardRow(
            number=number,
            brand=BRANDS[brand_id.lower()].label,
            valid=validate_card(number),
        )

    def validate(self, value: str) -> bool:
        return validate_card(value)


__all__ = ["BRANDS", "Brand", "CreditCardRegistry", "generate_card", "validate_card"]
