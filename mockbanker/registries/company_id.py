"""
Company registration number registry.
"""

from __future__ import annotations

import random
from typing import Callable, Dict, List, NamedTuple, Optional

from stdnum.au import acn
from stdnum.dk import cvr
from stdnum.ee import registrikood
from stdnum.fi import ytunnus
from stdnum.fr import siren
from stdnum.no import orgnr

from mockbanker.domain.models import DomainOption, GenerationOptions
from mockbanker.domain.rows import CompanyIdRow
from mockbanker.registries._support import DIGITS, compact, complete, draw, first_valid
from mockbanker.registries.abstract import CountryScopedRegistry
from mockbanker.registries.countries import country_name

_MAX_DRAWS = 20


class CompanyScheme(NamedTuple):
    name: str
    description: str
    leading: str
    length: int
    is_valid: Callable[[str], bool]


SCHEMES: Dict[str, CompanyScheme] = {
    "AU": CompanyScheme("ACN", "Australian Company Number (9 digits)", DIGITS, 9, acn.is_valid),
    "DK": CompanyScheme("CVR-nummer", "Central Business Register (8 digits, MOD 11)", "123456789", 8, cvr.is_valid),
    "EE": CompanyScheme("Registrikood", "Business registry code (8 digits)", "1789", 8, registrikood.is_valid),
    "FI": CompanyScheme("Y-tunnus", "Business ID (7 digits + check)", DIGITS, 8, ytunnus.is_valid),
    "FR": CompanyScheme("SIREN", "Company identifier (9 digits, Luhn)", "123456789", 9, siren.is_valid),
    "NO": CompanyScheme("Organisasjonsnummer", "Organisation number (9 digits, MOD 11)", "89", 9, orgnr.is_valid),
}


def _draw_code(scheme: CompanyScheme, rng: random.Random) -> Optional[str]:
    body = rng.choice(scheme.leading) + draw(rng, DIGITS, scheme.length - 2)
    return complete(lambda check: body + check, scheme.is_valid)


class CompanyIdRegistry(CountryScopedRegistry):
    name = "company_id"

    def list_options(self) -> List[DomainOption]:
        return [
            DomainOption(code=code, label=country_name(code), description=scheme.description)
            for code, scheme in SCHEMES.items()
        ]

    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[CompanyIdRow]:
        scheme = SCHEMES.get((selector or "").upper())
        if scheme is None:
            return None
        code = first_valid(_MAX_DRAWS, lambda: _draw_code(scheme, rng))
        if code is None:
            return None
        return CompanyIdRow(code=code, name=scheme.name, valid=scheme.is_valid(code))

    def validate(self, country: str, value: str) -> Optional[bool]:
        scheme = SCHEMES.get(country.upper())
        if scheme is None:
            return None
        return scheme.is_valid(compact(value))


__all__ = ["SCHEMES", "CompanyScheme", "CompanyIdRegistry"]
