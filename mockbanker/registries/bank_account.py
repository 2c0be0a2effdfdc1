"""
Domestic bank account registry.

US accounts pair a free-form account number with an ABA routing number
(`stdnum.us.rtn`); Norwegian kontonummer carry their own MOD 11 check digit
(`stdnum.no.kontonr`).
"""

from __future__ import annotations

import random
import re
from typing import Dict, List, Optional

from stdnum.no import kontonr
from stdnum.us import rtn

from mockbanker.domain.models import DomainOption, GenerationOptions
from mockbanker.domain.rows import BankAccountRow
from mockbanker.registries._support import DIGITS, compact, complete, draw, first_valid
from mockbanker.registries.abstract import CountryScopedRegistry
from mockbanker.registries.countries import country_name

_US_ACCOUNT_RE = re.compile(r"^\d{4,17}$")
_US_PAIR_RE = re.compile(r"^(\d{9})[\s/:-]+(\d{4,17})$")
_MAX_DRAWS = 20

DESCRIPTIONS: Dict[str, str] = {
    "NO": "Kontonummer (11 digits, MOD 11)",
    "US": "Account number with ABA routing number",
}


def _us_routing(rng: random.Random) -> Optional[str]:
    # Federal Reserve district prefixes 01-12.
    body = f"{rng.randint(1, 12):02d}{draw(rng, DIGITS, 6)}"
    return complete(lambda check: body + check, rtn.is_valid)


def _us_account(rng: random.Random) -> str:
    return str(rng.randint(1, 9)) + draw(rng, DIGITS, rng.randint(7, 11))


def _no_account(rng: random.Random) -> Optional[str]:
    body = str(rng.randint(1, 9)) + draw(rng, DIGITS, 9)
    return complete(lambda check: body + check, kontonr.is_valid)


def validate_us(value: str) -> bool:
    """
    A bare account number (no check digit exists) or `routing account`.
    """
    value = value.strip()
    pair = _US_PAIR_RE.match(value)
    if pair:
        return rtn.is_valid(pair.group(1)) and bool(_US_ACCOUNT_RE.match(pair.group(2)))
    return bool(_US_ACCOUNT_RE.match(compact(value)))


class BankAccountRegistry(CountryScopedRegistry):
    name = "bank_account"

    def list_options(self) -> List[DomainOption]:
        return [
            DomainOption(code=code, label=country_name(code), description=DESCRIPTIONS[code])
            for code in DESCRIPTIONS
        ]

    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[BankAccountRow]:
        country = (selector or "").upper()
        if country == "US":
            routing = first_valid(_MAX_DRAWS, lambda: _us_routing(rng))
            if routing is None:
                return None
            account = _us_account(rng)
            return BankAccountRow(account=account, routing=routing, valid=validate_us(account))
        if country == "NO":
            account = first_valid(_MAX_DRAWS, lambda: _no_account(rng))
            if account is None:
                return None
            return BankAccountRow(account=account, routing=account[:4], valid=kontonr.is_valid(account))
        return None

    def validate(self, country: str, value: str) -> Optional[bool]:
        country = country.upper()
        if country == "US":
            return validate_us(value)
        if country == "NO":
            return kontonr.is_valid(compact(value))
        return None


__all__ = ["BankAccountRegistry", "validate_us"]
