"""Passport number registry (format checks only)."""

from __future__ import annotations

import random
from typing import Dict, List, NamedTuple, Optional

from mockbanker.domain.models import DomainOption, GenerationOptions
from mockbanker.domain.rows import PassportRow
from mockbanker.registries._support import (
    DIGITS,
    LETTERS,
    Pattern,
    compact,
    draw_pattern,
    pattern_regex,
)
from mockbanker.registries.abstract import CountryScopedRegistry
from mockbanker.registries.countries import country_name

# German passport serials avoid vowels and look-alike letters.
_DE_CHARS = "CFGHJKLMNPRTVWXYZ0123456789"


class PassportFormat(NamedTuple):
    name: str
    description: str
    pattern: Pattern


FORMATS: Dict[str, PassportFormat] = {
    "DE": PassportFormat("Reisepass", "C + 8 characters", (("C", 1), (_DE_CHARS, 8))),
    "EE": PassportFormat("Eesti pass", "1 letter + 7 digits", ((LETTERS, 1), (DIGITS, 7))),
    "FR": PassportFormat("Passeport", "2 digits + 2 letters + 5 digits", ((DIGITS, 2), (LETTERS, 2), (DIGITS, 5))),
    "GB": PassportFormat("British Passport", "9 digits", ((DIGITS, 9),)),
    "US": PassportFormat("U.S. Passport", "9 digits", ((DIGITS, 9),)),
}

_FORMAT_RE = {code: pattern_regex(fmt.pattern) for code, fmt in FORMATS.items()}


class PassportRegistry(CountryScopedRegistry):
    name = "passport"

    def list_options(self) -> List[DomainOption]:
        return [
            DomainOption(code=code, label=country_name(code), description=fmt.description)
            for code, fmt in FORMATS.items()
        ]

    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[PassportRow]:
        country = (selector or "").upper()
        fmt = FORMATS.get(country)
        if fmt is None:
            return None
        code = draw_pattern(rng, fmt.pattern)
        return PassportRow(code=code, name=fmt.name, country=country, valid=bool(self.validate(country, code)))

    def validate(self, country: str, value: str) -> Optional[bool]:
        regex = _FORMAT_RE.get(country.upper())
        if regex is None:
            return None
        return bool(regex.match(compact(value)))


__all__ = ["FORMATS", "PassportFormat", "PassportRegistry"]
