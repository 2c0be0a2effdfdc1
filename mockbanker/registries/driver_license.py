"""
Driver's license registry.

Licence numbers carry no public checksum; validation is a per-country (for
the US, per-state) format check.
"""

from __future__ import annotations

import random
from typing import Dict, List, NamedTuple, Optional

from mockbanker.domain.models import DomainOption, GenerationOptions
from mockbanker.domain.rows import DriverLicenseRow
from mockbanker.registries._support import (
    ALNUM,
    DIGITS,
    LETTERS,
    Pattern,
    compact,
    draw_pattern,
    pattern_regex,
)
from mockbanker.registries.abstract import CountryScopedRegistry
from mockbanker.registries.countries import country_name


class LicenseFormat(NamedTuple):
    name: str
    description: str
    pattern: Pattern


FORMATS: Dict[str, LicenseFormat] = {
    "DE": LicenseFormat("Führerschein", "11 alphanumeric characters", ((ALNUM, 11),)),
    "EE": LicenseFormat("Juhiluba", "2 letters + 6 digits", ((LETTERS, 2), (DIGITS, 6))),
    "FR": LicenseFormat("Permis de conduire", "12 digits", ((DIGITS, 12),)),
    "GB": LicenseFormat(
        "DVLA Driving Licence",
        "16 characters (surname, birth date, initials, check)",
        ((ALNUM, 5), (DIGITS, 6), (ALNUM, 2), (DIGITS, 1), (LETTERS, 2)),
    ),
    "US": LicenseFormat("Driver License", "State-specific format", ()),
}

US_STATES: Dict[str, Pattern] = {
    "CA": ((LETTERS, 1), (DIGITS, 7)),
    "FL": ((LETTERS, 1), (DIGITS, 12)),
    "IL": ((LETTERS, 1), (DIGITS, 11)),
    "NY": ((DIGITS, 9),),
    "TX": ((DIGITS, 8),),
}

_COUNTRY_RE = {code: pattern_regex(fmt.pattern) for code, fmt in FORMATS.items() if fmt.pattern}
_STATE_RE = {state: pattern_regex(pattern) for state, pattern in US_STATES.items()}


class DriverLicenseRegistry(CountryScopedRegistry):
    name = "driver_license"

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
    ) -> Optional[DriverLicenseRow]:
        country = (selector or "").upper()
        fmt = FORMATS.get(country)
        if fmt is None:
            return None
        state = None
        pattern = fmt.pattern
        if country == "US":
            state = rng.choice(sorted(US_STATES))
            pattern = US_STATES[state]
        code = draw_pattern(rng, pattern)
        return DriverLicenseRow(
            code=code,
            name=fmt.name,
            country=country,
            state=state,
            valid=bool(self.validate(country, code)),
        )

    def validate(self, country: str, value: str) -> Optional[bool]:
        country = country.upper()
        if country not in FORMATS:
            return None
        code = compact(value)
        if country == "US":
            return any(regex.match(code) for regex in _STATE_RE.values())
        return bool(_COUNTRY_RE[country].match(code))


__all__ = ["FORMATS", "US_STATES", "LicenseFormat", "DriverLicenseRegistry"]
