"""
National personal ID registry.

Every supported scheme encodes a date of birth and a gender, so besides
generation and validation this registry can `parse` a code back into those
fields. Check characters are completed against python-stdnum's validators.
"""

from __future__ import annotations

import abc
import datetime
import random
from typing import Callable, Dict, List, Optional, Tuple

from stdnum.bg import egn
from stdnum.ee import ik
from stdnum.fi import hetu
from stdnum.lt import asmens
from stdnum.pl import pesel

from mockbanker.domain.models import DomainOption, Gender, GenerationOptions
from mockbanker.domain.rows import PersonalIdRow
from mockbanker.registries._support import DIGITS, compact, complete, draw, random_date
from mockbanker.registries.abstract import CountryScopedRegistry
from mockbanker.registries.countries import country_name

Decoded = Tuple[datetime.date, Gender]


def _yymmdd(dob: datetime.date, month_offset: int = 0) -> str:
    return f"{dob.year % 100:02d}{dob.month + month_offset:02d}{dob.day:02d}"


class _Scheme(abc.ABC):
    """One country's personal code layout."""

    description: str
    year_range: Tuple[int, int]
    check_alphabet: str = DIGITS
    is_valid: Callable[[str], bool]

    @abc.abstractmethod
    def body(self, rng: random.Random, dob: datetime.date, gender: Gender) -> str:
        """Everything but the trailing check character."""

    @abc.abstractmethod
    def decode(self, code: str) -> Decoded:
        """Birth date and gender; raises ValueError on a malformed code."""

    def generate(self, rng: random.Random, dob: datetime.date, gender: Gender) -> Optional[str]:
        body = self.body(rng, dob, gender)
        return complete(lambda check: body + check, self.is_valid, self.check_alphabet)


class _BalticScheme(_Scheme):
    """Estonian isikukood and Lithuanian asmens kodas share one layout."""

    year_range = (1800, 2099)
    _CENTURY_DIGIT = {1800: 1, 1900: 3, 2000: 5}

    def __init__(self, description: str, is_valid: Callable[[str], bool]) -> None:
        self.description = description
        self.is_valid = is_valid

    def body(self, rng: random.Random, dob: datetime.date, gender: Gender) -> str:
        first = self._CENTURY_DIGIT[dob.year // 100 * 100] + (1 if gender == "female" else 0)
        return f"{first}{_yymmdd(dob)}{draw(rng, DIGITS, 3)}"

    def decode(self, code: str) -> Decoded:
        if len(code) != 11 or not code.isdigit() or code[0] not in "123456":
            raise ValueError("not a GYYMMDDSSSC code")
        first = int(code[0])
        century = 1800 + (first - 1) // 2 * 100
        dob = datetime.date(century + int(code[1:3]), int(code[3:5]), int(code[5:7]))
        return dob, "male" if first % 2 else "female"


class _PeselScheme(_Scheme):
    description = "PESEL (11 digits, YYMMDDZZZXC)"
    year_range = (1800, 2299)
    is_valid = staticmethod(pesel.is_valid)
    _MONTH_OFFSET = {1800: 80, 1900: 0, 2000: 20, 2100: 40, 2200: 60}

    def body(self, rng: random.Random, dob: datetime.date, gender: Gender) -> str:
        offset = self._MONTH_OFFSET[dob.year // 100 * 100]
        sex = rng.choice("13579" if gender == "male" else "02468")
        return f"{_yymmdd(dob, offset)}{draw(rng, DIGITS, 3)}{sex}"

    def decode(self, code: str) -> Decoded:
        if len(code) != 11 or not code.isdigit():
            raise ValueError("not an 11-digit PESEL")
        month_field = int(code[2:4])
        offset = month_field // 20 * 20
        century = {offset_: century for century, offset_ in self._MONTH_OFFSET.items()}[offset]
        dob = datetime.date(century + int(code[0:2]), month_field - offset, int(code[4:6]))
        return dob, "male" if int(code[9]) % 2 else "female"


class _EgnScheme(_Scheme):
    description = "EGN (10 digits, YYMMDDSSGC)"
    year_range = (1800, 2099)
    is_valid = staticmethod(egn.is_valid)
    _MONTH_OFFSET = {1800: 20, 1900: 0, 2000: 40}

    def body(self, rng: random.Random, dob: datetime.date, gender: Gender) -> str:
        offset = self._MONTH_OFFSET[dob.year // 100 * 100]
        sex = rng.choice("02468" if gender == "male" else "13579")
        return f"{_yymmdd(dob, offset)}{draw(rng, DIGITS, 2)}{sex}"

    def decode(self, code: str) -> Decoded:
        if len(code) != 10 or not code.isdigit():
            raise ValueError("not a 10-digit EGN")
        month = int(code[2:4])
        if month > 40:
            century, month = 2000, month - 40
        elif month > 20:
            century, month = 1800, month - 20
        else:
            century = 1900
        dob = datetime.date(century + int(code[0:2]), month, int(code[4:6]))
        return dob, "female" if int(code[8]) % 2 else "male"


class _HetuScheme(_Scheme):
    description = "Henkilötunnus (DDMMYYCZZZQ)"
    year_range = (1800, 2099)
    check_alphabet = "0123456789ABCDEFHJKLMNPRSTUVWXY"
    is_valid = staticmethod(hetu.is_valid)
    _SIGN = {1800: "+", 1900: "-", 2000: "A"}
    _CENTURY = {"+": 1800, "-": 1900, "Y": 1900, "X": 1900, "W": 1900, "V": 1900, "U": 1900,
                "A": 2000, "B": 2000, "C": 2000, "D": 2000, "E": 2000, "F": 2000}

    def body(self, rng: random.Random, dob: datetime.date, gender: Gender) -> str:
        individual = rng.randrange(3, 900, 2) if gender == "male" else rng.randrange(2, 900, 2)
        sign = self._SIGN[dob.year // 100 * 100]
        return f"{dob.day:02d}{dob.month:02d}{dob.year % 100:02d}{sign}{individual:03d}"

    def decode(self, code: str) -> Decoded:
        if len(code) != 11 or code[6] not in self._CENTURY or not code[7:10].isdigit():
            raise ValueError("not a DDMMYYCZZZQ code")
        dob = datetime.date(self._CENTURY[code[6]] + int(code[4:6]), int(code[2:4]), int(code[0:2]))
        return dob, "male" if int(code[7:10]) % 2 else "female"


SCHEMES: Dict[str, _Scheme] = {
    "BG": _EgnScheme(),
    "EE": _BalticScheme("Isikukood (11 digits, GYYMMDDSSSC)", ik.is_valid),
    "FI": _HetuScheme(),
    "LT": _BalticScheme("Asmens kodas (11 digits, GYYMMDDSSSC)", asmens.is_valid),
    "PL": _PeselScheme(),
}


class PersonalIdRegistry(CountryScopedRegistry):
    name = "personal_id"

    def list_options(self) -> List[DomainOption]:
        return [
            DomainOption(code=code, label=country_name(code), description=SCHEMES[code].description)
            for code in SCHEMES
        ]

    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[PersonalIdRow]:
        scheme = SCHEMES.get((selector or "").upper())
        if scheme is None:
            return None
        dob = random_date(rng, options.year, scheme.year_range)
        if dob is None:
            return None
        gender: Gender = options.gender or rng.choice(("male", "female"))
        code = scheme.generate(rng, dob, gender)
        if code is None:
            return None
        return self.parse(selector, code)

    def parse(self, country: Optional[str], value: str) -> Optional[PersonalIdRow]:
        """
        Decode birth date and gender.

        None when the country is unsupported or the value does not have the
        scheme's shape; a well-shaped code with a bad check digit parses with
        `valid=False`.
        """
        scheme = SCHEMES.get((country or "").upper())
        if scheme is None:
            return None
        code = compact(value, strip=(" ",))
        try:
            dob, gender = scheme.decode(code)
        except (ValueError, KeyError):
            return None
        return PersonalIdRow(code=code, gender=gender, dob=dob.isoformat(), valid=scheme.is_valid(code))

    def validate(self, country: str, value: str) -> Optional[bool]:
        scheme = SCHEMES.get(country.upper())
        if scheme is None:
            return None
        return scheme.is_valid(compact(value, strip=(" ",)))


__all__ = ["SCHEMES", "PersonalIdRegistry"]
