"""
Tax identification number registry.

Some countries issue different numbers to individuals and companies (Brazil's
CPF/CNPJ, Portugal's NIF ranges, India's PAN holder letter); the generated row
records which holder type it encodes.
"""

from __future__ import annotations

import random
from typing import Callable, Dict, List, NamedTuple, Optional

from stdnum.br import cnpj, cpf
from stdnum.de import idnr
from stdnum.es import dni
from stdnum.in_ import pan
from stdnum.pt import nif

from mockbanker.domain.models import DomainOption, GenerationOptions, HolderType
from mockbanker.domain.rows import TaxIdRow
from mockbanker.registries._support import DIGITS, LETTERS, compact, complete, draw, first_valid
from mockbanker.registries.abstract import CountryScopedRegistry
from mockbanker.registries.countries import country_name

_MAX_DRAWS = 20
_DNI_LETTERS = "TRWAGMYFPDXBNJZSQVHLCKE"


class TaxScheme(NamedTuple):
    name: str
    build: Callable[[random.Random], Optional[str]]
    is_valid: Callable[[str], bool]


def _cpf(rng: random.Random) -> Optional[str]:
    body = draw(rng, DIGITS, 9)
    return complete(lambda check: body + check, cpf.is_valid, width=2)


def _cnpj(rng: random.Random) -> Optional[str]:
    body = str(rng.randint(1, 9)) + draw(rng, DIGITS, 7) + "0001"
    return complete(lambda check: body + check, cnpj.is_valid, width=2)


def _idnr(rng: random.Random) -> Optional[str]:
    # First ten digits: one digit appears twice, one is missing, the rest once.
    digits = rng.sample(DIGITS, 9)
    digits.append(rng.choice(digits))
    rng.shuffle(digits)
    if digits[0] == "0":
        return None
    body = "".join(digits)
    return complete(lambda check: body + check, idnr.is_valid)


def _dni(rng: random.Random) -> Optional[str]:
    body = draw(rng, DIGITS, 8)
    return complete(lambda check: body + check, dni.is_valid, alphabet=_DNI_LETTERS)


def _pan(holder: str) -> Callable[[random.Random], Optional[str]]:
    def build(rng: random.Random) -> Optional[str]:
        code = f"{draw(rng, LETTERS, 3)}{holder}{rng.choice(LETTERS)}{rng.randint(1, 9999):04d}{rng.choice(LETTERS)}"
        return code if pan.is_valid(code) else None

    return build


def _nif(leading: str) -> Callable[[random.Random], Optional[str]]:
    def build(rng: random.Random) -> Optional[str]:
        body = rng.choice(leading) + draw(rng, DIGITS, 7)
        return complete(lambda check: body + check, nif.is_valid)

    return build


SCHEMES: Dict[str, Dict[HolderType, TaxScheme]] = {
    "BR": {
        "individual": TaxScheme("CPF", _cpf, cpf.is_valid),
        "company": TaxScheme("CNPJ", _cnpj, cnpj.is_valid),
    },
    "DE": {"individual": TaxScheme("Steuer-IdNr", _idnr, idnr.is_valid)},
    "ES": {"individual": TaxScheme("DNI", _dni, dni.is_valid)},
    "IN": {
        "individual": TaxScheme("PAN", _pan("P"), pan.is_valid),
        "company": TaxScheme("PAN", _pan("C"), pan.is_valid),
    },
    "PT": {
        "individual": TaxScheme("NIF", _nif("12"), nif.is_valid),
        "company": TaxScheme("NIF", _nif("5"), nif.is_valid),
    },
}


class TaxIdRegistry(CountryScopedRegistry):
    name = "tax_id"

    def list_options(self) -> List[DomainOption]:
        return [
            DomainOption(
                code=code,
                label=country_name(code),
                description=" / ".join(sorted({scheme.name for scheme in schemes.values()})),
            )
            for code, schemes in SCHEMES.items()
        ]

    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[TaxIdRow]:
        country = (selector or "").upper()
        schemes = SCHEMES.get(country)
        if schemes is None:
            return None
        holder = options.holder_type or rng.choice(sorted(schemes))
        scheme = schemes.get(holder)
        if scheme is None:
            return None
        code = first_valid(_MAX_DRAWS, lambda: scheme.build(rng))
        if code is None:
            return None
        return TaxIdRow(
            code=code,
            name=scheme.name,
            holder_type=holder,
            country=country,
            valid=scheme.is_valid(code),
        )

    def validate(self, country: str, value: str) -> Optional[bool]:
        schemes = SCHEMES.get(country.upper())
        if schemes is None:
            return None
        code = compact(value)
        return any(scheme.is_valid(code) for scheme in schemes.values())


__all__ = ["SCHEMES", "TaxScheme", "TaxIdRegistry"]
