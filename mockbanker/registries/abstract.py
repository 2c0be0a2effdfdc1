"""
Registry interfaces for MockBanker identifier domains.

Each identifier family (IBAN, personal ID, credit card, ...) is served by one
registry. Registries are stateless: they list their selectable options, draw
values from a caller-supplied `random.Random`, and validate values. A registry
signals "cannot do this" by returning None, never by raising.
"""

from __future__ import annotations

import abc
import random
from typing import List, Optional, Protocol, runtime_checkable

from mockbanker.domain.models import DomainOption, GenerationOptions
from mockbanker.domain.rows import ResultRow


@runtime_checkable
class IdentifierRegistry(Protocol):
    """
    Common interface all identifier registries implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    country_scoped : bool
        Whether validity depends on a country chosen next to the value.
    """

    name: str
    country_scoped: bool

    def list_options(self) -> List[DomainOption]:
        """Selectable countries or brands, in a stable order."""
        ...

    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[ResultRow]:
        """
        Draw one value.

        Returns None when `selector` is unsupported or `options` cannot be
        honoured. Given the same `rng` state the result is reproducible.
        """
        ...

    def check(self, value: str, country: Optional[str] = None) -> Optional[bool]:
        """
        Uniform validation entry point.

        None means the country is not supported by a country-scoped registry.
        """
        ...


class AbstractRegistry(abc.ABC):
    """
    ABC helper for class-based registries.

    Subclasses set `name` and implement `list_options` and `generate`, plus
    the validation form that fits them (see the two subclasses below).
    """

    name: str
    country_scoped: bool = False

    @abc.abstractmethod
    def list_options(self) -> List[DomainOption]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def generate(
        self,
        selector: Optional[str],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Optional[ResultRow]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def check(self, value: str, country: Optional[str] = None) -> Optional[bool]:
        raise NotImplementedError  # pragma: no cover - interface only

    def option_codes(self) -> List[str]:
        return [option.code for option in self.list_options()]


class CountryFreeRegistry(AbstractRegistry):
    """Registry whose values carry their own country (or none at all)."""

    def list_countries(self) -> List[DomainOption]:
        return self.list_options()

    @abc.abstractmethod
    def validate(self, value: str) -> bool:  # pragma: no cover - interface only
        raise NotImplementedError

    def check(self, value: str, country: Optional[str] = None) -> Optional[bool]:
        return self.validate(value)


class CountryScopedRegistry(AbstractRegistry):
    """Registry whose validation rules depend on a separately chosen country."""

    country_scoped = True

    def list_countries(self) -> List[DomainOption]:
        return self.list_options()

    def supports(self, country: Optional[str]) -> bool:
        return country is not None and country.strip().upper() in self.option_codes()

    @abc.abstractmethod
    def validate(self, country: str, value: str) -> Optional[bool]:  # pragma: no cover
        """True/False for a supported country, None otherwise."""
        raise NotImplementedError

    def check(self, value: str, country: Optional[str] = None) -> Optional[bool]:
        if country is None:
            return None
        return self.validate(country, value)


__all__ = [
    "IdentifierRegistry",
    "AbstractRegistry",
    "CountryFreeRegistry",
    "CountryScopedRegistry",
]
