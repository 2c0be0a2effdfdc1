"""
Result rows, one model per identifier domain.

Field order is the export order. Every row exposes `primary_value` (the value
copied, logged to history and re-validated) and `valid`.
"""
from __future__ import annotations

from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict


class ResultRow(BaseModel):
    """Base for all domain rows."""

    primary_field: ClassVar[str] = "code"

    model_config = ConfigDict(frozen=True)

    @property
    def primary_value(self) -> str:
        return getattr(self, self.primary_field)

    def display(self, spaces: bool = True) -> str:
        """Text shown and copied for this row."""
        return self.primary_value

    def cell(self, field: str, spaces: bool = True) -> Any:
        """Value of `field` as rendered in tabular exports."""
        if field == self.primary_field:
            return self.display(spaces)
        return getattr(self, field)


class IbanRow(ResultRow):
    primary_field: ClassVar[str] = "raw"

    raw: str
    formatted: str
    valid: bool

    def display(self, spaces: bool = True) -> str:
        return self.formatted if spaces else self.raw


class PersonalIdRow(ResultRow):
    code: str
    gender: str
    dob: str
    valid: bool


class BankAccountRow(ResultRow):
    primary_field: ClassVar[str] = "account"

    account: str
    routing: str
    valid: bool

    def display(self, spaces: bool = True) -> str:
        if not self.routing:
            return self.account
        return f"{self.account} ({self.routing})"

    def cell(self, field: str, spaces: bool = True) -> Any:
        return getattr(self, field)


class CreditCardRow(ResultRow):
    primary_field: ClassVar[str] = "number"

    number: str
    brand: str
    valid: bool


class SwiftRow(ResultRow):
    code: str
    bank: str
    country: str
    location: str
    valid: bool


class CompanyIdRow(ResultRow):
    code: str
    name: str
    valid: bool


class DriverLicenseRow(ResultRow):
    code: str
    name: str
    country: str
    state: Optional[str] = None
    valid: bool


class PassportRow(ResultRow):
    code: str
    name: str
    country: str
    valid: bool


class TaxIdRow(ResultRow):
    code: str
    name: str
    holder_type: Optional[str] = None
    country: str
    valid: bool


class VatRow(ResultRow):
    code: str
    country_code: str
    country_name: str
    valid: bool


class LeiRow(ResultRow):
    code: str
    lou: str
    country_code: str
    valid: bool


__all__ = [
    "ResultRow",
    "IbanRow",
    "PersonalIdRow",
    "BankAccountRow",
    "CreditCardRow",
    "SwiftRow",
    "CompanyIdRow",
    "DriverLicenseRow",
    "PassportRow",
    "TaxIdRow",
    "VatRow",
    "LeiRow",
]
