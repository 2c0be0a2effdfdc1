"""
Registries package for MockBanker.

This module re-exports the abstract interfaces and the concrete registry
classes so downstream code can import from `mockbanker.registries` directly.
"""

from mockbanker.registries.abstract import (
    AbstractRegistry,
    CountryFreeRegistry,
    CountryScopedRegistry,
    IdentifierRegistry,
)
from mockbanker.registries.bank_account import BankAccountRegistry
from mockbanker.registries.company_id import CompanyIdRegistry
from mockbanker.registries.credit_card import CreditCardRegistry
from mockbanker.registries.driver_license import DriverLicenseRegistry
from mockbanker.registries.iban import IbanRegistry
from mockbanker.registries.lei import LeiRegistry
from mockbanker.registries.passport import PassportRegistry
from mockbanker.registries.personal_id import PersonalIdRegistry
from mockbanker.registries.swift import SwiftRegistry
from mockbanker.registries.tax_id import TaxIdRegistry
from mockbanker.registries.vat import VatRegistry

__all__ = [
    # Abstracts
    "IdentifierRegistry",
    "AbstractRegistry",
    "CountryFreeRegistry",
    "CountryScopedRegistry",
    # Concrete registries
    "BankAccountRegistry",
    "CompanyIdRegistry",
    "CreditCardRegistry",
    "DriverLicenseRegistry",
    "IbanRegistry",
    "LeiRegistry",
    "PassportRegistry",
    "PersonalIdRegistry",
    "SwiftRegistry",
    "TaxIdRegistry",
    "VatRegistry",
]
