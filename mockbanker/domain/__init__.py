"""
Domain package for MockBanker.

Exports the request, row, history and verdict models used across registries,
the pipeline and the CLI. Keep this package focused on data definitions and
validation concerns.
"""

from mockbanker.domain.models import (
    RANDOM_LABEL,
    DomainOption,
    GenerationOptions,
    GenerationRequest,
    HistoryEntry,
    ValidationVerdict,
    clamp_count,
)
from mockbanker.domain.rows import (
    BankAccountRow,
    CompanyIdRow,
    CreditCardRow,
    DriverLicenseRow,
    IbanRow,
    LeiRow,
    PassportRow,
    PersonalIdRow,
    ResultRow,
    SwiftRow,
    TaxIdRow,
    VatRow,
)

__all__ = [
    "RANDOM_LABEL",
    "DomainOption",
    "GenerationOptions",
    "GenerationRequest",
    "HistoryEntry",
    "ValidationVerdict",
    "clamp_count",
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
