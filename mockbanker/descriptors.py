"""
Domain descriptors: the static facts that make one identifier family a tab.

Every domain shares the same generate/export/history plumbing; what differs is
collected here (history category, export stem and columns, row model, registry
and the selector it is driven by). `available_domains()` and `resolve_domain()`
look domains up by key.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, List, Literal, Optional, Tuple, Type

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
from mockbanker.registries import (
    AbstractRegistry,
    BankAccountRegistry,
    CompanyIdRegistry,
    CreditCardRegistry,
    DriverLicenseRegistry,
    IbanRegistry,
    LeiRegistry,
    PassportRegistry,
    PersonalIdRegistry,
    SwiftRegistry,
    TaxIdRegistry,
    VatRegistry,
)

SelectorKind = Literal["country", "brand"]


@dataclass(frozen=True)
class Column:
    """One exported column: CSV header, row field and SQL column."""

    header: str
    field: str
    sql_name: Optional[str] = None
    sql_type: Literal["TEXT", "BOOLEAN"] = "TEXT"

    @property
    def sql_column(self) -> str:
        return self.sql_name or self.field


VALID = Column("Valid", "valid", sql_type="BOOLEAN")


@dataclass(frozen=True)
class DomainDescriptor:
    """
    Static description of one identifier domain.

    Attributes
    ----------
    key : str
        Machine name used by the CLI and the pipeline (e.g. "iban").
    category : str
        Label recorded in history entries and used in validator messages.
    stem : str
        Export file stem; also the SQL table name.
    row_model : type[ResultRow]
        Row schema; its field order is the JSON field order.
    csv_columns / sql_columns : tuple[Column, ...]
        Column layouts for the tabular exports.
    registry_factory : callable
        Builds the registry serving this domain.
    selector_kind : {"country", "brand"}
        What the selector picks.
    default_selector : str | None
        Initial selection; None means "Random".
    validator_tag : str
        Tag accepted by the validation dispatcher.
    """

    key: str
    category: str
    stem: str
    row_model: Type[ResultRow]
    csv_columns: Tuple[Column, ...]
    sql_columns: Tuple[Column, ...]
    registry_factory: Callable[[], AbstractRegistry]
    validator_tag: str
    valid_message: str
    invalid_message: str
    selector_kind: SelectorKind = "country"
    default_selector: Optional[str] = None

    @property
    def table(self) -> str:
        return self.stem

    def registry(self) -> AbstractRegistry:
        return get_registry(self.key)


def _same(*columns: Column) -> Dict[str, Tuple[Column, ...]]:
    return {"csv_columns": columns, "sql_columns": columns}


_DESCRIPTORS: Tuple[DomainDescriptor, ...] = (
    DomainDescriptor(
        key="iban",
        category="IBAN",
        stem="ibans",
        row_model=IbanRow,
        csv_columns=(Column("IBAN", "raw"), VALID),
        sql_columns=(Column("IBAN", "raw", sql_name="iban"), VALID),
        registry_factory=IbanRegistry,
        validator_tag="iban",
        valid_message="Valid IBAN",
        invalid_message="Invalid IBAN checksum or format",
    ),
    DomainDescriptor(
        key="personal_id",
        category="Personal ID",
        stem="personal_ids",
        row_model=PersonalIdRow,
        **_same(Column("Code", "code"), Column("Gender", "gender"), Column("Date of Birth", "dob"), VALID),
        registry_factory=PersonalIdRegistry,
        validator_tag="id",
        valid_message="Valid ID",
        invalid_message="Invalid ID for selected country",
        default_selector="EE",
    ),
    DomainDescriptor(
        key="bank_account",
        category="Bank Account",
        stem="bank_accounts",
        row_model=BankAccountRow,
        **_same(Column("Account", "account"), Column("Routing", "routing"), VALID),
        registry_factory=BankAccountRegistry,
        validator_tag="bank",
        valid_message="Valid Bank Account for selected country",
        invalid_message="Invalid Bank Account checksum or format",
        default_selector="US",
    ),
    DomainDescriptor(
        key="credit_card",
        category="Credit Card",
        stem="credit_cards",
        row_model=CreditCardRow,
        **_same(Column("Number", "number"), Column("Brand", "brand"), VALID),
        registry_factory=CreditCardRegistry,
        validator_tag="card",
        valid_message="Valid Credit Card (Luhn check passed)",
        invalid_message="Invalid Credit Card (Luhn check failed)",
        selector_kind="brand",
        default_selector="visa",
    ),
    DomainDescriptor(
        key="swift",
        category="SWIFT",
        stem="swift_codes",
        row_model=SwiftRow,
        **_same(
            Column("SWIFT/BIC", "code"),
            Column("Bank", "bank"),
            Column("Country", "country"),
            Column("Location", "location"),
            VALID,
        ),
        registry_factory=SwiftRegistry,
        validator_tag="swift",
        valid_message="Valid SWIFT/BIC format",
        invalid_message="Invalid SWIFT/BIC format",
    ),
    DomainDescriptor(
        key="company_id",
        category="Company ID",
        stem="company_ids",
        row_model=CompanyIdRow,
        **_same(Column("Code", "code"), Column("Name", "name"), VALID),
        registry_factory=CompanyIdRegistry,
        validator_tag="company",
        valid_message="Valid Company ID for selected country",
        invalid_message="Invalid Company ID checksum or format",
        default_selector="EE",
    ),
    DomainDescriptor(
        key="driver_license",
        category="Driver's License",
        stem="driver_licenses",
        row_model=DriverLicenseRow,
        **_same(
            Column("Code", "code"),
            Column("Name", "name"),
            Column("Country", "country"),
            Column("State", "state"),
            VALID,
        ),
        registry_factory=DriverLicenseRegistry,
        validator_tag="driver_license",
        valid_message="Valid Driver's License for selected country",
        invalid_message="Invalid Driver's License format",
        default_selector="EE",
    ),
    DomainDescriptor(
        key="passport",
        category="Passport",
        stem="passports",
        row_model=PassportRow,
        **_same(Column("Code", "code"), Column("Name", "name"), Column("Country", "country"), VALID),
        registry_factory=PassportRegistry,
        validator_tag="passport",
        valid_message="Valid Passport for selected country",
        invalid_message="Invalid Passport format",
        default_selector="EE",
    ),
    DomainDescriptor(
        key="tax_id",
        category="Tax ID",
        stem="tax_ids",
        row_model=TaxIdRow,
        **_same(
            Column("Code", "code"),
            Column("Name", "name"),
            Column("Type", "holder_type"),
            Column("Country", "country"),
            VALID,
        ),
        registry_factory=TaxIdRegistry,
        validator_tag="tax_id",
        valid_message="Valid Tax ID for selected country",
        invalid_message="Invalid Tax ID format",
        default_selector="DE",
    ),
    DomainDescriptor(
        key="vat",
        category="VAT",
        stem="vat_numbers",
        row_model=VatRow,
        **_same(
            Column("Code", "code"),
            Column("Country Code", "country_code"),
            Column("Country Name", "country_name"),
            VALID,
        ),
        registry_factory=VatRegistry,
        validator_tag="vat",
        valid_message="Valid VAT number",
        invalid_message="Invalid VAT number format",
    ),
    DomainDescriptor(
        key="lei",
        category="LEI",
        stem="lei_codes",
        row_model=LeiRow,
        **_same(Column("Code", "code"), Column("LOU", "lou"), Column("Country", "country_code"), VALID),
        registry_factory=LeiRegistry,
        validator_tag="lei",
        valid_message="Valid LEI code",
        invalid_message="Invalid LEI code format",
    ),
)


def _domain_map() -> Dict[str, DomainDescriptor]:
    """Registry of available domains."""
    return {descriptor.key: descriptor for descriptor in _DESCRIPTORS}


def available_domains() -> List[str]:
    """List available domain keys."""
    return sorted(_domain_map().keys())


def all_descriptors() -> List[DomainDescriptor]:
    """Descriptors in tab order."""
    return list(_DESCRIPTORS)


def resolve_domain(name: str) -> DomainDescriptor:
    domains = _domain_map()
    key = name.strip().lower().replace("-", "_")
    if key not in domains:
        raise ValueError(f"Unknown domain '{name}'. Available: {', '.join(available_domains())}")
    return domains[key]


def descriptor_for_tag(tag: str) -> Optional[DomainDescriptor]:
    """Descriptor whose validator tag is `tag`, if any."""
    for descriptor in _DESCRIPTORS:
        if descriptor.validator_tag == tag:
            return descriptor
    return None


@lru_cache(maxsize=None)
def get_registry(key: str) -> AbstractRegistry:
    """One shared registry per domain; registries are stateless."""
    return resolve_domain(key).registry_factory()


__all__ = [
    "Column",
    "DomainDescriptor",
    "SelectorKind",
    "available_domains",
    "all_descriptors",
    "resolve_domain",
    "descriptor_for_tag",
    "get_registry",
]
