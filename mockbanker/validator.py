"""
Validation dispatcher: `(domain tag, country?, value)` -> one verdict.

Stateless and never raising. Blank input produces no verdict at all; every
other input produces exactly one `ValidationVerdict`. Validation never touches
the activity log.
"""

from __future__ import annotations

from typing import Dict, Optional

from mockbanker.descriptors import DomainDescriptor, descriptor_for_tag
from mockbanker.domain.models import ValidationVerdict
from mockbanker.registries.abstract import CountryScopedRegistry
from mockbanker.registries.personal_id import PersonalIdRegistry
from mockbanker.utils.logging import get_logger

log = get_logger(__name__)

# Country assumed when a country-scoped tag arrives without one.
DEFAULT_COUNTRIES: Dict[str, str] = {
    "id": "EE",
    "bank": "US",
    "company": "EE",
    "driver_license": "EE",
    "passport": "EE",
    "tax_id": "DE",
}


class ValidationDispatcher:
    def validate(
        self,
        domain_tag: str,
        value: str,
        country: Optional[str] = None,
    ) -> Optional[ValidationVerdict]:
        value = value.strip()
        if not value:
            return None
        descriptor = descriptor_for_tag(domain_tag)
        if descriptor is None:
            return ValidationVerdict(valid=False, message=f"Unknown identifier type '{domain_tag}'")
        country = (country or DEFAULT_COUNTRIES.get(domain_tag) or "").strip().upper() or None
        try:
            return self._dispatch(descriptor, value, country)
        except Exception as exc:  # noqa: BLE001 - a verdict is always returned
            log.exception("Validation failed", extra={"domain": descriptor.key, "country": country})
            return ValidationVerdict(valid=False, message=f"Could not validate: {exc}")

    def _dispatch(
        self,
        descriptor: DomainDescriptor,
        value: str,
        country: Optional[str],
    ) -> ValidationVerdict:
        registry = descriptor.registry()
        if isinstance(registry, CountryScopedRegistry) and not registry.supports(country):
            return ValidationVerdict(
                valid=False,
                message=f"{descriptor.category} validation not supported for this country",
            )
        if isinstance(registry, PersonalIdRegistry):
            parsed = registry.parse(country, value)
            if parsed is None:
                return ValidationVerdict(valid=False, message="Could not parse ID")
            if not parsed.valid:
                return ValidationVerdict(valid=False, message=descriptor.invalid_message)
            return ValidationVerdict(
                valid=True,
                message=f"{descriptor.valid_message} ({parsed.gender} / {parsed.dob})",
            )
        valid = bool(registry.check(value, country))
        return ValidationVerdict(
            valid=valid,
            message=descriptor.valid_message if valid else descriptor.invalid_message,
        )


__all__ = ["ValidationDispatcher", "DEFAULT_COUNTRIES"]
