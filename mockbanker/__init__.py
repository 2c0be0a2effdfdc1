"""
MockBanker - synthetic financial identifiers for testing.

Generates and validates checksum-correct test data, fully offline:

- IBANs and SWIFT/BIC codes
- National personal IDs, passports and driver's licenses
- Bank accounts and credit card numbers
- Company IDs, tax IDs, VAT numbers and LEI codes

Each identifier family is served by a registry behind one contract; a single
generation pipeline drives them and records every batch in a bounded,
persisted activity history.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from mockbanker.config import Settings, get_settings
from mockbanker.descriptors import DomainDescriptor, available_domains, resolve_domain
from mockbanker.domain.models import GenerationOptions, GenerationRequest, HistoryEntry, ValidationVerdict
from mockbanker.exporter import export
from mockbanker.history import ActivityHistoryLog
from mockbanker.pipeline import GenerationPipeline
from mockbanker.registries.abstract import AbstractRegistry, IdentifierRegistry
from mockbanker.tab import Tab, TabState
from mockbanker.utils.logging import configure_logging, get_logger
from mockbanker.validator import ValidationDispatcher

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domains
    "DomainDescriptor",
    "available_domains",
    "resolve_domain",
    # Generation
    "GenerationOptions",
    "GenerationRequest",
    "GenerationPipeline",
    "Tab",
    "TabState",
    "export",
    # History and validation
    "ActivityHistoryLog",
    "HistoryEntry",
    "ValidationDispatcher",
    "ValidationVerdict",
    # Registry abstractions
    "IdentifierRegistry",
    "AbstractRegistry",
    # Logging
    "configure_logging",
    "get_logger",
]
