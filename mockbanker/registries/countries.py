"""Country names for every code a registry can emit."""

from __future__ import annotations

from typing import Optional

COUNTRY_NAMES = {
    "AT": "Austria",
    "AU": "Australia",
    "BE": "Belgium",
    "BG": "Bulgaria",
    "BR": "Brazil",
    "CH": "Switzerland",
    "DE": "Germany",
    "DK": "Denmark",
    "EE": "Estonia",
    "ES": "Spain",
    "FI": "Finland",
    "FR": "France",
    "GB": "United Kingdom",
    "IE": "Ireland",
    "IN": "India",
    "IT": "Italy",
    "LI": "Liechtenstein",
    "LT": "Lithuania",
    "LU": "Luxembourg",
    "NL": "Netherlands",
    "NO": "Norway",
    "PL": "Poland",
    "PT": "Portugal",
    "US": "United States",
}


def country_name(code: Optional[str]) -> str:
    if not code:
        return "Unknown"
    return COUNTRY_NAMES.get(code.upper(), "Unknown")


def sorted_by_name(codes) -> list[str]:
    return sorted(codes, key=country_name)


__all__ = ["COUNTRY_NAMES", "country_name", "sorted_by_name"]
