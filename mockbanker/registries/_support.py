"""
Drawing helpers shared by the registries.

Bodies are drawn from character-class patterns; check characters are found by
asking python-stdnum which completion it accepts, so the checksum rules live
in one place (the library) rather than being re-derived per registry.
"""

from __future__ import annotations

import calendar
import datetime
import itertools
import random
import re
import string
from typing import Callable, Iterable, Optional, Sequence, Tuple

DIGITS = string.digits
LETTERS = string.ascii_uppercase
ALNUM = string.digits + string.ascii_uppercase

# (charset, length) pairs, e.g. ((LETTERS, 4), (DIGITS, 6)).
Pattern = Sequence[Tuple[str, int]]

_CLASS_ALIASES = {DIGITS: r"\d", LETTERS: "[A-Z]", ALNUM: "[A-Z0-9]"}


def draw(rng: random.Random, charset: str, length: int) -> str:
    return "".join(rng.choice(charset) for _ in range(length))


def draw_pattern(rng: random.Random, pattern: Pattern) -> str:
    return "".join(draw(rng, charset, length) for charset, length in pattern)


def pattern_regex(pattern: Pattern) -> re.Pattern[str]:
    parts = []
    for charset, length in pattern:
        klass = _CLASS_ALIASES.get(charset) or "[" + re.escape(charset) + "]"
        parts.append(f"{klass}{{{length}}}")
    return re.compile("^" + "".join(parts) + "$")


def complete(
    template: Callable[[str], str],
    is_valid: Callable[[str], bool],
    alphabet: str = DIGITS,
    width: int = 1,
) -> Optional[str]:
    """
    Return the first `template(check)` that `is_valid` accepts.

    `check` runs over every `width`-long string from `alphabet`. None when no
    completion exists (e.g. a mod-11 body whose check value would be 10).
    """
    for combo in itertools.product(alphabet, repeat=width):
        candidate = template("".join(combo))
        if is_valid(candidate):
            return candidate
    return None


def first_valid(
    attempts: int,
    build: Callable[[], Optional[str]],
) -> Optional[str]:
    """Call `build` until it returns a value, at most `attempts` times."""
    for _ in range(attempts):
        value = build()
        if value is not None:
            return value
    return None


def random_date(
    rng: random.Random,
    year: Optional[int],
    year_range: Tuple[int, int],
    default_range: Tuple[int, int] = (1950, 2005),
) -> Optional[datetime.date]:
    """
    Random calendar date in `year` (or a plausible default year).

    None when the requested year is outside `year_range`.
    """
    low, high = year_range
    if year is None:
        year = rng.randint(max(low, default_range[0]), min(high, default_range[1]))
    elif not low <= year <= high:
        return None
    month = rng.randint(1, 12)
    day = rng.randint(1, calendar.monthrange(year, month)[1])
    return datetime.date(year, month, day)


def compact(value: str, strip: Iterable[str] = (" ", "-", "/", ".")) -> str:
    value = value.strip().upper()
    for char in strip:
        value = value.replace(char, "")
    return value


__all__ = [
    "DIGITS",
    "LETTERS",
    "ALNUM",
    "Pattern",
    "draw",
    "draw_pattern",
    "pattern_regex",
    "complete",
    "first_valid",
    "random_date",
    "compact",
]
