"""
Easter Sunday calculation (Gauss computus with per-century corrections).
"""

from datetime import date
from typing import NamedTuple


class EasterCorrection(NamedTuple):
    """Correction constants for a range of Gregorian years."""

    first_year: int
    last_year: int
    x: int
    y: int

    def covers(self, year: int) -> bool:
        return self.first_year <= year <= self.last_year


# Checked in order; years outside every range use FALLBACK_CORRECTION.
EASTER_CORRECTIONS = (
    EasterCorrection(1582, 1699, 22, 2),
    EasterCorrection(1700, 1799, 23, 3),
    EasterCorrection(1800, 1899, 24, 4),
    EasterCorrection(1900, 2099, 24, 5),
    EasterCorrection(2100, 2199, 24, 6),
    EasterCorrection(2200, 2299, 25, 7),
)

FALLBACK_CORRECTION = EasterCorrection(1900, 2099, 24, 5)

VALIDITY_WINDOW = (EASTER_CORRECTIONS[0].first_year, EASTER_CORRECTIONS[-1].last_year)


def easter_correction(year: int) -> EasterCorrection:
    """
    Look up the correction constants for a year.

    Args:
        year: Any integer year.

    Returns:
        The matching table record, or the fallback record for years
        outside 1582-2299 (results for those years are best effort).
    """
    for correction in EASTER_CORRECTIONS:
        if correction.covers(year):
            return correction
    return FALLBACK_CORRECTION


def in_validity_window(year: int) -> bool:
    """Whether the Easter date for this year is exact."""
    return VALIDITY_WINDOW[0] <= year <= VALIDITY_WINDOW[1]


def easter_sunday(year: int) -> date:
    """
    Calculate the date of Easter Sunday.

    Args:
        year: Year to calculate Easter for. Every integer is accepted, but
            only 1582-2299 is covered by the correction table.

    Gauss's two exceptions are applied on top of the plain formula, so some
    years differ from it: d=29, e=6 gives April 19 instead of April 26
    (1981, 2076), and d=28, e=6 with (11x + 11) mod 30 < 19 gives April 18
    instead of April 25 (1954, 2049).

    Returns:
        Date of Easter Sunday, always between March 22 and April 25.
    """
    correction = easter_correction(year)

    a = year % 19
    b = year % 4
    c = year % 7
    d = (19 * a + correction.x) % 30
    e = (2 * b + 4 * c + 6 * d + correction.y) % 7

    if d + e > 9:
        day = d + e - 9
        # Gauss's exceptions keep the date inside the paschal window
        if d == 29 and e == 6:
            day = 19
        elif d == 28 and e == 6 and (11 * correction.x + 11) % 30 < 19:
            day = 18
        return date(year, 4, day)

    return date(year, 3, d + e + 22)
