"""Date helpers for Wikibase time values.

Wikibase returns times such as ``+1950-05-15T00:00:00Z``: a signed year,
often padded with ``00`` months and days when only the year is known.
"""

import re
from datetime import date, datetime
from typing import Optional

_SIGNED_YEAR = re.compile(r"^([+-]?)(\d{4})")
_ANY_YEAR = re.compile(r"\b(\d{4})\b")
_YEAR_MONTH = re.compile(r"^(\d{4})(?:-(\d{2}))?$")


def extract_year(date_string: Optional[str]) -> Optional[str]:
    """Return the four-digit year of a date string, keeping a minus sign for BCE."""
    if not date_string:
        return None

    match = _SIGNED_YEAR.match(date_string.strip())
    if match:
        sign, year = match.groups()
        return f"-{year}" if sign == "-" else year

    match = _ANY_YEAR.search(date_string)
    return match.group(1) if match else None


def format_date(date_string: Optional[str]) -> str:
    """Format a date as '15 May 1950', falling back to the raw value."""
    if not date_string:
        return "Unknown"

    value = date_string[1:] if date_string.startswith("+") else date_string

    # Reduced precision: "1950" and "1950-05" fall on the first day
    partial = _YEAR_MONTH.match(value)
    if partial:
        year, month = partial.groups()
        try:
            parsed = date(int(year), int(month or 1), 1)
        except ValueError:
            return value
        return f"{parsed.day} {parsed:%B %Y}"

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{parsed.day} {parsed:%B %Y}"


def calculate_age(
    birth: Optional[str],
    death: Optional[str] = None,
    today: Optional[date] = None
) -> Optional[int]:
    """
    Calculate age in whole years from year values only.

    Uses the death year when present, otherwise the current year.
    Returns None when the birth year is unknown or the result is negative.
    """
    birth_year = extract_year(birth)
    if not birth_year:
        return None

    death_year = extract_year(death)
    end_year = int(death_year) if death_year else (today or date.today()).year
    age = end_year - int(birth_year)
    return age if age >= 0 else None


def format_birth_order(order: Optional[str]) -> str:
    """Render a birth order number as '1st born', '12th born', etc."""
    if not order:
        return ""

    try:
        num = int(order)
    except (TypeError, ValueError):
        return str(order)

    if 10 <= num % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(num % 10, "th")
    return f"{num}{suffix} born"
