"""Calendar-day arithmetic on date-only values.

Everything expiration-related goes through here. Values are plain
``datetime.date`` objects so there is no time-of-day or timezone component
that could shift a comparison by a day. Functions that need "now" take an
explicit ``as_of`` date so callers and tests can pin the clock.
"""

from datetime import date, datetime


def today() -> date:
    """Today's date in the local calendar."""
    return date.today()


def parse_date_only(value: date | str) -> date:
    """Normalize a ``YYYY-MM-DD`` string or date into a date-only value.

    Raises:
        ValueError: If a string is not a valid ISO calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def days_between(start: date | str, end: date | str) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if end is earlier).

    A date-only difference is already integral, so this is the ceil of the
    elapsed time: something expiring tomorrow is 1 day away, today is 0.
    """
    return (parse_date_only(end) - parse_date_only(start)).days


def is_before(a: date | str, b: date | str) -> bool:
    """Strict calendar-day ordering."""
    return parse_date_only(a) < parse_date_only(b)


def days_until_expiration(
    expiration_date: date | str | None,
    never_expires: bool = False,
    as_of: date | None = None,
) -> int | None:
    """Days left before an item expires, or None if it does not expire."""
    if never_expires or not expiration_date:
        return None
    return days_between(as_of or today(), expiration_date)


def is_expired(
    expiration_date: date | str | None,
    never_expires: bool = False,
    as_of: date | None = None,
) -> bool:
    days = days_until_expiration(expiration_date, never_expires, as_of)
    return days is not None and days < 0


def is_expiring_soon(
    expiration_date: date | str | None,
    never_expires: bool = False,
    threshold_days: int = 30,
    as_of: date | None = None,
) -> bool:
    """True if the item expires within ``threshold_days`` (already expired excluded)."""
    days = days_until_expiration(expiration_date, never_expires, as_of)
    return days is not None and 0 <= days <= threshold_days
