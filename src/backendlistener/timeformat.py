"""
Timestamp formatting with Java-style date patterns.

Listener configuration carries timestamp patterns written for the
load-testing engine (``yyyy-MM-dd'T'HH:mm:ss.SSSZZ``), so they are
interpreted with SimpleDateFormat semantics rather than strftime.

Supported pattern letters:
    G  era (AD)                  u  day number of week (1 = Monday)
    y  year                      a  AM/PM marker
    Y  week year (ISO)*          H  hour in day (0-23)
    M  month in year             k  hour in day (1-24)
    L  month in year             K  hour in AM/PM (0-11)
    w  week in year (ISO)*       h  hour in AM/PM (1-12)
    W  week in month*            m  minute in hour
    D  day in year               s  second in minute
    d  day in month              S  millisecond
    F  day of week in month      z  time zone abbreviation**
    E  day name in week          Z  RFC 822 time zone (-0800)
                                 X  ISO 8601 time zone (-08, -0800, -08:00)

* Weeks start on Monday (ISO 8601), not on the locale's first day of the
  week, so Sunday dates and week numbers near year boundaries can differ
  from the engine's rendering in Sunday-first locales.
** Any count of z gives the abbreviation (tzname()); zzzz does not expand
  to the long zone name.

Text inside single quotes is copied as-is; ``''`` is a literal quote.
Any other ASCII letter is an error.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

from dateutil import tz as dateutil_tz

PATTERN_LETTERS = "GyYMLwWDdFEuaHkKhmsSzZX"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class InvalidPatternError(ValueError):
    """Raised when a timestamp pattern cannot be compiled."""


@dataclass(frozen=True)
class PatternField:
    """A run of one pattern letter, e.g. ``yyyy``."""

    letter: str
    count: int


Token = Union[str, PatternField]


def parse_pattern(pattern: str) -> list[Token]:
    """
    Split a pattern into literal text and pattern fields.

    Args:
        pattern: Java-style date pattern

    Returns:
        Tokens in pattern order; strings are literals

    Raises:
        InvalidPatternError: On an unknown letter or an unterminated quote
    """
    tokens: list[Token] = []
    i = 0
    n = len(pattern)

    while i < n:
        char = pattern[i]

        if char == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                tokens.append("'")
                i += 2
                continue

            j = i + 1
            quoted = []
            while True:
                if j >= n:
                    raise InvalidPatternError(f"Unterminated quote in pattern: {pattern!r}")
                if pattern[j] == "'":
                    if j + 1 < n and pattern[j + 1] == "'":
                        quoted.append("'")
                        j += 2
                        continue
                    break
                quoted.append(pattern[j])
                j += 1
            tokens.append("".join(quoted))
            i = j + 1

        elif char.isascii() and char.isalpha():
            if char not in PATTERN_LETTERS:
                raise InvalidPatternError(f"Illegal pattern character '{char}'")
            j = i
            while j < n and pattern[j] == char:
                j += 1
            count = j - i
            if char == "X" and count > 3:
                raise InvalidPatternError(f"Invalid ISO 8601 format: length={count}")
            tokens.append(PatternField(char, count))
            i = j

        else:
            tokens.append(char)
            i += 1

    return tokens


def from_millis(millis: int, tz: Optional[tzinfo] = None) -> datetime:
    """
    Convert epoch milliseconds to an aware datetime.

    Args:
        millis: Milliseconds since the Unix epoch
        tz: Target time zone (local zone when omitted)
    """
    return (EPOCH + timedelta(milliseconds=millis)).astimezone(tz or dateutil_tz.tzlocal())


def _number(value: int, count: int) -> str:
    return str(value).zfill(count)


def _text(full: str, count: int) -> str:
    return full if count >= 4 else full[:3]


def _offset(value: datetime, count: int, iso: bool) -> str:
    offset = value.utcoffset() or timedelta(0)
    total_minutes = int(offset.total_seconds() // 60)

    if iso and total_minutes == 0:
        return "Z"

    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)

    if not iso:
        return f"{sign}{hours:02d}{minutes:02d}"
    if count == 1:
        return f"{sign}{hours:02d}"
    if count == 2:
        return f"{sign}{hours:02d}{minutes:02d}"
    return f"{sign}{hours:02d}:{minutes:02d}"


def _render(field: PatternField, value: datetime) -> str:
    letter, count = field.letter, field.count

    if letter == "G":
        return "AD"
    if letter in "yY":
        year = value.isocalendar()[0] if letter == "Y" else value.year
        if count == 2:
            return _number(year % 100, 2)
        return _number(year, count)
    if letter in "ML":
        if count >= 3:
            return _text(MONTH_NAMES[value.month - 1], count)
        return _number(value.month, count)
    if letter == "w":
        return _number(value.isocalendar()[1], count)
    if letter == "W":
        first_weekday = value.replace(day=1).weekday()
        return _number((value.day + first_weekday - 1) // 7 + 1, count)
    if letter == "D":
        return _number(value.timetuple().tm_yday, count)
    if letter == "d":
        return _number(value.day, count)
    if letter == "F":
        return _number((value.day - 1) // 7 + 1, count)
    if letter == "E":
        return _text(DAY_NAMES[value.weekday()], count)
    if letter == "u":
        return _number(value.isoweekday(), count)
    if letter == "a":
        return "AM" if value.hour < 12 else "PM"
    if letter == "H":
        return _number(value.hour, count)
    if letter == "k":
        return _number(value.hour or 24, count)
    if letter == "K":
        return _number(value.hour % 12, count)
    if letter == "h":
        return _number(value.hour % 12 or 12, count)
    if letter == "m":
        return _number(value.minute, count)
    if letter == "s":
        return _number(value.second, count)
    if letter == "S":
        return _number(value.microsecond // 1000, count)
    if letter == "z":
        return value.tzname() or ""
    if letter == "Z":
        return _offset(value, count, iso=False)
    # X
    return _offset(value, count, iso=True)


class DateFormat:
    """
    A compiled Java-style date pattern.

    Compiling validates the pattern once; formatting never fails for an
    aware datetime.

    Usage:
        fmt = DateFormat("yyyy-MM-dd HH:mm:ss")
        fmt.format(datetime(2024, 1, 15, 10, 30, 45))     # '2024-01-15 10:30:45'
        fmt.format_millis(1705314645000, tz=timezone.utc)  # '2024-01-15 10:30:45'
    """

    def __init__(self, pattern: str):
        """
        Compile a pattern.

        Raises:
            InvalidPatternError: If the pattern is malformed
        """
        self.pattern = pattern
        self._tokens = parse_pattern(pattern)

    def format(self, value: datetime) -> str:
        """Format a datetime. Naive values are taken as local time."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=dateutil_tz.tzlocal())
        return "".join(
            token if isinstance(token, str) else _render(token, value)
            for token in self._tokens
        )

    def format_millis(self, millis: int, tz: Optional[tzinfo] = None) -> str:
        """Format epoch milliseconds in the given zone (local when omitted)."""
        return self.format(from_millis(millis, tz))

    def __repr__(self) -> str:
        return f"DateFormat({self.pattern!r})"
