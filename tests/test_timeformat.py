"""
Tests for Java-style timestamp patterns.
"""

from datetime import datetime, timedelta, timezone

import pytest
from dateutil import tz as dateutil_tz

from backendlistener.timeformat import (
    DateFormat,
    InvalidPatternError,
    PatternField,
    from_millis,
    parse_pattern,
)

UTC = timezone.utc

# Monday 2024-01-15 10:30:45.123 UTC
MOMENT = datetime(2024, 1, 15, 10, 30, 45, 123000, tzinfo=UTC)


class TestParsePattern:
    """Tests for pattern tokenizing."""

    def test_fields_and_literals(self):
        """Test splitting a pattern into fields and literal text."""
        tokens = parse_pattern("yyyy-MM-dd")
        assert tokens == [
            PatternField("y", 4),
            "-",
            PatternField("M", 2),
            "-",
            PatternField("d", 2),
        ]

    def test_quoted_text(self):
        """Test that quoted letters are literal."""
        tokens = parse_pattern("HH'h'mm")
        assert tokens == [PatternField("H", 2), "h", PatternField("m", 2)]

    def test_escaped_quote(self):
        """Test that two quotes produce one literal quote."""
        assert parse_pattern("''") == ["'"]
        assert parse_pattern("'o''clock'") == ["o'clock"]

    def test_illegal_letter(self):
        """Test that unknown pattern letters are rejected."""
        with pytest.raises(InvalidPatternError, match="Illegal pattern character 'q'"):
            parse_pattern("yyyy-qq")

    def test_unterminated_quote(self):
        """Test that an open quote is rejected."""
        with pytest.raises(InvalidPatternError, match="Unterminated quote"):
            parse_pattern("yyyy 'at")

    def test_too_many_iso_zone_letters(self):
        """Test that XXXX is rejected."""
        with pytest.raises(InvalidPatternError):
            parse_pattern("XXXX")

    def test_invalid_pattern_is_value_error(self):
        """Test that pattern errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            DateFormat("bogus")


class TestDateFormat:
    """Tests for formatting datetimes."""

    @pytest.mark.parametrize(
        "pattern,expected",
        [
            ("yyyy-MM-dd HH:mm:ss", "2024-01-15 10:30:45"),
            ("yy/M/d", "24/1/15"),
            ("dd MMM yyyy", "15 Jan 2024"),
            ("MMMM", "January"),
            ("EEE, EEEE", "Mon, Monday"),
            ("HH:mm:ss.SSS", "10:30:45.123"),
            ("h:mm a", "10:30 AM"),
            ("D", "15"),
            ("DDD", "015"),
            ("u", "1"),
            ("w", "3"),
            ("F", "3"),
            ("G", "AD"),
            ("yyyy-MM-dd'T'HH:mm:ss", "2024-01-15T10:30:45"),
        ],
    )
    def test_pattern_letters(self, pattern, expected):
        """Test rendering of individual pattern letters."""
        assert DateFormat(pattern).format(MOMENT) == expected

    def test_twelve_hour_clock(self):
        """Test midnight and noon on the 12- and 24-hour clocks."""
        midnight = MOMENT.replace(hour=0)
        noon = MOMENT.replace(hour=12)

        assert DateFormat("h a").format(midnight) == "12 AM"
        assert DateFormat("K a").format(midnight) == "0 AM"
        assert DateFormat("k").format(midnight) == "24"
        assert DateFormat("h a").format(noon) == "12 PM"

    def test_weeks_start_on_monday(self):
        """Test that Sunday closes the ISO week rather than opening a new one."""
        sunday = MOMENT - timedelta(days=1)

        assert DateFormat("w u").format(sunday) == "2 7"
        assert DateFormat("w u").format(MOMENT) == "3 1"

    def test_long_zone_name_is_abbreviation(self):
        """Test that zzzz renders the same abbreviation as z."""
        assert DateFormat("zzzz").format(MOMENT) == DateFormat("z").format(MOMENT) == "UTC"

    def test_rfc822_zone(self):
        """Test Z renders an offset without a colon."""
        plus_two = MOMENT.astimezone(timezone(timedelta(hours=2)))
        minus_half = MOMENT.astimezone(timezone(timedelta(hours=-3, minutes=-30)))

        assert DateFormat("Z").format(MOMENT) == "+0000"
        assert DateFormat("ZZ").format(plus_two) == "+0200"
        assert DateFormat("Z").format(minus_half) == "-0330"

    def test_iso_zone(self):
        """Test X renders Z for UTC and offsets otherwise."""
        plus_two = MOMENT.astimezone(timezone(timedelta(hours=5, minutes=30)))

        assert DateFormat("X").format(MOMENT) == "Z"
        assert DateFormat("X").format(plus_two) == "+05"
        assert DateFormat("XX").format(plus_two) == "+0530"
        assert DateFormat("XXX").format(plus_two) == "+05:30"

    def test_default_listener_pattern(self):
        """Test the listener's default pattern end to end."""
        value = DateFormat("yyyy-MM-dd'T'HH:mm:ss.SSSZZ").format(MOMENT)
        assert value == "2024-01-15T10:30:45.123+0000"

    def test_naive_datetime_is_local(self):
        """Test that naive datetimes are formatted as local wall time."""
        naive = datetime(2024, 1, 15, 10, 30, 45)
        assert DateFormat("yyyy-MM-dd HH:mm:ss").format(naive) == "2024-01-15 10:30:45"

    def test_format_millis(self):
        """Test formatting epoch millis in a given zone."""
        fmt = DateFormat("yyyy-MM-dd HH:mm:ss")
        assert fmt.format_millis(1705314645000, UTC) == "2024-01-15 10:30:45"

        new_york = dateutil_tz.gettz("America/New_York")
        assert fmt.format_millis(1705314645000, new_york) == "2024-01-15 05:30:45"


class TestFromMillis:
    """Tests for epoch-millis conversion."""

    def test_keeps_milliseconds(self):
        """Test that millisecond precision survives conversion."""
        value = from_millis(1705314645123, UTC)
        assert value == MOMENT

    def test_epoch(self):
        """Test the epoch itself."""
        assert from_millis(0, UTC) == datetime(1970, 1, 1, tzinfo=UTC)

    def test_default_zone_is_aware(self):
        """Test that the local-zone default still yields an aware value."""
        assert from_millis(0).tzinfo is not None
