"""Tests for timestamps module."""

import pytest

from stepsubs.timestamps import format_timestamp, parse_timestamp, with_separator


class TestFormatTimestamp:
    def test_zero(self):
        assert format_timestamp(0) == "00:00:00#000"

    def test_milliseconds_only(self):
        assert format_timestamp(7) == "00:00:00#007"

    def test_minutes(self):
        assert format_timestamp(65_250) == "00:01:05#250"

    def test_hours(self):
        assert format_timestamp(3_661_005) == "01:01:01#005"

    def test_does_not_wrap_at_24_hours(self):
        assert format_timestamp(90_000_000) == "25:00:00#000"

    def test_hours_past_two_digits(self):
        assert format_timestamp(100 * 3_600_000 + 1) == "100:00:00#001"

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            format_timestamp(-1)


class TestParseTimestamp:
    def test_placeholder_separator(self):
        assert parse_timestamp("01:01:01#005") == 3_661_005

    def test_srt_separator(self):
        assert parse_timestamp("00:01:02,500") == 62_500

    def test_vtt_separator(self):
        assert parse_timestamp("00:01:02.250") == 62_250

    @pytest.mark.parametrize("ms", [0, 999, 59_999, 3_599_999, 86_399_999, 90_000_000, 123_456_789])
    def test_inverse_of_format(self, ms):
        assert parse_timestamp(format_timestamp(ms)) == ms

    @pytest.mark.parametrize("value", ["", "1:02:03,000", "00:60:00,000", "00:00:00", "00:00:00,00"])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid timestamp"):
            parse_timestamp(value)


class TestWithSeparator:
    def test_srt(self):
        assert with_separator("00:00:01#500", ",") == "00:00:01,500"

    def test_vtt(self):
        assert with_separator("00:00:01#500", ".") == "00:00:01.500"
