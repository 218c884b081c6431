"""Unit tests for the lenient numeric extractors."""

import math

import pytest

from electorate_scraper.lib.results_scraper.extractors import (
    extract_percentage,
    extract_swing,
    extract_votes,
    first_resolved,
    parse_percentage,
    parse_swing,
    parse_votes,
)

NOISY_VALUES = [None, "", "   ", "n/a", "--", [], {}, object(), True, False, float("nan"), float("inf")]


class TestExtractVotes:
    """Tests for extract_votes()."""

    def test_thousands_separated_string(self):
        assert extract_votes("12,345 votes") == 12345

    def test_empty_string(self):
        assert extract_votes("") == 0

    def test_first_digit_run_wins(self):
        assert extract_votes("Counted 4,001 of 5,000") == 4001

    def test_float_is_floored(self):
        assert extract_votes(27500.9) == 27500

    def test_negative_number_clamped(self):
        assert extract_votes(-12) == 0

    def test_sign_not_preserved_in_strings(self):
        assert extract_votes("-1,200") == 1200

    @pytest.mark.parametrize("value", NOISY_VALUES)
    def test_total_over_noise(self, value):
        result = extract_votes(value)
        assert isinstance(result, int)
        assert result == 0


class TestExtractPercentage:
    """Tests for extract_percentage()."""

    def test_percent_string(self):
        assert extract_percentage("54.3%") == 54.3

    def test_number_returned_as_is(self):
        assert extract_percentage(54.3) == 54.3
        assert extract_percentage(55) == 55.0

    def test_sign_dropped(self):
        assert extract_percentage("-2.1%") == 2.1

    def test_leading_decimal_point(self):
        assert extract_percentage(".5%") == 0.5

    def test_text_around_number(self):
        assert extract_percentage("Margin 3.2 % (LNP)") == 3.2

    @pytest.mark.parametrize("value", NOISY_VALUES)
    def test_total_over_noise(self, value):
        result = extract_percentage(value)
        assert math.isfinite(result)
        assert result == 0.0


class TestExtractSwing:
    """Tests for extract_swing()."""

    def test_negative_swing(self):
        assert extract_swing("-2.1%") == -2.1

    def test_explicit_positive_swing(self):
        assert extract_swing("+2.1") == 2.1

    def test_numeric_swing(self):
        assert extract_swing(-1.5) == -1.5

    def test_unsigned_swing(self):
        assert extract_swing("3.4% swing to LNP") == 3.4

    @pytest.mark.parametrize("value", NOISY_VALUES)
    def test_total_over_noise(self, value):
        result = extract_swing(value)
        assert math.isfinite(result)
        assert result == 0.0


class TestParseHelpers:
    """Tests for the None-returning parse_* helpers."""

    def test_unresolved_is_none(self):
        assert parse_votes("none yet") is None
        assert parse_percentage(None) is None
        assert parse_swing("") is None

    def test_bool_is_not_numeric(self):
        assert parse_votes(True) is None
        assert parse_percentage(False) is None

    def test_zero_is_resolved(self):
        assert parse_votes("0") == 0
        assert parse_percentage(0) == 0.0


class TestFirstResolved:
    """Tests for first_resolved()."""

    def test_first_non_zero_wins(self):
        source = {"totalVotes": 0, "formalVotes": "31,204", "validVotes": 30000}
        assert first_resolved(source, ("totalVotes", "formalVotes", "validVotes"), parse_votes) == 31204

    def test_missing_fields_skipped(self):
        assert first_resolved({"b": "4.5%"}, ("a", "b"), parse_percentage) == 4.5

    def test_nothing_resolved(self):
        assert first_resolved({"a": "n/a"}, ("a", "b"), parse_votes) is None

    def test_non_mapping_source(self):
        assert first_resolved(["a"], ("a",), parse_votes) is None
        assert first_resolved(None, ("a",), parse_votes) is None


class TestOversizedNumbers:
    """Digit runs too long to convert stay total and finite."""

    @pytest.mark.parametrize("value", ["1" * 5000, "Votes: " + "2" * 4400])
    def test_votes_past_int_conversion_limit(self, value):
        assert parse_votes(value) is None
        assert extract_votes(value) == 0

    @pytest.mark.parametrize("value", ["9" * 400, "9" * 400 + "%", "-" + "9" * 400])
    def test_percentages_overflowing_float(self, value):
        assert parse_percentage(value) is None
        assert extract_percentage(value) == 0.0
        assert extract_swing(value) == 0.0

    def test_long_but_convertible_vote_count(self):
        assert extract_votes("9" * 40) == int("9" * 40)
