"""Test masked formatting and unformatting."""
import pytest

from number_mask.formatting.digits import canonical_number
from number_mask.formatting.number_format import NumberFormatter
from tests.factories import make_options


def fmt(**overrides) -> NumberFormatter:
    return NumberFormatter(make_options(**overrides))


class TestFormatGrouping:
    def test_plain(self, formatter):
        assert formatter.format(1234567) == "1,234,567"

    def test_with_prefix(self):
        assert fmt(prefix="$").format(1234567) == "$1,234,567"

    def test_short_numbers_untouched(self, formatter):
        assert formatter.format(123) == "123"
        assert formatter.format(1000) == "1,000"

    def test_fraction_not_grouped(self):
        assert fmt(precision=6).format("1234.567891") == "1,234.567891"

    def test_european_marks(self):
        assert fmt(separator=".", decimal=",").format(1234.5) == "1.234,5"

    def test_no_separator(self):
        assert fmt(separator="").format(1234567) == "1234567"


class TestFormatPrecision:
    def test_pads_to_minimum_fraction_digits(self):
        assert fmt(precision=2, minimum_fraction_digits=2).format("3") == "3.00"

    def test_half_rounds_away_from_zero(self):
        f = fmt(precision=2, minimum_fraction_digits=2)
        assert f.format("3.005") == "3.01"
        assert f.format(-3.005) == "-3.01"

    def test_float_input_rounds_on_its_shortest_repr(self):
        # binary 2.675 is slightly below the half; the displayed decimal is what counts
        assert fmt().format(2.675) == "2.68"

    @pytest.mark.parametrize("value,expected", [(2.5, "3"), (3.5, "4"), (-2.5, "-3"), (0.4, "0")])
    def test_precision_zero(self, value, expected):
        assert fmt(precision=0).format(value) == expected

    def test_trims_trailing_zeros_down_to_minimum(self):
        f = fmt(precision=4, minimum_fraction_digits=1)
        assert f.format("1.2300") == "1.23"
        assert f.format("1") == "1.0"

    def test_rounds_to_zero_without_sign(self, formatter):
        assert formatter.format(-0.001) == "0"


class TestFormatSign:
    def test_sign_after_prefix(self):
        assert fmt(prefix="$").format(-1234.5) == "$-1,234.5"

    def test_sign_first_without_prefix(self):
        assert fmt(suffix=" kg").format(-12) == "-12 kg"

    def test_no_separator_after_sign(self, formatter):
        assert formatter.format(-123456) == "-123,456"


class TestFormatAbsent:
    def test_empty_without_prefill(self, formatter):
        assert formatter.format(None) == ""
        assert formatter.format("") == ""

    def test_null_value(self):
        f = fmt(null_value="N/A")
        assert f.format(None) == "N/A"
        assert f.format("N/A") == "N/A"

    def test_prefill_formats_zero(self):
        assert fmt(prefill=True, prefix="$", minimum_fraction_digits=2).format(None) == "$0.00"

    def test_nan_is_absent(self, formatter):
        assert formatter.format(float("nan")) == ""

    def test_display_text_read_best_effort(self):
        assert fmt(prefix="$").format("$1,2x34.5") == "$1,234.5"


class TestTypingMode:
    def test_clean_returns_new_formatter(self, formatter):
        typing = formatter.clean(False)
        assert typing is not formatter
        assert typing.is_clean is False
        assert formatter.is_clean is True

    def test_keeps_trailing_decimal_mark(self, typing_formatter):
        assert typing_formatter.format("12.") == "12."

    def test_trailing_mark_uses_configured_decimal(self):
        assert fmt(separator=".", decimal=",").clean(False).format("1234.") == "1.234,"

    def test_lone_minus(self):
        assert fmt(prefix="$").clean(False).format("-") == "$-"

    def test_lone_decimal_mark(self, typing_formatter):
        assert typing_formatter.format(".") == "0."

    def test_leading_zeros_dropped(self, typing_formatter):
        assert typing_formatter.format("007") == "7"
        assert typing_formatter.format("-0") == "-0"

    def test_extra_fraction_digits_truncated(self, typing_formatter):
        assert typing_formatter.format("1.239") == "1.23"

    def test_precision_zero_drops_decimal_mark(self):
        assert fmt(precision=0).clean(False).format("1.") == "1"

    def test_minimum_fraction_digits_shown_while_typing(self):
        typing = fmt(minimum_fraction_digits=2).clean(False)
        assert typing.format("3") == "3.00"
        assert typing.format("3.") == "3.00"
        assert typing.format("1.5") == "1.50"
        assert typing.format("-") == "-"

    def test_reformat_reports_padding(self):
        shaped = fmt(minimum_fraction_digits=2, suffix=" kg").clean(False).reformat("3")
        assert shaped.text == "3.00 kg"
        assert shaped.padding == 3
        assert shaped.trimmed == 0

    def test_reformat_overwrites_padding_zeros_first(self):
        shaped = fmt(minimum_fraction_digits=2).clean(False).reformat("34.500")
        assert shaped.text == "34.50"
        assert shaped.trimmed == 1

    def test_trailing_zeros_kept_while_typing(self):
        assert fmt(minimum_fraction_digits=1).clean(False).format("1.50") == "1.50"


class TestUnformat:
    def test_strips_decoration(self):
        assert fmt(prefix="$", suffix=" USD").unformat("$1,234.56 USD") == "1234.56"

    def test_european_marks(self):
        assert fmt(separator=".", decimal=",").unformat("1.234,5") == "1234.5"

    def test_prefix_holding_decimal_character(self):
        assert fmt(prefix="Rs.").unformat("Rs.1,234.5") == "1234.5"

    def test_noise_only(self, formatter):
        assert formatter.unformat("abc") == ""

    def test_second_decimal_mark_dropped(self, formatter):
        assert formatter.unformat("1.2.3") == "1.23"

    def test_sign_after_prefix(self):
        assert fmt(prefix="$").unformat("$-5") == "-5"

    def test_null_value(self):
        assert fmt(null_value="N/A").unformat("N/A") == ""

    def test_numbers(self, formatter):
        assert formatter.unformat(1234.5) == "1234.5"
        assert formatter.unformat(1e-7) == "0"

    def test_minimum_fraction_digits(self):
        assert fmt(minimum_fraction_digits=2).unformat("3") == "3.00"

    def test_no_digits_unformats_to_empty_in_both_modes(self, formatter, typing_formatter):
        for text in ["-", ".", "-.", "$"]:
            assert formatter.unformat(text) == ""
        assert typing_formatter.unformat("-") == ""

    def test_commit_reading_is_canonical(self, formatter):
        assert formatter.unformat("12.") == "12"
        assert formatter.unformat("1.50") == "1.5"


class TestReverseFill:
    @pytest.fixture
    def typing(self):
        return fmt(reverse_fill=True).clean(False)

    @pytest.mark.parametrize("typed,expected", [
        ("1", "0.01"),
        ("12", "0.12"),
        ("1.234", "12.34"),
        ("12,345.6", "1234.56"),
    ])
    def test_digits_fill_from_the_right(self, typing, typed, expected):
        assert typing.unformat(typed) == expected

    def test_format_pads_to_precision(self, typing):
        assert typing.format(typing.unformat("12,345")) == "123.45"
        assert typing.format("5") == "5.00"

    def test_numbers_are_not_shifted(self):
        f = fmt(reverse_fill=True)
        assert f.format(3) == "3.00"
        assert f.unformat(3) == "3.00"

    def test_precision_zero(self):
        assert fmt(reverse_fill=True, precision=0).unformat("12.3") == "123"

    def test_lone_minus_shown_but_not_a_value(self, typing):
        assert typing.format("-") == "-"
        assert typing.unformat("-") == ""

    def test_display_string_reads_like_unformat(self):
        f = fmt(reverse_fill=True)
        for text in ["1,234", "$12.3", "1 234"]:
            assert f.format(text) == f.format(f.unformat(text)), text
        assert f.format("1,234") == "12.34"

    def test_canonical_string_not_shifted(self):
        assert fmt(reverse_fill=True).format("1234") == "1,234.00"


OPTION_SETS = [
    {},
    {"prefix": "$", "minimum_fraction_digits": 2},
    {"separator": ".", "decimal": ",", "suffix": " EUR"},
    {"precision": 0, "separator": " "},
    {"precision": 3, "minimum_fraction_digits": 1, "prefix": "R$ "},
    {"reverse_fill": True},
]
VALUES = [0, 1, -1, 7.5, 1234567, 0.5, -1234.5678, 3.005, 999999.999, 1e-9, 12345678901234]


class TestProperties:
    @pytest.mark.parametrize("overrides", OPTION_SETS)
    def test_format_is_idempotent(self, overrides):
        f = fmt(**overrides)
        for value in VALUES:
            once = f.format(value)
            assert f.format(f.unformat(once)) == once, value

    @pytest.mark.parametrize("value", VALUES)
    def test_round_trip_gives_canonical_string(self, formatter, value):
        assert formatter.unformat(formatter.format(value)) == canonical_number(value, 2, 0)
