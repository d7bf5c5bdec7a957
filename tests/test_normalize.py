"""Tests for decimal normalization and lot filtering."""

import pytest
from decimal import Decimal

from donation_chooser.config import Objective
from donation_chooser.exceptions import InputError, ParseError
from donation_chooser.models import DonationInput, Lot
from donation_chooser.normalize import (
    NormalizedLots,
    parse_decimal,
    parse_donation,
    shift_to_integer,
)


class TestParseDecimal:
    def test_keeps_precision_of_strings(self):
        value = parse_decimal("10.00")
        assert value == Decimal("10")
        assert value.as_tuple().exponent == -2

    def test_int_and_float(self):
        assert parse_decimal(12) == Decimal("12")
        assert parse_decimal(0.1) == Decimal("0.1")

    def test_strips_whitespace(self):
        assert parse_donation(" 250.5 ") == Decimal("250.5")

    @pytest.mark.parametrize("value", ["abc", "", "1.2.3", "1_000", "0.5_0", None, True, [1]])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ParseError):
            parse_decimal(value)

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
    def test_rejects_non_finite(self, value):
        with pytest.raises(ParseError, match="finite"):
            parse_decimal(value)

    def test_rejects_negative(self):
        with pytest.raises(ParseError, match="negative"):
            parse_donation("-5")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_donation("lots")


class TestShiftToInteger:
    def test_exact_shift(self):
        assert shift_to_integer(Decimal("12.35"), -2) == 1235
        assert shift_to_integer(Decimal("12.35"), -4) == 123500

    def test_positive_exponent(self):
        assert shift_to_integer(Decimal("1E+2"), 1) == 10

    def test_truncates_remainder(self):
        assert shift_to_integer(Decimal("1.239"), -2) == 123

    def test_zero(self):
        assert shift_to_integer(Decimal("0.00"), -3) == 0


class TestNormalizedLots:
    def test_uses_finest_exponent_across_all_inputs(self):
        source = DonationInput(
            {"A": Decimal("1.5")}, [Lot("A", "d1", 2, Decimal("0.125"))]
        )
        normalized = NormalizedLots(source, Decimal("10"))

        assert normalized.exponent == -3
        assert normalized.donation == 10000
        assert normalized.share_prices == {"A": 1500}
        assert normalized.lots[0].cost == 125

    def test_donation_can_set_exponent(self):
        source = DonationInput({"A": Decimal("1.5")}, [Lot("A", "d1", 2, Decimal("1"))])
        normalized = NormalizedLots(source, Decimal("0.0001"))

        assert normalized.exponent == -4
        assert normalized.donation == 1
        assert normalized.share_prices["A"] == 15000

    def test_price_can_set_exponent(self):
        source = DonationInput({"A": Decimal("0.001")}, [Lot("A", "d1", 2, Decimal("1.5"))])
        normalized = NormalizedLots(source, Decimal("3"))

        assert normalized.exponent == -3
        assert normalized.lots[0].cost == 1500

    def test_coarse_exponents(self):
        source = DonationInput(
            {"A": Decimal("1E+2")}, [Lot("A", "d1", 1, Decimal("2E+1"))]
        )
        normalized = NormalizedLots(source, Decimal("3E+2"))

        assert normalized.exponent == 1
        assert normalized.donation == 30
        assert normalized.share_prices["A"] == 10
        assert normalized.lots[0].cost == 2

    def test_unknown_asset_raises(self):
        source = DonationInput(
            {"VTI": Decimal("100")}, [Lot("MSFT", "d1", 1, Decimal("50"))]
        )
        with pytest.raises(InputError, match="MSFT"):
            NormalizedLots(source, Decimal("100"))

    def test_lots_keep_their_input_index(self, etf_input):
        normalized = NormalizedLots(etf_input, Decimal("100"))

        assert [lot.index for lot in normalized.lots] == [0, 1, 2, 3]
        assert normalized.lot(normalized.lots[3]) is etf_input.lots[3]

    def test_unit_capital_gains(self, etf_input):
        normalized = NormalizedLots(etf_input, Decimal("100"))

        gains = [normalized.unit_capital_gains(lot) for lot in normalized.lots]
        assert gains == [4967, 4467, -2000, 235]

    def test_does_not_modify_input(self, etf_input):
        before = list(etf_input.lots)
        normalized = NormalizedLots(etf_input, Decimal("100"))
        normalized.filter_lots(Objective.MAXIMIZE_GAINS)

        assert etf_input.lots == before


class TestFilterLots:
    def test_gains_mode_keeps_gains_in_order(self, etf_input):
        normalized = NormalizedLots(etf_input, Decimal("200"))
        normalized.filter_lots(Objective.MAXIMIZE_GAINS)

        assert [lot.index for lot in normalized.lots] == [0, 1, 3]

    def test_losses_mode_keeps_losses(self, etf_input):
        normalized = NormalizedLots(etf_input, Decimal("200"))
        normalized.filter_lots(Objective.MAXIMIZE_LOSSES)

        assert [lot.index for lot in normalized.lots] == [2]

    def test_drops_lots_priced_over_budget(self, etf_input):
        normalized = NormalizedLots(etf_input, Decimal("100"))
        normalized.filter_lots(Objective.MAXIMIZE_GAINS)

        # VTI costs 100.22 a share, more than the whole donation
        assert [lot.index for lot in normalized.lots] == [3]

    def test_price_equal_to_budget_is_kept(self):
        source = DonationInput({"A": Decimal("10")}, [Lot("A", "d1", 3, Decimal("4"))])
        normalized = NormalizedLots(source, Decimal("10.00"))
        normalized.filter_lots(Objective.MAXIMIZE_GAINS)

        assert len(normalized.lots) == 1

    def test_drops_zero_gain_in_both_modes(self):
        source = DonationInput({"A": Decimal("10")}, [Lot("A", "d1", 3, Decimal("10.0"))])
        for objective in Objective:
            normalized = NormalizedLots(source, Decimal("100"))
            normalized.filter_lots(objective)
            assert normalized.lots == []

    def test_drops_empty_lots(self):
        source = DonationInput({"A": Decimal("10")}, [Lot("A", "d1", 0, Decimal("1"))])
        normalized = NormalizedLots(source, Decimal("100"))
        normalized.filter_lots(Objective.MAXIMIZE_GAINS)

        assert normalized.lots == []

    def test_total_price_of_survivors(self, etf_input):
        normalized = NormalizedLots(etf_input, Decimal("200"))
        normalized.filter_lots(Objective.MAXIMIZE_GAINS)

        assert normalized.total_price() == 10022 * 24 + 1235 * 50

    def test_values_are_negated_for_losses(self, etf_input):
        normalized = NormalizedLots(etf_input, Decimal("200"))
        normalized.filter_lots(Objective.MAXIMIZE_LOSSES)

        assert normalized.values(Objective.MAXIMIZE_LOSSES) == [2000]
        assert normalized.prices() == [10022]
