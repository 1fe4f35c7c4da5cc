#
# Amounts - Storage Size Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from decimal import Decimal

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from amounts.amount import AmountParseError
from amounts.duration import Duration, DurationUnit
from amounts.storage import DATA_EXCHANGE_RATES, DataAmount, DataAmountParseError, DataUnit


# Tests ----------------------------------------------------------------------------------------------------------------

class TestDataAmountParse:

    @pytest.mark.parametrize(
        "text, value, unit",
        [
            pytest.param("512b", 512, DataUnit.BITS, id="bits"),
            pytest.param("512B", 512, DataUnit.BYTES, id="bytes"),
            pytest.param("1.5MB", 1.5, DataUnit.MEGABYTES, id="fractional-megabytes"),
            pytest.param("1Mb", 1, DataUnit.MEGABITS, id="megabits"),
            pytest.param("3kb", 3, DataUnit.KILOBITS, id="lower-kilobits"),
            pytest.param("3kB", 3, DataUnit.KILOBYTES, id="lower-kilobytes"),
            pytest.param("3KB", 3, DataUnit.KILOBYTES, id="upper-kilobytes"),
            pytest.param("3Kb", 3, DataUnit.KILOBITS, id="upper-kilobits"),
            pytest.param("10gB", 10, DataUnit.GIGABYTES, id="gigabytes"),
            pytest.param("2Tb", 2, DataUnit.TERABITS, id="terabits"),
            pytest.param("2TB", 2, DataUnit.TERABYTES, id="terabytes"),
            pytest.param("  64MB ", 64, DataUnit.MEGABYTES, id="surrounding-whitespace"),
        ],
    )
    def test_strings(self, text, value, unit):
        amount = DataAmount.parse(text)
        assert amount.value == value
        assert amount.unit is unit

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(2048, 2048, id="int"),
            pytest.param(0.5, 0.5, id="float"),
            pytest.param(0, 0, id="zero"),
            pytest.param(Decimal("1.5"), 1.5, id="decimal"),
        ],
    )
    def test_numbers_are_bytes(self, value, expected):
        amount = DataAmount.parse(value)
        assert amount.value == expected
        assert amount.unit is DataUnit.BYTES

    def test_instance_returned_unchanged(self):
        amount = DataAmount(1, DataUnit.BITS)
        assert DataAmount.parse(amount) is amount

    @pytest.mark.parametrize(
        "value, match",
        [
            pytest.param("abc", "invalid format", id="garbage"),
            pytest.param("1.5.2MB", "invalid format", id="two-periods"),
            pytest.param("5 MB", "invalid format", id="inner-space"),
            pytest.param("2048", "invalid unit", id="no-suffix"),
            pytest.param("5K", "invalid unit", id="magnitude-only"),
            pytest.param(None, "Value is None", id="none"),
            pytest.param([1], "should be a DataAmount, number or string", id="list"),
            pytest.param(True, "should be a DataAmount, number or string", id="bool"),
        ],
    )
    def test_parse_errors(self, value, match):
        with pytest.raises(DataAmountParseError, match=match):
            DataAmount.parse(value)

    def test_other_kind_rejected(self):
        with pytest.raises(DataAmountParseError):
            DataAmount.parse(Duration(1, DurationUnit.SECONDS))

    def test_parse_error_is_value_error(self):
        assert issubclass(DataAmountParseError, AmountParseError)
        assert issubclass(DataAmountParseError, ValueError)

    def test_try_parse(self):
        assert DataAmount.try_parse("abc") is None
        assert DataAmount.try_parse(None) is None
        assert DataAmount.try_parse("1MB") == DataAmount(1.0, DataUnit.MEGABYTES)

    def test_try_parse_propagates_other_errors(self):
        class Exploding:
            def __float__(self):
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            DataAmount.try_parse(Exploding())

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param("1.5MB", True, id="valid-string"),
            pytest.param(42, True, id="number"),
            pytest.param(DataAmount(1, DataUnit.BYTES), True, id="instance"),
            pytest.param("abc", False, id="invalid-string"),
            pytest.param("42", False, id="missing-unit"),
            pytest.param(None, False, id="none"),
        ],
    )
    def test_is_valid(self, value, expected):
        assert DataAmount.is_valid(value) is expected


class TestDataAmountConversion:

    def test_exchange_table(self):
        assert [rate.multiplier for rate in DATA_EXCHANGE_RATES] == [1, 8, 125, 8, 125, 8, 125, 8, 125, 8]
        assert [rate.unit for rate in DATA_EXCHANGE_RATES] == list(DataUnit)

    @pytest.mark.parametrize(
        "value, unit, target, expected",
        [
            pytest.param(1, DataUnit.BYTES, DataUnit.BITS, 8, id="byte-to-bits"),
            pytest.param(1, DataUnit.KILOBITS, DataUnit.BYTES, 125, id="kilobit-to-bytes"),
            pytest.param(1, DataUnit.KILOBYTES, DataUnit.BYTES, 1000, id="kilobyte-to-bytes"),
            pytest.param(1, DataUnit.KILOBYTES, DataUnit.KILOBITS, 8, id="kilobyte-to-kilobits"),
            pytest.param(1, DataUnit.MEGABYTES, DataUnit.KILOBYTES, 1000, id="megabyte-to-kilobytes"),
            pytest.param(1, DataUnit.TERABYTES, DataUnit.BITS, 8e12, id="terabyte-to-bits"),
            pytest.param(8, DataUnit.BITS, DataUnit.BYTES, 1, id="bits-to-byte"),
            pytest.param(2500, DataUnit.BYTES, DataUnit.KILOBYTES, 2.5, id="bytes-to-kilobytes"),
        ],
    )
    def test_as_unit(self, value, unit, target, expected):
        assert DataAmount(value, unit).as_unit(target) == pytest.approx(expected)

    def test_as_unit_rounding(self):
        amount = DataAmount(1234, DataUnit.BYTES)
        assert amount.as_unit(DataUnit.KILOBYTES, 1) == pytest.approx(1.2)
        assert amount.as_unit(DataUnit.KILOBYTES, 0) == 1

    @pytest.mark.parametrize("unit", [-1, 10])
    def test_out_of_range(self, unit):
        amount = DataAmount(1, DataUnit.BYTES)
        assert amount.as_unit(unit) is None
        assert amount.convert(unit) is None

    @pytest.mark.parametrize("first", list(DataUnit))
    @pytest.mark.parametrize("second", [DataUnit.BITS, DataUnit.MEGABYTES, DataUnit.TERABYTES])
    def test_conversion_consistency(self, first, second):
        amount = DataAmount(3.25, first)
        there = amount.convert(second)
        assert there.as_unit(first) == pytest.approx(3.25)


class TestDataAmountArithmetic:

    def test_mixed_units(self):
        total = DataAmount.parse("1KB").plus("500B")
        assert total.unit is DataUnit.KILOBYTES
        assert total.value == pytest.approx(1.5)

    def test_number_in_receiver_unit(self):
        assert DataAmount.parse("1MB").plus(1) == DataAmount(2.0, DataUnit.MEGABYTES)

    def test_clamp(self):
        assert DataAmount(5, DataUnit.MEGABYTES).clamp("1MB", "2MB").value == pytest.approx(2)
        assert DataAmount(5, DataUnit.MEGABYTES).clamp("1MB", "10MB").value == 5

    def test_bits_and_bytes(self):
        amount = DataAmount(1, DataUnit.BYTES).minus("4b")
        assert amount.value == pytest.approx(0.5)


class TestDataAmountRendering:

    def test_str(self):
        assert str(DataAmount.parse("512b")) == "512 BITS"
        assert str(DataAmount.parse("1.5MB")) == "1.5 MEGABYTES"
        assert DataAmount(1, DataUnit.GIGABITS).unit_to_string() == "GIGABITS"

    @pytest.mark.parametrize(
        "value, unit, expected",
        [
            pytest.param(1_500_000, DataUnit.BYTES, "1.5 MEGABYTES", id="bytes-up"),
            pytest.param(2048, DataUnit.BYTES, "2.048 KILOBYTES", id="kilobytes"),
            pytest.param(0.5, DataUnit.BYTES, "4 BITS", id="half-byte"),
            pytest.param(3, DataUnit.BYTES, "3 BYTES", id="unchanged"),
            pytest.param(0.5, DataUnit.KILOBYTES, "4 KILOBITS", id="half-kilobyte"),
            pytest.param(5000, DataUnit.TERABYTES, "5000 TERABYTES", id="top"),
        ],
    )
    def test_to_human_string(self, value, unit, expected):
        assert DataAmount(value, unit).to_human_string() == expected
