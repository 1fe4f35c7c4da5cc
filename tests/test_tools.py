#
# Amounts - Tools Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import math

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from amounts.tools import fmt_number, fmt_type, fmt_value


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFmtNumber:

    @pytest.mark.parametrize(
        "number, expected",
        [
            pytest.param(512, "512", id="int"),
            pytest.param(512.0, "512", id="integral-float"),
            pytest.param(-3.0, "-3", id="negative-integral"),
            pytest.param(1.5, "1.5", id="fraction"),
            pytest.param(2.048, "2.048", id="shortest-repr"),
            pytest.param(1e21, "1e+21", id="huge"),
            pytest.param(math.nan, "nan", id="nan"),
            pytest.param(math.inf, "inf", id="inf"),
            pytest.param(-math.inf, "-inf", id="negative-inf"),
        ],
    )
    def test_fmt_number(self, number, expected):
        assert fmt_number(number) == expected

    def test_rejects_bool(self):
        with pytest.raises(TypeError):
            fmt_number(True)


class TestFmtTypeValue:

    def test_fmt_type(self):
        assert fmt_type(42) == "<type: int>"
        assert fmt_type(ValueError) == "<type: ValueError>"

    def test_fmt_value(self):
        assert fmt_value(42) == "<int: 42>"
        assert fmt_value([1, 2]) == "<list: [1, 2]>"

    def test_fmt_value_truncates(self):
        text = fmt_value("x" * 500)
        assert text.startswith("<str: 'xxx")
        assert text.endswith("'...>")
        assert len(text) < 200

    def test_fmt_value_escapes_ascii(self):
        class Angled:
            def __repr__(self):
                return "<angled>"

        assert fmt_value(Angled()) == "<Angled: <angled\\>>"

    def test_fmt_value_broken_repr(self):
        class Broken:
            def __repr__(self):
                raise RuntimeError("nope")

        assert "repr failed: RuntimeError" in fmt_value(Broken())
