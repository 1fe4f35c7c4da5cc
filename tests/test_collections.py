#
# Amounts - Collection Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from amounts.collections import BiDirectionalMap


# Tests ----------------------------------------------------------------------------------------------------------------
class TestBiDirectionalMap:

    @pytest.fixture
    def populated_map(self):
        """Fixture providing a pre-populated BiDirectionalMap instance."""
        return BiDirectionalMap({
            "ms": 0,
            "s": 1,
            "m": 2,
        })

    def test_lookup(self, populated_map):
        assert populated_map["m"] == 2
        assert populated_map.get("s") == 1
        assert populated_map.get("h") is None
        assert populated_map.get_key(0) == "ms"

    def test_missing_reverse_lookup(self, populated_map):
        with pytest.raises(KeyError):
            populated_map.get_key(99)

    def test_value_uniqueness(self):
        with pytest.raises(ValueError, match="Value <int: 1> already exists"):
            BiDirectionalMap([("s", 1), ("sec", 1)])

    def test_key_uniqueness(self):
        with pytest.raises(ValueError, match="Key <str: 's'> already exists"):
            BiDirectionalMap([("s", 1), ("s", 2)])

    def test_contains(self, populated_map):
        assert "ms" in populated_map  # Checks key
        assert 0 not in populated_map

    def test_keys_values_items(self, populated_map):
        assert list(populated_map.keys()) == ["ms", "s", "m"]
        assert list(populated_map.values()) == [0, 1, 2]
        assert set(populated_map.items()) == {("ms", 0), ("s", 1), ("m", 2)}
        assert len(populated_map) == 3

    def test_read_only(self, populated_map):
        with pytest.raises(TypeError):
            populated_map["h"] = 3

    def test_equality(self, populated_map):
        assert populated_map == {"ms": 0, "s": 1, "m": 2}
        assert repr(BiDirectionalMap({"a": 1})) == "BiDirectionalMap({'a': 1})"

    def test_empty(self):
        assert len(BiDirectionalMap()) == 0
