"""Tests for model helpers and AnalysisConfig."""

from restock.models import (
    AnalysisConfig,
    RestockSuggestion,
    get_optional_number,
    get_quantity_value,
    normalize,
)
from restock.config import DEFAULT_VALID_STATUSES, DEFAULT_PICKING_LEVELS


class TestNormalize:
    """Tests for grouping-key normalization."""

    def test_trims_and_uppercases(self):
        """Keys are trimmed and uppercased."""
        assert normalize("  sku-01 ") == "SKU-01"
        assert normalize("Disponible") == "DISPONIBLE"

    def test_none_and_nan_become_empty(self):
        """None and NaN → ""."""
        assert normalize(None) == ""
        assert normalize(float("nan")) == ""

    def test_numbers_are_stringified(self):
        """Whole floats from Excel lose their ".0"."""
        assert normalize(46600) == "46600"
        # Excel numeric cells arrive as floats
        assert normalize(46600.0) == "46600"
        assert normalize(1.5) == "1.5"


class TestGetQuantityValue:
    """Tests for lenient numeric coercion."""

    def test_numbers_pass_through(self):
        """Numbers come back unchanged; whole floats become int."""
        assert get_quantity_value(5) == 5
        assert get_quantity_value(2.5) == 2.5
        assert get_quantity_value(10.0) == 10
        assert isinstance(get_quantity_value(10.0), int)

    def test_missing_or_invalid_is_zero(self):
        """None, blank, text, NaN and lists → 0."""
        assert get_quantity_value(None) == 0
        assert get_quantity_value("") == 0
        assert get_quantity_value("abc") == 0
        assert get_quantity_value(float("nan")) == 0
        assert get_quantity_value([1, 2]) == 0

    def test_text_numbers(self):
        """Plain and decimal-comma text both parse."""
        assert get_quantity_value("12") == 12
        assert get_quantity_value(" 7.5 ") == 7.5
        assert get_quantity_value("1.234,5") == 1234.5

    def test_optional_number_keeps_missing(self):
        """Missing or invalid values → None, numbers pass through."""
        assert get_optional_number(None) is None
        assert get_optional_number("") is None
        assert get_optional_number(float("nan")) is None
        assert get_optional_number("x") is None
        assert get_optional_number(-3) == -3
        assert get_optional_number("12") == 12

    def test_optional_number_decimal_comma(self):
        """Decimal-comma text parses the same way get_quantity_value does."""
        assert get_optional_number("1.234,5") == 1234.5
        assert get_optional_number("7,5") == 7.5
        assert get_optional_number(" 30 ") == 30


class TestAnalysisConfig:
    """Tests for config defaults and (de)serialization."""

    def test_defaults(self):
        """Default config uses the shipped status and level lists."""
        config = AnalysisConfig()
        assert config.valid_statuses == DEFAULT_VALID_STATUSES
        assert config.picking_levels == DEFAULT_PICKING_LEVELS
        assert "DISPONIBLE" in config.status_allow_set

    def test_defaults_are_not_shared(self):
        """Mutating one config's list leaves other configs alone."""
        first = AnalysisConfig()
        second = AnalysisConfig()
        first.valid_statuses.append("QA")
        assert "QA" not in second.valid_statuses
        assert "QA" not in DEFAULT_VALID_STATUSES

    def test_round_trip_dict(self):
        """to_dict/from_dict keeps every list and the derived sets."""
        config = AnalysisConfig(
            valid_statuses=["libre"],
            ignored_locations=["qa-hold"],
            picking_levels=["1"],
            reserve_levels=["2"],
            additional_reserve_locations=["dock"],
        )
        restored = AnalysisConfig.from_dict(config.to_dict())
        assert restored == config
        assert restored.status_allow_set == {"LIBRE"}
        assert restored.location_deny_set == {"QA-HOLD"}
        assert restored.reserve_prefixes == ("DOCK",)

    def test_from_dict_fills_missing_keys(self):
        """Keys missing from the dict take their defaults."""
        config = AnalysisConfig.from_dict({"picking_levels": ["1"]})
        assert config.picking_levels == ["1"]
        assert config.valid_statuses == DEFAULT_VALID_STATUSES


class TestRestockSuggestion:
    """Tests for suggestion properties."""

    def test_quantity_short(self):
        """Need 45, restock 30 → 15 short, no source."""
        s = RestockSuggestion(
            sku="A", description="", quantity_sold=0, quantity_available=0,
            quantity_to_restock=30, quantity_needed=45,
        )
        assert s.needs_restock is True
        assert s.quantity_short == 15
        assert s.has_source is False

    def test_ok_item(self):
        """Nothing to restock → OK item."""
        s = RestockSuggestion(
            sku="A", description="", quantity_sold=5, quantity_available=10,
            quantity_to_restock=0,
        )
        assert s.needs_restock is False
        assert s.quantity_short == 0
