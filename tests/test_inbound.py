"""Tests for the inbound receipt builder."""

from datetime import datetime

from restock.config import INBOUND_FIELDS
from restock.inbound import build_inbound_row, build_inbound_rows, format_excel_date, inbound_to_dataframe

MAPPING = {
    "N_ORDER": "Pedido",
    "SKU": "Material",
    "QTY": "Cantidad",
    "FECHA_DE_VENCIMIENTO": "Vencimiento",
    "LOTE": "Lote",
}


class TestFormatExcelDate:
    """Tests for Excel serial date conversion."""

    def test_serial(self):
        """Excel serial 45658 → 2025-01-01, time fraction dropped."""
        assert format_excel_date(45658) == "2025-01-01"
        assert format_excel_date(45658.75) == "2025-01-01"

    def test_datetime(self):
        """datetime values are formatted as ISO dates."""
        assert format_excel_date(datetime(2024, 2, 29, 8, 30)) == "2024-02-29"

    def test_text_passes_through(self):
        """Text dates are kept as-is; None → ""."""
        assert format_excel_date("31/12/2025") == "31/12/2025"
        assert format_excel_date(None) == ""


class TestBuildInboundRow:
    """Tests for mapping one source row."""

    def test_every_field_is_present(self):
        """Unmapped fields default to "" or 0 for numeric fields."""
        entry = build_inbound_row({"Material": "A"}, MAPPING)
        assert list(entry) == INBOUND_FIELDS
        assert entry["SKU"] == "A"
        assert entry["N_ORDER"] == ""
        assert entry["QTY"] == 0
        assert entry["PRICE"] == 0

    def test_values_are_converted(self):
        """Float order numbers, numeric SKUs, text quantities and serial dates are normalized."""
        row = {"Pedido": 1001.0, "Material": 46600, "Cantidad": "12", "Vencimiento": 45658, "Lote": "L1"}
        entry = build_inbound_row(row, MAPPING)
        assert entry["N_ORDER"] == "1001"
        assert entry["SKU"] == "46600"
        assert entry["QTY"] == 12
        assert entry["FECHA_DE_VENCIMIENTO"] == "2025-01-01"
        assert entry["LOTE"] == "L1"

    def test_fixed_values_override_mapping(self):
        """Fixed values replace mapped columns."""
        entry = build_inbound_row(
            {"Pedido": "P1", "Material": "A"},
            MAPPING,
            {"N_ORDER": "FIXED", "INBOUNDTYPE_CODE": "REC", "NOTE": ""},
        )
        assert entry["N_ORDER"] == "FIXED"
        assert entry["INBOUNDTYPE_CODE"] == "REC"
        assert entry["NOTE"] == ""

    def test_blank_fixed_value_falls_back_to_column(self):
        """Blank fixed value → mapped column is used."""
        entry = build_inbound_row({"Pedido": "P1"}, MAPPING, {"N_ORDER": ""})
        assert entry["N_ORDER"] == "P1"

    def test_missing_date_is_empty(self):
        """NaN expiration date → ""."""
        entry = build_inbound_row({"Vencimiento": float("nan")}, MAPPING)
        assert entry["FECHA_DE_VENCIMIENTO"] == ""


class TestBuildInboundRows:
    """Tests for building a whole file."""

    def test_dataframe_column_order(self):
        """Output columns follow the inbound schema order."""
        entries = build_inbound_rows([{"Material": "A"}, {"Material": "B"}], MAPPING, {"UOM_CODE": "UN"})
        df = inbound_to_dataframe(entries)
        assert list(df.columns) == INBOUND_FIELDS
        assert df["SKU"].tolist() == ["A", "B"]
        assert df["UOM_CODE"].tolist() == ["UN", "UN"]
