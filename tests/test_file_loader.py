"""Tests for spreadsheet reading and record loading."""

import io
import logging

import pandas as pd
import pytest
from restock.file_loader import (
    MissingColumnsError,
    RecordValidationError,
    format_cell_date,
    format_cell_text,
    load_cross_check_rows,
    load_inventory_records,
    load_min_max_rules,
    load_sales_lines,
    load_shelf_life_limits,
    read_table,
    validate_required_columns,
)
from restock.config import WAREHOUSE_INVENTORY_MAPPING


def excel_bytes(df: pd.DataFrame) -> io.BytesIO:
    buffer = io.BytesIO()
    df.to_excel(buffer, index=False, engine="openpyxl")
    buffer.seek(0)
    return buffer


class TestReadTable:
    """Tests for format detection."""

    def test_excel(self):
        """.xlsx uploads are read with their numeric types."""
        source = pd.DataFrame({"SKU": ["A", "B"], "Disponible": [1, 2]})
        df = read_table(excel_bytes(source), filename="stock.xlsx")
        assert list(df.columns) == ["SKU", "Disponible"]
        assert df["Disponible"].tolist() == [1, 2]

    def test_csv_with_comma(self):
        """CSV cells stay text, so leading zeros survive."""
        content = io.BytesIO("SKU,Disponible\n007,5\n".encode("utf-8"))
        df = read_table(content, filename="stock.csv")
        assert df.to_dict("records") == [{"SKU": "007", "Disponible": "5"}]

    def test_tab_delimited_text(self):
        """Tab-delimited .txt with a BOM and CRLF line ends."""
        content = io.BytesIO("\ufeffSKU\tDescripcion\r\nA\tWidget, large\r\n".encode("utf-8"))
        df = read_table(content, filename="stock.txt")
        assert list(df.columns) == ["SKU", "Descripcion"]
        assert df.iloc[0]["Descripcion"] == "Widget, large"

    def test_path(self, tmp_path):
        """A filesystem path is read using its own suffix."""
        path = tmp_path / "sales.csv"
        path.write_text("Material,cantidad confirmada\nA,3\n", encoding="utf-8")
        df = read_table(path)
        assert len(df) == 1


class TestColumnValidation:
    """Tests for column resolution."""

    def test_headers_are_case_insensitive(self):
        """Headers match ignoring case and padding."""
        df = pd.DataFrame(columns=["sku", " LOCALIZACION ", "DISPONIBLE", "estado"])
        is_valid, missing = validate_required_columns(df, {
            "sku": ["SKU"],
            "location": ["Localizacion"],
            "available_qty": ["Disponible"],
            "status": ["Estado"],
        })
        assert is_valid is True
        assert missing == []

    def test_missing_required_columns(self):
        """Missing columns → MissingColumnsError naming the expected headers."""
        df = pd.DataFrame(columns=["SKU", "Localizacion"])
        with pytest.raises(MissingColumnsError) as exc_info:
            load_inventory_records(df)
        assert set(exc_info.value.missing) == {"available_qty", "status"}
        assert "Disponible" in str(exc_info.value)

    def test_optional_columns_may_be_absent(self):
        """No LPN or expiry columns → those fields are None."""
        df = pd.DataFrame({
            "SKU": ["A"], "Localizacion": ["P1-A-1-5"], "Disponible": [4], "Estado": ["Disponible"],
        })
        records = load_inventory_records(df)
        assert records[0].license_plate is None
        assert records[0].days_to_expiry is None
        assert records[0].expiration_date is None


class TestLoadInventory:
    """Tests for inventory record loading."""

    def test_excel_row_conversion(self):
        """Excel SKUs, LPNs, quantities and dates convert to record fields."""
        source = pd.DataFrame({
            "SKU": [46600, 46601],
            "LPN": ["LP1", None],
            "Descripcion": ["Widget", "Gadget"],
            "Localizacion": ["P2-B-3-20", "P1-A-1-5"],
            "Disponible": [80, 12.5],
            "Estado": ["Disponible", "Disponible"],
            "Fecha de vencimiento": [pd.Timestamp("2025-06-30"), None],
            "FPC": [10, None],
        })
        records = load_inventory_records(read_table(excel_bytes(source), filename="inv.xlsx"))

        first, second = records
        assert first.sku == "46600"
        assert first.license_plate == "LP1"
        assert first.available_qty == 80
        assert first.expiration_date == "2025-06-30"
        assert first.days_to_expiry == 10
        assert second.license_plate is None
        assert second.available_qty == 12.5
        assert second.expiration_date is None
        assert second.days_to_expiry is None

    def test_csv_decimal_comma(self):
        """Quantity "1.234,5" in a text file → 1234.5."""
        content = io.BytesIO(
            "SKU\tLocalizacion\tDisponible\tEstado\nA\tP1-A-1-5\t1.234,5\tDisponible\n".encode("utf-8")
        )
        records = load_inventory_records(read_table(content, filename="inv.txt"))
        assert records[0].available_qty == 1234.5

    def test_empty_rows_are_skipped(self):
        """Fully blank rows are dropped."""
        df = pd.DataFrame({
            "SKU": ["A", None, ""],
            "Localizacion": ["P1-A-1-5", None, ""],
            "Disponible": [1, None, 0],
            "Estado": ["Disponible", None, ""],
        })
        assert len(load_inventory_records(df)) == 1

    def test_row_without_sku_is_skipped_with_warning(self, caplog):
        """Row without SKU → skipped and logged with its field path."""
        df = pd.DataFrame({
            "SKU": ["A", ""],
            "Localizacion": ["P1-A-1-5", "P1-A-1-5"],
            "Disponible": [1, 5],
            "Estado": ["Disponible", "Disponible"],
        })
        with caplog.at_level(logging.WARNING, logger="restock.file_loader"):
            records = load_inventory_records(df)
        assert [r.sku for r in records] == ["A"]
        assert "inventory[1].sku" in caplog.text

    def test_strict_mode_raises_with_field_path(self):
        """strict=True → RecordValidationError at inventory[1].sku."""
        df = pd.DataFrame({
            "SKU": ["A", ""],
            "Localizacion": ["P1-A-1-5", "P1-A-1-5"],
            "Disponible": [1, 5],
            "Estado": ["Disponible", "Disponible"],
        })
        with pytest.raises(RecordValidationError) as exc_info:
            load_inventory_records(df, strict=True)
        assert exc_info.value.field_path == "inventory[1].sku"
        assert str(exc_info.value) == "inventory[1].sku: SKU is required"


class TestOtherLoaders:
    """Tests for sales, min/max, cross-check and shelf-life loaders."""

    def test_sales_lines(self):
        """Invoicing export columns map to sales lines."""
        df = pd.DataFrame({
            "ID de Producto": ["A", "B"],
            "Nombre de Artículo": ["Widget", ""],
            "Cant. Facturada": [10, "3"],
        })
        lines = load_sales_lines(df)
        assert [(s.sku, s.confirmed_qty, s.description) for s in lines] == [
            ("A", 10, "Widget"), ("B", 3, "")
        ]

    def test_min_max_rule_requires_location(self):
        """Rule without a location → error when strict, skipped otherwise."""
        df = pd.DataFrame({
            "sku": ["A", "B"],
            "localizacion": ["P1-A-1-5", ""],
            "cantidad minima": [10, 10],
            "cantidad maxima": [50, 50],
        })
        with pytest.raises(RecordValidationError) as exc_info:
            load_min_max_rules(df, strict=True)
        assert exc_info.value.field_path == "min_max[1].location"

        rules = load_min_max_rules(df)
        assert [(r.sku, r.location, r.min_qty, r.max_qty, r.lpn) for r in rules] == [
            ("A", "P1-A-1-5", 10, 50, None)
        ]

    def test_cross_check_feeds(self):
        """System and warehouse feeds load with their own column mappings."""
        system = pd.DataFrame({
            "Material": ["X", "X"], "Ce. Lote": ["L1", "L2"], "Stock disponible": [10, 5],
        })
        warehouse = pd.DataFrame({"Codigo": ["X"], "Lote": ["L9"], "Unidades": [20]})

        system_rows = load_cross_check_rows(system)
        warehouse_rows = load_cross_check_rows(warehouse, WAREHOUSE_INVENTORY_MAPPING)

        assert [(r.sku, r.lot, r.quantity) for r in system_rows] == [("X", "L1", 10), ("X", "L2", 5)]
        assert [(r.sku, r.lot, r.quantity) for r in warehouse_rows] == [("X", "L9", 20)]

    def test_shelf_life_limits(self):
        """Master rows load as SKU + minimum days."""
        df = pd.DataFrame({"Material": ["A"], "Dias minimos": [45]})
        assert [(m.sku, m.min_days) for m in load_shelf_life_limits(df)] == [("A", 45)]


class TestCellFormatting:
    """Tests for cell helpers."""

    def test_text(self):
        """Cell text drops Excel ".0", NaN and padding."""
        assert format_cell_text(46600.0) == "46600"
        assert format_cell_text(float("nan")) == ""
        assert format_cell_text(" LP1 ") == "LP1"
        assert format_cell_text(None) == ""

    def test_dates(self):
        """Serials, timestamps and text dates normalize; blanks → None."""
        assert format_cell_date(45658) == "2025-01-01"
        assert format_cell_date(pd.Timestamp("2025-01-02 13:45")) == "2025-01-02"
        assert format_cell_date("31/12/2025") == "31/12/2025"
        assert format_cell_date("") is None
        assert format_cell_date(None) is None
        assert format_cell_date(pd.NaT) is None
