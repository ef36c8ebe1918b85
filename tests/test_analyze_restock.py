"""Tests for the command-line analysis script."""

import pandas as pd
from openpyxl import load_workbook
from analyze_restock import analyze_files


def write_inventory(path):
    pd.DataFrame({
        "SKU": ["A", "A", "B"],
        "LPN": ["", "LP1", ""],
        "Localizacion": ["P1-A-1-5", "P2-B-3-20", "P1-A-1-5"],
        "Disponible": [30, 80, 50],
        "Estado": ["Disponible", "Disponible", "Disponible"],
        "FPC": [None, 10, None],
    }).to_excel(path, index=False)


class TestAnalyzeFiles:
    """End-to-end runs over Excel files."""

    def test_sales_mode(self, tmp_path, capsys):
        """Sales run writes report and tasks and prints the summary counts."""
        inventory = tmp_path / "inventory.xlsx"
        sales = tmp_path / "sales.xlsx"
        write_inventory(inventory)
        pd.DataFrame({"Material": ["A", "B", "Z"], "cantidad confirmada": [100, 10, 5]}).to_excel(sales, index=False)

        files = analyze_files(str(inventory), str(sales), "sales", output_dir=str(tmp_path / "out"))

        names = sorted(f.name.split("_sales_")[0] for f in files)
        assert names == ["restock_report", "wms_tasks"]

        report = next(f for f in files if f.name.startswith("restock_report"))
        assert load_workbook(report).sheetnames == ["Restock", "Missing Products"]

        tasks = pd.read_excel(next(f for f in files if f.name.startswith("wms_tasks")))
        assert tasks.to_dict("records") == [{"LRLD_LPN_CODE": "LP1", "LRLD_LOCATION": "P2-B-3-20"}]

        out = capsys.readouterr().out
        assert "SKUs to restock: 1" in out
        assert "SKUs already OK: 1" in out
        assert "Products without inventory: 1" in out

    def test_levels_mode_without_restock(self, tmp_path):
        """Slot already above min → report only, no task file."""
        inventory = tmp_path / "inventory.xlsx"
        levels = tmp_path / "levels.csv"
        write_inventory(inventory)
        levels.write_text("sku,localizacion,min,max\nB,P1-A-1-5,10,60\n", encoding="utf-8")

        files = analyze_files(str(inventory), str(levels), "levels", output_dir=str(tmp_path / "out"))

        assert [f.name.split("_levels_")[0] for f in files] == ["restock_report"]
