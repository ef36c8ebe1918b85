#!/usr/bin/env python3
"""
Run a restock analysis over an inventory file and a demand file

Modes:
- sales:  demand file is an invoicing export (SKU + confirmed quantity);
          short picking stock is refilled with whole reserve pallets
- levels: demand file lists min/max levels per picking slot;
          slots below min are refilled exactly up to max

Writes a report workbook and the WMS task file into output/.
"""

import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

from restock import (
    AnalysisConfig,
    AnalysisMode,
    RestockAnalyzer,
    load_inventory_records,
    load_min_max_rules,
    load_sales_lines,
    read_table,
)
from restock.export import (
    build_report_workbook,
    missing_products_to_dataframe,
    suggestions_to_dataframe,
    wms_task_dataframe,
)

OUTPUT_DIR = "output"


def analyze_files(
    inventory_file: str,
    demand_file: str,
    mode: str = "sales",
    config: Optional[AnalysisConfig] = None,
    output_dir: str = OUTPUT_DIR
) -> list[Path]:
    """
    Main analysis function

    Args:
        inventory_file: Path to the inventory Excel/CSV file
        demand_file: Path to the sales or min/max Excel/CSV file
        mode: "sales" or "levels"
        config: Analysis rules (defaults when omitted)
        output_dir: Directory for the generated files

    Returns:
        Paths of the files written
    """
    mode = AnalysisMode(mode)

    print(f"Loading {inventory_file}...")
    inventory = load_inventory_records(read_table(inventory_file))

    print(f"Loading {demand_file}...")
    if mode == AnalysisMode.SALES:
        demand = load_sales_lines(read_table(demand_file))
    else:
        demand = load_min_max_rules(read_table(demand_file))

    print(f"Processing {len(inventory)} inventory rows, {len(demand)} demand rows...")
    result = RestockAnalyzer(config).analyze(mode, inventory, demand)

    # Create output directory
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    print("\nGenerating output files...")
    files_created = []

    if result.suggestions or result.missing_products:
        report_path = output_path / f"restock_report_{mode.value}_{timestamp}.xlsx"
        report_path.write_bytes(build_report_workbook({
            "Restock": suggestions_to_dataframe(result.suggestions, mode),
            "Missing Products": missing_products_to_dataframe(result.missing_products),
        }))
        files_created.append(report_path)
        print(f"  Created: {report_path.name}")

    if result.restock_items:
        tasks = wms_task_dataframe(result.restock_items, mode)
        tasks_path = output_path / f"wms_tasks_{mode.value}_{timestamp}.xlsx"
        tasks.to_excel(tasks_path, index=False)
        files_created.append(tasks_path)
        print(f"  Created: {tasks_path.name} ({len(tasks)} tasks)")

    # Summary
    print("\n=== Summary ===")
    print(f"SKUs evaluated: {len(result.suggestions)}")
    print(f"SKUs to restock: {len(result.restock_items)}")
    print(f"SKUs already OK: {len(result.ok_items)}")
    print(f"Total units to restock: {result.total_to_restock}")
    if mode == AnalysisMode.SALES:
        print(f"Products without inventory: {len(result.missing_products)}")
    else:
        short = [s for s in result.restock_items if s.quantity_short > 0]
        print(f"Slots reserve could not fill to max: {len(short)}")

    return files_created


if __name__ == "__main__":
    import sys

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) < 3:
        print("Usage: python analyze_restock.py <inventory.xlsx> <demand.xlsx> [sales|levels]")
        print("  sales  = demand file is a sales export (default)")
        print("  levels = demand file is a min/max levels sheet")
        sys.exit(1)

    inventory_file = sys.argv[1]
    demand_file = sys.argv[2]
    mode = sys.argv[3] if len(sys.argv) > 3 else "sales"

    if mode not in ["sales", "levels"]:
        print("Error: mode must be 'sales' or 'levels'")
        sys.exit(1)

    analyze_files(inventory_file, demand_file, mode)
