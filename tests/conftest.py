"""Shared fixtures for restock analysis tests."""

import pytest
from restock.models import AnalysisConfig, InventoryRecord, MinMaxRule, SalesLine

# Location codes used in tests (level = last segment)
PICK_A = "P1-A-1-5"        # picking
PICK_B = "P1-A-2-10"       # picking
RESERVE_A = "P2-B-3-20"    # reserve
RESERVE_B = "P2-B-4-30"    # reserve
RESERVE_C = "P2-C-1-40"    # reserve
DOCK = "MUELLE ENTRADA 1"  # reserve by prefix
TRANSIT = "T-9-99"         # no role

VALID_STATUS = "Disponible"


@pytest.fixture
def config():
    """Standard AnalysisConfig for tests (module defaults)."""
    return AnalysisConfig()


def make_record(
    sku: str,
    location: str,
    qty: float,
    status: str = VALID_STATUS,
    description: str = "",
    lpn: str = None,
    days: float = None,
    expires: str = None,
    lot: str = None,
) -> InventoryRecord:
    """Helper to create an inventory record with usable status by default."""
    return InventoryRecord(
        sku=sku,
        location=location,
        available_qty=qty,
        status=status,
        description=description or f"Product {sku}",
        license_plate=lpn,
        lot=lot,
        expiration_date=expires,
        days_to_expiry=days,
    )


def make_sale(sku: str, qty: float, description: str = "") -> SalesLine:
    """Helper to create a sales line."""
    return SalesLine(sku=sku, confirmed_qty=qty, description=description)


def make_rule(sku: str, location: str, min_qty: float, max_qty: float, lpn: str = None) -> MinMaxRule:
    """Helper to create a min/max rule."""
    return MinMaxRule(sku=sku, location=location, min_qty=min_qty, max_qty=max_qty, lpn=lpn)
