"""FEFO allocation - pulls reserve stock for restock candidates, soonest expiry first."""

from datetime import date, datetime
from typing import Optional

import pandas as pd

from .models import (
    Allocation,
    LocationStock,
    RestockCandidate,
    SuggestedLocation,
    get_optional_number,
)


def _expiration_datetime(value) -> Optional[datetime]:
    """
    Parse an expiration date; unparseable or missing dates become None.

    Dates beyond the pandas nanosecond range (e.g. "9999-12-31") are still
    returned as plain datetimes so they sort as far-future expiries.
    """
    if value is None or value is pd.NaT or value == "":
        return None
    if isinstance(value, datetime):
        return datetime.combine(value.date(), value.time())
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    try:
        timestamp = pd.to_datetime(value, errors="coerce")
    except (ValueError, OverflowError):
        timestamp = None

    if timestamp is None or pd.isna(timestamp):
        try:
            return datetime.fromisoformat(str(value).strip()[:10])
        except ValueError:
            return None
    return timestamp.to_pydatetime().replace(tzinfo=None)


def fefo_sort_key(stock: LocationStock) -> tuple:
    """
    Sort key for FEFO ordering.

    Primary: days to expiry ascending, missing values last.
    Secondary: expiration date ascending, missing values last.
    """
    days = get_optional_number(stock.days_to_expiry)
    expires = _expiration_datetime(stock.expiration_date)
    return (
        days is None,
        days if days is not None else 0,
        expires is None,
        expires if expires is not None else datetime.min,
    )


def sort_fefo(locations: list[LocationStock]) -> list[LocationStock]:
    """Return locations in FEFO order. Full ties keep their original order."""
    return sorted(locations, key=fefo_sort_key)


def allocate_full_pallets(candidate: RestockCandidate) -> Allocation:
    """
    Sales-mode allocation: take whole location quantities.

    Walks reserve locations in FEFO order, taking the full available quantity
    of each, until the running total covers amount_needed. The total may
    exceed the demand. With nothing needed (amount_needed <= 0) exactly one
    location is taken.
    """
    allocation = Allocation()

    for stock in sort_fefo(candidate.reserve_locations):
        allocation.quantity_to_restock += stock.available
        allocation.suggested_locations.append(
            SuggestedLocation.from_stock(stock, full_pallet=True)
        )
        if candidate.amount_needed <= 0 or allocation.quantity_to_restock >= candidate.amount_needed:
            break

    return allocation


def allocate_exact(candidate: RestockCandidate) -> Allocation:
    """
    Levels-mode allocation: fill exactly up to amount_needed.

    Walks reserve locations in FEFO order taking min(available, remaining),
    so the last location used may be a partial pull.
    """
    allocation = Allocation()
    remaining = candidate.amount_needed

    for stock in sort_fefo(candidate.reserve_locations):
        if remaining <= 0:
            break

        amount_to_take = min(stock.available, remaining)
        allocation.quantity_to_restock += amount_to_take
        allocation.suggested_locations.append(
            SuggestedLocation.from_stock(
                stock,
                quantity=amount_to_take,
                full_pallet=amount_to_take == stock.available,
            )
        )
        remaining -= amount_to_take

    return allocation
