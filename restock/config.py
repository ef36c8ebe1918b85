"""Default configuration values."""

# Inventory states that count as usable stock (compared upper-cased)
DEFAULT_VALID_STATUSES = ["STOCK EN ALMACEN LIBRE", "DISPONIBLE"]

# Locations excluded from every analysis (quality hold, discrepancies, virtual bins)
DEFAULT_IGNORED_LOCATIONS = ["PDIF-INV-1-10", "DEV-1-10"]

# Last segment of a location code marking it as picking, e.g. "P1-A-1-5" -> "5"
DEFAULT_PICKING_LEVELS = ["5", "10", "15"]

# Last segment of a location code marking it as reserve, e.g. "P2-B-3-20" -> "20"
DEFAULT_RESERVE_LEVELS = ["20", "30", "40", "50", "60", "70"]

# Location prefixes that are always reserve (case-insensitive)
DEFAULT_ADDITIONAL_RESERVE_LOCATIONS = ["MUELLE ENTRADA"]

# Separator used for composite grouping keys
KEY_SEPARATOR = "__"

# Lot placeholder when the cross-check does not group by lot
UNIFIED_LOT = "UNIFIED"

# Description used for min/max rules whose SKU has no usable inventory
UNKNOWN_DESCRIPTION = "N/A"

# Quantity above which a restock line is reported as a full-pallet move
FULL_PALLET_THRESHOLD = 10

# Column mappings: internal field -> accepted header names (first match wins,
# case-insensitive). Fields listed in OPTIONAL_FIELDS may be absent.
SALES_COLUMN_MAPPING = {
    "sku": ["Material", "ID de Producto", "codigo"],
    "description": ["Descripción", "Nombre de Artículo", "Description"],
    "confirmed_qty": ["cantidad confirmada", "Cant. Facturada", "Confirmed Qty"],
}

INVENTORY_COLUMN_MAPPING = {
    "sku": ["SKU", "Item Code"],
    "license_plate": ["LPN", "Pallet ID"],
    "description": ["Descripcion", "Description"],
    "location": ["Localizacion", "Location"],
    "available_qty": ["Disponible", "Available"],
    "status": ["Estado", "Status"],
    "expiration_date": ["Fecha de vencimiento", "Expiration", "fecha caducidad"],
    "days_to_expiry": ["FPC", "Days to Exp"],
    "lot": ["Lote", "Lot"],
}

MIN_MAX_COLUMN_MAPPING = {
    "sku": ["sku", "item"],
    "lpn": ["lpn", "pallet"],
    "location": ["localizacion", "loc", "location"],
    "min_qty": ["cantidad minima", "min"],
    "max_qty": ["cantidad maxima", "max"],
}

SYSTEM_INVENTORY_MAPPING = {
    "sku": ["Material"],
    "description": ["Texto breve material"],
    "lot": ["Ce. Lote", "Lote"],
    "quantity": ["Stock disponible", "WM stock disp."],
}

WAREHOUSE_INVENTORY_MAPPING = {
    "sku": ["SKU", "Codigo"],
    "description": ["Descripcion", "Descripción"],
    "lot": ["Lote"],
    "quantity": ["Disponible", "Unidades"],
}

SHELF_LIFE_MASTER_MAPPING = {
    "sku": ["SKU", "Material"],
    "min_days": ["Dias minimos", "Min Days", "FPC"],
}

OPTIONAL_FIELDS = {
    "expiration_date",
    "days_to_expiry",
    "lot",
    "license_plate",
    "lpn",
    "description",
}

# Inbound receipt output schema
INBOUND_FIELDS = [
    "N_ORDER",
    "ORDER2",
    "PURCHASE_ORDER",
    "INVOICE",
    "PROVIDER_UID",
    "ORDER_DATE",
    "SERVICE_DATE",
    "INBOUNDTYPE_CODE",
    "NOTE",
    "SKU",
    "LOTE",
    "FECHA_DE_VENCIMIENTO",
    "FECHA_DE_FABRICACION",
    "SERIAL",
    "ESTADO_CALIDAD",
    "QTY",
    "UOM_CODE",
    "REFERENCE",
    "PRICE",
    "TAXES",
    "IBL_LPN_CODE",
    "IBL_WEIGHT",
]
INBOUND_DATE_FIELDS = ["ORDER_DATE", "SERVICE_DATE", "FECHA_DE_VENCIMIENTO", "FECHA_DE_FABRICACION"]
INBOUND_NUMERIC_FIELDS = ["QTY", "PRICE", "TAXES", "IBL_WEIGHT"]

# Output columns for the WMS task files
SALES_TASK_COLUMNS = ["LRLD_LPN_CODE", "LRLD_LOCATION"]
LEVELS_TASK_COLUMNS = [
    "LTLD_LPN_SRC",
    "LTLD_SKU",
    "LTLD_LOT",
    "LTLD_QTY",
    "LTLD_LPN_DST",
    "LTLD_LOCATION_DST",
]

# Restock type labels used in the full report
RESTOCK_TYPE_FULL_PALLET = "Full Pallet Restock"
RESTOCK_TYPE_UNITS = "Unit Restock"
RESTOCK_TYPE_OK = "OK"
