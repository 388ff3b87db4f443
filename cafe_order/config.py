"""Runtime configuration defaults for ordering, receipts and printing."""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path

_PACKAGE_DIR = Path(__file__).resolve().parent

# Cart caps keep checkout and receipts short on small screens.
MAX_CART_LINES = 5
MAX_LINE_QUANTITY = 5

TAX_RATE = Decimal("0.05")

TABLE_MIN = 1
TABLE_MAX = 12

POPUP_SECONDS = 3.0

ALL_CATEGORY = "All"
CURRENCY_SYMBOL = "₹"

CATALOG_PATH = os.environ.get("CAFE_ORDER_CATALOG", "").strip() or str(_PACKAGE_DIR / "products.json")
RECEIPT_DIR = "receipts"
DEBUG_LOG_PATH = "/tmp/cafe-order-debug.log"

RESTAURANT_NAME = "Your Cafe"
RESTAURANT_TAGLINE = "Our Daily Healthy Meal Plans"
RESTAURANT_ADDRESS = "12 Market Street, Bengaluru 560001"
RESTAURANT_PHONE = "+91 80 4000 1234"
RESTAURANT_EMAIL = "hello@yourcafe.example"

RECEIPT_WIDTH_CHARS = 32

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 22
PRINTER_FONT_PATH = "/System/Library/Fonts/Menlo.ttc"
PRINTER_LEFT_INDENT_PX = 8
PRINTER_TAIL_SPACER_PX = 70
