"""Receipt layout, document export and thermal printing for confirmed orders."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from cafe_order.config import (
    CURRENCY_SYMBOL,
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
    RECEIPT_DIR,
    RECEIPT_WIDTH_CHARS,
    RESTAURANT_ADDRESS,
    RESTAURANT_EMAIL,
    RESTAURANT_NAME,
    RESTAURANT_PHONE,
)
from cafe_order.models import OrderSummary
from cafe_order.pricing import format_money, format_rate

logger = logging.getLogger(__name__)

_FONT_OVERRIDE_ENV = "CAFE_ORDER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/liberation/LiberationMono-Regular.ttf",
)
_LINE_EXTRA_PX = 10
_SEPARATOR_HEIGHT_PX = 12
_SEPARATOR_THICKNESS_PX = 2
_RIGHT_GUTTER_PX = 8
_DOCUMENT_FORMATS = {"pdf": "PDF", "png": "PNG"}


@dataclass(frozen=True)
class ReceiptRow:
    """One receipt row: text on the left, optional amount on the right."""

    text: str = ""
    amount: str = ""
    centered: bool = False
    separator: bool = False


_SEPARATOR_ROW = ReceiptRow(separator=True)


def _timestamp_label(created_at: str) -> str:
    try:
        return datetime.fromisoformat(created_at).strftime("%Y-%m-%d %H:%M UTC")
    except ValueError:
        return created_at


def receipt_rows(summary: OrderSummary, currency: str = CURRENCY_SYMBOL) -> list[ReceiptRow]:
    """Lay out letterhead, customer block, item rows and totals."""
    customer = summary.customer
    rows = [
        ReceiptRow(RESTAURANT_NAME, centered=True),
        ReceiptRow(RESTAURANT_ADDRESS, centered=True),
        ReceiptRow(f"Tel {RESTAURANT_PHONE}", centered=True),
        ReceiptRow(RESTAURANT_EMAIL, centered=True),
        _SEPARATOR_ROW,
        ReceiptRow(f"Order {summary.order_id[:8]}"),
        ReceiptRow(_timestamp_label(summary.created_at)),
        ReceiptRow(f"Table {customer.table}"),
        ReceiptRow(f"Name  {customer.name}"),
        ReceiptRow(f"Phone {customer.phone}"),
        _SEPARATOR_ROW,
    ]
    for line in summary.lines:
        rows.append(ReceiptRow(f"{line.quantity} x {line.name}", format_money(line.line_total, currency)))
        if line.quantity > 1:
            rows.append(ReceiptRow(f"    @ {format_money(line.unit_price, currency)}"))
    rows.extend(
        [
            _SEPARATOR_ROW,
            ReceiptRow("Subtotal", format_money(summary.subtotal, currency)),
            ReceiptRow(f"Tax ({format_rate(summary.tax_rate)})", format_money(summary.tax, currency)),
            ReceiptRow("Total", format_money(summary.total, currency)),
            _SEPARATOR_ROW,
            ReceiptRow("Thank you!", centered=True),
        ]
    )
    return rows


def _fit_text(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return f"{text[: width - 3]}..."


def receipt_lines(summary: OrderSummary, width: int = RECEIPT_WIDTH_CHARS, currency: str = CURRENCY_SYMBOL) -> list[str]:
    """Plain-text receipt, each line at most ``width`` characters."""
    lines: list[str] = []
    for row in receipt_rows(summary, currency):
        if row.separator:
            lines.append("-" * width)
        elif row.centered:
            lines.append(_fit_text(row.text, width).center(width).rstrip())
        elif row.amount:
            room = max(1, width - len(row.amount) - 1)
            left = _fit_text(row.text, room)
            lines.append(f"{left}{' ' * (width - len(left) - len(row.amount))}{row.amount}")
        else:
            lines.append(_fit_text(row.text, width))
    return lines


def font_candidates() -> list[str]:
    """Receipt font paths in lookup order, blanks and repeats dropped."""
    override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    ordered = [override, PRINTER_FONT_PATH, *_LINUX_FONT_FALLBACKS]
    return list(dict.fromkeys(path for path in ordered if path))


def resolve_printer_font_path() -> str:
    """First existing font: $CAFE_ORDER_FONT_PATH, PRINTER_FONT_PATH, then Linux monospace fonts."""
    candidates = font_candidates()
    found = next((path for path in candidates if Path(path).is_file()), None)
    if found is None:
        raise RuntimeError(
            f"No receipt font found (tried {', '.join(candidates)}). "
            f"Point {_FONT_OVERRIDE_ENV} at a .ttf/.otf file."
        )
    return found


def _load_printer_font() -> object:
    from PIL import ImageFont

    return ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)


def _load_document_font() -> object:
    # Saved documents may use Pillow's built-in font; the printer may not.
    try:
        return _load_printer_font()
    except (RuntimeError, OSError) as exc:
        from PIL import ImageFont

        logger.warning("receipt font unavailable, using Pillow default: %s", exc)
        return ImageFont.load_default()


def _render_row(row: ReceiptRow, font: object) -> object:
    from PIL import Image, ImageDraw

    if row.separator:
        img = Image.new("1", (PRINTER_WIDTH_PX, _SEPARATOR_HEIGHT_PX), color=1)
        draw = ImageDraw.Draw(img)
        top = (_SEPARATOR_HEIGHT_PX - _SEPARATOR_THICKNESS_PX) // 2
        draw.rectangle(
            (PRINTER_LEFT_INDENT_PX, top, PRINTER_WIDTH_PX - _RIGHT_GUTTER_PX, top + _SEPARATOR_THICKNESS_PX - 1),
            fill=0,
        )
        return img

    probe = Image.new("1", (1, 1), color=1)
    probe_draw = ImageDraw.Draw(probe)
    sample = probe_draw.textbbox((0, 0), "Ag", font=font)
    canvas_height = (sample[3] - sample[1]) + _LINE_EXTRA_PX

    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    # Offset by bbox top so descenders are not clipped.
    y = (canvas_height - (sample[3] - sample[1])) // 2 - sample[1]

    text_bbox = draw.textbbox((0, 0), row.text, font=font)
    if row.centered:
        x = (PRINTER_WIDTH_PX - (text_bbox[2] - text_bbox[0])) // 2 - text_bbox[0]
    else:
        x = PRINTER_LEFT_INDENT_PX
    draw.text((x, y), row.text, font=font, fill=0)

    if row.amount:
        amount_bbox = draw.textbbox((0, 0), row.amount, font=font)
        amount_x = PRINTER_WIDTH_PX - _RIGHT_GUTTER_PX - (amount_bbox[2] - amount_bbox[0]) - amount_bbox[0]
        draw.text((amount_x, y), row.amount, font=font, fill=0)
    return img


def _render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def _render_rows(summary: OrderSummary, font: object) -> list[object]:
    return [_render_row(row, font) for row in receipt_rows(summary)]


def render_receipt_image(summary: OrderSummary, font: object | None = None) -> object:
    """Stack every receipt row into a single monochrome image."""
    from PIL import Image

    if font is None:
        font = _load_document_font()
    parts = _render_rows(summary, font)
    height = sum(part.height for part in parts)
    receipt = Image.new("1", (PRINTER_WIDTH_PX, max(1, height)), color=1)
    y = 0
    for part in parts:
        receipt.paste(part, (0, y))
        y += part.height
    return receipt


def save_receipt(summary: OrderSummary, directory: str | Path = RECEIPT_DIR, fmt: str = "pdf") -> Path:
    """Write the receipt as a PDF or PNG document and return its path."""
    fmt = fmt.lower()
    if fmt not in _DOCUMENT_FORMATS:
        raise ValueError(f"unsupported receipt format: {fmt}")

    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"receipt-{summary.order_id[:8]}.{fmt}"
    image = render_receipt_image(summary).convert("L")
    image.save(path, _DOCUMENT_FORMATS[fmt])
    logger.info("receipt saved order_id=%s path=%s", summary.order_id, path)
    return path


def _usb_printer_class() -> type:
    from escpos.printer import Usb

    return Usb


def check_printer_dependencies() -> tuple[bool, str]:
    """Report whether a confirmed order can go to the thermal printer."""
    try:
        _usb_printer_class()
        _load_printer_font()
    except (ImportError, RuntimeError, OSError) as exc:
        return (False, f"Printing unavailable: {exc}")
    return (True, "Printer ready")


def print_receipt(summary: OrderSummary) -> None:
    """Print the receipt row by row on the USB thermal printer and cut."""
    try:
        usb = _usb_printer_class()
    except ImportError as exc:
        raise RuntimeError(f"python-escpos unavailable: {exc}") from exc

    printer = usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    font = _load_printer_font()
    for part in _render_rows(summary, font):
        printer.image(part)
    # Extra tail so the ticket tears below the footer.
    printer.image(_render_spacer(PRINTER_TAIL_SPACER_PX))
    printer.cut()
    logger.info("receipt printed order_id=%s", summary.order_id)
