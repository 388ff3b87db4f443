"""Entry point for the cafe-order Textual app."""

from __future__ import annotations

import argparse
import logging
from decimal import Decimal, InvalidOperation

from cafe_order.catalog import load_catalog
from cafe_order.config import CATALOG_PATH, DEBUG_LOG_PATH, RECEIPT_DIR, TAX_RATE
from cafe_order.flow import OrderFlowController


def _tax_rate(value: str) -> Decimal:
    try:
        rate = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from exc
    if not rate.is_finite() or rate < 0:
        raise argparse.ArgumentTypeError("tax rate must be a non-negative number")
    return rate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cafe-order",
        description="Cafe Order - browse the menu, build a cart and place a table order",
    )
    parser.add_argument(
        "--catalog",
        default=CATALOG_PATH,
        help="Product catalog JSON file (default: bundled products.json or $CAFE_ORDER_CATALOG)",
    )
    parser.add_argument(
        "--tax-rate",
        type=_tax_rate,
        default=TAX_RATE,
        help=f"Tax rate as a fraction (default: {TAX_RATE})",
    )
    parser.add_argument(
        "--receipt-dir",
        default=RECEIPT_DIR,
        help=f"Directory for saved receipts (default: {RECEIPT_DIR})",
    )
    parser.add_argument(
        "--log-file",
        default=DEBUG_LOG_PATH,
        help=f"Log file; the terminal belongs to the UI (default: {DEBUG_LOG_PATH})",
    )
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the Textual application."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        filename=args.log_file,
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    from cafe_order.cafe_app import CafeOrderApp

    controller = OrderFlowController(tax_rate=args.tax_rate)
    CafeOrderApp(catalog=load_catalog(args.catalog), controller=controller, receipt_dir=args.receipt_dir).run()


if __name__ == "__main__":
    main()
