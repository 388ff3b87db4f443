from __future__ import annotations

import importlib
import json
from decimal import Decimal

import pytest

from cafe_order import config
from cafe_order.cafe_app import CafeOrderApp
from cafe_order.main import build_parser, main


def test_defaults_come_from_config():
    args = build_parser().parse_args([])

    assert args.catalog == config.CATALOG_PATH
    assert args.tax_rate == config.TAX_RATE
    assert args.receipt_dir == config.RECEIPT_DIR
    assert args.log_file == config.DEBUG_LOG_PATH
    assert args.debug is False


def test_tax_rate_is_parsed_as_decimal():
    args = build_parser().parse_args(["--tax-rate", "0.1"])
    assert args.tax_rate == Decimal("0.1")
    assert isinstance(args.tax_rate, Decimal)


@pytest.mark.parametrize("value", ["-1", "abc", "nan", "inf"])
def test_bad_tax_rate_exits(value):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--tax-rate", value])


def test_paths_pass_through(tmp_path):
    args = build_parser().parse_args(
        ["--catalog", str(tmp_path / "menu.json"), "--receipt-dir", str(tmp_path / "out"), "--debug"]
    )

    assert args.catalog == str(tmp_path / "menu.json")
    assert args.receipt_dir == str(tmp_path / "out")
    assert args.debug is True


def test_catalog_path_env_override(monkeypatch, tmp_path):
    menu = tmp_path / "menu.json"
    monkeypatch.setenv("CAFE_ORDER_CATALOG", str(menu))
    try:
        assert importlib.reload(config).CATALOG_PATH == str(menu)
    finally:
        monkeypatch.delenv("CAFE_ORDER_CATALOG")
        importlib.reload(config)

    assert config.CATALOG_PATH.endswith("products.json")


def test_main_wires_catalog_tax_and_receipts(monkeypatch, tmp_path):
    menu = tmp_path / "menu.json"
    menu.write_text(json.dumps([{"id": 1, "name": "Tea", "price": 20}]), encoding="utf-8")
    started = []
    monkeypatch.setattr(CafeOrderApp, "run", lambda self: started.append(self))

    main(
        [
            "--catalog",
            str(menu),
            "--tax-rate",
            "0.1",
            "--receipt-dir",
            str(tmp_path / "out"),
            "--log-file",
            str(tmp_path / "cafe.log"),
        ]
    )

    (app,) = started
    assert [p.name for p in app.products] == ["Tea"]
    assert app.controller.tax_rate == Decimal("0.1")
    assert app.receipt_dir == str(tmp_path / "out")
