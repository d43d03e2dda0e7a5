"""End-to-end CLI tests against JSON files and a file standing in for the printer."""

import json

import click
import pytest
from click.testing import CliRunner

from orderdesk.application.dto import CustomItemSpec, ProductItemSpec
from orderdesk.infrastructure import config
from orderdesk.infrastructure.cli.main import cli
from orderdesk.infrastructure.cli.order_commands import parse_item
from orderdesk.domain.exceptions import UnknownItemVariantError


@pytest.fixture
def runner(tmp_path):
    config.set_settings_for_test(
        data_dir=tmp_path / "data",
        printer_device_path=str(tmp_path / "lp0"),
        log_level="WARNING",
    )
    yield CliRunner()
    config._settings = None


def _invoke(runner, *args):
    result = runner.invoke(cli, list(args))
    assert result.exit_code == 0, result.output
    return result.output


class TestParseItem:

    def test_product(self):
        assert parse_item("product:1:2") == ProductItemSpec(product_id=1, amount=2)

    def test_product_with_price_override(self):
        assert parse_item("product:1:2:0") == ProductItemSpec(1, 2, price_at_sale=0)

    def test_custom_name_may_contain_colons(self):
        assert parse_item("custom:Fee: delivery:5000") == CustomItemSpec("Fee: delivery", 5000)

    def test_unknown_kind(self):
        with pytest.raises(UnknownItemVariantError):
            parse_item("gift:1:1")

    def test_bad_quantity(self):
        with pytest.raises(click.BadParameter):
            parse_item("product:1:two")


class TestProductCommands:

    def test_add_and_list(self, runner):
        out = _invoke(runner, "product", "add", "--name", "Espresso", "--price", "25000")
        assert "Product #1 'Espresso' added at Rp25.000" in out

        rows = json.loads(_invoke(runner, "product", "list", "--json"))
        assert rows == [{"id": 1, "name": "Espresso", "price": 25000}]

    def test_duplicate_name_is_reported(self, runner):
        _invoke(runner, "product", "add", "--name", "Espresso", "--price", "25000")
        result = runner.invoke(cli, ["product", "add", "--name", "Espresso", "--price", "1"])
        assert result.exit_code != 0
        assert "already exists" in result.output


class TestOrderCommands:

    def test_create_show_print_delete(self, runner, tmp_path):
        _invoke(runner, "product", "add", "--name", "Espresso", "--price", "25000")

        out = _invoke(
            runner, "order", "create", "--customer", "Alice",
            "--item", "product:1:2", "--item", "custom:Ongkos Kirim:10000",
        )
        assert "Order #1 created" in out
        assert "Espresso" in out

        data = json.loads(_invoke(runner, "order", "show", "--id", "1", "--json"))
        assert [i["priceAtSale"] for i in data["items"]] == [25000, 10000]

        out = _invoke(runner, "order", "print", "--id", "1")
        assert "sent to" in out
        receipt = (tmp_path / "lp0").read_bytes()
        assert b"TOTAL Rp60.000\n\n" in receipt

        _invoke(runner, "order", "delete", "--id", "1")
        assert "No orders found." in _invoke(runner, "order", "list")

    def test_update_replaces_items(self, runner):
        _invoke(runner, "product", "add", "--name", "Espresso", "--price", "25000")
        _invoke(runner, "order", "create", "--customer", "Alice", "--item", "product:1:1")

        _invoke(runner, "order", "update", "--id", "1", "--item", "custom:Shipping:10000")

        data = json.loads(_invoke(runner, "order", "show", "--id", "1", "--json"))
        assert [i["itemType"] for i in data["items"]] == ["custom"]

    def test_snapshot_survives_price_change(self, runner):
        _invoke(runner, "product", "add", "--name", "Espresso", "--price", "25000")
        _invoke(runner, "order", "create", "--customer", "Alice", "--item", "product:1:1")
        _invoke(runner, "product", "update", "--id", "1", "--price", "30000")

        data = json.loads(_invoke(runner, "order", "show", "--id", "1", "--json"))
        assert data["items"][0]["priceAtSale"] == 25000
        assert data["items"][0]["product"]["price"] == 30000

    def test_missing_order_is_reported(self, runner):
        result = runner.invoke(cli, ["order", "print", "--id", "9"])
        assert result.exit_code != 0
        assert "not found" in result.output

    def test_unknown_item_kind_is_reported(self, runner):
        result = runner.invoke(cli, ["order", "create", "--customer", "A", "--item", "gift:1:1"])
        assert result.exit_code != 0
        assert "Invalid item type" in result.output
