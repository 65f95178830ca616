# tests/test_record_extractor.py

"""Tests for leaf parsing and price record fan-out."""

import json
import unittest
from pathlib import Path
from typing import Any

from src.filters.record_extractor import (
    RecordExtractor,
    is_valid_storage,
    resolve_carrier,
    resolve_model,
    resolve_storage,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _options(*names: str) -> list[dict[str, Any]]:
    return [{"option_name": name} for name in names]


def _leaf(
    options: list[dict[str, Any]], *products: dict[str, Any]
) -> dict[str, Any]:
    return {"selectedOptionList": options, "productList": list(products)}


class TestResolveModel(unittest.TestCase):
    """Model name resolution."""

    def test_longest_family_name_wins(self) -> None:
        """A full model name beats the bare family name."""
        self.assertEqual(
            resolve_model(_options("iPhone", "iPhone 16 Pro Max")),
            "iPhone 16 Pro Max",
        )

    def test_order_does_not_matter(self) -> None:
        """Longest name wins regardless of position."""
        self.assertEqual(
            resolve_model(_options("iPhone 16 Pro Max", "iPhone")),
            "iPhone 16 Pro Max",
        )

    def test_ignores_non_family_options(self) -> None:
        """Carrier and storage names are never mistaken for models."""
        self.assertEqual(
            resolve_model(_options("Unlocked", "iPhone 15", "1TB")),
            "iPhone 15",
        )

    def test_no_match_gives_sentinel(self) -> None:
        """No family-prefixed option resolves to Unknown Model."""
        self.assertEqual(
            resolve_model(_options("Unlocked", "128GB")), "Unknown Model"
        )

    def test_prefix_is_case_sensitive(self) -> None:
        """Lower-case 'iphone' is not a model option."""
        self.assertEqual(resolve_model(_options("iphone 16")), "Unknown Model")


class TestResolveCarrier(unittest.TestCase):
    """Carrier resolution."""

    def test_known_carrier(self) -> None:
        self.assertEqual(
            resolve_carrier(_options("iPhone 16", "T-Mobile", "128GB")),
            "T-Mobile",
        )

    def test_first_match_wins(self) -> None:
        """With two carriers selected, the earlier one is used."""
        self.assertEqual(
            resolve_carrier(_options("Verizon", "AT&T")), "Verizon"
        )

    def test_unknown_carrier(self) -> None:
        """Unlisted carriers resolve to the sentinel."""
        self.assertEqual(
            resolve_carrier(_options("Sprint")), "Unknown Carrier"
        )


class TestResolveStorage(unittest.TestCase):
    """Storage resolution and validation."""

    def test_gb_and_tb(self) -> None:
        self.assertEqual(resolve_storage(_options("iPhone", "512GB")), "512GB")
        self.assertEqual(resolve_storage(_options("1TB")), "1TB")

    def test_missing_storage(self) -> None:
        self.assertIsNone(resolve_storage(_options("iPhone 16", "Unlocked")))

    def test_invalid_storage_values(self) -> None:
        """MB, empty and absent values all fail validation."""
        for value in ("512MB", "", None):
            with self.subTest(value=value):
                self.assertFalse(is_valid_storage(value))

    def test_valid_storage_values(self) -> None:
        for value in ("64GB", "2TB", "256 GB"):
            with self.subTest(value=value):
                self.assertTrue(is_valid_storage(value))


class TestRecordExtractor(unittest.TestCase):
    """End-to-end extraction from a leaf response."""

    def test_fixture_leaf(self) -> None:
        """Falsy prices (0, null) are skipped; order follows the table."""
        with open(FIXTURES_DIR / "buyback_leaf.json") as f:
            leaf = json.load(f)

        result = RecordExtractor.extract(leaf)

        self.assertFalse(result.rejected)
        self.assertEqual(
            [(r.condition, r.price) for r in result.records],
            [
                ("Brand New", 780),
                ("Flawless", 700),
                ("Good", 640),
                ("Fair", 410),
            ],
        )
        for record in result.records:
            self.assertEqual(record.phone_model, "iPhone 16 Pro Max")
            self.assertEqual(record.carrier, "AT&T")
            self.assertEqual(record.storage, "256GB")

    def test_scenario_two_prices(self) -> None:
        """price_6 and price_4 produce Brand New then Good."""
        leaf = _leaf(
            _options("iPhone 16", "Unlocked", "128GB"),
            {"price_6": 500, "price_4": 400},
        )
        records = RecordExtractor.extract(leaf).records
        self.assertEqual(
            [(r.condition, r.price) for r in records],
            [("Brand New", 500), ("Good", 400)],
        )

    def test_one_record_per_product_and_price(self) -> None:
        """Every product in the list fans out independently."""
        leaf = _leaf(
            _options("iPhone 13", "Verizon", "64GB"),
            {"price_6": 300, "price_1": 20},
            {"price_6": 290, "price_5": 250, "price_11": 150},
        )
        records = RecordExtractor.extract(leaf).records
        self.assertEqual(
            [(r.condition, r.price) for r in records],
            [
                ("Brand New", 300),
                ("Faulty", 20),
                ("Brand New", 290),
                ("Flawless", 250),
                ("Average", 150),
            ],
        )

    def test_timestamp_format(self) -> None:
        leaf = _leaf(
            _options("iPhone 16", "Unlocked", "128GB"), {"price_6": 500}
        )
        record = RecordExtractor.extract(leaf).records[0]
        self.assertRegex(
            record.timestamp, r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$"
        )

    def test_invalid_storage_rejects_leaf(self) -> None:
        """A leaf without a GB/TB option yields nothing."""
        leaf = _leaf(
            _options("iPhone 16", "Unlocked", "512MB"), {"price_6": 500}
        )
        result = RecordExtractor.extract(leaf)
        self.assertTrue(result.rejected)
        self.assertEqual(result.records, [])
        self.assertIn("storage", result.skip_reason or "")

    def test_unknown_model_rejects_leaf(self) -> None:
        leaf = _leaf(_options("Unlocked", "128GB"), {"price_6": 500})
        result = RecordExtractor.extract(leaf)
        self.assertTrue(result.rejected)
        self.assertEqual(result.records, [])

    def test_unknown_carrier_rejects_leaf(self) -> None:
        leaf = _leaf(_options("iPhone 16", "Sprint", "128GB"), {"price_6": 500})
        result = RecordExtractor.extract(leaf)
        self.assertTrue(result.rejected)
        self.assertIn("carrier", result.skip_reason or "")

    def test_missing_option_list_rejects_leaf(self) -> None:
        result = RecordExtractor.extract({"productList": [{"price_6": 500}]})
        self.assertTrue(result.rejected)

    def test_all_prices_falsy(self) -> None:
        """A valid leaf with no usable prices emits nothing but is not rejected."""
        leaf = _leaf(
            _options("iPhone 16", "Unlocked", "128GB"),
            {"price_6": 0, "price_5": "", "price_4": None},
        )
        result = RecordExtractor.extract(leaf)
        self.assertFalse(result.rejected)
        self.assertEqual(result.records, [])

    def test_missing_storage_option_rejects_leaf(self) -> None:
        """No capacity option at all drops the leaf with a storage reason."""
        leaf = _leaf(_options("iPhone 16", "Unlocked"), {"price_6": 500})
        result = RecordExtractor.extract(leaf)
        self.assertTrue(result.rejected)
        self.assertEqual(result.records, [])
        self.assertEqual(result.skip_reason, "invalid storage option: None")

    def test_null_option_name_is_fatal(self) -> None:
        """A null option name raises instead of becoming the text 'None'."""
        with self.assertRaises(AttributeError):
            RecordExtractor.extract(
                _leaf(
                    [{"option_name": None}, *_options("Unlocked", "128GB")],
                    {"price_6": 500},
                )
            )

    def test_option_without_name_is_fatal(self) -> None:
        """A malformed option list is not silently skipped."""
        with self.assertRaises(KeyError):
            RecordExtractor.extract(
                {"selectedOptionList": [{"option_url": "x"}], "productList": []}
            )


if __name__ == "__main__":
    unittest.main()
