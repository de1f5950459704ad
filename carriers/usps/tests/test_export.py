"""
Unit Tests for USPS Label Batch Export

Tests partitioning by label size, return labels and file naming.

Run with: pytest carriers/usps/tests/test_export.py -v
"""

from datetime import datetime

import pytest
import polars as pl

from shared.orders import ORDER_COLS
from carriers.usps.build_shipments import build_shipments
from carriers.usps.columns import EXPORT_COLS
from carriers.usps.data import DEFAULT_SETTINGS, LABEL_SIZES, Address
from carriers.usps.export import (
    batch_file_name,
    export_batch,
    export_shipment,
    partition_by_label_size,
    to_return_shipments,
)


# =============================================================================
# FIXTURES
# =============================================================================

STAMP = datetime(2025, 11, 3, 14, 5, 9)

SETTINGS = DEFAULT_SETTINGS._replace(
    from_address=Address(name="Card Shop", street1="500 Market St", zip="97201"),
)


def order(order_id, street1, item_count=1, value_cents=100):
    return {
        "order_id": order_id, "first_name": "Ada", "last_name": "Lovelace",
        "street1": street1, "street2": "", "city": "Springfield", "state": "IL",
        "postal_code": "62701", "country": "US", "item_count": item_count,
        "value_cents": value_cents, "shipping_method": "Standard",
    }


@pytest.fixture
def shipments():
    """Two letters (7x3) and one flat (4x6)."""
    orders = pl.DataFrame([
        order("L-1", "1 Main St"),
        order("F-1", "2 Main St", item_count=40),
        order("L-2", "3 Main St"),
    ]).select(ORDER_COLS)
    return build_shipments(orders, SETTINGS)


# =============================================================================
# PARTITIONING
# =============================================================================

class TestPartitioning:
    """Each shipment lands in exactly one label size partition."""

    def test_partitions_cover_all_shipments(self, shipments):
        sizes = [partition_by_label_size(shipments, s) for s in LABEL_SIZES]
        references = [r for part in sizes for r in part["reference"].to_list()]
        assert sorted(references) == sorted(shipments["reference"].to_list())

    def test_partition_keeps_order(self, shipments):
        assert partition_by_label_size(shipments, "7x3")["reference"].to_list() == ["L-1", "L-2"]

    def test_empty_partition(self, shipments):
        assert partition_by_label_size(shipments, "6x4").is_empty()

    def test_return_swaps_addresses(self, shipments):
        returns = to_return_shipments(shipments)
        assert returns["to_address.name"][0] == "Card Shop"
        assert returns["from_address.name"][0] == "Ada Lovelace"
        assert returns["return_address.name"][0] == "Card Shop"
        assert returns["parcel.weight"].to_list() == shipments["parcel.weight"].to_list()


# =============================================================================
# FILES
# =============================================================================

class TestExportBatch:
    """One CSV per non-empty label size."""

    def test_file_name(self):
        assert batch_file_name("EasyPost_Shipments", "4x6", STAMP) == (
            "EasyPost_Shipments_4x6_2025.11.03.14.05.09.csv"
        )

    def test_files_for_non_empty_sizes(self, shipments, tmp_path):
        paths = export_batch(shipments, tmp_path, timestamp=STAMP)
        assert [p.name for p in paths] == [
            "EasyPost_Shipments_4x6_2025.11.03.14.05.09.csv",
            "EasyPost_Shipments_7x3_2025.11.03.14.05.09.csv",
        ]

    def test_file_contents(self, shipments, tmp_path):
        paths = export_batch(shipments, tmp_path, timestamp=STAMP)
        letters = pl.read_csv(paths[1], infer_schema_length=0)
        assert letters.columns == EXPORT_COLS
        assert letters["reference"].to_list() == ["L-1", "L-2"]
        assert letters["options.label_size"].to_list() == ["7x3", "7x3"]

    def test_returns_prefix(self, shipments, tmp_path):
        paths = export_batch(shipments, tmp_path, returns=True, timestamp=STAMP)
        assert all(p.name.startswith("EasyPost_Returns_") for p in paths)

    def test_output_dir_created(self, shipments, tmp_path):
        paths = export_batch(shipments, tmp_path / "out" / "today", timestamp=STAMP)
        assert all(p.exists() for p in paths)

    def test_broken_profile_skips_only_its_shipments(self, tmp_path):
        broken = SETTINGS._replace(flat=SETTINGS.flat._replace(width="wide"))
        orders = pl.DataFrame([
            order("L-1", "1 Main St"),
            order("F-1", "2 Main St", item_count=40),
        ]).select(ORDER_COLS)
        paths = export_batch(build_shipments(orders, broken), tmp_path, timestamp=STAMP)
        assert [p.name for p in paths] == ["EasyPost_Shipments_7x3_2025.11.03.14.05.09.csv"]

    def test_unclassified_not_exported(self, tmp_path):
        broken = SETTINGS._replace(label_format="BMP")
        orders = pl.DataFrame([order("L-1", "1 Main St")]).select(ORDER_COLS)
        assert export_batch(build_shipments(orders, broken), tmp_path, timestamp=STAMP) == []


class TestExportShipment:
    """Single shipment export."""

    def test_single_file(self, shipments, tmp_path):
        path = export_shipment(shipments, "F-1", tmp_path, timestamp=STAMP)
        assert path.name == "EasyPost_Shipments_4x6_2025.11.03.14.05.09.csv"
        assert pl.read_csv(path, infer_schema_length=0)["reference"].to_list() == ["F-1"]

    def test_return_label(self, shipments, tmp_path):
        path = export_shipment(shipments, "L-2", tmp_path, returns=True, timestamp=STAMP)
        row = pl.read_csv(path, infer_schema_length=0).row(0, named=True)
        assert row["to_address.street1"] == "500 Market St"
        assert row["from_address.street1"] == "3 Main St"

    def test_unknown_reference(self, shipments, tmp_path):
        with pytest.raises(ValueError, match="NOPE"):
            export_shipment(shipments, "NOPE", tmp_path)
