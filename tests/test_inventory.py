"""Tests for loading and holding the inventory."""

import pytest
from pydantic import ValidationError

from churro.api.core.inventory import InventoryLoadError, InventoryStore, load_inventory, split_features

HEADER = (
    "id,make,model,year,category,dailyRate,imageUrl,features,seats,transmission,"
    "fuelType,available,mileagePolicy,location,pickupMethod\n"
)


def _write_csv(tmp_path, rows):
    path = tmp_path / "inventory.csv"
    path.write_text(HEADER + "".join(row + "\n" for row in rows))
    return str(path)


class TestLoadInventory:
    """Tests for reading the inventory CSV."""

    def test_loads_rows_in_file_order(self, tmp_path):
        path = _write_csv(tmp_path, [
            '10,Kia,EV6,2024,electric,9900,,Fast Charging|Heated Seats,5,automatic,electric,true,Unlimited,"Seattle, WA",Downtown',
            '2,Ford,F-150,2023,truck,11500,,,5,automatic,gasoline,false,200 miles/day,"Austin, TX",Airport',
        ])
        store = load_inventory(path)
        records = store.all()
        assert [r.id for r in records] == ["10", "2"]
        assert records[0].features == ["Fast Charging", "Heated Seats"]
        assert records[0].daily_rate == 9900
        assert records[0].location == "Seattle, WA"
        assert records[1].features == []
        assert records[1].available is False

    def test_missing_file_raises_load_error(self, tmp_path):
        with pytest.raises(InventoryLoadError):
            load_inventory(str(tmp_path / "missing.csv"))

    def test_invalid_row_raises_load_error(self, tmp_path):
        path = _write_csv(tmp_path, [
            '1,Kia,EV6,2024,hovercraft,9900,,,5,automatic,electric,true,Unlimited,"Seattle, WA",Downtown',
        ])
        with pytest.raises(InventoryLoadError):
            load_inventory(path)

    def test_duplicate_ids_raise_load_error(self, tmp_path):
        row = '1,Kia,EV6,2024,electric,9900,,,5,automatic,electric,true,Unlimited,"Seattle, WA",Downtown'
        with pytest.raises(InventoryLoadError):
            load_inventory(_write_csv(tmp_path, [row, row]))

    def test_shipped_inventory_loads(self, shipped_store):
        """Test that the bundled data file is valid and has unique ids."""
        assert len(shipped_store) > 0
        assert len({r.id for r in shipped_store}) == len(shipped_store)
        assert any(not r.available for r in shipped_store)

    def test_split_features(self):
        assert split_features("A| B |") == ["A", "B"]
        assert split_features("") == []
        assert split_features(None) == []


class TestInventoryStore:
    """Tests for the in-memory store."""

    def test_all_returns_records_in_order(self, sample_store):
        assert [r.id for r in sample_store.all()] == ["1", "2", "3", "4", "5", "6", "7"]

    def test_all_is_immutable(self, sample_store):
        assert isinstance(sample_store.all(), tuple)

    def test_records_are_frozen(self, sample_store):
        with pytest.raises(ValidationError):
            sample_store.all()[0].daily_rate = 1

    def test_get(self, sample_store):
        assert sample_store.get("3").model == "Tahoe"
        assert sample_store.get("nope") is None

    def test_duplicate_ids_rejected(self, make_record):
        with pytest.raises(ValueError):
            InventoryStore([make_record(id="1"), make_record(id="1")])

    def test_len_and_iter(self, sample_store):
        assert len(sample_store) == 7
        assert [r.id for r in sample_store] == [r.id for r in sample_store.all()]
