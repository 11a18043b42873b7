import pytest

from warehouse_catalog.exceptions import ValidationError
from warehouse_catalog.models import Warehouse
from warehouse_catalog.repositories.merge import apply_patch, patch_to_dict
from warehouse_catalog.schemas.warehouse import WarehouseUpdate


def make_warehouse(**overrides) -> Warehouse:
    values = {
        "warehouse_id": 7,
        "warehouse_code": "WH-SBY-01",
        "warehouse_name": "Surabaya Port Warehouse",
        "warehouse_type": "STANDARD",
        "city": "Surabaya",
        "phone": "+62315550199",
        "country": "Indonesia",
        "timezone": "Asia/Jakarta",
        "updated_by": 3,
    }
    values.update(overrides)
    return Warehouse(**values)


class TestPatchToDict:

    def test_only_provided_keys_from_model(self):
        patch = WarehouseUpdate(city="Gresik", phone=None)
        assert patch_to_dict(patch) == {"city": "Gresik", "phone": None}

    def test_mapping_is_copied(self):
        raw = {"city": "Gresik"}
        result = patch_to_dict(raw)
        assert result == raw
        assert result is not raw


class TestApplyPatch:

    def test_absent_keys_are_kept(self):
        warehouse = make_warehouse()

        changed = apply_patch(warehouse, WarehouseUpdate(warehouse_name="Surabaya North"), actor_id=9)

        assert changed == ["warehouse_name"]
        assert warehouse.warehouse_name == "Surabaya North"
        assert warehouse.city == "Surabaya"
        assert warehouse.phone == "+62315550199"

    def test_explicit_null_clears_nullable_field(self):
        warehouse = make_warehouse()

        changed = apply_patch(warehouse, {"phone": None}, actor_id=9)

        assert changed == ["phone"]
        assert warehouse.phone is None

    def test_explicit_null_on_required_field_is_rejected(self):
        warehouse = make_warehouse()

        with pytest.raises(ValidationError) as exc_info:
            apply_patch(warehouse, {"warehouse_name": None, "city": "Malang"}, actor_id=9)

        assert exc_info.value.fields == ["warehouse_name"]
        # nothing applied
        assert warehouse.city == "Surabaya"
        assert warehouse.updated_by == 3

    def test_unknown_key_is_rejected(self):
        warehouse = make_warehouse()

        with pytest.raises(ValidationError) as exc_info:
            apply_patch(warehouse, {"floor_count": 3}, actor_id=9)

        assert exc_info.value.fields == ["floor_count"]

    def test_disallowed_key_is_rejected(self):
        warehouse = make_warehouse()

        with pytest.raises(ValidationError) as exc_info:
            apply_patch(
                warehouse,
                {"warehouse_code": "WH-NEW", "city": "Malang"},
                actor_id=9,
                allowed_fields={"city"},
            )

        assert exc_info.value.fields == ["warehouse_code"]
        assert warehouse.warehouse_code == "WH-SBY-01"

    def test_audit_fields_refreshed_even_without_changes(self):
        warehouse = make_warehouse()

        changed = apply_patch(warehouse, {"city": "Surabaya"}, actor_id=9)

        assert changed == []
        assert warehouse.updated_by == 9
        assert warehouse.updated_at is not None

    def test_changed_fields_are_sorted(self):
        warehouse = make_warehouse()

        changed = apply_patch(warehouse, {"timezone": "Asia/Makassar", "city": "Denpasar"}, actor_id=1)

        assert changed == ["city", "timezone"]
