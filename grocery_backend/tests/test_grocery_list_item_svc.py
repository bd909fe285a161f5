from unittest.mock import MagicMock

import pytest
from grocery_backend.services import grocery_list_item_svc as svc
from grocery_backend.services.catalog_svc import delete_grocery_list


def test_create_records_entity_and_after():
    log = MagicMock()
    out = svc.create_item({"grocery_list_id": 1, "product_id": 2, "amount": 4}, log)
    log.set_entity.assert_called_once_with("GROCERY_LIST_ITEM", out["id"])
    log.set_after.assert_called_once_with(out)
    assert svc.get_item(out["id"]) == out


def test_update_logs_before_snapshot():
    log = MagicMock()
    svc.update_item(5, {"grocery_list_id": 2, "product_id": 2, "amount": 1}, log)
    log.set_before.assert_called_once_with({"id": 5, "grocery_list_id": 2, "product_id": 2, "amount": 5})


def test_delete_missing_raises_lookup():
    with pytest.raises(LookupError):
        svc.delete_item(404, MagicMock())


def test_deleted_seed_item_stays_deleted():
    svc.delete_item(1, MagicMock())
    # a second service call must reuse the repositories, not re-seed
    assert svc.get_item(1) is None
    assert [it["id"] for it in svc.list_items()] == [2, 3, 4, 5]


def test_list_delete_cascades_through_service():
    delete_grocery_list(2, MagicMock())
    assert svc.list_items_for_list(2) == []


@pytest.mark.parametrize("amount", [0, -3])
def test_create_rejects_non_positive_amount(amount):
    with pytest.raises(ValueError, match="amount_must_be_positive"):
        svc.create_item({"grocery_list_id": 1, "product_id": 1, "amount": amount}, MagicMock())
    assert len(svc.list_items()) == 5


def test_update_rejects_non_positive_amount():
    with pytest.raises(ValueError, match="amount_must_be_positive"):
        svc.update_item(1, {"grocery_list_id": 1, "product_id": 1, "amount": 0}, MagicMock())
    assert svc.get_item(1)["amount"] == 3
