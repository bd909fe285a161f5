"""
Audit log tests: entity filters and per-entity history.
"""

import pytest
from grocery_backend.logs import ENTITY_ITEM, entity_history, search_operation_logs


def test_search_by_entity_returns_item_trail(client):
    created = client.post("/api/items", json={"grocery_list_id": 1, "product_id": 2, "amount": 2}).json()
    client.put(f"/api/items/{created['id']}", json={"grocery_list_id": 1, "product_id": 2, "amount": 7})
    # noise on another item
    client.put("/api/items/1", json={"grocery_list_id": 1, "product_id": 1, "amount": 9})

    res = client.get(
        "/api/logs/search",
        params={"entity_type": ENTITY_ITEM, "entity_id": created["id"]},
    ).json()
    assert res["total"] == 2
    assert {it["action"] for it in res["items"]} == {"ITEM_CREATE", "ITEM_UPDATE"}
    assert all(it["entity_id"] == str(created["id"]) for it in res["items"])

    total, _ = search_operation_logs(entity_type=ENTITY_ITEM)
    assert total == 3


def test_history_oldest_first_with_snapshots(client):
    client.put("/api/items/2", json={"grocery_list_id": 1, "product_id": 2, "amount": 4})
    client.delete("/api/items/2")

    hist = entity_history(ENTITY_ITEM, 2)
    assert [h["action"] for h in hist] == ["ITEM_UPDATE", "ITEM_DELETE"]
    assert hist[0]["before"]["amount"] == 1
    assert hist[0]["after"]["amount"] == 4
    assert hist[1]["before"]["amount"] == 4
    assert hist[1]["after"] is None


def test_history_skips_failed_operations(client):
    client.delete("/api/lists/1")
    client.delete("/api/lists/1")  # 404, logged as ERROR without an entity

    res = client.get("/api/logs/history/grocery_list/1").json()
    assert [h["action"] for h in res["items"]] == ["GROCERY_LIST_DELETE"]
    assert res["items"][0]["before"]["name"] == "Boodschappen familieweekend"


def test_history_unknown_entity_type(client):
    assert client.get("/api/logs/history/recipe/1").status_code == 400
    with pytest.raises(ValueError):
        entity_history("RECIPE", 1)
