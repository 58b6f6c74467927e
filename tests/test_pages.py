import json

import sample_data
from config import settings


def test_home_falls_back_to_sample_data_when_empty(client):
    body = client.get("/api/pages/home").json()
    assert body["outlets"] == sample_data.outlet_samples()
    assert body["featuredProducts"] == sample_data.featured_samples()
    assert body["bestSelling"] == sample_data.best_selling_samples()
    assert body["outlets"]


def test_home_prefers_database_content(client, make_outlet, make_menu_item):
    outlet = make_outlet()
    make_menu_item(outlet["id"], "Burger")
    make_menu_item(outlet["id"], "Hidden", isAvailable=False)

    body = client.get("/api/pages/home").json()
    assert [o["name"] for o in body["outlets"]] == ["Cafe A"]
    assert [i["name"] for i in body["featuredProducts"]] == ["Burger"]
    assert [i["name"] for i in body["bestSelling"]] == ["Burger"]


def test_menu_categories(client, make_outlet, make_menu_item):
    fallback = client.get("/api/pages/menu").json()["categories"]
    assert fallback == sample_data.category_samples()

    outlet = make_outlet()
    make_menu_item(outlet["id"], "Latte", category="Beverages")
    make_menu_item(outlet["id"], "Burger", category="Snacks")
    make_menu_item(outlet["id"], "Fries", category="Snacks")
    assert client.get("/api/pages/menu").json()["categories"] == ["Beverages", "Snacks"]


def test_checkout_lists_all_outlets(client, make_outlet):
    for name in ("C", "A", "B"):
        make_outlet(name)
    outlets = client.get("/api/pages/checkout").json()["outlets"]
    assert [o["name"] for o in outlets] == ["A", "B", "C"]


def test_admin_dashboard(client, customer, make_outlet, make_menu_item):
    outlet = make_outlet()
    item = make_menu_item(outlet["id"])
    client.post(
        "/api/orders",
        json={"customer": customer, "outlet": outlet["id"], "items": [{"menuItem": item["id"]}]},
    )

    stats = client.get("/api/admin/dashboard").json()["stats"]
    assert stats["totalOutlets"] == 1
    assert stats["totalMenuItems"] == 1
    assert len(stats["recentOrders"]) == 1
    assert stats["recentOrders"][0]["outlet"] == {"id": outlet["id"], "name": "Cafe A"}


def test_read_json_missing_file_returns_fallback(tmp_path):
    assert sample_data.read_json("nope.json", {"restaurants": []}, directory=tmp_path) == {"restaurants": []}


def test_read_json_invalid_file_returns_fallback(tmp_path):
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    assert sample_data.read_json("broken.json", {}, directory=tmp_path) == {}


def test_category_samples_union(tmp_path, monkeypatch):
    (tmp_path / "menu-items.json").write_text(
        json.dumps({"menuItems": {"A": {"Tea": [], "Snacks": []}, "B": {"Snacks": [], "Meals": []}}}),
        encoding="utf-8",
    )
    monkeypatch.setattr(sample_data, "settings", type(settings)(sample_data_dir=tmp_path))
    assert sample_data.category_samples() == ["Meals", "Snacks", "Tea"]
