from types import SimpleNamespace

import pytest

from app.services import cart_service
from app.services.errors import NotFoundError


def _meal(id, name="Meal", price=2.0, restaurant_id=1):
    return SimpleNamespace(id=id, name_en=name, price=price, restaurant_id=restaurant_id)


def test_add_item_increments_existing_line():
    cart = []
    cart_service.add_item(cart, _meal(1), 2)
    cart_service.add_item(cart, _meal(1), "3")
    assert len(cart) == 1
    assert cart[0]["quantity"] == 5
    assert cart_service.cart_totals(cart) == (5, 10.0)


@pytest.mark.parametrize("qty", [0.5, "0.9", -3])
def test_add_item_keeps_at_least_one(qty):
    cart = []
    cart_service.add_item(cart, _meal(1), qty)
    assert cart[0]["quantity"] == 1


def test_update_item_qty_wins_over_delta_and_zero_removes():
    cart = []
    cart_service.add_item(cart, _meal(1), 2)
    cart_service.add_item(cart, _meal(2, price=1.25))

    cart_service.update_item(cart, "1", qty="4.7", delta=10)
    assert cart_service.find_item(cart, 1)["quantity"] == 4

    cart_service.update_item(cart, 2, delta=-1)
    assert cart_service.find_item(cart, 2) is None

    with pytest.raises(NotFoundError):
        cart_service.update_item(cart, 99, qty=1)


def test_remove_many_accepts_single_value():
    cart = []
    for i in (1, 2, 3):
        cart_service.add_item(cart, _meal(i))
    cart_service.remove_many(cart, "2")
    assert [i["meal_id"] for i in cart] == ["1", "3"]
    cart_service.remove_many(cart, ["1", "3"])
    assert cart == []


def test_refresh_uses_catalog_prices():
    cart = [{"meal_id": "1", "name": "Old", "price": 9, "quantity": 0}]
    meal = SimpleNamespace(id=1, name_en="New", price=3, restaurant_id=4,
                           restaurant_name="Grill", image_url=None)
    cart_service.refresh_from_meals(cart, [meal])
    assert cart[0]["name"] == "New"
    assert cart[0]["price"] == 3.0
    assert cart[0]["quantity"] == 1


def test_toggle_favorite():
    favs = []
    assert cart_service.toggle_favorite(favs, 5) is True
    assert favs == ["5"]
    assert cart_service.toggle_favorite(favs, "5") is False
    assert favs == []


def test_add_to_cart_endpoint(client, meal_ids):
    shawarma = meal_ids["Shawarma"]
    r = client.post("/cart/add", json={"mealId": shawarma, "qty": 2})
    assert r.status_code == 200
    r = client.post("/cart/add", json={"mealId": str(shawarma)})
    summary = r.get_json()["summary"]
    assert summary["count"] == 3
    assert summary["total"] == 4.5
    assert summary["items"][0]["lineTotal"] == 4.5

    r = client.get("/cart/mini")
    assert r.get_json()["summary"]["count"] == 3


def test_add_to_cart_errors(client):
    r = client.post("/cart/add", json={})
    assert r.status_code == 400
    assert r.get_json() == {"error": "mealId required"}

    r = client.post("/cart/add", json={"mealId": "999"})
    assert r.status_code == 404
    assert r.get_json() == {"error": "Meal not found"}


def test_add_to_cart_form_redirects(client, meal_ids):
    r = client.post("/cart/add", data={"mealId": meal_ids["Falafel"], "redirect": "/restaurant"})
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/restaurant")


def test_update_and_remove_endpoints(client, meal_ids):
    falafel = meal_ids["Falafel"]
    client.post("/cart/add", json={"mealId": falafel})

    r = client.post("/cart/update", json={"mealId": falafel, "delta": 2})
    assert r.get_json()["summary"]["count"] == 3

    r = client.post("/cart/update", json={"id": 12345, "qty": 1})
    assert r.status_code == 404
    assert r.get_json()["success"] is False

    r = client.post("/cart/update", json={"qty": 1})
    assert r.status_code == 400

    r = client.post("/cart/remove", json={"mealId": falafel})
    assert r.get_json()["summary"] == {"items": [], "total": 0, "count": 0}


def test_view_cart_is_not_cached(client, meal_ids):
    client.post("/cart/add", json={"mealId": meal_ids["Shawarma"]})
    r = client.get("/cart/view")
    assert r.status_code == 200
    assert r.headers["Cache-Control"] == "no-store"
    assert b"Shawarma" in r.data


def test_remove_selected_and_clear(client, meal_ids):
    for meal_id in meal_ids.values():
        client.post("/cart/add", json={"mealId": meal_id})

    r = client.post("/cart/remove-selected", data={"selectedMeals": [str(meal_ids["Shawarma"])]})
    assert r.status_code == 302
    with client.session_transaction() as sess:
        assert [i["meal_id"] for i in sess["cart"]] == [str(meal_ids["Falafel"])]

    r = client.post("/cart/clear")
    assert r.status_code == 204
    with client.session_transaction() as sess:
        assert sess["cart"] == []


def test_session_helpers(client, meal_ids):
    client.post("/cart/add", json={"mealId": meal_ids["Shawarma"]})
    client.post("/favorites/toggle", json={"mealId": meal_ids["Shawarma"]})

    r = client.post("/session/start-new")
    assert r.status_code == 303
    with client.session_transaction() as sess:
        assert sess["cart"] == []
        assert sess["favorites"] == [str(meal_ids["Shawarma"])]

    r = client.post("/session/clear-all")
    assert r.status_code == 204
    with client.session_transaction() as sess:
        assert sess["favorites"] == []


def test_favorites(client, meal_ids):
    r = client.post("/favorites/toggle", json={"mealId": meal_ids["Falafel"]})
    assert r.get_json() == {"success": True, "favorite": True, "favorites": [str(meal_ids["Falafel"])]}

    r = client.get("/favorites/list")
    assert r.status_code == 200
    assert b"Falafel" in r.data

    r = client.post("/favorites/toggle", json={"mealId": meal_ids["Falafel"]})
    assert r.get_json()["favorite"] is False
