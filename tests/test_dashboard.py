from app.models.meal import Meal
from app.models.restaurant import Restaurant
from app.models.user import User
from tests.helpers import admin_headers, driver_headers, login


def _order(client, meal_ids):
    r = client.post("/api/orders", json={
        "customerName": "Nour", "customerMobile": "96554444444", "city": "Jabriya",
        "cartItems": [{"mealId": meal_ids["Falafel"], "name": "Falafel", "price": 0.75,
                       "quantity": 4, "restaurantId": "1"}],
    })
    return r.get_json()["orderId"]


def test_login_lands_by_role(client):
    assert login(client, "admin").headers["Location"].endswith("/dashboard")
    assert login(client, "entry").headers["Location"].endswith("/dashboard/restaurant/add")

    r = login(client, "admin", "wrong")
    assert r.status_code == 401
    assert b"Invalid username or password" in r.data


def test_logout_clears_session(client):
    login(client, "admin")
    r = client.get("/logout")
    assert r.headers["Location"].endswith("/login")
    assert client.get("/dashboard").status_code == 302


def test_dashboard_role_guard(client):
    assert client.get("/dashboard").status_code == 302
    login(client, "entry")
    assert client.get("/dashboard").status_code == 403
    login(client, "support")
    assert client.get("/dashboard").status_code == 200
    assert client.post("/dashboard/add-food", data={"name": "X"}).status_code == 403


def test_meal_crud(client, app):
    login(client, "entry")
    r = client.post("/dashboard/add-food", data={
        "name": "Mandi", "price": "3.250", "restaurant_en": "Yemeni House", "offer": "on", "period": "40",
    })
    assert r.status_code == 302

    with app.app_context():
        meal = Meal.query.filter_by(name_en="Mandi").one()
        assert meal.offer is True
        assert meal.period == 40
        assert meal.restaurant.name_en == "Yemeni House"
        meal_id = meal.id

    r = client.post("/dashboard/add-food", data={"name": "No price"})
    assert r.status_code == 400
    assert r.mimetype == "text/html"
    assert b"Add restaurant" in r.data
    assert b"Missing data for required field." in r.data

    assert client.get(f"/dashboard/edit/{meal_id}").status_code == 200
    r = client.post(f"/dashboard/edit/{meal_id}", data={"name": "Mandi Lamb", "price": "4"})
    assert r.status_code == 302
    with app.app_context():
        meal = Meal.query.get(meal_id)
        assert meal.name_en == "Mandi Lamb"
        assert meal.offer is False

    assert client.get("/dashboard/edit/9999").status_code == 404
    # data entry cannot delete
    assert client.post(f"/dashboard/delete/{meal_id}").status_code == 403

    login(client, "admin")
    assert client.post(f"/dashboard/delete/{meal_id}").status_code == 302
    assert client.post(f"/dashboard/delete/{meal_id}").status_code == 404


def test_invalid_meal_form_rerenders_dashboard_for_admin(client, app):
    login(client, "admin")
    r = client.post("/dashboard/add-food", data={"name": "Kabsa", "price": "-1"})
    assert r.status_code == 400
    assert b"<h2>Notifications</h2>" in r.data
    assert b"Must be greater than or equal to 0." in r.data
    with app.app_context():
        assert Meal.query.filter_by(name_en="Kabsa").count() == 0


def test_restaurant_form(client, app):
    login(client, "entry")
    assert client.get("/dashboard/restaurant/add").status_code == 200

    r = client.post("/dashboard/restaurant/add", data={"restaurant_en": "Pizza Corner", "address": "Fahaheel"})
    assert r.headers["Location"].endswith("/dashboard/restaurant-menu")

    r = client.post("/dashboard/restaurant/add", data={"restaurant_en": "pizza corner"})
    assert r.status_code == 409

    assert client.post("/dashboard/restaurant/add", data={}).status_code == 400
    with app.app_context():
        assert Restaurant.query.filter_by(name_en="Pizza Corner").count() == 1


def test_admin_restaurant_menu(client):
    login(client, "support")
    r = client.get("/dashboard/restaurant-menu")
    assert r.status_code == 200
    assert b"Flamingo Grill" in r.data


def test_driver_meals_report(client, meal_ids):
    order_id = _order(client, meal_ids)
    client.post(f"/api/driver/claim/{order_id}", headers=driver_headers(client))

    login(client, "support")
    assert client.get("/reports/driver-meals").status_code == 403

    login(client, "admin")
    r = client.get("/reports/driver-meals", headers={"Accept": "application/json"})
    drivers = r.get_json()["drivers"]
    driver1 = next(d for d in drivers if d["driverName"] == "driver1")
    line = driver1["orders"][0]
    assert line["orderId"] == int(order_id)
    assert line["mealName"] == "Falafel"
    assert line["lineTotal"] == 3.0

    assert client.get("/reports/driver-meals").status_code == 200


def test_admin_api_requires_admin_token(client):
    assert client.get("/api/admin/users").status_code == 401
    assert client.get("/api/admin/users", headers=driver_headers(client)).status_code == 403


def test_admin_user_management(client, app):
    headers = admin_headers(client)
    r = client.get("/api/admin/users?search=driver", headers=headers)
    data = r.get_json()
    assert data["total"] == 2

    r = client.get("/api/admin/users?role=admin", headers=headers)
    assert [u["username"] for u in r.get_json()["items"]] == ["admin"]

    user_id = next(u["id"] for u in data["items"] if u["username"] == "driver2")
    r = client.put(f"/api/admin/users/{user_id}/role", headers=headers, json={"role": "driver"})
    assert r.status_code == 200
    assert r.get_json()["role"] == "driver"

    r = client.put(f"/api/admin/users/{user_id}/role", headers=headers, json={"role": "king"})
    assert r.status_code == 400

    assert client.get("/api/admin/users/9999", headers=headers).status_code == 404
    with app.app_context():
        assert User.query.get(user_id).role_name == "driver"


def test_admin_stats_and_notifications(client, meal_ids):
    order_id = _order(client, meal_ids)
    headers = admin_headers(client)

    stats = client.get("/api/admin/dashboard/stats", headers=headers).get_json()
    assert stats["total_users"] == 5
    assert stats["total_meals"] == 2
    assert stats["orders_by_status"]["Pending"] == 1
    assert stats["orders_by_status"]["Delivered"] == 0

    notes = client.get("/api/admin/notifications", headers=headers).get_json()
    assert notes[0]["orderId"] == int(order_id)
    assert notes[0]["status"] == "unpicked"


def test_api_login(client):
    r = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert r.status_code == 401
    assert client.post("/api/auth/login", json={}).status_code == 400


def test_mobile_register(client):
    body = {"name": "Huda", "mobile": "96555555555", "password": "hunter22", "email": "huda@example.com"}
    r = client.post("/api/mobile/register", json=body)
    assert r.status_code == 200
    assert r.get_json()["success"] is True

    r = client.post("/api/mobile/register", json=body)
    assert r.status_code == 400
    assert r.get_json()["error"] == "MOBILE_ALREADY_REGISTERED"

    r = client.post("/api/mobile/register", json={"name": "Huda"})
    assert r.get_json()["error"] == "MISSING_FIELDS"

    r = client.post("/api/auth/login", json={"username": "96555555555", "password": "hunter22"})
    assert r.get_json()["user"]["role"] == "customer"
