import logging

from flask import session, render_template
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.services import catalog_service
from app.services.errors import NotFoundError
from app.utils.http import ok, error, json_body, arg_str, wants_json, public_base_url

logger = logging.getLogger(__name__)

HOME_MEAL_LIMIT = 20


def _invalid_id(message, value):
    return ok({"message": message, "idReceived": value}, 400)


# ---------------------------------------------------------------------------
# Mobile JSON catalog
# ---------------------------------------------------------------------------

def list_meals_handler(offers_only=False):
    base = public_base_url()
    meals = catalog_service.list_meals(offers_only=offers_only)
    return ok([catalog_service.serialize_meal(m, base) for m in meals])


def get_meal_handler(meal_id):
    if not str(meal_id).isdigit():
        return _invalid_id("Invalid meal id format", meal_id)
    try:
        meal = catalog_service.get_meal(int(meal_id))
    except NotFoundError:
        return ok({"message": "Not found"}, 404)
    return ok(catalog_service.serialize_meal(meal, public_base_url()))


def list_restaurants_handler():
    base = public_base_url()
    return ok([catalog_service.serialize_restaurant(r, base) for r in catalog_service.list_restaurants()])


def get_restaurant_handler(restaurant_id):
    if not str(restaurant_id).isdigit():
        return _invalid_id("Invalid restaurant id format", restaurant_id)
    try:
        restaurant = catalog_service.get_restaurant(int(restaurant_id))
    except NotFoundError:
        return ok({"message": "Restaurant not found", "idRequested": restaurant_id}, 404)
    return ok(catalog_service.serialize_restaurant(restaurant, public_base_url()))


def restaurant_meals_handler(restaurant_id):
    if not str(restaurant_id).isdigit():
        return _invalid_id("Invalid restaurant id format", restaurant_id)
    base = public_base_url()
    meals = catalog_service.restaurant_meals(int(restaurant_id))
    return ok([catalog_service.serialize_meal(m, base) for m in meals])


def health_handler():
    return ok({"ok": True})


def ping_handler():
    return "pong", 200, {"Content-Type": "text/plain"}


def db_health_handler():
    try:
        value = db.session.execute(db.text("SELECT 1")).scalar()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Database health check failed: %s", e)
        return error("DB_UNREACHABLE", "Database not reachable", 500, detail=str(e))
    return ok({"ok": value})


# ---------------------------------------------------------------------------
# Customer pages
# ---------------------------------------------------------------------------

def intro_handler():
    return render_template("intro.html", title="Welcome to Flamingo")


def home_handler():
    return render_template(
        "home.html",
        meals=catalog_service.list_meals(limit=HOME_MEAL_LIMIT),
        restaurants=catalog_service.list_restaurants(),
        favorites=session.get("favorites") or [],
    )


def restaurants_page_handler():
    return render_template("restaurants.html", restaurants=catalog_service.list_restaurants())


def restaurant_menu_handler(name):
    name = (name or "").strip()
    restaurant = catalog_service.find_restaurant_by_name(name)
    meals = catalog_service.restaurant_meals(restaurant.id) if restaurant else []
    if not meals:
        return render_template("errors/404.html", url=f"/restaurant/{name}"), 404
    return render_template(
        "restaurant_menu.html",
        restaurant=restaurant,
        restaurant_name=restaurant.display_name,
        restaurant_address=restaurant.address or "Not available",
        meals=meals,
        hide_footer=True,
    )


def save_restaurant_handler():
    data = json_body()
    try:
        _, created = catalog_service.save_restaurant(
            data.get("restaurant_en"), data.get("restaurant_ar"),
            data.get("address"), data.get("logo"),
        )
    except ValueError as e:
        return error("VALIDATION_ERROR", str(e), 400)
    if not created:
        return ok({"message": "Restaurant already exists"}, 200)
    return ok({"message": "Restaurant saved successfully"}, 201)


def grocery_list_handler():
    supermarket_id = arg_str("supermarketId")
    items = catalog_service.list_groceries(
        supermarket_id=int(supermarket_id) if (supermarket_id or "").isdigit() else None,
        category=arg_str("category"),
    )
    if wants_json():
        base = public_base_url()
        return ok([catalog_service.serialize_grocery(i, base) for i in items])
    return render_template("grocery_list.html", items=items)
