from flask import Blueprint
from app.controllers.home_controller import (
    list_meals_handler,
    get_meal_handler,
    list_restaurants_handler,
    get_restaurant_handler,
    restaurant_meals_handler,
    health_handler,
    ping_handler,
    db_health_handler,
)
from app.controllers.order_controller import create_order_handler
from app.controllers.auth_controller import mobile_register_handler

api_bp = Blueprint("api", __name__, url_prefix="/api")

@api_bp.get("/meals")
def list_meals():
    return list_meals_handler()

@api_bp.get("/meals/offers")
def list_offer_meals():
    return list_meals_handler(offers_only=True)

@api_bp.get("/meals/<meal_id>")
def get_meal(meal_id):
    return get_meal_handler(meal_id)

@api_bp.get("/restaurants")
def list_restaurants():
    return list_restaurants_handler()

@api_bp.get("/restaurants/<restaurant_id>")
def get_restaurant(restaurant_id):
    return get_restaurant_handler(restaurant_id)

@api_bp.get("/restaurants/<restaurant_id>/meals")
def restaurant_meals(restaurant_id):
    return restaurant_meals_handler(restaurant_id)

@api_bp.post("/orders")
def create_order():
    return create_order_handler()

@api_bp.post("/mobile/register")
def mobile_register():
    return mobile_register_handler()

@api_bp.get("/health")
def health():
    return health_handler()

@api_bp.get("/ping")
def ping():
    return ping_handler()

@api_bp.get("/health/db")
def db_health():
    return db_health_handler()
