from flask import Blueprint
from app.controllers.home_controller import (
    intro_handler,
    home_handler,
    restaurants_page_handler,
    restaurant_menu_handler,
    save_restaurant_handler,
    grocery_list_handler,
)

home_bp = Blueprint("home", __name__)

@home_bp.route("/")
def intro():
    return intro_handler()

@home_bp.route("/home")
def home_page():
    return home_handler()

@home_bp.route("/restaurant")
def restaurants():
    return restaurants_page_handler()

@home_bp.route("/restaurant/<path:name>")
def restaurant_menu(name):
    return restaurant_menu_handler(name)

@home_bp.post("/restaurant/save")
def save_restaurant():
    return save_restaurant_handler()

@home_bp.route("/grocery")
def grocery():
    return grocery_list_handler()
