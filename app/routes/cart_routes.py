from flask import Blueprint, redirect, url_for
from app.controllers.cart_controller import (
    mini_cart_handler,
    add_to_cart_handler,
    update_cart_handler,
    remove_from_cart_handler,
    view_cart_handler,
    remove_selected_handler,
    clear_cart_handler,
    clear_all_handler,
    start_new_handler,
    toggle_favorite_handler,
    list_favorites_handler,
)

cart_bp = Blueprint("cart", __name__, url_prefix="/cart")
session_bp = Blueprint("session", __name__, url_prefix="/session")
favorites_bp = Blueprint("favorites", __name__, url_prefix="/favorites")

@cart_bp.get("/mini")
def mini_cart():
    return mini_cart_handler()

@cart_bp.post("/add")
def add_to_cart():
    return add_to_cart_handler()

@cart_bp.post("/update")
def update_cart():
    return update_cart_handler()

@cart_bp.post("/remove")
def remove_from_cart():
    return remove_from_cart_handler()

@cart_bp.get("/view")
def view_cart():
    return view_cart_handler()

@cart_bp.post("/remove-selected")
def remove_selected():
    return remove_selected_handler()

@cart_bp.post("/clear")
def clear_cart():
    return clear_cart_handler()

@cart_bp.get("/back")
def back():
    return redirect(url_for("cart.view_cart"))


@session_bp.post("/clear-all")
def clear_all():
    return clear_all_handler()

@session_bp.post("/clear-cart")
def clear_session_cart():
    return clear_cart_handler()

@session_bp.post("/start-new")
def start_new():
    return start_new_handler()


@favorites_bp.post("/toggle")
def toggle_favorite():
    return toggle_favorite_handler()

@favorites_bp.get("/list")
def list_favorites():
    return list_favorites_handler()
