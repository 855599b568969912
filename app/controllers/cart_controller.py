from flask import request, session, redirect, render_template, url_for, make_response

from app.services import cart_service, catalog_service
from app.services.errors import NotFoundError
from app.utils.http import ok, json_body, wants_json


def _session_list(key):
    # Mutated in place by the services, so flag the session as dirty up front
    session.modified = True
    return session.setdefault(key, [])


def _chosen_id(data):
    return data.get("mealId") or data.get("id")


def _find_meal(meal_id):
    if not str(meal_id).isdigit():
        return None
    try:
        return catalog_service.get_meal(int(meal_id))
    except NotFoundError:
        return None


def _summary_response(cart):
    return ok({"success": True, "summary": cart_service.summarize(cart)})


def mini_cart_handler():
    return _summary_response(_session_list("cart"))


def add_to_cart_handler():
    data = json_body()
    meal_id = _chosen_id(data)
    if not meal_id:
        return ok({"error": "mealId required"}, 400)

    meal = _find_meal(meal_id)
    if not meal:
        return ok({"error": "Meal not found"}, 404)

    cart = _session_list("cart")
    cart_service.add_item(cart, meal, data.get("qty", 1))

    if wants_json():
        return _summary_response(cart)
    return redirect(data.get("redirect") or request.referrer or url_for("home.home_page"))


def update_cart_handler():
    data = json_body()
    meal_id = _chosen_id(data)
    if not meal_id:
        return ok({"success": False, "message": "mealId (or id) is required"}, 400)

    cart = _session_list("cart")
    try:
        cart_service.update_item(cart, meal_id, qty=data.get("qty"), delta=data.get("delta"))
    except NotFoundError as e:
        return ok({"success": False, "message": str(e)}, 404)
    return _summary_response(cart)


def remove_from_cart_handler():
    data = json_body()
    meal_id = _chosen_id(data)
    if not meal_id:
        return ok({"success": False, "message": "mealId (or id) is required"}, 400)
    cart = _session_list("cart")
    cart_service.remove_item(cart, meal_id)
    return _summary_response(cart)


def view_cart_handler():
    cart = _session_list("cart")
    meals = catalog_service.meals_by_ids(i.get("meal_id") for i in cart)
    cart_service.refresh_from_meals(cart, meals)
    _, total = cart_service.cart_totals(cart)

    resp = make_response(render_template("cart.html", cart=cart, total=total, hide_footer=True))
    resp.headers["Cache-Control"] = "no-store"
    return resp


def remove_selected_handler():
    selected = request.form.getlist("selectedMeals") or json_body().get("selectedMeals")
    cart_service.remove_many(_session_list("cart"), selected)
    return redirect(url_for("cart.view_cart"))


def clear_cart_handler():
    cart_service.clear(_session_list("cart"))
    return "", 204


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------

def clear_all_handler():
    session["cart"] = []
    session["favorites"] = []
    return "", 204


def start_new_handler():
    session["cart"] = []
    return redirect(url_for("home.home_page"), code=303)


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------

def toggle_favorite_handler():
    meal_id = _chosen_id(json_body())
    if not meal_id:
        return ok({"success": False, "message": "mealId required"}, 400)
    is_favorite = cart_service.toggle_favorite(_session_list("favorites"), meal_id)
    return ok({"success": True, "favorite": is_favorite, "favorites": session["favorites"]})


def list_favorites_handler():
    meals = catalog_service.meals_by_ids(_session_list("favorites"))
    return render_template("favorites.html", meals=meals)
