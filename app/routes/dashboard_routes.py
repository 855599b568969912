from flask import Blueprint
from app.controllers.dashboard_controller import (
    dashboard_page_handler,
    add_meal_handler,
    edit_meal_page_handler,
    edit_meal_submit_handler,
    delete_meal_handler,
    restaurant_menu_handler,
    restaurant_form_handler,
    restaurant_submit_handler,
    driver_meals_report_handler,
)
from app.utils.auth import roles_required
from app.utils.enums import UserRole

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")
reports_bp = Blueprint("reports", __name__, url_prefix="/reports")

ADMIN = UserRole.ADMIN.value
SUPPORT = UserRole.SUPPORT.value
DATA_ENTRY = UserRole.DATA_ENTRY.value

@dashboard_bp.get("")
@roles_required(ADMIN, SUPPORT)
def dashboard_page():
    return dashboard_page_handler()

@dashboard_bp.post("/add-food")
@roles_required(ADMIN, DATA_ENTRY)
def add_food():
    return add_meal_handler()

@dashboard_bp.get("/edit/<int:meal_id>")
@roles_required(ADMIN, DATA_ENTRY)
def edit_meal_page(meal_id):
    return edit_meal_page_handler(meal_id)

@dashboard_bp.post("/edit/<int:meal_id>")
@roles_required(ADMIN, DATA_ENTRY)
def edit_meal_submit(meal_id):
    return edit_meal_submit_handler(meal_id)

@dashboard_bp.post("/delete/<int:meal_id>")
@roles_required(ADMIN)
def delete_meal(meal_id):
    return delete_meal_handler(meal_id)

@dashboard_bp.get("/restaurant-menu")
@roles_required(ADMIN, SUPPORT)
def restaurant_menu():
    return restaurant_menu_handler()

@dashboard_bp.get("/restaurant/add")
@roles_required(ADMIN, DATA_ENTRY)
def restaurant_form():
    return restaurant_form_handler()

@dashboard_bp.post("/restaurant/add")
@roles_required(ADMIN, DATA_ENTRY)
def restaurant_submit():
    return restaurant_submit_handler()


@reports_bp.get("/driver-meals")
@roles_required(ADMIN)
def driver_meals():
    return driver_meals_report_handler()
