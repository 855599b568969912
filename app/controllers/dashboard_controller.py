import logging

from flask import redirect, render_template, session, url_for

from app.schemas.food_schema import MealFormSchema, MealUpdateSchema, RestaurantFormSchema
from app.services import catalog_service, report_service
from app.services.errors import NotFoundError
from app.utils.enums import UserRole
from app.utils.http import ok, json_body, validate_schema, arg_int, wants_json

logger = logging.getLogger(__name__)


def dashboard_page_handler():
    return render_template(
        "dashboard.html",
        title="Dashboard",
        notifications=report_service.recent_notifications(),
        meals=catalog_service.list_meals(),
    )


def add_meal_handler():
    data, errors = validate_schema(MealFormSchema, json_body())
    if errors:
        # Data entry staff post this form from the restaurant page
        if session.get("user_role") == UserRole.ADMIN.value:
            return render_template(
                "dashboard.html",
                title="Dashboard",
                notifications=report_service.recent_notifications(),
                meals=catalog_service.list_meals(),
                meal_errors=errors,
            ), 400
        return render_template("restaurant_form.html", errors={}, form={}, meal_errors=errors), 400
    meal = catalog_service.create_meal(data)
    logger.info("Meal %s added to restaurant %s", meal.id, meal.restaurant_id)
    return redirect(url_for("dashboard.dashboard_page"))


def edit_meal_page_handler(meal_id):
    try:
        meal = catalog_service.get_meal(meal_id)
    except NotFoundError:
        return "Food not found", 404
    return render_template("edit_meal.html", title="Edit Food", meal=meal, errors={})


def edit_meal_submit_handler(meal_id):
    form = json_body()
    data, errors = validate_schema(MealUpdateSchema, form)
    if errors:
        try:
            meal = catalog_service.get_meal(meal_id)
        except NotFoundError:
            return "Food not found", 404
        return render_template("edit_meal.html", title="Edit Food", meal=meal, errors=errors), 400
    try:
        catalog_service.update_meal(meal_id, data)
    except NotFoundError:
        return "Food not found", 404
    return redirect(url_for("dashboard.dashboard_page"))


def delete_meal_handler(meal_id):
    try:
        catalog_service.delete_meal(meal_id)
    except NotFoundError:
        return "Food item not found", 404
    return redirect(url_for("dashboard.dashboard_page"))


def restaurant_menu_handler():
    return render_template("admin_restaurant_menu.html", menu_by_restaurant=catalog_service.menu_by_restaurant())


def restaurant_form_handler():
    return render_template("restaurant_form.html", errors={}, form={})


def restaurant_submit_handler():
    form = json_body()
    data, errors = validate_schema(RestaurantFormSchema, form)
    if errors:
        return render_template("restaurant_form.html", errors=errors, form=form), 400
    _, created = catalog_service.save_restaurant(
        data["restaurant_en"], data["restaurant_ar"], data["address"], data["logo"],
    )
    if not created:
        return render_template("restaurant_form.html", errors={"restaurant_en": ["Restaurant already exists"]},
                               form=form), 409
    return redirect(url_for("dashboard.restaurant_menu"))


def driver_meals_report_handler():
    drivers = report_service.driver_meals()
    if wants_json():
        return ok({"drivers": drivers})
    return render_template("driver_meals_report.html", title="Meals per Driver", drivers=drivers)


# ---------------------------------------------------------------------------
# Admin JSON API
# ---------------------------------------------------------------------------

def get_stats_handler():
    return ok(report_service.dashboard_stats())


def list_notifications_handler():
    limit = arg_int("limit", 50, min_value=1, max_value=200)
    return ok([
        {
            "id": n.id,
            "orderId": n.order_id,
            "message": n.message,
            "status": n.status,
            "createdAt": n.created_at.isoformat() if n.created_at else None,
        }
        for n in report_service.recent_notifications(limit)
    ])
