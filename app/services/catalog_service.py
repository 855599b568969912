"""
Catalog Service

Restaurant and meal lookups shared by the mobile JSON API, the customer
pages and the admin dashboard.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func

from app.extensions import db
from app.models.meal import Meal
from app.models.restaurant import Restaurant
from app.models.grocery_item import GroceryItem
from app.services.errors import NotFoundError
from app.utils.http import normalize_image, safe_number

logger = logging.getLogger(__name__)


def _newest_first(query, model):
    return query.order_by(model.created_at.desc(), model.id.desc())


def serialize_meal(meal: Meal, base: str) -> Dict[str, Any]:
    restaurant = meal.restaurant
    return {
        "id": str(meal.id),
        "name": meal.name_en or meal.name_ar or "",
        "name_ar": meal.name_ar or "",
        "price": float(meal.price or 0),
        "image": normalize_image(base, meal.image_url),
        "restaurant": restaurant.display_name if restaurant else "",
        "restaurantId": str(restaurant.id) if restaurant else None,
        "details": meal.details_en or meal.details_ar or "",
        "offer": bool(meal.offer),
        "period": int(meal.period or 0),
        "address": meal.address or "",
    }


def serialize_restaurant(restaurant: Restaurant, base: str) -> Dict[str, Any]:
    return {
        "id": str(restaurant.id),
        "restaurant_en": restaurant.name_en or "",
        "restaurant_ar": restaurant.name_ar or "",
        "logo": normalize_image(base, restaurant.logo_url),
        "address": restaurant.address or "",
        "lat": restaurant.latitude,
        "lng": restaurant.longitude,
    }


def list_meals(offers_only: bool = False, limit: Optional[int] = None) -> List[Meal]:
    query = Meal.query
    if offers_only:
        query = query.filter(Meal.offer.is_(True))
    query = _newest_first(query, Meal)
    if limit:
        query = query.limit(limit)
    return query.all()


def get_meal(meal_id) -> Meal:
    meal = Meal.query.get(meal_id)
    if not meal:
        raise NotFoundError("Meal not found")
    return meal


def meals_by_ids(ids) -> List[Meal]:
    int_ids = []
    for i in ids:
        try:
            int_ids.append(int(i))
        except (TypeError, ValueError):
            continue
    if not int_ids:
        return []
    return Meal.query.filter(Meal.id.in_(int_ids)).all()


def list_restaurants() -> List[Restaurant]:
    return _newest_first(Restaurant.query, Restaurant).all()


def get_restaurant(restaurant_id) -> Restaurant:
    restaurant = Restaurant.query.get(restaurant_id)
    if not restaurant:
        raise NotFoundError("Restaurant not found")
    return restaurant


def restaurant_meals(restaurant_id) -> List[Meal]:
    return _newest_first(Meal.query.filter_by(restaurant_id=restaurant_id), Meal).all()


def find_restaurant_by_name(name: str) -> Optional[Restaurant]:
    name = (name or "").strip()
    if not name:
        return None
    return Restaurant.query.filter(func.lower(Restaurant.name_en) == name.lower()).first()


def meals_for_restaurant_name(name: str) -> List[Meal]:
    restaurant = find_restaurant_by_name(name)
    if not restaurant:
        return []
    return restaurant_meals(restaurant.id)


def get_or_create_restaurant(name_en: str, name_ar: str = "", address: str = "", logo_url: str = "") -> Restaurant:
    """Case-insensitive lookup on the English name; creates the restaurant when missing."""
    existing = find_restaurant_by_name(name_en)
    if existing:
        return existing
    restaurant = Restaurant(
        name_en=name_en.strip(),
        name_ar=(name_ar or "").strip(),
        address=(address or "").strip(),
        logo_url=logo_url or "",
    )
    db.session.add(restaurant)
    db.session.flush()
    logger.info("Created restaurant %s (%s)", restaurant.id, restaurant.name_en)
    return restaurant


def save_restaurant(name_en: str, name_ar: str = "", address: str = "", logo_url: str = ""):
    """Insert unless a restaurant with both names already exists. Returns (restaurant, created)."""
    name_en = (name_en or "").strip()
    name_ar = (name_ar or "").strip()
    if not name_en:
        raise ValueError("restaurant_en is required")

    exists = Restaurant.query.filter(
        func.lower(Restaurant.name_en) == name_en.lower(),
        func.lower(func.coalesce(Restaurant.name_ar, "")) == name_ar.lower(),
    ).first()
    if exists:
        return exists, False

    restaurant = Restaurant(name_en=name_en, name_ar=name_ar, address=(address or "").strip(), logo_url=logo_url or "")
    db.session.add(restaurant)
    db.session.commit()
    return restaurant, True


def _meal_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    period = safe_number(data.get("period"))
    fields = {
        "name_en": (data.get("name") or data.get("name_en") or "").strip(),
        "name_ar": (data.get("name_ar") or "").strip(),
        "price": safe_number(data.get("price"), 0) or 0,
        "details_en": (data.get("details") or data.get("details_en") or "").strip(),
        "details_ar": (data.get("details_ar") or "").strip(),
        "address": (data.get("address") or "").strip(),
        "offer": data.get("offer") in (True, "true", "on", "1", 1),
        "period": int(period) if period is not None else 0,
    }
    cuisine = (data.get("cuisine") or "").strip()
    if cuisine:
        fields["cuisine"] = cuisine
    image = (data.get("image") or data.get("image_url") or "").strip()
    if image:
        fields["image_url"] = image
    return fields


def create_meal(data: Dict[str, Any]) -> Meal:
    fields = _meal_fields(data)
    if not fields["name_en"]:
        raise ValueError("name is required")

    restaurant_name = (data.get("restaurant_en") or data.get("restaurant") or "").strip()
    if not restaurant_name:
        raise ValueError("restaurant_en is required")
    restaurant = get_or_create_restaurant(
        restaurant_name,
        data.get("restaurant_ar") or "",
        data.get("address") or "",
        data.get("restaurant_logo") or "",
    )

    meal = Meal(restaurant_id=restaurant.id, **fields)
    db.session.add(meal)
    db.session.commit()
    return meal


def update_meal(meal_id, data: Dict[str, Any]) -> Meal:
    meal = get_meal(meal_id)
    fields = _meal_fields(data)
    if not fields["name_en"]:
        raise ValueError("name is required")

    restaurant_name = (data.get("restaurant_en") or data.get("restaurant") or "").strip()
    if restaurant_name:
        restaurant = get_or_create_restaurant(restaurant_name, data.get("restaurant_ar") or "", data.get("address") or "")
        meal.restaurant_id = restaurant.id

    for key, value in fields.items():
        setattr(meal, key, value)
    db.session.commit()
    return meal


def delete_meal(meal_id) -> Meal:
    meal = get_meal(meal_id)
    db.session.delete(meal)
    db.session.commit()
    return meal


def menu_by_restaurant() -> Dict[str, List[Meal]]:
    grouped: Dict[str, List[Meal]] = {}
    for meal in Meal.query.order_by(Meal.name_en).all():
        name = (meal.restaurant_name or "").strip() or "Unknown"
        grouped.setdefault(name, []).append(meal)
    return grouped


def list_groceries(supermarket_id=None, category: Optional[str] = None) -> List[GroceryItem]:
    query = GroceryItem.query
    if supermarket_id:
        query = query.filter(GroceryItem.supermarket_id == supermarket_id)
    if category:
        query = query.filter(GroceryItem.category == category)
    return query.order_by(GroceryItem.name_en).all()


def serialize_grocery(item: GroceryItem, base: str) -> Dict[str, Any]:
    return {
        "id": item.id,
        "name_en": item.name_en,
        "name_ar": item.name_ar,
        "description_en": item.description_en or "",
        "description_ar": item.description_ar or "",
        "price": float(item.price),
        "offer": bool(item.offer),
        "offerPrice": float(item.offer_price) if item.offer_price is not None else None,
        "effectivePrice": item.effective_price,
        "image": normalize_image(base, item.image_url),
        "category": item.category,
        "unit": item.unit,
        "stockQuantity": item.stock_quantity,
        "available": bool(item.available),
        "supermarket": item.supermarket.display_name if item.supermarket else None,
    }
