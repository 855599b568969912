"""
Cart Service

The shopping cart lives in the cookie session as a list of plain dicts:
``{"meal_id", "name", "price", "restaurant_id", "quantity"}``. The functions
here mutate that list in place; callers are responsible for marking the
session as modified.
"""

import math
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.services.errors import NotFoundError
from app.utils.http import safe_number

CartItem = Dict[str, Any]


def _qty(item: CartItem) -> int:
    return int(safe_number(item.get("quantity"), 0) or 0)


def _price(item: CartItem) -> float:
    return safe_number(item.get("price"), 0.0) or 0.0


def cart_totals(cart: Iterable[CartItem]) -> Tuple[int, float]:
    count = 0
    total = 0.0
    for item in cart:
        count += _qty(item)
        total += _price(item) * _qty(item)
    return count, round(total, 2)


def summarize(cart: Optional[List[CartItem]]) -> Dict[str, Any]:
    items = []
    for i in cart or []:
        items.append({
            "id": str(i.get("meal_id")),
            "name": i.get("name"),
            "qty": _qty(i),
            "price": _price(i),
            "lineTotal": _price(i) * _qty(i),
        })
    count, total = cart_totals(cart or [])
    return {"items": items, "total": total, "count": count}


def find_item(cart: List[CartItem], meal_id) -> Optional[CartItem]:
    for item in cart:
        if str(item.get("meal_id")) == str(meal_id):
            return item
    return None


def add_item(cart: List[CartItem], meal, qty: Any = 1) -> CartItem:
    """Add ``qty`` of ``meal``, incrementing an existing line for the same meal."""
    qty = max(1, int(safe_number(qty, 1) or 1))
    existing = find_item(cart, meal.id)
    if existing:
        existing["quantity"] = _qty(existing) + qty
        return existing

    item = {
        "meal_id": str(meal.id),
        "name": meal.name_en,
        "price": float(meal.price or 0),
        "restaurant_id": str(meal.restaurant_id or ""),
        "quantity": qty,
    }
    cart.append(item)
    return item


def update_item(cart: List[CartItem], meal_id, qty: Any = None, delta: Any = None) -> List[CartItem]:
    """
    Set an exact quantity or apply a +/- delta.

    ``qty`` wins over ``delta``. A resulting quantity of zero or less
    removes the line.
    """
    item = find_item(cart, meal_id)
    if item is None:
        raise NotFoundError("Item not in cart")

    if qty is not None:
        q = safe_number(qty)
        new_qty = math.floor(q) if q is not None else _qty(item)
    else:
        new_qty = _qty(item) + int(safe_number(delta, 0) or 0)

    new_qty = max(0, new_qty)
    if new_qty == 0:
        return remove_item(cart, meal_id)
    item["quantity"] = new_qty
    return cart


def remove_item(cart: List[CartItem], meal_id) -> List[CartItem]:
    cart[:] = [i for i in cart if str(i.get("meal_id")) != str(meal_id)]
    return cart


def remove_many(cart: List[CartItem], meal_ids) -> List[CartItem]:
    if meal_ids is None:
        ids = set()
    elif isinstance(meal_ids, (list, tuple, set)):
        ids = {str(m) for m in meal_ids}
    else:
        ids = {str(meal_ids)}
    cart[:] = [i for i in cart if str(i.get("meal_id")) not in ids]
    return cart


def clear(cart: List[CartItem]) -> List[CartItem]:
    del cart[:]
    return cart


def refresh_from_meals(cart: List[CartItem], meals) -> List[CartItem]:
    """Overwrite names and prices with current catalog values; quantities below 1 become 1."""
    by_id = {str(m.id): m for m in meals}
    refreshed = []
    for ci in cart:
        meal = by_id.get(str(ci.get("meal_id")))
        refreshed.append({
            "meal_id": str(ci.get("meal_id")),
            "name": meal.name_en if meal else ci.get("name"),
            "price": float(meal.price) if meal else _price(ci),
            "restaurant_id": str(meal.restaurant_id or "") if meal else ci.get("restaurant_id", ""),
            "restaurant_name": meal.restaurant_name if meal else ci.get("restaurant_name", ""),
            "image": meal.image_url if meal else ci.get("image"),
            "quantity": _qty(ci) if _qty(ci) > 0 else 1,
        })
    cart[:] = refreshed
    return cart


def toggle_favorite(favorites: List[str], meal_id) -> bool:
    """Add or remove ``meal_id``; returns True when it is now a favorite."""
    key = str(meal_id)
    if key in favorites:
        favorites[:] = [f for f in favorites if f != key]
        return False
    favorites.append(key)
    return True
