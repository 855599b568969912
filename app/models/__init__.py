from app.models.role import Role
from app.models.user import User
from app.models.restaurant import Restaurant
from app.models.meal import Meal
from app.models.order import Order, OrderItem
from app.models.notification import Notification
from app.models.payment import Payment
from app.models.customer import Customer
from app.models.grocery_item import GroceryItem

__all__ = [
    "Role", "User", "Restaurant", "Meal", "Order", "OrderItem",
    "Notification", "Payment", "Customer", "GroceryItem",
]
