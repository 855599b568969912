from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    SUPPORT = "support"
    DATA_ENTRY = "data_entry"
    DRIVER = "driver"
    DELIVERY = "delivery"  # legacy name for driver accounts
    CUSTOMER = "customer"


DRIVER_ROLES = (UserRole.DRIVER.value, UserRole.DELIVERY.value)


class OrderStatus(str, Enum):
    PENDING = "Pending"
    PICKED_UP = "Picked Up"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"


class NotificationStatus(str, Enum):
    UNPICKED = "unpicked"
    PICKED = "picked"
    DELIVERED = "delivered"


class GroceryCategory(str, Enum):
    FRUITS = "Fruits"
    VEGETABLES = "Vegetables"
    DAIRY = "Dairy"
    MEAT = "Meat"
    BAKERY = "Bakery"
    SNACKS = "Snacks"
    BEVERAGES = "Beverages"
    PANTRY = "Pantry"
    FROZEN = "Frozen"
    HOUSEHOLD = "Household"


class GroceryUnit(str, Enum):
    KG = "kg"
    GRAM = "gram"
    LITER = "liter"
    PIECE = "piece"
    PACK = "pack"
    BOX = "box"
