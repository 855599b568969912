from app import create_app
from app.extensions import db
from app.models.user import User
from app.models.restaurant import Restaurant
from app.models.meal import Meal
from app.models.grocery_item import GroceryItem
from app.scripts.seed_roles import seed_roles
from app.services.user_service import get_role
from werkzeug.security import generate_password_hash

app = create_app()

with app.app_context():
    # ensure tables exist (non-destructive: won't alter existing columns)
    db.create_all()
    seed_roles()

    def add_user(username, role, name):
        if not User.query.filter_by(username=username).first():
            db.session.add(User(username=username, name=name,
                                password=generate_password_hash("secret"), role=get_role(role)))

    add_user("admin", "admin", "Admin Demo")
    add_user("support", "support", "Support Demo")
    add_user("entry", "data_entry", "Data Entry Demo")
    add_user("driver1", "driver", "Driver Demo")

    def add_restaurant(name_en, name_ar, address, lat, lng):
        r = Restaurant.query.filter_by(name_en=name_en).first()
        if not r:
            r = Restaurant(name_en=name_en, name_ar=name_ar, address=address, latitude=lat, longitude=lng)
            db.session.add(r)
            db.session.flush()
        return r

    burger = add_restaurant("Burger House", "بيت البرجر", "Salmiya, Block 10", 29.3339, 48.0765)
    shawarma = add_restaurant("Shawarma Corner", "ركن الشاورما", "Hawalli, Tunis St", 29.3397, 48.0284)
    market = add_restaurant("Fresh Market", "السوق الطازج", "Kuwait City", 29.3759, 47.9774)

    def add_meal(restaurant, name_en, name_ar, price, offer=False, cuisine=""):
        if not Meal.query.filter_by(name_en=name_en, restaurant_id=restaurant.id).first():
            db.session.add(Meal(restaurant_id=restaurant.id, name_en=name_en, name_ar=name_ar,
                                price=price, offer=offer, cuisine=cuisine, address=restaurant.address))

    add_meal(burger, "Classic Burger", "برجر كلاسيك", 2.750, cuisine="American")
    add_meal(burger, "Cheese Fries", "بطاطس بالجبن", 1.250, offer=True, cuisine="American")
    add_meal(shawarma, "Chicken Shawarma", "شاورما دجاج", 0.950, cuisine="Lebanese")
    add_meal(shawarma, "Shawarma Plate", "صحن شاورما", 2.200, offer=True, cuisine="Lebanese")

    def add_grocery(name_en, name_ar, price, category, unit):
        if not GroceryItem.query.filter_by(name_en=name_en, supermarket_id=market.id).first():
            db.session.add(GroceryItem(name_en=name_en, name_ar=name_ar, price=price,
                                       category=category, unit=unit, supermarket_id=market.id))

    add_grocery("Bananas", "موز", 0.450, "Fruits", "kg")
    add_grocery("Fresh Milk", "حليب طازج", 0.350, "Dairy", "liter")
    add_grocery("Arabic Bread", "خبز عربي", 0.150, "Bakery", "pack")

    db.session.commit()
    print("✅ Seed completed.")
