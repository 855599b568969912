import pytest

from app import create_app
from app.extensions import db
from app.models.meal import Meal
from app.models.restaurant import Restaurant
from app.scripts.seed_roles import seed_roles
from app.services import user_service
from tests.helpers import PASSWORD, FakeGateway

STAFF = [
    ("admin", "admin"),
    ("support", "support"),
    ("entry", "data_entry"),
    ("driver1", "driver"),
    ("driver2", "delivery"),
]


@pytest.fixture()
def app():
    app = create_app("config.TestConfig")
    with app.app_context():
        db.create_all()
        seed_roles()
        for username, role in STAFF:
            user_service.create_user(username, PASSWORD, role, name=username.title())

        grill = Restaurant(name_en="Flamingo Grill", name_ar="فلامنغو", address="Salmiya",
                           latitude=29.33, longitude=48.07)
        db.session.add(grill)
        db.session.flush()
        db.session.add_all([
            Meal(restaurant_id=grill.id, name_en="Shawarma", price=1.5, period=15,
                 image_url="/uploads/shawarma.jpg"),
            Meal(restaurant_id=grill.id, name_en="Falafel", price=0.75, offer=True),
        ])
        db.session.commit()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def meal_ids(app):
    with app.app_context():
        return {m.name_en: m.id for m in Meal.query.all()}


@pytest.fixture()
def gateway(monkeypatch):
    fake = FakeGateway()
    monkeypatch.setattr("app.services.payment_service.requests.post", fake)
    return fake
