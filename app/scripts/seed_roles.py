from app.extensions import db
from app.models.role import Role
from app.utils.enums import UserRole

ROLE_DESCRIPTIONS = {
    UserRole.ADMIN.value: "Full dashboard access, user and menu management",
    UserRole.SUPPORT.value: "Reads orders, notifications and menus",
    UserRole.DATA_ENTRY.value: "Maintains restaurants and meals",
    UserRole.DRIVER.value: "Claims and delivers orders",
    UserRole.DELIVERY.value: "Driver accounts carried over from the old store",
    UserRole.CUSTOMER.value: "Mobile app customer",
}


def seed_roles(verbose=False):
    """Insert any role from ``UserRole`` that is missing; returns the names added.

    Run ``python -m app.scripts.seed_roles`` after ``flask db upgrade``.
    """
    existing = {name for (name,) in db.session.query(Role.name).all()}
    added = []
    for role in UserRole:
        if role.value in existing:
            continue
        db.session.add(Role(name=role.value, description=ROLE_DESCRIPTIONS.get(role.value)))
        added.append(role.value)
    db.session.commit()
    if verbose:
        print(f"Roles added: {', '.join(added) or 'none'}")
    return added


if __name__ == "__main__":
    from app import create_app
    app = create_app()
    with app.app_context():
        seed_roles(verbose=True)
