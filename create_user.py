"""Create a staff or driver account.

Usage::

    python create_user.py <username> <password> [role] [name]

``role`` defaults to ``driver``.
"""
import sys

from app import create_app
from app.scripts.seed_roles import seed_roles
from app.services.errors import ConflictError
from app.services.user_service import create_user
from app.utils.enums import UserRole

ROLES = [r.value for r in UserRole]

if len(sys.argv) < 3:
    print(__doc__)
    sys.exit(1)

username, password = sys.argv[1], sys.argv[2]
role = sys.argv[3] if len(sys.argv) > 3 else UserRole.DRIVER.value
name = sys.argv[4] if len(sys.argv) > 4 else username

if role not in ROLES:
    print(f"Unknown role '{role}', expected one of: {', '.join(ROLES)}")
    sys.exit(1)

app = create_app()

with app.app_context():
    seed_roles()
    try:
        user = create_user(username, password, role, name=name)
    except ConflictError as e:
        print(f"User not created: {e}")
        sys.exit(1)
    print(f"Created {role} user {user.username} (id={user.id})")
