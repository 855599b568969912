"""Import a directory of mongoexport JSON files (users, restaurants, meals, orders).

Usage::

    python import_mongo_export.py ./mongo-export
"""
import sys

from app import create_app
from app.scripts.mongo_import import MongoImporter
from app.scripts.seed_roles import seed_roles

if len(sys.argv) != 2:
    print(__doc__)
    sys.exit(1)

app = create_app()

with app.app_context():
    seed_roles()
    print(f"🚀 Importing mongoexport dumps from {sys.argv[1]} ...")
    counts = MongoImporter().run(sys.argv[1])
    for name, count in counts.items():
        print(f"   - {name}: {count}")
    print("✅ Import completed.")
