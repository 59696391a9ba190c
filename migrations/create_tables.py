import argparse
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from campushub import create_app
from campushub.extensions import db


def create_tables(drop_first=False):
    app = create_app()
    with app.app_context():
        if drop_first:
            db.drop_all()
            print("Dropped all campus tables")
        db.create_all()
        print(f"Created tables: {', '.join(sorted(db.metadata.tables))}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the campus database tables")
    parser.add_argument(
        "--drop", action="store_true", help="drop every table first (destroys all data)"
    )
    args = parser.parse_args()
    create_tables(drop_first=args.drop)
