import argparse
import os
from campushub import create_app
from campushub.models import User
from campushub.extensions import db


def create_admin_user(student_id, username, password, full_name, update=False):
    app = create_app()
    with app.app_context():
        db.create_all()
        # Check if admin already exists
        admin = User.query.filter_by(student_id=student_id).first()
        if not admin:
            admin = User(
                student_id=student_id,
                username=username,
                full_name=full_name,
                is_admin=True,
            )
            admin.set_password(password)
            db.session.add(admin)
            db.session.commit()
            print("Admin user created successfully!")
        elif update:
            admin.set_password(password)
            admin.is_admin = True
            admin.is_banned = False
            db.session.commit()
            print("Admin user updated successfully!")
        else:
            print("Admin user already exists!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or update the campus admin account")
    parser.add_argument("--student-id", type=int, default=int(os.getenv("ADMIN_STUDENT_ID", 1)))
    parser.add_argument("--username", default=os.getenv("ADMIN_USERNAME", "admin"))
    parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD", "admin123"))
    parser.add_argument("--full-name", default="Campus Admin")
    parser.add_argument("--update", action="store_true")
    args = parser.parse_args()
    create_admin_user(args.student_id, args.username, args.password, args.full_name, update=args.update)
