"""
Script to create or update demo accounts and sample content for Campus Hub.
"""

from datetime import datetime, timedelta, timezone
from campushub import create_app
from campushub.models import User, Event, StudentApp
from campushub.extensions import db
from campushub.services import RegistrationService
from campushub.services.ranking_service import APP_POINTS, EVENT_POINTS


def _upsert_user(student_id, username, full_name, is_admin=False):
    user = User.query.filter_by(student_id=student_id).first()
    if user:
        user.set_password("password")
        db.session.commit()
        print(f"Updated password for {username}")
        return user

    user = User(
        student_id=student_id,
        username=username,
        full_name=full_name,
        is_admin=is_admin,
    )
    user.set_password("password")
    db.session.add(user)
    db.session.commit()
    print(f"Created user {username} with ID: {user.id}")
    return user


def main():
    """Create or update demo accounts with correct credentials."""
    app = create_app()
    with app.app_context():
        db.create_all()

        _upsert_user(1000, "admin", "Campus Admin", is_admin=True)
        student = _upsert_user(2024001, "demo_student", "Demo Student")

        if not Event.query.filter_by(title="Hack Night").first():
            event = Event(
                title="Hack Night",
                description="An evening of building side projects.",
                event_date=datetime.now(timezone.utc) + timedelta(days=7),
                location="Engineering Hall 101",
                max_attendees=50,
                created_by=student.id,
            )
            db.session.add(event)
            student.total_points += EVENT_POINTS
            db.session.commit()
            RegistrationService.register(event.id, student.id, enforce_limits=False)
            print(f"Created demo event with ID: {event.id}")

        if not StudentApp.query.filter_by(title="Study Buddy").first():
            demo_app = StudentApp(
                title="Study Buddy",
                description="Match with classmates for study sessions.",
                tags=["python", "flask"],
                created_by=student.id,
            )
            db.session.add(demo_app)
            student.total_points += APP_POINTS
            db.session.commit()
            print(f"Created demo app with ID: {demo_app.id}")

        print("Demo accounts setup complete!")


if __name__ == "__main__":
    main()
