from campushub.models import User
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError
from campushub.repositories import (
    UserRepository,
    UserFollowRepository,
    StudentAppRepository,
    EventRepository,
)
from campushub.exceptions import (
    MissingFieldsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    ConflictError,
)
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PROFILE_FIELDS = [
    "full_name",
    "username",
    "major",
    "graduation_year",
    "bio",
    "avatar_url",
    "instagram_url",
    "github_url",
    "facebook_url",
    "other_social_url",
]


def _parse_int(value, field):
    if value is None or value == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field} must be a number")


class UserService:
    @staticmethod
    def _issue_token(user: User) -> str:
        return create_access_token(identity=str(user.id))

    @staticmethod
    def sign_up(user_data):
        required_fields = ["student_id", "username", "password", "full_name"]
        missing = [f for f in required_fields if not user_data.get(f)]
        if missing:
            raise MissingFieldsError(missing)

        student_id = _parse_int(user_data["student_id"], "Student ID")
        username = str(user_data["username"]).strip()

        if UserRepository.find_by_student_id(student_id):
            logger.warning(f"Signup attempt with existing student ID: {student_id}")
            raise ConflictError("Student ID already registered")

        if UserRepository.find_by_username(username):
            logger.warning(f"Signup attempt with taken username: {username}")
            raise ConflictError("Username already taken")

        user = User(
            student_id=student_id,
            username=username,
            full_name=str(user_data["full_name"]).strip(),
            major=user_data.get("major") or None,
            graduation_year=_parse_int(user_data.get("graduation_year"), "Graduation year"),
            is_admin=False,
        )
        user.set_password(str(user_data["password"]))

        try:
            created_user = UserRepository.sign_up(user)
        except IntegrityError:
            # Lost a race with another sign-up for the same student ID or username
            logger.warning(f"Signup for {username} hit a unique constraint")
            if UserRepository.find_by_student_id(student_id):
                raise ConflictError("Student ID already registered")
            raise ConflictError("Username already taken")
        logger.info(f"User created successfully: {created_user.username}")

        return {"token": UserService._issue_token(created_user), "user": created_user.to_dict()}

    @staticmethod
    def sign_in(student_id, password):
        try:
            parsed_id = _parse_int(student_id, "Student ID")
        except ValidationError:
            parsed_id = None

        user = UserRepository.find_by_student_id(parsed_id) if parsed_id is not None else None
        if not user or not user.check_password(str(password)):
            logger.warning(f"Failed login attempt for student ID: {student_id}")
            raise UnauthorizedError("Invalid student ID or password")

        if user.is_banned:
            logger.info(f"Banned user signed in: {user.username}")
        else:
            logger.info(f"User logged in successfully: {user.username}")

        return {"token": UserService._issue_token(user), "user": user.to_dict()}

    @staticmethod
    def update_profile(user: User, data: dict):
        attrs = {key: data[key] for key in PROFILE_FIELDS if key in data}

        if "username" in attrs:
            username = str(attrs["username"] or "").strip()
            if not username:
                raise ValidationError("Username cannot be empty")
            if UserRepository.username_taken_by_other(username, user.id):
                raise ConflictError("Username already taken")
            attrs["username"] = username

        if "full_name" in attrs and not str(attrs["full_name"] or "").strip():
            raise ValidationError("Full name cannot be empty")

        if "graduation_year" in attrs:
            attrs["graduation_year"] = _parse_int(attrs["graduation_year"], "Graduation year")

        try:
            updated = UserRepository.update_user(user, attrs)
        except IntegrityError:
            logger.warning(f"Profile update for user {user.id} hit a unique constraint")
            raise ConflictError("Username already taken")
        logger.info(f"Profile updated for user {user.id}: {sorted(attrs.keys())}")
        return updated

    @staticmethod
    def get_public_profile(username: str, viewer_id=None):
        user = UserRepository.find_by_username(username)
        if not user:
            raise NotFoundError("User not found")

        apps = StudentAppRepository.find_by_creator(user.id)
        profile = user.to_summary()
        profile.update(
            {
                "major": user.major,
                "graduation_year": user.graduation_year,
                "bio": user.bio,
                "github_url": user.github_url,
                "instagram_url": user.instagram_url,
                "facebook_url": user.facebook_url,
                "other_social_url": user.other_social_url,
                "total_points": user.total_points,
                "followers_count": UserFollowRepository.count_followers(user.id),
                "following_count": UserFollowRepository.count_following(user.id),
                "apps_published": len(apps),
                "apps": [app.to_dict() for app in apps],
                "events_created": EventRepository.count_by_creator(user.id),
                "is_following": (
                    UserFollowRepository.find(viewer_id, user.id) is not None
                    if viewer_id and viewer_id != user.id
                    else False
                ),
            }
        )
        return profile
