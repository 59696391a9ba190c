from flask import current_app
from sqlalchemy.exc import IntegrityError
from campushub.repositories import (
    StudentAppRepository,
    AppLikeRepository,
    AppCommentRepository,
    AppRatingRepository,
    AppReportRepository,
    UserRestrictionRepository,
)
from campushub.exceptions import (
    ForbiddenError,
    MissingFieldsError,
    NotFoundError,
    PublishingRestrictedError,
    ValidationError,
)
from campushub.models import StudentApp, User
from campushub.models.enums import ReportCategory, RestrictionType
from campushub.services.ranking_service import RankingService, APP_POINTS
from typing import List, Optional

MAX_TAGS = 10
POPULAR_TAG_LIMIT = 8
EDITABLE_FIELDS = ["title", "description", "github_url", "live_url", "image_url", "tags"]


def _clean_tags(tags) -> Optional[list]:
    if tags is None:
        return None
    if not isinstance(tags, list):
        raise ValidationError("tags must be a list of strings")
    cleaned = []
    for tag in tags:
        tag = str(tag).strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    if len(cleaned) > MAX_TAGS:
        raise ValidationError(f"An app can have at most {MAX_TAGS} tags")
    return cleaned or None


def _clean_app_attrs(data: dict) -> dict:
    attrs = {key: data[key] for key in EDITABLE_FIELDS if key in data}
    # The submission form calls the live link "demo_url"
    if "demo_url" in data and "live_url" not in attrs:
        attrs["live_url"] = data["demo_url"]
    if "title" in attrs:
        attrs["title"] = str(attrs["title"] or "").strip()
        if not attrs["title"]:
            raise ValidationError("title cannot be empty")
    if "tags" in attrs:
        attrs["tags"] = _clean_tags(attrs["tags"])
    for key in ("description", "github_url", "live_url", "image_url"):
        if key in attrs and not attrs[key]:
            attrs[key] = None
    return attrs


class StudentAppService:
    @staticmethod
    def get_app_or_404(app_id: int) -> StudentApp:
        app = StudentAppRepository.get_app(app_id)
        if not app:
            raise NotFoundError(f"App with ID {app_id} not found")
        return app

    @staticmethod
    def _ensure_owner_or_admin(app: StudentApp, user: User):
        if not (user.is_admin or app.created_by == user.id):
            raise ForbiddenError("Unauthorized to modify this app")

    @staticmethod
    def _ensure_not_restricted(user: User, restriction_type: RestrictionType):
        restriction = UserRestrictionRepository.find_active(user.id, restriction_type)
        if restriction:
            current_app.logger.warning(
                f"User {user.id} blocked by restriction {restriction_type.value}"
            )
            if restriction_type == RestrictionType.CANNOT_PUBLISH:
                raise PublishingRestrictedError(restriction.reason)
            raise ForbiddenError("You are restricted from commenting")

    @staticmethod
    def stats(app_id: int, viewer: Optional[User] = None) -> dict:
        average, total = AppRatingRepository.aggregate_by_app(app_id)
        stats = {
            "likes_count": AppLikeRepository.count_by_app(app_id),
            "average_rating": round(average, 2),
            "total_ratings": total,
        }
        if viewer:
            stats["is_liked"] = AppLikeRepository.find(app_id, viewer.id) is not None
            own_rating = AppRatingRepository.find(app_id, viewer.id)
            stats["user_rating"] = own_rating.rating if own_rating else None
        return stats

    @staticmethod
    def list_apps(
        viewer: Optional[User] = None, search: Optional[str] = None, tag: Optional[str] = None
    ) -> List[dict]:
        search = (search or "").strip() or None
        tag = (tag or "").strip() or None
        return [
            app.to_dict(stats=StudentAppService.stats(app.id, viewer))
            for app in StudentAppRepository.get_apps(search=search, tag=tag)
        ]

    @staticmethod
    def popular_tags() -> List[str]:
        return StudentAppRepository.popular_tags(POPULAR_TAG_LIMIT)

    @staticmethod
    def get_app(app_id: int, viewer: Optional[User] = None) -> dict:
        app = StudentAppService.get_app_or_404(app_id)
        data = app.to_dict(stats=StudentAppService.stats(app.id, viewer))
        data["comments_count"] = len(app.comments)
        return data

    @staticmethod
    def create_app(data: dict, user: User) -> StudentApp:
        StudentAppService._ensure_not_restricted(user, RestrictionType.CANNOT_PUBLISH)

        if not data.get("title"):
            raise MissingFieldsError(["title"])

        attrs = _clean_app_attrs(data)
        attrs["created_by"] = user.id
        app = StudentAppRepository.create_app(attrs)
        current_app.logger.info(f"User {user.id} published app {app.id}: {app.title}")
        RankingService.adjust_points(user.id, APP_POINTS)
        return app

    @staticmethod
    def update_app(app_id: int, data: dict, user: User) -> StudentApp:
        app = StudentAppService.get_app_or_404(app_id)
        StudentAppService._ensure_owner_or_admin(app, user)
        attrs = _clean_app_attrs(data)
        updated = StudentAppRepository.update_app(app, attrs)
        current_app.logger.info(f"User {user.id} updated app {app_id}: {sorted(attrs)}")
        return updated

    @staticmethod
    def delete_app(app_id: int, user: User):
        app = StudentAppService.get_app_or_404(app_id)
        StudentAppService._ensure_owner_or_admin(app, user)
        owner_id = app.created_by
        StudentAppRepository.delete_app(app)
        current_app.logger.info(f"User {user.id} deleted app {app_id}")
        RankingService.adjust_points(owner_id, -APP_POINTS)

    @staticmethod
    def like(app_id: int, user: User) -> dict:
        StudentAppService.get_app_or_404(app_id)
        if AppLikeRepository.find(app_id, user.id) is None:
            try:
                AppLikeRepository.add(app_id, user.id)
                current_app.logger.info(f"User {user.id} liked app {app_id}")
            except IntegrityError:
                current_app.logger.info(f"User {user.id} already liked app {app_id}")
        return {"is_liked": True, "likes_count": AppLikeRepository.count_by_app(app_id)}

    @staticmethod
    def unlike(app_id: int, user: User) -> dict:
        StudentAppService.get_app_or_404(app_id)
        if AppLikeRepository.delete(app_id, user.id):
            current_app.logger.info(f"User {user.id} unliked app {app_id}")
        return {"is_liked": False, "likes_count": AppLikeRepository.count_by_app(app_id)}

    @staticmethod
    def list_comments(app_id: int) -> List[dict]:
        StudentAppService.get_app_or_404(app_id)
        return [comment.to_dict() for comment in AppCommentRepository.list_by_app(app_id)]

    @staticmethod
    def add_comment(app_id: int, content, user: User):
        StudentAppService.get_app_or_404(app_id)
        StudentAppService._ensure_not_restricted(user, RestrictionType.CANNOT_COMMENT)
        content = str(content or "").strip()
        if not content:
            raise ValidationError("Comment cannot be empty")
        comment = AppCommentRepository.add(
            {"app_id": app_id, "user_id": user.id, "content": content}
        )
        current_app.logger.info(f"User {user.id} commented on app {app_id}")
        return comment

    @staticmethod
    def delete_comment(app_id: int, comment_id: int, user: User):
        comment = AppCommentRepository.get(comment_id)
        if not comment or comment.app_id != app_id:
            raise NotFoundError("Comment not found")
        if not (user.is_admin or comment.user_id == user.id):
            raise ForbiddenError("Unauthorized to delete this comment")
        AppCommentRepository.delete(comment)
        current_app.logger.info(f"User {user.id} deleted comment {comment_id} on app {app_id}")

    @staticmethod
    def rate(app_id: int, rating, user: User) -> dict:
        StudentAppService.get_app_or_404(app_id)
        if isinstance(rating, bool):
            raise ValidationError("Rating must be a whole number from 1 to 5")
        try:
            rating = int(rating)
        except (TypeError, ValueError):
            raise ValidationError("Rating must be a whole number from 1 to 5")
        if rating < 1 or rating > 5:
            raise ValidationError("Rating must be a whole number from 1 to 5")

        AppRatingRepository.upsert(app_id, user.id, rating)
        average, total = AppRatingRepository.aggregate_by_app(app_id)
        current_app.logger.info(f"User {user.id} rated app {app_id} {rating}/5")
        return {
            "user_rating": rating,
            "average_rating": round(average, 2),
            "total_ratings": total,
        }

    @staticmethod
    def report(app_id: int, data: dict, user: User):
        StudentAppService.get_app_or_404(app_id)
        missing = [f for f in ("category", "reason") if not str(data.get(f) or "").strip()]
        if missing:
            raise MissingFieldsError(missing)
        try:
            category = ReportCategory(str(data["category"]).strip().lower())
        except ValueError:
            allowed = ", ".join(c.value for c in ReportCategory)
            raise ValidationError(f"Invalid report category. Must be one of: {allowed}")

        report = AppReportRepository.add(
            {
                "app_id": app_id,
                "reported_by": user.id,
                "category": category,
                "reason": str(data["reason"]).strip(),
            }
        )
        current_app.logger.info(
            f"User {user.id} reported app {app_id} ({category.value})"
        )
        return report
