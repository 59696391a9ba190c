from flask import current_app
from campushub.repositories import (
    UserRepository,
    EventRepository,
    EventRegistrationRepository,
    StudentAppRepository,
    AppLikeRepository,
    AppCommentRepository,
    AppReportRepository,
    UserRestrictionRepository,
)
from campushub.exceptions import ForbiddenError, NotFoundError, ValidationError
from campushub.models import User
from campushub.models.enums import ReportStatus, RestrictionType
from campushub.utils.dates import utcnow

USER_FILTERS = {"all": None, "banned": True, "active": False}


class AdminService:
    @staticmethod
    def _get_user_or_404(user_id: int) -> User:
        user = UserRepository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def list_users(status: str = "all"):
        if status not in USER_FILTERS:
            raise ValidationError("status must be one of: all, banned, active")
        return [user.to_dict() for user in UserRepository.list_users(USER_FILTERS[status])]

    @staticmethod
    def ban_user(user_id: int, reason, admin: User) -> User:
        user = AdminService._get_user_or_404(user_id)
        if user.is_admin:
            raise ForbiddenError("Administrators cannot be banned")

        updated = UserRepository.update_user(
            user,
            {
                "is_banned": True,
                "banned_reason": (str(reason).strip() or None) if reason else None,
                "banned_at": utcnow(),
            },
        )
        current_app.logger.info(f"Admin {admin.id} banned user {user_id}")
        return updated

    @staticmethod
    def unban_user(user_id: int, admin: User) -> User:
        user = AdminService._get_user_or_404(user_id)
        updated = UserRepository.update_user(
            user, {"is_banned": False, "banned_reason": None, "banned_at": None}
        )
        current_app.logger.info(f"Admin {admin.id} unbanned user {user_id}")
        return updated

    @staticmethod
    def add_restriction(user_id: int, data: dict, admin: User):
        AdminService._get_user_or_404(user_id)
        try:
            restriction_type = RestrictionType(
                data.get("restriction_type", RestrictionType.CANNOT_PUBLISH.value)
            )
        except ValueError:
            allowed = ", ".join(r.value for r in RestrictionType)
            raise ValidationError(f"Invalid restriction type. Must be one of: {allowed}")

        existing = UserRestrictionRepository.find_active(user_id, restriction_type)
        if existing:
            return existing

        restriction = UserRestrictionRepository.add(
            {
                "user_id": user_id,
                "restriction_type": restriction_type,
                "reason": data.get("reason"),
                "created_by": admin.id,
            }
        )
        current_app.logger.info(
            f"Admin {admin.id} restricted user {user_id}: {restriction_type.value}"
        )
        return restriction

    @staticmethod
    def list_restrictions(user_id: int):
        AdminService._get_user_or_404(user_id)
        return [r.to_dict() for r in UserRestrictionRepository.find_by_user(user_id)]

    @staticmethod
    def lift_restriction(restriction_id: int, admin: User):
        restriction = UserRestrictionRepository.get(restriction_id)
        if not restriction:
            raise NotFoundError("Restriction not found")
        lifted = UserRestrictionRepository.deactivate(restriction)
        current_app.logger.info(f"Admin {admin.id} lifted restriction {restriction_id}")
        return lifted

    @staticmethod
    def list_reports(status=None):
        parsed = None
        if status:
            try:
                parsed = ReportStatus(status)
            except ValueError:
                raise ValidationError("Invalid report status")
        return [report.to_dict() for report in AppReportRepository.list_reports(parsed)]

    @staticmethod
    def resolve_report(report_id: int, status, admin: User):
        report = AppReportRepository.get(report_id)
        if not report:
            raise NotFoundError("Report not found")
        try:
            parsed = ReportStatus(status)
        except ValueError:
            raise ValidationError("Invalid report status")
        updated = AppReportRepository.update_status(report, parsed)
        current_app.logger.info(f"Admin {admin.id} marked report {report_id} {parsed.value}")
        return updated

    @staticmethod
    def stats() -> dict:
        return {
            "users": UserRepository.count(),
            "banned_users": UserRepository.count(banned=True),
            "events": EventRepository.count(),
            "registrations": EventRegistrationRepository.count(),
            "check_ins": EventRegistrationRepository.count_checked_in(),
            "apps": StudentAppRepository.count(),
            "likes": AppLikeRepository.count(),
            "comments": AppCommentRepository.count(),
            "reports": AppReportRepository.count(),
            "pending_reports": AppReportRepository.count(ReportStatus.PENDING),
        }
