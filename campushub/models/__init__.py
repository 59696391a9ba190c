from campushub.models.user import User
from campushub.models.event import Event
from campushub.models.event_registration import EventRegistration
from campushub.models.student_app import StudentApp
from campushub.models.app_like import AppLike
from campushub.models.app_comment import AppComment
from campushub.models.app_rating import AppRating
from campushub.models.app_report import AppReport
from campushub.models.user_follow import UserFollow
from campushub.models.user_restriction import UserRestriction
from campushub.models.enums import (
    RegistrationState,
    ReportCategory,
    ReportStatus,
    RestrictionType,
)
