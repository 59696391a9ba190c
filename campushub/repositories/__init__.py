from campushub.repositories.user_repository import UserRepository
from campushub.repositories.event_repository import EventRepository
from campushub.repositories.event_registration_repository import (
    EventRegistrationRepository,
)
from campushub.repositories.student_app_repository import StudentAppRepository
from campushub.repositories.app_like_repository import AppLikeRepository
from campushub.repositories.app_comment_repository import AppCommentRepository
from campushub.repositories.app_rating_repository import AppRatingRepository
from campushub.repositories.app_report_repository import AppReportRepository
from campushub.repositories.user_follow_repository import UserFollowRepository
from campushub.repositories.user_restriction_repository import (
    UserRestrictionRepository,
)
