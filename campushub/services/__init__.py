from campushub.services.user_service import UserService
from campushub.services.ranking_service import RankingService
from campushub.services.registration_service import RegistrationService
from campushub.services.check_in_service import CheckInService
from campushub.services.event_service import EventService
from campushub.services.student_app_service import StudentAppService
from campushub.services.follow_service import FollowService
from campushub.services.admin_service import AdminService
