from typing import Optional
from flask import current_app
from campushub.extensions import db
from campushub.models import User
from campushub.repositories import (
    UserRepository,
    UserFollowRepository,
    StudentAppRepository,
    EventRepository,
)
from campushub.exceptions import NotFoundError, ValidationError
from campushub.utils.dates import start_of_week

APP_POINTS = 50
EVENT_POINTS = 30

# (highest rank in tier, title); ranks past the last tier are community members
RANK_TIERS = [
    (1, "Champion"),
    (3, "Top Performer"),
    (10, "Rising Star"),
    (50, "Active Member"),
]
DEFAULT_RANK_TITLE = "Community Member"

NEXT_RANK_TARGETS = [
    (50, "Top 50"),
    (10, "Top 10"),
    (3, "Top 3"),
    (1, "Champion"),
]

LEADERBOARD_SCOPES = ("all", "week", "friends")
WEEKLY_LEADERBOARD_SIZE = 20


class RankingService:
    @staticmethod
    def points_breakdown(total_points: int, apps_published: int, events_created: int) -> dict:
        """
        Split a stored total into app, event and quiz points.

        Quiz points are whatever is left after app and event points are taken
        out, so they go negative when the stored total is behind the counts.
        """
        app_points = apps_published * APP_POINTS
        event_points = events_created * EVENT_POINTS
        quiz_points = round(total_points - app_points - event_points)
        calculated_total = quiz_points + app_points + event_points
        return {
            "total_points": total_points,
            "app_points": app_points,
            "event_points": event_points,
            "quiz_points": quiz_points,
            "calculated_total": calculated_total,
            "has_discrepancy": quiz_points < 0 or calculated_total != total_points,
        }

    @staticmethod
    def rank_title(rank: int) -> str:
        for limit, title in RANK_TIERS:
            if rank <= limit:
                return title
        return DEFAULT_RANK_TITLE

    @staticmethod
    def next_rank_target(rank: int) -> Optional[dict]:
        for target, title in NEXT_RANK_TARGETS:
            if rank > target:
                return {"target": target, "title": title}
        return None

    @staticmethod
    def progress_to_next(rank: int) -> float:
        next_rank = RankingService.next_rank_target(rank)
        if next_rank is None:
            return 100.0
        target = next_rank["target"]
        return max(0.0, 100.0 - ((rank - target) / target) * 100.0)

    @staticmethod
    def adjust_points(user_id: int, delta: int):
        """Add (or remove) points for a published app or created event."""
        user = UserRepository.find_by_id(user_id)
        if not user:
            return None
        user.total_points = (user.total_points or 0) + delta
        db.session.commit()
        current_app.logger.info(
            f"Adjusted points for user {user_id} by {delta} (now {user.total_points})"
        )
        return user

    @staticmethod
    def _entry(user: User, rank: int, app_counts: dict, event_counts: dict, following_ids,
               points: Optional[int] = None):
        return {
            "id": user.id,
            "full_name": user.full_name,
            "student_id": user.student_id,
            "username": user.username,
            "avatar_url": user.avatar_url,
            "total_points": user.total_points if points is None else points,
            "apps_published": app_counts.get(user.id, 0),
            "events_created": event_counts.get(user.id, 0),
            "rank": rank,
            "rank_title": RankingService.rank_title(rank),
            "is_following": user.id in following_ids,
        }

    @staticmethod
    def leaderboard(scope: str = "all", viewer: Optional[User] = None):
        if scope not in LEADERBOARD_SCOPES:
            raise ValidationError(f"Unknown leaderboard scope: {scope}")

        following_ids = set(UserFollowRepository.following_ids(viewer.id)) if viewer else set()
        if scope == "week":
            return RankingService.weekly_leaderboard(following_ids)
        if scope == "friends":
            if viewer is None:
                raise ValidationError("Sign in to see your friends leaderboard")
            users = UserRepository.find_rankable(sorted(following_ids))
        else:
            users = UserRepository.find_rankable()

        app_counts = StudentAppRepository.counts_by_creator()
        event_counts = EventRepository.counts_by_creator()
        return [
            RankingService._entry(user, index + 1, app_counts, event_counts, following_ids)
            for index, user in enumerate(users)
        ]

    @staticmethod
    def weekly_leaderboard(following_ids=frozenset()):
        """
        Rank users on app and event points earned since the start of the week.

        Stored totals are ignored here: apps and events created this week are
        counted per creator and priced at APP_POINTS and EVENT_POINTS. Ties keep
        the all-time order.
        """
        since = start_of_week()
        app_counts = StudentAppRepository.counts_by_creator(since=since)
        event_counts = EventRepository.counts_by_creator(since=since)

        def weekly_points(user):
            return app_counts.get(user.id, 0) * APP_POINTS + event_counts.get(user.id, 0) * EVENT_POINTS

        users = sorted(UserRepository.find_rankable(), key=weekly_points, reverse=True)
        return [
            RankingService._entry(
                user, index + 1, app_counts, event_counts, following_ids,
                points=weekly_points(user),
            )
            for index, user in enumerate(users[:WEEKLY_LEADERBOARD_SIZE])
        ]

    @staticmethod
    def rank_details(user_id: int) -> dict:
        user = UserRepository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        apps_published = StudentAppRepository.count_by_creator(user.id)
        events_created = EventRepository.count_by_creator(user.id)
        details = {
            "user_id": user.id,
            "full_name": user.full_name,
            "apps_published": apps_published,
            "events_created": events_created,
            "breakdown": RankingService.points_breakdown(
                user.total_points, apps_published, events_created
            ),
            "rank": None,
            "rank_title": None,
            "next_rank": None,
            "progress_to_next": None,
        }

        ranked_ids = [u.id for u in UserRepository.find_rankable()]
        if user.id in ranked_ids:
            rank = ranked_ids.index(user.id) + 1
            details.update(
                {
                    "rank": rank,
                    "rank_title": RankingService.rank_title(rank),
                    "next_rank": RankingService.next_rank_target(rank),
                    "progress_to_next": round(RankingService.progress_to_next(rank), 1),
                }
            )
        return details
