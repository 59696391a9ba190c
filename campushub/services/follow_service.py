from flask import current_app
from sqlalchemy.exc import IntegrityError
from campushub.repositories import UserRepository, UserFollowRepository
from campushub.exceptions import NotFoundError, ValidationError
from typing import List


class FollowService:
    @staticmethod
    def _get_user_or_404(user_id: int):
        user = UserRepository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def follow(follower_id: int, following_id: int) -> dict:
        if follower_id == following_id:
            raise ValidationError("You cannot follow yourself")
        FollowService._get_user_or_404(following_id)

        if UserFollowRepository.find(follower_id, following_id) is None:
            try:
                UserFollowRepository.add(follower_id, following_id)
                current_app.logger.info(f"User {follower_id} followed user {following_id}")
            except IntegrityError:
                current_app.logger.info(
                    f"User {follower_id} already follows user {following_id}"
                )
        return FollowService.status(follower_id, following_id)

    @staticmethod
    def unfollow(follower_id: int, following_id: int) -> dict:
        FollowService._get_user_or_404(following_id)
        if UserFollowRepository.delete(follower_id, following_id):
            current_app.logger.info(f"User {follower_id} unfollowed user {following_id}")
        return FollowService.status(follower_id, following_id)

    @staticmethod
    def is_following(follower_id: int, following_id: int) -> bool:
        return UserFollowRepository.find(follower_id, following_id) is not None

    @staticmethod
    def status(follower_id: int, following_id: int) -> dict:
        return {
            "is_following": FollowService.is_following(follower_id, following_id),
            "followers_count": UserFollowRepository.count_followers(following_id),
        }

    @staticmethod
    def get_following(user_id: int) -> List[dict]:
        FollowService._get_user_or_404(user_id)
        return [user.to_summary() for user in UserFollowRepository.find_following(user_id)]

    @staticmethod
    def get_followers(user_id: int) -> List[dict]:
        FollowService._get_user_or_404(user_id)
        return [user.to_summary() for user in UserFollowRepository.find_followers(user_id)]
