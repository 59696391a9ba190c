from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from campushub.services import UserService, FollowService
from campushub.utils.auth import get_current_user_id, require_user

user_bp = Blueprint("user", __name__)


@user_bp.route("/me", methods=["GET"])
@jwt_required()
def get_me():
    user = require_user(allow_banned=True)
    return jsonify(user.to_dict()), 200


@user_bp.route("/me", methods=["PUT"])
@jwt_required()
def update_me():
    user = require_user()
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "No data provided"}), 400

    updated = UserService.update_profile(user, data)
    return (
        jsonify({"message": "Profile updated successfully", "user": updated.to_dict()}),
        200,
    )


@user_bp.route("/by-username/<string:username>", methods=["GET"])
@jwt_required(optional=True)
def get_profile(username):
    profile = UserService.get_public_profile(username, viewer_id=get_current_user_id())
    return jsonify(profile), 200


@user_bp.route("/<int:user_id>/following", methods=["GET"])
def get_following(user_id):
    return jsonify({"following": FollowService.get_following(user_id)}), 200


@user_bp.route("/<int:user_id>/followers", methods=["GET"])
def get_followers(user_id):
    return jsonify({"followers": FollowService.get_followers(user_id)}), 200


@user_bp.route("/<int:user_id>/follow", methods=["GET"])
@jwt_required()
def get_follow_status(user_id):
    user = require_user(allow_banned=True)
    return jsonify(FollowService.status(user.id, user_id)), 200


@user_bp.route("/<int:user_id>/follow", methods=["POST"])
@jwt_required()
def follow_user(user_id):
    user = require_user()
    return jsonify(FollowService.follow(user.id, user_id)), 200


@user_bp.route("/<int:user_id>/follow", methods=["DELETE"])
@jwt_required()
def unfollow_user(user_id):
    user = require_user()
    return jsonify(FollowService.unfollow(user.id, user_id)), 200
