from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from campushub.services import RankingService
from campushub.utils.auth import get_current_user

ranking_bp = Blueprint("ranking", __name__)


@ranking_bp.route("/leaderboard", methods=["GET"])
@jwt_required(optional=True)
def get_leaderboard():
    scope = request.args.get("scope", "all")
    entries = RankingService.leaderboard(scope, viewer=get_current_user())
    return jsonify({"scope": scope, "leaderboard": entries}), 200


@ranking_bp.route("/users/<int:user_id>/rank", methods=["GET"])
def get_rank(user_id):
    return jsonify(RankingService.rank_details(user_id)), 200
