from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from campushub.services import StudentAppService
from campushub.utils.auth import get_current_user, require_user

app_bp = Blueprint("apps", __name__)


@app_bp.route("", methods=["GET"])
@jwt_required(optional=True)
def get_all_apps():
    apps = StudentAppService.list_apps(
        viewer=get_current_user(),
        search=request.args.get("search"),
        tag=request.args.get("tag"),
    )
    return jsonify({"apps": apps, "popular_tags": StudentAppService.popular_tags()}), 200


@app_bp.route("", methods=["POST"])
@jwt_required()
def create_app():
    user = require_user()
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "No data provided"}), 400

    app = StudentAppService.create_app(data, user)
    return jsonify(app.to_dict(stats=StudentAppService.stats(app.id, user))), 201


@app_bp.route("/<int:app_id>", methods=["GET"])
@jwt_required(optional=True)
def get_app(app_id):
    return jsonify(StudentAppService.get_app(app_id, viewer=get_current_user())), 200


@app_bp.route("/<int:app_id>", methods=["PUT"])
@jwt_required()
def update_app(app_id):
    user = require_user()
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "No data provided"}), 400

    app = StudentAppService.update_app(app_id, data, user)
    return jsonify(app.to_dict(stats=StudentAppService.stats(app.id, user))), 200


@app_bp.route("/<int:app_id>", methods=["DELETE"])
@jwt_required()
def delete_app(app_id):
    user = require_user()
    StudentAppService.delete_app(app_id, user)
    return jsonify({"message": "App deleted successfully"}), 200


@app_bp.route("/<int:app_id>/like", methods=["POST"])
@jwt_required()
def like_app(app_id):
    user = require_user()
    return jsonify(StudentAppService.like(app_id, user)), 200


@app_bp.route("/<int:app_id>/like", methods=["DELETE"])
@jwt_required()
def unlike_app(app_id):
    user = require_user()
    return jsonify(StudentAppService.unlike(app_id, user)), 200


@app_bp.route("/<int:app_id>/comments", methods=["GET"])
def get_comments(app_id):
    return jsonify({"comments": StudentAppService.list_comments(app_id)}), 200


@app_bp.route("/<int:app_id>/comments", methods=["POST"])
@jwt_required()
def add_comment(app_id):
    user = require_user()
    data = request.get_json(silent=True) or {}
    comment = StudentAppService.add_comment(app_id, data.get("content"), user)
    return jsonify(comment.to_dict()), 201


@app_bp.route("/<int:app_id>/comments/<int:comment_id>", methods=["DELETE"])
@jwt_required()
def delete_comment(app_id, comment_id):
    user = require_user()
    StudentAppService.delete_comment(app_id, comment_id, user)
    return jsonify({"message": "Comment deleted successfully"}), 200


@app_bp.route("/<int:app_id>/rating", methods=["PUT"])
@jwt_required()
def rate_app(app_id):
    user = require_user()
    data = request.get_json(silent=True) or {}
    if "rating" not in data:
        return jsonify({"error": "Rating is required"}), 400
    return jsonify(StudentAppService.rate(app_id, data["rating"], user)), 200


@app_bp.route("/<int:app_id>/reports", methods=["POST"])
@jwt_required()
def report_app(app_id):
    user = require_user()
    data = request.get_json(silent=True) or {}
    report = StudentAppService.report(app_id, data, user)
    return jsonify({"message": "App reported successfully", "report": report.to_dict()}), 201
