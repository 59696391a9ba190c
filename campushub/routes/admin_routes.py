from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from campushub.services import AdminService, EventService
from campushub.utils.auth import require_admin

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/check", methods=["GET"])
@jwt_required()
def check_admin():
    """Check if current user is an admin"""
    require_admin()
    return jsonify({"is_admin": True})


@admin_bp.route("/stats", methods=["GET"])
@jwt_required()
def get_stats():
    require_admin()
    return jsonify(AdminService.stats()), 200


@admin_bp.route("/users", methods=["GET"])
@jwt_required()
def get_all_users():
    """Get all users (admin only)"""
    require_admin()
    status = request.args.get("status", "all")
    return jsonify({"users": AdminService.list_users(status)}), 200


@admin_bp.route("/users/<int:user_id>/ban", methods=["POST"])
@jwt_required()
def ban_user(user_id):
    admin = require_admin()
    data = request.get_json(silent=True) or {}
    user = AdminService.ban_user(user_id, data.get("reason"), admin)
    return jsonify({"message": "User banned", "user": user.to_dict()}), 200


@admin_bp.route("/users/<int:user_id>/ban", methods=["DELETE"])
@jwt_required()
def unban_user(user_id):
    admin = require_admin()
    user = AdminService.unban_user(user_id, admin)
    return jsonify({"message": "User unbanned", "user": user.to_dict()}), 200


@admin_bp.route("/users/<int:user_id>/restrictions", methods=["GET"])
@jwt_required()
def get_restrictions(user_id):
    require_admin()
    return jsonify({"restrictions": AdminService.list_restrictions(user_id)}), 200


@admin_bp.route("/users/<int:user_id>/restrictions", methods=["POST"])
@jwt_required()
def add_restriction(user_id):
    admin = require_admin()
    data = request.get_json(silent=True) or {}
    restriction = AdminService.add_restriction(user_id, data, admin)
    return jsonify(restriction.to_dict()), 201


@admin_bp.route("/restrictions/<int:restriction_id>", methods=["DELETE"])
@jwt_required()
def lift_restriction(restriction_id):
    admin = require_admin()
    restriction = AdminService.lift_restriction(restriction_id, admin)
    return jsonify(restriction.to_dict()), 200


@admin_bp.route("/reports", methods=["GET"])
@jwt_required()
def get_reports():
    require_admin()
    return jsonify({"reports": AdminService.list_reports(request.args.get("status"))}), 200


@admin_bp.route("/reports/<int:report_id>", methods=["PUT"])
@jwt_required()
def resolve_report(report_id):
    admin = require_admin()
    data = request.get_json(silent=True) or {}
    if "status" not in data:
        return jsonify({"error": "Status is required"}), 400
    report = AdminService.resolve_report(report_id, data["status"], admin)
    return jsonify(report.to_dict()), 200


@admin_bp.route("/events/<int:event_id>/featured", methods=["PUT"])
@jwt_required()
def set_event_featured(event_id):
    admin = require_admin()
    data = request.get_json(silent=True) or {}
    if "is_featured" not in data:
        return jsonify({"error": "is_featured is required"}), 400
    event = EventService.set_featured(event_id, data["is_featured"], admin)
    return jsonify(event.to_dict()), 200
