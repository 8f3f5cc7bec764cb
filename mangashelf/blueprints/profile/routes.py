from flask import jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from mangashelf.blueprints.helpers import api_errors, require_user
from mangashelf.blueprints.profile import profile_bp
from mangashelf.errors import ValidationError
from mangashelf.services.auth_service import refresh_session_avatar
from mangashelf.services.profile_service import AVATAR_TOO_LARGE, ProfileService


profile_service = ProfileService()


@profile_bp.route("/api/profile", methods=["GET"])
@profile_bp.route("/api/profile/update", methods=["GET"])
@api_errors("Failed to fetch profile")
def get_profile():
    user = require_user()
    profile = profile_service.get_profile(user)
    return jsonify({"user": profile.profile_dict()}), 200


@profile_bp.route("/api/profile", methods=["POST"])
@profile_bp.route("/api/profile/update", methods=["POST"])
@api_errors("Failed to update profile")
def update_profile():
    user = require_user()
    try:
        form, files = request.form, request.files
    except RequestEntityTooLarge:
        raise ValidationError(AVATAR_TOO_LARGE)
    updated = profile_service.update_profile(user, form, files)
    refresh_session_avatar(user.id, updated.avatar)
    return jsonify({
        "message": "Profile updated successfully",
        "user": updated.profile_dict(),
    }), 200
