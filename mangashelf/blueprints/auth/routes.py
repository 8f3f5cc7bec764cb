from urllib.parse import urlsplit

from flask import jsonify, make_response, redirect, render_template, request, url_for

from mangashelf.blueprints.auth import auth_bp
from mangashelf.blueprints.helpers import api_errors
from mangashelf.errors import AppError
from mangashelf.services import auth_service
from mangashelf.utils.logging import get_logger


log = get_logger("mangashelf.auth")


def _local_path(target, default):
    if not target or "\\" in target or not target.startswith("/"):
        return default
    parts = urlsplit(target)
    if parts.scheme or parts.netloc or target.startswith("//"):
        return default
    return target


def _credentials():
    if request.is_json:
        data = request.get_json(silent=True) or {}
    else:
        data = request.form
    return data.get("name"), data.get("email"), data.get("password")


@auth_bp.route("/api/register", methods=["POST"])
@api_errors("Failed to register user")
def register():
    name, email, password = _credentials()
    try:
        user = auth_service.register(name=name, email=email, password=password)
    except AppError as exc:
        if request.is_json:
            raise
        return render_template("auth/register.html", error=exc.message), exc.status_code
    if not request.is_json:
        auth_service.start_session(auth_service.Identity(user.id, user.email, user.name))
        return redirect(url_for("pages.dashboard"))
    return jsonify({
        "message": "User registered successfully",
        "user": user.public_dict(),
    }), 201


@auth_bp.route("/api/auth/login", methods=["POST"])
@api_errors("Failed to log in")
def login():
    _, email, password = _credentials()
    try:
        identity = auth_service.authorize(email, password)
    except AppError as exc:
        if request.is_json:
            raise
        return render_template("auth/login.html", error=exc.message), exc.status_code
    auth_service.start_session(identity)
    if not request.is_json:
        return redirect(_local_path(request.args.get("next"), url_for("pages.dashboard")))
    return jsonify({"message": "Logged in", "user": identity._asdict()}), 200


@auth_bp.route("/api/auth/logout", methods=["POST"])
def logout():
    try:
        next_url = request.form.get("next")
        if next_url:
            response = redirect(_local_path(next_url, url_for("pages.login")))
        else:
            response = make_response(jsonify({"message": "Logged out successfully"}), 200)
        return auth_service.logout(response)
    except Exception:
        log.exception("logout failed")
        return jsonify({"error": "Failed to log out"}), 500


@auth_bp.route("/api/auth/session", methods=["GET"])
def session_info():
    return jsonify(auth_service.session_payload()), 200
