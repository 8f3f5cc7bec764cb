from functools import wraps

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from mangashelf.errors import AppError, AuthError
from mangashelf.services.auth_service import current_user
from mangashelf.utils.logging import get_logger


log = get_logger("mangashelf.api")


def api_errors(failure_message):
    """Map errors raised by a JSON view to ``{"error": ...}`` responses.

    Known errors keep their own message and status; anything else is logged
    and answered with ``failure_message`` and a 500.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except AppError as exc:
                if exc.status_code >= 500:
                    log.error("%s %s: %s", request.method, request.path, exc.message)
                return jsonify(exc.to_dict()), exc.status_code
            except HTTPException as exc:
                return jsonify({"error": exc.description}), exc.code
            except Exception:
                log.exception("%s %s failed", request.method, request.path)
                return jsonify({"error": failure_message}), 500
        return wrapper
    return decorator


def require_user():
    user = current_user()
    if user is None:
        raise AuthError("Unauthorized")
    return user

