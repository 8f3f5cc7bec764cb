"""Credential checks and the session-backed identity.

Token signing is left to Flask's session cookie (keyed by ``SECRET_KEY``);
this module decides what goes into the session and reads it back as a
``CurrentUser`` that route handlers pass explicitly to the other services.
"""
from collections import namedtuple

from flask import session

from mangashelf.errors import ConflictError, InvalidCredentials, ValidationError
from mangashelf.models.user import DEFAULT_AVATAR
from mangashelf.repositories.user_repository import UserRepository
from mangashelf.utils.logging import get_logger


Identity = namedtuple("Identity", ["id", "email", "name"])
CurrentUser = namedtuple("CurrentUser", ["id", "email", "name", "avatar"])

# Expired on logout; userSession is the Flask session cookie itself.
LOGOUT_COOKIES = ("userToken", "userLibrary", "userSession")

log = get_logger("mangashelf.auth")
user_repository = UserRepository()


def authorize(email, password):
    if not email or not str(email).strip() or not password:
        raise ValidationError("Email and password required")
    user = user_repository.get_by_email(email, with_password=True)
    if user is None or not user.check_password(password):
        log.info("rejected login for %s", str(email).strip().lower())
        raise InvalidCredentials()
    return Identity(id=user.id, email=user.email, name=user.name)


def register(name, email, password):
    if user_repository.get_by_email(email) is not None:
        raise ConflictError("User already exists")
    user = user_repository.create(name=name, email=email, password=password)
    log.info("registered user %s", user.id)
    return user


def start_session(identity):
    session.clear()
    session["user_id"] = identity.id
    session["email"] = identity.email
    session["name"] = identity.name
    refresh_session_avatar(identity.id)


def refresh_session_avatar(user_id, avatar=None):
    if avatar is None:
        user = user_repository.get_by_id(user_id)
        avatar = (user.avatar if user else None) or DEFAULT_AVATAR
    session["avatar"] = avatar


def current_user():
    user_id = session.get("user_id")
    if not user_id:
        return None
    return CurrentUser(
        id=int(user_id),
        email=session.get("email"),
        name=session.get("name"),
        avatar=session.get("avatar") or DEFAULT_AVATAR,
    )


def session_payload():
    user = current_user()
    if user is None:
        return {}
    return {"user": {"id": str(user.id), "email": user.email, "name": user.name, "image": user.avatar}}


def logout(response):
    session.clear()
    for name in LOGOUT_COOKIES:
        response.delete_cookie(name, path="/")
    return response
