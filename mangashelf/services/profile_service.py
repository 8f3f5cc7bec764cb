import os
import time

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from mangashelf.errors import InternalError, NotFoundError, ValidationError
from mangashelf.repositories.user_repository import UserRepository
from mangashelf.utils.logging import get_logger


ALLOWED_AVATAR_TYPES = ("image/jpeg", "image/png", "image/gif")
PRESET_AVATARS = tuple(
    f"/uploads/preset-avatars/avatar_{n}.png" for n in range(1, 11)
)
AVATAR_URL_PREFIX = "/uploads/avatars"
AVATAR_TOO_LARGE = "File is too large. Maximum size is 5MB."

log = get_logger("mangashelf.profile")


class ProfileService:
    def __init__(self, user_repository=None):
        self.user_repository = user_repository or UserRepository()

    def get_profile(self, current_user):
        user = self.user_repository.get_by_id(current_user.id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, current_user, form, files):
        user = self.user_repository.get_by_id(current_user.id)
        if user is None:
            raise NotFoundError("User not found")

        fields = {}
        if form.get("name") is not None:
            fields["name"] = form.get("name")
        if form.get("bio") is not None:
            fields["bio"] = form.get("bio")
        goal = form.get("readingGoal")
        if goal is not None and str(goal).strip() != "":
            try:
                fields["reading_goal"] = int(str(goal).strip())
            except ValueError:
                raise ValidationError("Reading goal must be a whole number")

        avatar = self._resolve_avatar(current_user, files.get("avatar") or form.get("avatar"))
        if avatar:
            fields["avatar"] = avatar

        return self.user_repository.update(user, **fields)

    def _resolve_avatar(self, current_user, avatar):
        if not avatar:
            return None
        if isinstance(avatar, str):
            if avatar in PRESET_AVATARS:
                return avatar
            log.info("ignoring unknown avatar path %r for user %s", avatar, current_user.id)
            return None
        if isinstance(avatar, FileStorage) and avatar.filename:
            return self.save_avatar(current_user, avatar)
        return None

    def save_avatar(self, current_user, upload):
        if upload.mimetype not in ALLOWED_AVATAR_TYPES:
            raise ValidationError("Invalid file type. Please upload JPEG, PNG, or GIF.")

        max_bytes = current_app.config["MAX_AVATAR_BYTES"]
        data = upload.stream.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise ValidationError(AVATAR_TOO_LARGE)
        if not data:
            return None

        extension = secure_filename(upload.filename.rsplit(".", 1)[-1]) or "img"
        filename = f"avatar-{current_user.id}-{int(time.time() * 1000)}.{extension}"
        upload_dir = os.path.join(current_app.config["UPLOAD_FOLDER"], "avatars")
        try:
            os.makedirs(upload_dir, exist_ok=True)
            with open(os.path.join(upload_dir, filename), "wb") as file_handle:
                file_handle.write(data)
        except OSError as exc:
            log.error("failed to store avatar for user %s: %s", current_user.id, exc)
            raise InternalError("Failed to update profile")
        return f"{AVATAR_URL_PREFIX}/{filename}"
