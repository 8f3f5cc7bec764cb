from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import undefer

from mangashelf import db
from mangashelf.errors import ConflictError, ValidationError
from mangashelf.models.user import User


class UserRepository:
    def get_by_id(self, user_id):
        return User.query.get(user_id)

    def get_by_email(self, email, with_password=False):
        query = User.query
        if with_password:
            query = query.options(undefer(User.password_hash))
        return query.filter_by(email=(email or "").strip().lower()).first()

    def create(self, name, email, password):
        user = User(name=name, email=email)
        user.set_password(password)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("User already exists")
        return user

    def update(self, user, **fields):
        try:
            for key, value in fields.items():
                setattr(user, key, value)
        except ValidationError:
            db.session.rollback()
            raise
        db.session.commit()
        return user
