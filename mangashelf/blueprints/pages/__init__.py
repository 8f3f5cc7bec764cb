from flask import Blueprint


pages_bp = Blueprint("pages", __name__)


from mangashelf.blueprints.pages import routes  # noqa: E402,F401
