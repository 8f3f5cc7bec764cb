from flask import Blueprint


manga_bp = Blueprint("manga", __name__)


from mangashelf.blueprints.manga import routes  # noqa: E402,F401
