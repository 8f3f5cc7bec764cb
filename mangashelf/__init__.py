import os

from flask import Flask
from flask import current_app, send_from_directory
from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()


def create_app(config_object=None):
    app = Flask(__name__, template_folder="templates", static_folder="static")

    from mangashelf.config import DevelopmentConfig

    app.config.from_object(config_object or DevelopmentConfig)

    db.init_app(app)

    from mangashelf import models  # noqa: F401

    from mangashelf.utils.logging import get_logger

    get_logger("mangashelf").debug("app created with %s", app.config.get("SQLALCHEMY_DATABASE_URI"))

    from mangashelf.blueprints.auth import auth_bp
    from mangashelf.blueprints.profile import profile_bp
    from mangashelf.blueprints.library import library_bp
    from mangashelf.blueprints.manga import manga_bp
    from mangashelf.blueprints.pages import pages_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(library_bp)
    app.register_blueprint(manga_bp)
    app.register_blueprint(pages_bp)

    @app.route("/uploads/<path:relpath>")
    def serve_upload(relpath):
        return send_from_directory(current_app.config["UPLOAD_FOLDER"], relpath)

    @app.context_processor
    def inject_current_user():
        from mangashelf.services.auth_service import current_user

        user = current_user()
        return {"current_user": user, "is_authenticated": bool(user)}

    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    return app
