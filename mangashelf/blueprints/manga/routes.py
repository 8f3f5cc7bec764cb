from flask import jsonify

from mangashelf.blueprints.helpers import api_errors
from mangashelf.blueprints.manga import manga_bp
from mangashelf.services.manga_service import MangaService


manga_service = MangaService()


@manga_bp.route("/api/manga/new-releases", methods=["GET"])
@api_errors("Failed to fetch new releases")
def new_releases():
    return jsonify([m.to_dict() for m in manga_service.new_releases()]), 200


@manga_bp.route("/api/manga/recent-updates", methods=["GET"])
@api_errors("Failed to fetch recent updates")
def recent_updates():
    return jsonify([m.to_dict() for m in manga_service.recent_updates()]), 200
