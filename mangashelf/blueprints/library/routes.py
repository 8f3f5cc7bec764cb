from flask import jsonify, make_response, request

from mangashelf.blueprints.helpers import api_errors
from mangashelf.blueprints.library import library_bp
from mangashelf.errors import ValidationError
from mangashelf.services import library_service


@library_bp.route("/api/library/add", methods=["POST"])
@api_errors("Failed to add manga to library")
def add_to_library():
    entry = request.get_json(silent=True)
    if entry is None:
        raise ValidationError("Invalid manga data")
    library = library_service.load_library(request.cookies)
    library_service.upsert_entry(library, entry)
    response = make_response(jsonify({
        "message": "Manga added to library successfully",
        "manga": entry,
    }), 200)
    return library_service.save_library(library, response)


@library_bp.route("/api/library", methods=["GET"])
@library_bp.route("/api/library/add", methods=["GET"])
@api_errors("Failed to retrieve library")
def get_library():
    library = library_service.load_library(request.cookies)
    section = request.args.get("section")
    return jsonify(library_service.filter_section(library, section)), 200
