from flask import current_app, redirect, render_template, request, url_for

from mangashelf.blueprints.pages import pages_bp
from mangashelf.errors import AppError, UpstreamError
from mangashelf.services import library_merge, library_service
from mangashelf.services.auth_service import current_user, refresh_session_avatar
from mangashelf.services.catalog_client import CatalogClient
from mangashelf.services.profile_service import PRESET_AVATARS, ProfileService
from mangashelf.utils.logging import get_logger


DISCOVER_PAGE_SIZE = 5

log = get_logger("mangashelf.pages")
profile_service = ProfileService()


def _search(client, query):
    if not query:
        return []
    try:
        return client.search(query)
    except UpstreamError as exc:
        log.warning("catalog search for %r failed: %s", query, exc.message)
        return []


@pages_bp.route("/")
@pages_bp.route("/dashboard")
def dashboard():
    client = CatalogClient()
    query = request.args.get("q", "").strip()
    try:
        sections = client.recent()
    except UpstreamError as exc:
        log.warning("failed to load dashboard manga: %s", exc.message)
        sections = {"newlyAdded": [], "recentlyUpdated": []}
    return render_template(
        "dashboard.html",
        newly_added=sections["newlyAdded"],
        recently_updated=sections["recentlyUpdated"],
        search_results=_search(client, query),
        query=query,
    )


@pages_bp.route("/discover")
def discover():
    try:
        sections = CatalogClient().recent(per_page=DISCOVER_PAGE_SIZE)
    except UpstreamError as exc:
        log.warning("failed to load discover manga: %s", exc.message)
        sections = {"newlyAdded": [], "recentlyUpdated": []}
    return render_template(
        "discover.html",
        newly_added=sections["newlyAdded"],
        recently_updated=sections["recentlyUpdated"],
    )


@pages_bp.route("/explore")
def explore():
    client = CatalogClient()
    query = request.args.get("q", "").strip()
    try:
        sections = client.explore()
    except UpstreamError as exc:
        log.warning("failed to load explore manga: %s", exc.message)
        sections = {"trending": [], "popular": []}
    return render_template(
        "explore.html",
        trending=sections["trending"],
        popular=sections["popular"],
        search_results=_search(client, query),
        query=query,
    )


@pages_bp.route("/library")
def library():
    section = request.args.get("section") or "reading"
    if section not in library_merge.BUCKETS:
        section = "reading"
    query = request.args.get("q", "")

    client = CatalogClient()
    user_id = current_app.config["ANILIST_USER_ID"]
    remote = library_merge.fetch_buckets("catalog", lambda: client.user_media_list(user_id))
    local = library_merge.fetch_buckets(
        "cookie",
        lambda: library_merge.local_buckets(library_service.load_library(request.cookies)),
    )
    merged = library_merge.merge_buckets(local, remote)
    return render_template(
        "library.html",
        buckets=library_merge.filter_buckets(merged, query),
        bucket_names=library_merge.BUCKETS,
        section=section,
        query=query,
    )


@pages_bp.route("/library/add", methods=["POST"])
def add_to_library():
    entry = {
        "id": request.form.get("id"),
        "title": request.form.get("title"),
        "coverImage": request.form.get("coverImage"),
        "status": request.form.get("status") or "CURRENT",
        "progress": request.form.get("progress", type=int) or 0,
    }
    target = request.referrer or url_for("pages.library")
    library = library_service.load_library(request.cookies)
    try:
        library_service.upsert_entry(library, entry)
    except AppError as exc:
        log.info("rejected library entry: %s", exc.message)
        return redirect(target)
    return library_service.save_library(library, redirect(target))


@pages_bp.route("/profile", methods=["GET", "POST"])
def profile():
    user = current_user()
    if user is None:
        return redirect(url_for("pages.login", next=url_for("pages.profile")))
    error = None
    message = None
    if request.method == "POST":
        try:
            updated = profile_service.update_profile(user, request.form, request.files)
            refresh_session_avatar(user.id, updated.avatar)
            message = "Profile updated successfully"
        except AppError as exc:
            error = exc.message
    try:
        record = profile_service.get_profile(user)
    except AppError:
        return redirect(url_for("pages.login"))
    return render_template(
        "profile.html",
        profile=record.profile_dict(),
        presets=PRESET_AVATARS,
        error=error,
        message=message,
    )


@pages_bp.route("/auth/login")
def login():
    return render_template("auth/login.html", error=None)


@pages_bp.route("/auth/register")
def register():
    return render_template("auth/register.html", error=None)
