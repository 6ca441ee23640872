# routes/feed.py
from flask import Blueprint, Response, current_app, render_template
import logging

from dircast.services.feed_service import RSS_MIME_TYPE, assemble
from dircast.services.search_service import search
from dircast.util.auth import verify
from dircast.util.slug import SlugError

logger = logging.getLogger(__name__)

feed_bp = Blueprint("feed", __name__)


def error_fragment(message, status):
    return render_template("error.html", message=message), status


@feed_bp.route("/gen_feed/<slug>/feed.rss")
def generate_feed(slug):
    codec = current_app.extensions["dircast.slug_codec"]
    try:
        search_request, credentials = codec.decode(slug)
    except SlugError:
        logger.warning("Feed requested with a malformed slug")
        return error_fragment("Something went wrong.", 500)

    if not verify(credentials, current_app.config["HTPASSWD_PATH"]):
        logger.info("Feed requested with rejected credentials")
        return error_fragment("Not authorized.", 401)

    settings = current_app.extensions["dircast.store"]
    try:
        result = search(search_request.query, settings)
        if result.failed:
            logger.error("Serving empty feed for %r: %s", search_request.title, result.error)
        body = assemble(search_request.title, search_request.author, settings.public_url, result.objects)
    except Exception:
        logger.exception("Failed to build feed %r", search_request.title)
        return error_fragment("Something went wrong.", 500)

    return Response(body, mimetype=RSS_MIME_TYPE)
