from flask import Blueprint, render_template, request, redirect, url_for, current_app, jsonify, make_response
import logging

from dircast.models import Credentials, SearchRequest
from dircast.services.feed_service import feed_link
from dircast.services.search_service import search
from dircast.util.auth import authenticated_credentials, format_identity_cookie, verify

logger = logging.getLogger(__name__)
main = Blueprint('main', __name__)

# -------------------------
# Helpers
# -------------------------

def current_credentials():
    return authenticated_credentials(
        request,
        current_app.config["HTPASSWD_PATH"],
        current_app.config["IDENTITY_COOKIE"],
    )


def redirect_to_login():
    return redirect(url_for("main.login"), code=307)


# -------------------------
# Search
# -------------------------

@main.route("/", methods=["GET"])
def index():
    if current_credentials() is None:
        return redirect_to_login()
    return render_template("search.html", search_request=SearchRequest())


@main.route("/", methods=["POST"])
def run_search():
    credentials = current_credentials()
    if credentials is None:
        return redirect_to_login()

    # Arriving here from the login redirect carries no search form
    if "search" not in request.form:
        return render_template("search.html", search_request=SearchRequest())

    search_request = SearchRequest(
        author=request.form.get("author", ""),
        query=request.form.get("search", ""),
        title=request.form.get("title", ""),
    )
    settings = current_app.extensions["dircast.store"]
    result = search(search_request.query, settings)
    if result.failed:
        logger.error("Search for %r failed, showing no results", search_request.query)

    codec = current_app.extensions["dircast.slug_codec"]
    slug = codec.encode(search_request, credentials)

    return render_template(
        "search.html",
        search_request=search_request,
        result=result,
        files=result.objects,
        feed_url=feed_link(settings.public_url, slug),
    )


# -------------------------
# Login
# -------------------------

@main.route("/login", methods=["GET"])
def login():
    if current_credentials() is not None:
        return redirect(url_for("main.index"), code=307)
    return render_template("login.html")


@main.route("/login", methods=["POST"])
def do_login():
    credentials = Credentials(
        user=request.form.get("user", ""),
        password=request.form.get("pass", ""),
    )
    # The identity cookie is a bare user:pass pair, so a colon cannot survive the round trip
    if ":" in credentials.user or ":" in credentials.password:
        logger.info("Rejected login with a colon in the user or password")
        return render_template("login.html", error="Invalid username or password."), 401

    if not verify(credentials, current_app.config["HTPASSWD_PATH"]):
        logger.info("Failed login attempt")
        return render_template("login.html", error="Invalid username or password."), 401

    logger.info("Login for user %s", credentials.user)
    response = make_response(redirect(url_for("main.index"), code=307))
    response.set_cookie(
        current_app.config["IDENTITY_COOKIE"],
        format_identity_cookie(credentials),
        httponly=True,
        samesite="Lax",
    )
    return response


@main.route("/logout", methods=["GET"])
def logout():
    response = make_response(redirect_to_login())
    response.delete_cookie(current_app.config["IDENTITY_COOKIE"])
    return response


@main.route("/healthz")
def healthz():
    return jsonify({"status": "ok"})
