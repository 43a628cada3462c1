"""JSON HTTP API over the catalog operations."""
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from . import category_queries
from .browser import DEFAULT_PAGE_SIZE, navigable_pages
from .config_loader import Config
from .providers import SORT_ORDERS, SORT_RELEVANCE
from .search import DEFAULT_LIMIT, SOURCE_ALL, SOURCES
from .service import CatalogService, get_service
from .trending import DEFAULT_LANGUAGE

MAX_LIMIT = 40


class BadRequest(ValueError):
    """Caller supplied an unusable parameter."""


def _int_arg(name: str, default: int, minimum: int = 1, maximum: Optional[int] = None) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise BadRequest(f"{name} must be an integer")
    if value < minimum:
        raise BadRequest(f"{name} must be at least {minimum}")
    if maximum is not None:
        value = min(value, maximum)
    return value


def create_app(service: Optional[CatalogService] = None, config: Optional[Dict[str, Any]] = None) -> Flask:
    """Build the Flask app; ``service`` defaults to the shared catalog service."""
    app = Flask(__name__)
    app.config.update(
        RATELIMIT_DEFAULT="200 per day;50 per hour",
        RATELIMIT_STORAGE_URI="memory://",
        RATELIMIT_HEADERS_ENABLED=True,
    )
    if config:
        app.config.update(config)
    app.json.sort_keys = False

    # Initialize rate limiter
    limiter = Limiter(
        key_func=get_remote_address,
        app=app,
        default_limits=[app.config["RATELIMIT_DEFAULT"]],
    )

    def catalog() -> CatalogService:
        return service or get_service()

    @app.errorhandler(BadRequest)
    def bad_request_error(e):
        app.logger.warning(f"Bad Request Error: {str(e)}")
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(429)
    def ratelimit_handler(e):
        return jsonify({"error": "Rate limit exceeded. Please try again later."}), 429

    @app.route("/api/search", methods=["GET"])
    @limiter.limit("30 per minute")
    def search():
        q = request.args.get("q", "").strip()
        if not q:
            raise BadRequest("Please enter a query.")
        source = request.args.get("source", SOURCE_ALL)
        if source not in SOURCES:
            raise BadRequest(f"source must be one of {', '.join(SOURCES)}")

        result = catalog().combined_search(
            q,
            limit=_int_arg("limit", DEFAULT_LIMIT, maximum=MAX_LIMIT),
            language=request.args.get("language") or None,
            source=source,
        )
        return jsonify(result.to_dict())

    @app.route("/api/categories/<category>", methods=["GET"])
    def browse(category):
        sort = request.args.get("sort", SORT_RELEVANCE)
        if sort not in SORT_ORDERS:
            raise BadRequest(f"sort must be one of {', '.join(SORT_ORDERS)}")
        limit = _int_arg("limit", DEFAULT_PAGE_SIZE, maximum=MAX_LIMIT)

        result = catalog().browse_category(
            category,
            page=_int_arg("page", 1),
            limit=limit,
            filter_label=request.args.get("filter") or None,
            sort_order=sort,
            language=request.args.get("language") or None,
        )
        payload = result.to_dict()
        payload["totalPages"] = navigable_pages(result.total_items, limit, Config.MAX_NAVIGABLE_PAGES)
        return jsonify(payload)

    @app.route("/api/categories/<category>/filters", methods=["GET"])
    def filters(category):
        return jsonify({"category": category, "filters": list(category_queries.labels(category))})

    @app.route("/api/entries/<path:entry_id>", methods=["GET"])
    def entry(entry_id):
        found = catalog().get_entry_by_id(entry_id)
        if found is None:
            return jsonify({"error": "Not found", "id": entry_id}), 404
        return jsonify(found.to_dict())

    @app.route("/api/trending", methods=["GET"])
    def trending():
        language = request.args.get("language") or DEFAULT_LANGUAGE
        return jsonify(catalog().get_trending(language).to_dict())

    @app.route("/api/stats", methods=["GET"])
    def stats():
        return jsonify(catalog().get_catalog_stats().to_dict())

    # Simple health route
    @app.route("/health", methods=["GET"])
    @limiter.exempt
    def health():
        return "ok", 200

    return app
