"""Command line entry point for the catalog search layer."""
import argparse
import json
import logging
import sys
from typing import List, Optional

from .config_loader import Config
from .providers import SORT_ORDERS, SORT_RELEVANCE
from .search import DEFAULT_LIMIT, SOURCE_ALL, SOURCES
from .service import CatalogService
from .trending import DEFAULT_LANGUAGE
from .utils.logging_setup import level_from_name, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="catalog-search", description="Query the external catalog providers")
    parser.add_argument("--log-level", default=Config.LOG_LEVEL, help="Logging level (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search both providers")
    search.add_argument("query")
    search.add_argument("--limit", type=int, default=DEFAULT_LIMIT)
    search.add_argument("--language")
    search.add_argument("--source", choices=SOURCES, default=SOURCE_ALL)

    browse = sub.add_parser("browse", help="Browse a category page")
    browse.add_argument("category")
    browse.add_argument("--page", type=int, default=1)
    browse.add_argument("--limit", type=int, default=12)
    browse.add_argument("--filter", dest="filter_label")
    browse.add_argument("--sort", choices=SORT_ORDERS, default=SORT_RELEVANCE)
    browse.add_argument("--language")

    get = sub.add_parser("get", help="Look up one entry by id")
    get.add_argument("entry_id")

    sub.add_parser("stats", help="Show catalog statistics")

    trending = sub.add_parser("trending", help="Show a random trending topic page")
    trending.add_argument("--language", default=DEFAULT_LANGUAGE)

    serve = sub.add_parser("serve", help="Run the JSON API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)
    serve.add_argument("--debug", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main program entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(Config.LOG_DIR, level_from_name(args.log_level), Config.LOG_FILE or None)

    service = CatalogService()

    if args.command == "serve":
        from .web import create_app
        create_app(service).run(host=args.host, port=args.port, debug=args.debug)
        return 0

    if args.command == "search":
        payload = service.combined_search(
            args.query, limit=args.limit, language=args.language, source=args.source
        ).to_dict()
    elif args.command == "browse":
        payload = service.browse_category(
            args.category,
            page=args.page,
            limit=args.limit,
            filter_label=args.filter_label,
            sort_order=args.sort,
            language=args.language,
        ).to_dict()
    elif args.command == "get":
        entry = service.get_entry_by_id(args.entry_id)
        if entry is None:
            print(f"Not found: {args.entry_id}", file=sys.stderr)
            return 1
        payload = entry.to_dict()
    elif args.command == "trending":
        payload = service.get_trending(args.language).to_dict()
    else:
        payload = service.get_catalog_stats().to_dict()

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        sys.exit(130)
