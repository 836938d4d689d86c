"""
CLI for browsing the SmartShop catalog from a terminal.
"""

import argparse
import asyncio
import json
import logging

from smartshop.dependencies import build_repository
from smartshop.logging_setup import setup_logging
from smartshop.models import RankingType
from smartshop.repository.base import BaseRepository
from smartshop.result import Result

logger = logging.getLogger(__name__)


def _dump(value) -> str:
    if isinstance(value, (list, tuple)):
        return json.dumps([v.model_dump(mode="json", by_alias=True) for v in value], indent=2, ensure_ascii=False)
    if hasattr(value, "model_dump"):
        return json.dumps(value.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)
    return json.dumps(value)


async def _run(repository: BaseRepository, args: argparse.Namespace) -> Result:
    if args.command == "featured":
        return await repository.get_featured_apps()
    if args.command == "search":
        return await repository.search_apps(args.keyword, page=args.page, page_size=args.page_size)
    if args.command == "app":
        return await repository.get_app_detail(args.app_id)
    if args.command == "ranking":
        return await repository.get_ranking_apps(RankingType(args.type), page=args.page, page_size=args.page_size)
    if args.command == "check-update":
        return await repository.check_for_update(args.current_version)
    raise ValueError(f"Unknown command: {args.command}")


def main():
    parser = argparse.ArgumentParser(
        description="Browse the SmartShop catalog."
    )
    parser.add_argument("--log-level", default=None, help="Override APP_LOG_LEVEL.")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("featured", help="List featured apps.")

    search = sub.add_parser("search", help="Search apps by keyword.")
    search.add_argument("keyword")
    search.add_argument("--page", type=int, default=1)
    search.add_argument("--page-size", type=int, default=None)

    app = sub.add_parser("app", help="Show one app.")
    app.add_argument("app_id")

    ranking = sub.add_parser("ranking", help="Show a ranking.")
    ranking.add_argument("--type", choices=[t.value for t in RankingType], default=RankingType.HOT.value)
    ranking.add_argument("--page", type=int, default=1)
    ranking.add_argument("--page-size", type=int, default=None)

    update = sub.add_parser("check-update", help="Check whether a newer client is published.")
    update.add_argument("current_version")

    args = parser.parse_args()
    setup_logging(args.log_level)

    repository = build_repository()
    result = asyncio.run(_run(repository, args))

    if not result.is_ok:
        logger.error(f"{args.command} failed: {type(result.error).__name__}: {result.error.message}")
        return 1

    print(_dump(result.value))
    return 0


if __name__ == "__main__":
    exit(main())
