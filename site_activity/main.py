"""
Main Entry Point - Site Activity Proxy

Command line interface to fetch sites once, serve the HTTP proxy, or keep a
local snapshot refreshed on a schedule.
"""

import json
import logging
import sys

from .coreutils.logging import setup_logging
from .coreutils.time import default_date_range
from .extract.errors import SiteActivityError
from .extract.models import SiteActivityQuery
from .orchestration.pipeline import SiteActivityPipeline

logger = logging.getLogger(__name__)


def build_query(args) -> SiteActivityQuery:
    """Build the upstream query from parsed CLI arguments"""
    from_date, to_date = args.from_date, args.to_date
    if args.last_days:
        from_date, to_date = default_date_range(args.last_days)

    return SiteActivityQuery(
        utm_source=args.utm_source,
        from_date=from_date,
        to_date=to_date,
        site_type=args.site_type,
        include_details=not args.no_details,
        agent_email=args.agent_email,
    )


def run_fetch(args) -> int:
    """Fetch once and print totals and KPIs"""
    pipeline = SiteActivityPipeline(output_dir=args.output_dir, dry_run=not args.save)

    try:
        stats = pipeline.run_snapshot(build_query(args), active_only=args.active_only)
    except SiteActivityError as e:
        logger.error(f"❌ Fetch failed: {e}")
        return 1

    print(json.dumps(stats, indent=2, default=str))
    return 0


def run_server(args) -> int:
    """Serve the HTTP proxy with uvicorn"""
    import uvicorn

    from .api.proxy import create_app

    logger.info(f"🚀 Serving site activity proxy on {args.host}:{args.port}")
    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def run_scheduler(args) -> int:
    """Refresh a local snapshot every N minutes"""
    from .orchestration.scheduler import SnapshotScheduler

    pipeline = SiteActivityPipeline(output_dir=args.output_dir)
    scheduler = SnapshotScheduler(
        pipeline, build_query(args), every_minutes=args.every_minutes
    )

    try:
        scheduler.start()
    except KeyboardInterrupt:
        logger.info("🛑 Scheduler stopped by user")
        scheduler.stop()
    return 0


def _add_query_arguments(parser):
    parser.add_argument("--utm-source", required=True, help="Source identifier")
    parser.add_argument("--from-date", help="Start date (YYYY-MM-DD)")
    parser.add_argument("--to-date", help="End date (YYYY-MM-DD)")
    parser.add_argument(
        "--last-days", type=int, help="Use the last N days instead of --from/--to"
    )
    parser.add_argument("--site-type", default="domestic", help="Site type")
    parser.add_argument("--agent-email", help="Only sites onboarded by this agent")
    parser.add_argument(
        "--no-details", action="store_true", help="Request summary records only"
    )
    parser.add_argument("--output-dir", default="output", help="Snapshot directory")


def main(argv=None) -> int:
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="Site Activity Proxy")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch_parser = subparsers.add_parser("fetch", help="Fetch sites once")
    _add_query_arguments(fetch_parser)
    fetch_parser.add_argument(
        "--active-only", action="store_true", help="KPIs over ACTIVE sites only"
    )
    fetch_parser.add_argument(
        "--save", action="store_true", help="Save a parquet/json snapshot"
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP proxy")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)

    schedule_parser = subparsers.add_parser(
        "schedule", help="Refresh a snapshot periodically"
    )
    _add_query_arguments(schedule_parser)
    schedule_parser.add_argument("--every-minutes", type=int, default=60)

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "fetch":
        return run_fetch(args)
    elif args.command == "serve":
        return run_server(args)
    return run_scheduler(args)


if __name__ == "__main__":
    sys.exit(main())
