"""
Job Radar CLI - Command line interface for the remote job radar.

Usage:
    python -m job_radar [command] [options]

Commands:
    refresh     Pull fresh jobs from every source into the store
    recent      Show the newest stored jobs, scored
    top         Show the best-matching stored jobs
    search      Filter and rank stored jobs
    sources     List source names, or the jobs of one source
    clean       Drop stored jobs older than N days
    profile     View and edit your profile
    config      Manage configuration
    serve       Run the HTTP API

Examples:
    python -m job_radar refresh --skills "AI & Automation,Python"
    python -m job_radar search --skills python --min-salary 50 --sort salary
    python -m job_radar profile --add-skill "Machine Learning"
    python -m job_radar serve --port 3001
"""

import argparse
import json
import logging
import sys

from job_radar.core import JobStore, SearchFilters, generate_job_summary, match_jobs_to_profile
from job_radar.core.models import SORT_OPTIONS, Job
from job_radar.core.ranker import recent_jobs, search_jobs, top_jobs
from job_radar.core.skills import SKILL_CATEGORIES
from job_radar.integrations import JobAggregator
from job_radar.utils import Config


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Job Radar - Remote job aggregation and profile matching",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", help="Path to config file")
    parser.add_argument("--db", help="Path to job database file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show progress logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Refresh command
    refresh_parser = subparsers.add_parser("refresh", help="Fetch jobs from sources")
    refresh_parser.add_argument("--skills", "-s", help="Comma-separated skill categories (default: profile)")
    refresh_parser.add_argument("--limit", "-n", type=int, help="Max jobs kept from this refresh")
    refresh_parser.add_argument("--live", action="store_true", help="Also scrape live job boards")

    # Recent command
    recent_parser = subparsers.add_parser("recent", help="Show newest jobs")
    recent_parser.add_argument("--limit", "-n", type=int, help="Max results (default: search.default_limit)")

    # Top command
    subparsers.add_parser("top", help="Show best matches")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search stored jobs")
    search_parser.add_argument("--skills", "-s", help="Comma-separated keywords")
    search_parser.add_argument("--sources", help="Comma-separated source names")
    search_parser.add_argument("--min-salary", type=int, help="Minimum salary")
    search_parser.add_argument("--max-salary", type=int, help="Maximum salary")
    search_parser.add_argument("--limit", "-n", type=int, help="Max results (default: search.default_limit)")
    search_parser.add_argument("--sort", choices=SORT_OPTIONS, default="match")

    # Clean command
    clean_parser = subparsers.add_parser("clean", help="Drop old jobs from the store")
    clean_parser.add_argument("--days", "-d", type=int, default=30, help="Remove jobs older than this many days")

    # Sources command
    sources_parser = subparsers.add_parser("sources", help="List available sources")
    sources_parser.add_argument("--name", help="Show the jobs of one source or curated category")
    sources_parser.add_argument("--skills", "-s", help="Comma-separated skill categories (default: profile)")

    # Profile command
    profile_parser = subparsers.add_parser("profile", help="Manage profile")
    profile_parser.add_argument("--show", action="store_true", help="Show the profile")
    profile_parser.add_argument("--add-skill", action="append", help="Add a skill (repeatable)")
    profile_parser.add_argument("--remove-skill", action="append", help="Remove a skill (repeatable)")
    profile_parser.add_argument("--set-rate", type=int, help="Minimum hourly rate")
    profile_parser.add_argument("--experience", help="Experience level")
    profile_parser.add_argument("--categories", help="Comma-separated preferred categories")
    profile_parser.add_argument("--list-categories", action="store_true", help="List known skill categories")

    # Config command
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"), help="Set a config value")
    config_parser.add_argument("--init", action="store_true", help="Initialize default config")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", "-p", type=int, help="Port")

    # Parse arguments
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Load configuration
    config = Config(args.config)
    if args.db:
        config.override("storage.db_path", args.db)

    commands = {
        "refresh": cmd_refresh,
        "recent": cmd_recent,
        "top": cmd_top,
        "search": cmd_search,
        "sources": cmd_sources,
        "clean": cmd_clean,
        "profile": cmd_profile,
        "config": cmd_config,
        "serve": cmd_serve,
    }

    # Execute command
    try:
        commands[args.command](args, config)

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


def _split(value):
    if not value:
        return None
    return [item.strip() for item in value.split(",") if item.strip()] or None


def _default_limit(args, config: Config) -> int:
    return args.limit or int(config.get("search.default_limit", 25))


def _open_store(config: Config) -> JobStore:
    return JobStore(config.get_db_path(), config.get_retention_cap())


def _print_jobs(jobs: list[Job]) -> None:
    if not jobs:
        print("No jobs found. Try `refresh` first.")
        return

    for i, job in enumerate(jobs, 1):
        print(f"{i:2}. [{job.match_score or 0:3}] {job.title}")
        print(f"    {generate_job_summary(job)}")
        print(f"    {job.url}")
        print()


def cmd_refresh(args, config: Config):
    """Execute refresh command."""
    print("🔄 Refreshing jobs...")

    store = _open_store(config)
    profile = store.get_profile()
    skills = _split(args.skills) or profile.skills

    aggregator = JobAggregator.from_config(config)
    limit = args.limit or int(config.get("search.refresh_limit", 50))
    aggregated = aggregator.aggregate(skills, limit=limit, include_live=True if args.live else None)
    store.merge(aggregated.jobs)

    for result in aggregated.results:
        print(f"   {result.source}: {len(result.jobs)} jobs")

    print(f"\n✅ Fetched {len(aggregated.jobs)} jobs from {len(aggregated.results)} sources")
    print(f"   Store now holds {len(store)} jobs\n")

    _print_jobs(match_jobs_to_profile(aggregated.jobs, profile)[:10])


def cmd_recent(args, config: Config):
    """Execute recent command."""
    store = _open_store(config)
    print("🕒 Most recent jobs\n")
    _print_jobs(recent_jobs(store, store.get_profile(), limit=_default_limit(args, config)))


def cmd_top(args, config: Config):
    """Execute top command."""
    store = _open_store(config)
    print("🎯 Top matches\n")
    _print_jobs(top_jobs(store, store.get_profile()))


def cmd_search(args, config: Config):
    """Execute search command."""
    filters = SearchFilters(
        skills=_split(args.skills),
        sources=_split(args.sources),
        min_salary=args.min_salary,
        max_salary=args.max_salary,
        limit=_default_limit(args, config),
        sort_by=args.sort,
    )

    store = _open_store(config)
    jobs = search_jobs(store, store.get_profile(), filters)

    print(f"🔍 Found {len(jobs)} jobs (sorted by {filters.sort_by})\n")
    _print_jobs(jobs)


def cmd_sources(args, config: Config):
    """Execute sources command."""
    aggregator = JobAggregator.from_config(config)

    if args.name:
        skills = _split(args.skills) or _open_store(config).get_profile().skills
        jobs = aggregator.scrape_source(args.name, skills)
        print(f"📡 {args.name}: {len(jobs)} jobs\n")
        _print_jobs(jobs)
        return

    stats = aggregator.get_stats()
    live = ", ".join(stats["live_sources"]) or "none"
    print(f"Live scraping: {'on' if stats['include_live'] else 'off'} ({live})\n")

    for name in aggregator.available_sources():
        print(f"  - {name}")


def cmd_clean(args, config: Config):
    """Execute clean command."""
    store = _open_store(config)
    removed = store.clear_old_jobs(days_old=args.days)
    print(f"🧹 Removed {removed} jobs older than {args.days} days, {len(store)} left")


def cmd_profile(args, config: Config):
    """Execute profile command."""
    if args.list_categories:
        for category in SKILL_CATEGORIES:
            print(f"  - {category}")
        return

    store = _open_store(config)
    profile = store.get_profile()
    partial = {}

    if args.set_rate is not None:
        partial["minHourlyRate"] = args.set_rate
    if args.experience:
        partial["experience"] = args.experience
    if args.categories:
        partial["preferredCategories"] = _split(args.categories) or []

    if args.add_skill or args.remove_skill:
        profile = store.update_skills(add=args.add_skill, remove=args.remove_skill)
    if partial:
        profile = store.save_profile(partial)

    if args.add_skill or args.remove_skill or partial:
        print("✅ Profile updated")
    elif not args.show:
        print("Use --show, --add-skill, --remove-skill, --set-rate, --experience, or --categories")
        return

    print("\n📋 Profile\n")
    print(json.dumps(profile.to_dict(), indent=2))


def cmd_config(args, config: Config):
    """Execute config command."""
    if args.init:
        config.save()
        print(f"✅ Created config at: {config.config_path}")

    elif args.show:
        print("\n📋 Current Configuration\n")
        config.print_config()

    elif args.set:
        key, value = args.set
        # Try to parse as JSON for non-string values
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            pass

        config.set(key, value)
        config.save()
        print(f"✅ Set {key} = {value}")

    else:
        print("Use --show, --set, or --init")


def cmd_serve(args, config: Config):
    """Execute serve command."""
    import uvicorn

    from job_radar.api import create_app

    host, port = config.get_server_address()
    host = args.host or host
    port = args.port or port

    print(f"🚀 Job Radar API on http://{host}:{port}")
    uvicorn.run(create_app(config), host=host, port=port)


if __name__ == "__main__":
    main()
