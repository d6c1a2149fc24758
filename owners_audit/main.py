"""Command line entry point for the OWNERS auditor."""

import argparse
import asyncio
import logging
import sys

import structlog

from owners_audit.config import Settings, settings
from owners_audit.exceptions import ConfigurationError, RetrievalError
from owners_audit.github.connector import GitHubConnector
from owners_audit.ownership.analyzer import OwnershipAuditor
from owners_audit.reporting import render_json, render_text

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_INVALID_USERS = 1
EXIT_FATAL = 2

_log_handler: logging.Handler | None = None


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structured logging to stderr."""
    global _log_handler

    root = logging.getLogger()
    if _log_handler is not None:
        root.removeHandler(_log_handler)

    # Bound to the current stderr on every call
    _log_handler = logging.StreamHandler(sys.stderr)
    _log_handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(_log_handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="owners-audit",
        description="Find OWNERS / OWNERS_ALIASES entries that are not members of a GitHub organization.",
    )
    parser.add_argument("--org", help="GitHub organization to audit (default: GITHUB_ORG setting)")
    parser.add_argument(
        "--repo",
        action="append",
        dest="repos",
        metavar="NAME",
        help="Only audit this repository (repeatable)",
    )
    parser.add_argument("--owners-file", help="Path of the owners file in each repository")
    parser.add_argument("--aliases-file", help="Path of the aliases file in each repository")
    parser.add_argument("--concurrency", type=int, help="Repositories audited in parallel")
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report format written to stdout",
    )
    parser.add_argument(
        "--fail-on-invalid",
        action="store_true",
        help="Exit with status 1 when any repository has invalid users",
    )
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL setting)")
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {settings.app_version}",
    )
    return parser


def apply_overrides(base: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with command line overrides applied."""
    overrides = {
        "github_org": args.org,
        "owners_file": args.owners_file,
        "owners_aliases_file": args.aliases_file,
        "audit_concurrency": args.concurrency,
        "log_level": args.log_level,
    }
    return base.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def build_connector(config: Settings) -> GitHubConnector:
    return GitHubConnector.from_settings(config)


async def main(argv: list[str] | None = None) -> int:
    """Run an audit and print the report. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    config = apply_overrides(settings, args)
    configure_logging(config.log_level, config.log_format)
    logger.info("Starting", app=config.app_name, version=config.app_version, org=config.github_org)

    connector = build_connector(config)
    try:
        async with connector:
            auditor = OwnershipAuditor(
                connector,
                org=config.github_org,
                owners_file=config.owners_file,
                aliases_file=config.owners_aliases_file,
                concurrency=config.audit_concurrency,
                repo_type=config.github_repo_type,
                members_per_page=config.github_members_per_page,
                repos_per_page=config.github_repos_per_page,
            )
            report = await auditor.run(repos=args.repos)
    except ConfigurationError as e:
        logger.error("Invalid configuration", error=str(e))
        return EXIT_FATAL
    except RetrievalError as e:
        logger.error(
            "Audit aborted, could not load organization data",
            org=config.github_org,
            error=e.to_dict(),
        )
        return EXIT_FATAL

    print(render_json(report) if args.format == "json" else render_text(report))

    if args.fail_on_invalid and report.invalid_repo_count:
        return EXIT_INVALID_USERS
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
