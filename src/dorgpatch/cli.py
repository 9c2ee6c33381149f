"""Command line entry point for dorgpatch."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from . import __version__
from .commit_message import CommitMessageHandler
from .config import DorgpatchSettings, get_settings
from .drupal_org import DrupalOrgClient
from .exceptions import DorgpatchError
from .git import GitRunner, GitService
from .repo_config import RepoConfig, load_repo_config
from .waypoints import BranchResolver, IssueNumberAnalyser, PatchHistoryReader
from .workflow import CreatePatchWorkflow

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging; diagnostics go to stderr, the report to stdout."""

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_git(settings: DorgpatchSettings, repo: Path) -> GitService:
    runner = GitRunner(Path(settings.git_path) if settings.git_path else None, cwd=repo)
    return GitService(runner)


def _resolver(args: argparse.Namespace, settings: DorgpatchSettings, repo_config: RepoConfig, git: GitService) -> BranchResolver:
    base = args.base or settings.base_branch or repo_config.base_branch
    return BranchResolver(git, base_branch=base, feature_branch=args.branch)


def cmd_patch(args: argparse.Namespace, settings: DorgpatchSettings, repo_config: RepoConfig) -> int:
    git = _build_git(settings, args.repo)
    issue_number = args.issue or settings.issue_number or repo_config.issue_number
    workflow = CreatePatchWorkflow(
        git=git,
        branches=_resolver(args, settings, repo_config, git),
        analyser=IssueNumberAnalyser(issue_number),
        drupal_org=DrupalOrgClient(settings.drupal_org_api_url, timeout=settings.http_timeout),
        sequential=args.sequential,
    )
    result = workflow.run()
    logger.info(
        "Patch workflow complete",
        extra={"marker_sha": result.marker_sha, "written": result.written},
    )
    return 0


def cmd_waypoints(args: argparse.Namespace, settings: DorgpatchSettings, repo_config: RepoConfig) -> int:
    git = _build_git(settings, args.repo)
    resolver = _resolver(args, settings, repo_config, git)
    base = resolver.resolve_base()
    feature = args.branch or git.current_branch()
    if not feature:
        raise DorgpatchError("No feature branch checked out; use --branch.")

    history = PatchHistoryReader(git, CommitMessageHandler(), base_ref=base.name, feature_ref=feature)
    waypoints = history.waypoints()
    if not waypoints:
        print(f"No patches recorded on {feature} since {base.name}.")
        return 0
    for waypoint in waypoints:
        comment = f"#{waypoint.comment_index}" if waypoint.comment_index is not None else "(local)"
        print(f"{waypoint.ordinal}: {waypoint.sha[:10]} {comment} {waypoint.filename}")
    return 0


def _add_branch_options(parser: argparse.ArgumentParser, *, default, repo_default) -> None:
    parser.add_argument("--repo", type=Path, default=repo_default, help="Repository working tree")
    parser.add_argument("--base", default=default, help="Base branch to diff against")
    parser.add_argument("--branch", default=default, help="Feature branch (defaults to the current branch)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default=default,
        help="Override DORGPATCH_LOG_LEVEL",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dorgpatch",
        description="Create Drupal.org patches and interdiffs from a feature branch.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_branch_options(parser, default=None, repo_default=Path.cwd())

    # Subcommands accept the same options; SUPPRESS keeps values given before the subcommand.
    shared = argparse.ArgumentParser(add_help=False)
    _add_branch_options(shared, default=argparse.SUPPRESS, repo_default=argparse.SUPPRESS)

    sub = parser.add_subparsers(dest="cmd")

    p_patch = sub.add_parser(
        "patch", parents=[shared], help="Create a patch, plus an interdiff if a patch was made before"
    )
    p_patch.add_argument("--issue", help="Drupal.org issue number (defaults to one in the branch name)")
    p_patch.add_argument(
        "--sequential",
        action="store_true",
        help="Write the patch as a format-patch series instead of a single diff",
    )
    p_patch.set_defaults(func=cmd_patch)

    p_waypoints = sub.add_parser(
        "waypoints", parents=[shared], help="List patches recorded on the feature branch"
    )
    p_waypoints.set_defaults(func=cmd_waypoints)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        args = parser.parse_args([*(argv if argv is not None else sys.argv[1:]), "patch"])

    try:
        settings = get_settings()
        if args.log_level:
            settings = settings.model_copy(update={"log_level": args.log_level})
        configure_logging(settings.log_level)
        repo_config = load_repo_config(settings.repo_config_path(args.repo))
        return args.func(args, settings, repo_config)
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 1
    except DorgpatchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
