"""CLI entrypoints for repohealth commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .config import ObservationConfig, load_config
from .errors import InvalidConfig, ObservationError
from .logging import configure_logging
from .orchestrator import ObservationOutcome, Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repohealth",
        description="Assess the health of the git repositories in a workspace.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    observe_parser = subparsers.add_parser(
        "observe",
        help="Scan a workspace and report repository health.",
    )
    _add_verbose_option(observe_parser, suppress_default=True)
    observe_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Workspace root to scan (defaults to current directory).",
    )
    observe_parser.add_argument(
        "--tool-root",
        default=None,
        help="Root of an external tooling checkout to record with the run.",
    )
    observe_parser.add_argument(
        "--team",
        default=None,
        help="External team identifier to record with the run.",
    )
    observe_parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="How many directory levels to search for repositories (default 4).",
    )
    observe_parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Directory pattern to skip; may be repeated. Replaces configured patterns.",
    )
    observe_parser.add_argument(
        "--unpushed-threshold",
        type=int,
        default=None,
        help="Raise an anomaly when more repositories than this have unpushed commits.",
    )
    observe_parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for JSON and Markdown reports (relative to the workspace).",
    )
    observe_parser.add_argument(
        "--no-reports",
        action="store_true",
        help="Print the summary without writing report files.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def build_config(args: argparse.Namespace) -> ObservationConfig:
    """Merge ``.repohealth.yml`` from the workspace with command-line overrides."""
    if not args.path:
        raise InvalidConfig("workspace_root cannot be empty")
    workspace = Path(args.path).expanduser().resolve()
    config = load_config(workspace)

    overrides: dict[str, object] = {}
    if args.tool_root:
        overrides["tool_root"] = args.tool_root
    if args.team:
        overrides["team_id"] = args.team
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if args.exclude:
        overrides["exclude_patterns"] = tuple(args.exclude)
    if args.unpushed_threshold is not None:
        overrides["thresholds"] = replace(
            config.thresholds, unpushed_count=args.unpushed_threshold
        )
    if args.output_dir:
        overrides["reports"] = replace(config.reports, output_dir=args.output_dir)
    return replace(config, **overrides) if overrides else config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repohealth commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "observe":
        try:
            config = build_config(args)
            outcome = Orchestrator().run(config, write_reports=not args.no_reports)
        except ObservationError as exc:
            parser.exit(1, f"repohealth observe failed: {exc}\nRun with --verbose for more details.\n")
        print(render_summary(outcome))
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def render_summary(outcome: ObservationOutcome) -> str:
    observation = outcome.observation
    git = observation.context.git
    lines = [
        f"Workspace: {observation.context.workspace}",
        "",
        "Git Repositories:",
        f"  Total: {git.total_repositories}",
        f"  Clean: {git.clean_repositories} ({git.health_score:.1f}%)",
        f"  Dirty: {git.dirty_repositories}",
        f"  Unpushed: {git.unpushed_repositories}",
        f"  Total Commits: {git.total_commits}",
        "",
        "Patterns Detected:",
    ]
    if observation.patterns:
        for pattern in observation.patterns:
            lines.append(f"  {pattern.type}: {pattern.evidence}")
            lines.append(f"     Recommendation: {pattern.recommendation}")
    else:
        lines.append("  No significant patterns detected")

    lines.extend(["", "Anomalies Detected:"])
    if observation.anomalies:
        for anomaly in observation.anomalies:
            lines.append(f"  {anomaly.type} ({anomaly.severity.value}): {anomaly.description}")
            lines.append(f"     Recommendation: {anomaly.recommendation}")
    else:
        lines.append("  No anomalies detected")

    lines.extend(
        [
            "",
            f"Trend: {outcome.trend.value}",
            f"Velocity: {outcome.velocity} commits",
        ]
    )
    if outcome.json_path or outcome.markdown_path:
        lines.extend(["", "Reports Generated:"])
        if outcome.json_path:
            lines.append(f"  JSON: {_relativize(outcome.json_path)}")
        if outcome.markdown_path:
            lines.append(f"  Markdown: {_relativize(outcome.markdown_path)}")
    return "\n".join(lines)


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
