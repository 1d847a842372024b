"""Main entry point for Atlas Fit."""

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path

from atlas_fit import __version__
from atlas_fit.config.settings import Settings, get_settings
from atlas_fit.utils.logging import configure_logging


def _score(value: str) -> int:
    try:
        score = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError("--min-score must be an integer") from e
    if not (0 <= score <= 100):
        raise argparse.ArgumentTypeError("--min-score must be between 0 and 100")
    return score


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError("--limit must be an integer") from e
    if number <= 0:
        raise argparse.ArgumentTypeError("--limit must be greater than 0")
    return number


def _timestamp_run_id(prefix: str) -> str:
    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}"


def _resolve_run_dir(
    settings: Settings, *, prefix: str, out_run_dir: Path | None
) -> Path:
    if out_run_dir is not None:
        run_dir = out_run_dir
    else:
        run_dir = settings.output_dir / "runs" / _timestamp_run_id(prefix)
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def _write_json(path: Path, payload: object) -> None:
    def _default(value: object):
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        return str(value)

    path.write_text(
        json.dumps(payload, indent=2, default=_default),
        encoding="utf-8",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="atlas-fit",
        description="Atlas Fit: score how well loads match driver preferences",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m atlas_fit fit --profile driver.yaml --load load.json
  python -m atlas_fit rank --drivers drivers.yaml --load load.json --limit 5
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    fit_parser = subparsers.add_parser(
        "fit",
        help="Score one driver profile against one load",
    )
    fit_parser.add_argument(
        "--profile",
        type=Path,
        default=None,
        help="Path to driver profile (YAML or JSON; defaults to FIT_PROFILE_PATH)",
    )
    fit_parser.add_argument(
        "--load", type=Path, required=True, help="Path to load (YAML or JSON)"
    )
    fit_parser.add_argument(
        "--out-run-dir",
        type=Path,
        default=None,
        help="Optional output run directory (defaults under artifacts/runs/)",
    )

    rank_parser = subparsers.add_parser(
        "rank",
        help="Rank many drivers for one load",
    )
    rank_parser.add_argument(
        "--drivers",
        type=Path,
        required=True,
        help="Path to a list of driver profiles (YAML or JSON)",
    )
    rank_parser.add_argument(
        "--load", type=Path, required=True, help="Path to load (YAML or JSON)"
    )
    rank_parser.add_argument(
        "--min-score",
        type=_score,
        default=None,
        help="Drop drivers scoring below this value (0-100)",
    )
    rank_parser.add_argument(
        "--limit",
        type=_positive_int,
        default=None,
        help="Maximum drivers to list",
    )
    rank_parser.add_argument(
        "--out-run-dir",
        type=Path,
        default=None,
        help="Optional output run directory (defaults under artifacts/runs/)",
    )

    return parser


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = get_settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Configure logging
    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    # If no mode specified, show help
    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.info(f"Atlas Fit v{__version__} running {parsed.mode}")

    from atlas_fit.scoring.profile import ProfileService
    from atlas_fit.scoring.service import DriverFitScorer

    profile_service = ProfileService()
    scorer = DriverFitScorer()

    if parsed.mode == "fit":
        try:
            profile = profile_service.load_profile(parsed.profile)
            load = profile_service.load_candidate(parsed.load)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Could not load input: {e}")
            print(f"Error: {e}", file=sys.stderr)
            return 1

        for warning in profile_service.validate_profile(profile):
            logger.warning(f"Profile {profile.driver_id or '(no id)'}: {warning}")

        run_dir = _resolve_run_dir(
            settings,
            prefix="fit",
            out_run_dir=getattr(parsed, "out_run_dir", None),
        )

        result = scorer.evaluate(profile, load)
        print(scorer.format_result(result))

        output_path = run_dir / "fit_result.json"
        _write_json(output_path, {"load": load, "result": result})
        print(f"Wrote: {output_path}")
        return 0

    if parsed.mode == "rank":
        try:
            profiles = profile_service.load_profiles(parsed.drivers)
            load = profile_service.load_candidate(parsed.load)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Could not load input: {e}")
            print(f"Error: {e}", file=sys.stderr)
            return 1

        run_dir = _resolve_run_dir(
            settings,
            prefix="rank",
            out_run_dir=getattr(parsed, "out_run_dir", None),
        )

        ranked = scorer.rank(
            profiles, load, min_score=parsed.min_score, limit=parsed.limit
        )
        print(f"Drivers: total={len(profiles)} ranked={len(ranked)}")
        for position, result in enumerate(ranked, start=1):
            print(
                f"{position}. {result.score:3d} {result.verdict:<9} "
                f"{result.driver_id or 'unknown'}"
            )

        output_path = run_dir / "ranking.json"
        _write_json(output_path, {"load": load, "items": ranked})
        print(f"Wrote: {output_path}")
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
