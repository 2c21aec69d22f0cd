"""CLI for printing benchmark comparison tables."""

import argparse
import logging
import sys
from pathlib import Path

from benchtable.config import AppConfig, load_config_from_yaml
from benchtable.errors import BenchTableError, RevisionError
from benchtable.loader import load_results
from benchtable.report.table import build_table
from benchtable.revisions import DEFAULT_REV, get_package_name_defaults, parse_rev
from benchtable.units import VALID_TIME_UNITS

logger = logging.getLogger(__name__)


def load_app_config(args) -> AppConfig:
    """Merge the optional YAML config with command line flags."""
    overrides = {
        "input_dir": args.input_dir,
        "revs": args.rev,
        "mode": args.mode,
        "time_unit": args.time_unit,
        "ratio": args.ratio,
    }
    if args.config:
        return load_config_from_yaml(args.config, **overrides)
    return AppConfig(**{k: v for k, v in overrides.items() if v is not None})


def cmd_table(args) -> int:
    """Print one table per requested mode."""
    config = load_app_config(args)

    revs = config.rev_list
    if not revs:
        raise RevisionError("No revisions specified.")

    package_name, url, path = get_package_name_defaults(args.package_name, args.url, args.path)

    if path:
        revs = [parse_rev(rev, path) for rev in revs]
    elif DEFAULT_REV in revs:
        raise RevisionError("You must explicitly set `--rev` for this set of options.")

    combined_results = load_results(package_name, revs, input_dir=config.input_dir)

    for key in config.metric_keys:
        print(
            build_table(
                combined_results,
                key=key,
                add_ratio=config.ratio,
                fixed_unit=config.time_unit,
            )
        )

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="benchpkgtable",
        description="Print a table of the benchmarks of a package across revisions",
    )
    parser.add_argument("package_name", nargs="?", default="", help="Name of the package")
    parser.add_argument(
        "-r", "--rev", default=None,
        help="Revisions to compare (delimit by comma). Default: dirty,{DEFAULT}",
    )
    parser.add_argument(
        "-i", "--input-dir", type=Path, default=None,
        help="Where the JSON results were saved (default: .)",
    )
    parser.add_argument(
        "--ratio", action="store_true", default=None,
        help="Include the ratio column when comparing two revisions",
    )
    parser.add_argument(
        "--mode", default=None,
        help='Table mode(s): "time" (default) and/or "memory", delimited by comma',
    )
    parser.add_argument(
        "--time-unit", default=None,
        help=f"Fixed time unit ({', '.join(VALID_TIME_UNITS)}). time_to_load always uses an automatic unit",
    )
    parser.add_argument("--url", default="", help="URL of the package. Only used to get the package name")
    parser.add_argument("--path", default="", help="Path of the package (default: . if nothing else is given)")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        return cmd_table(args)
    except (BenchTableError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
