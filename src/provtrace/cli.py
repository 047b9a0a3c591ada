"""provtrace CLI: trace file lineage from provenance."""

import argparse
import json
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path


def _add_trace_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "scripts",
        nargs="+",
        help="Script name(s), a .txt file of script names, or 'console'"
    )
    parser.add_argument(
        "--prov-dir",
        type=Path,
        default=None,
        help="Provenance directory (defaults to $PROVTRACE_PROV_DIR)"
    )
    parser.add_argument(
        "--details",
        action="store_true",
        help="Show timestamps, hash values and saved copies for each file"
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save the report to prov-trace.txt"
    )
    parser.add_argument(
        "--save-dir",
        default=None,
        help="Directory for prov-trace.txt: '.' for the current directory (default: temp directory)"
    )
    parser.add_argument(
        "--no-check",
        dest="check",
        action="store_false",
        help="Do not compare files against the filesystem"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of threads used to check files against the filesystem"
    )


def main():
    """Main CLI entry point for provtrace commands."""
    try:
        provtrace_version = get_version("provtrace")
    except PackageNotFoundError:
        provtrace_version = "dev"

    parser = argparse.ArgumentParser(
        prog="provtrace",
        description="provtrace: file lineage across script runs from recorded provenance"
    )
    parser.add_argument("--version", action="version", version=f"provtrace {provtrace_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not write the report to the console."
    )
    parent_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # trace command
    trace_parser = subparsers.add_parser(
        "trace",
        help="Trace file lineage from existing provenance",
        parents=[parent_parser]
    )
    _add_trace_arguments(trace_parser)
    trace_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the lineage as JSON instead of the text report (not with --details, --save or --quiet)"
    )

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run scripts collecting provenance, then trace file lineage",
        parents=[parent_parser]
    )
    _add_trace_arguments(run_parser)
    run_parser.add_argument(
        "--tool",
        default="rdtLite",
        help="Provenance collector: rdtLite or rdt"
    )
    run_parser.add_argument(
        "--prov-details",
        action="store_true",
        help="Collect fine-grained provenance"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

    from .config import TraceConfig
    from .errors import ConfigurationError, TraceError

    try:
        config = TraceConfig.from_env(check_workers=max(1, args.workers))
        scripts = args.scripts[0] if len(args.scripts) == 1 else list(args.scripts)

        if args.command == "trace" and args.json:
            conflicting = [
                flag for flag, used in (("--details", args.details), ("--save", args.save), ("--quiet", args.quiet))
                if used
            ]
            if conflicting:
                raise ConfigurationError(f"--json cannot be combined with {', '.join(conflicting)}")

            from ._internal.io.script_list import normalize_scripts
            from .api import build_lineage, load_provenance

            names = normalize_scripts(scripts)
            records = load_provenance(names, args.prov_dir, config)
            lineage = build_lineage(records, check=args.check, config=config)
            print(json.dumps(lineage.model_dump(mode="json"), indent=2))
        elif args.command == "trace":
            from .api import trace

            trace(
                scripts,
                prov_dir=args.prov_dir,
                file_details=args.details,
                console=not args.quiet,
                save=args.save,
                save_dir=args.save_dir,
                check=args.check,
                config=config,
            )
        elif args.command == "run":
            from .api import trace_after_run

            trace_after_run(
                scripts,
                prov_dir=args.prov_dir,
                file_details=args.details,
                console=not args.quiet,
                save=args.save,
                save_dir=args.save_dir,
                check=args.check,
                prov_tool=args.tool,
                details=args.prov_details,
                config=config,
            )
        sys.exit(0)
    except TraceError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
