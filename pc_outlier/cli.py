"""Command-line interface for PC-Outlier."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pc_outlier import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="pc-outlier",
        description="Point Cloud Outlier Classification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Label statistical outliers in a single file
  pc-outlier process input.las -o output/

  # Radius method with custom parameters
  pc-outlier process input.las -o output/ --method radius --radius 0.5 --min-k 4

  # Batch process a directory with 8 threads
  pc-outlier process ./data/ -o output/ --batch --threads 8

  # Show header information and class counts
  pc-outlier info output/input_outlier.las
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Process command
    process_parser = subparsers.add_parser(
        "process",
        help="Label outliers in point cloud(s)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    process_parser.add_argument(
        "input",
        type=Path,
        help="Input LAS/LAZ file or directory",
    )
    process_parser.add_argument(
        "-o", "--output",
        type=Path,
        required=True,
        help="Output directory",
    )
    process_parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Configuration YAML file",
    )
    process_parser.add_argument(
        "--batch",
        action="store_true",
        help="Process all LAS/LAZ files in directory",
    )
    process_parser.add_argument(
        "--method",
        default=None,
        help="Outlier method: statistical or radius (default: statistical)",
    )
    process_parser.add_argument(
        "--radius",
        type=float,
        default=None,
        help="Radius method: search radius (default: 1.0)",
    )
    process_parser.add_argument(
        "--min-k",
        type=int,
        default=None,
        help="Radius method: minimum number of neighbors in radius (default: 2)",
    )
    process_parser.add_argument(
        "--mean-k",
        type=int,
        default=None,
        help="Statistical method: number of neighbors (default: 8)",
    )
    process_parser.add_argument(
        "--multiplier",
        type=float,
        default=None,
        help="Statistical method: standard deviation multiplier (default: 2.0)",
    )
    process_parser.add_argument(
        "--class",
        dest="label",
        type=int,
        default=None,
        help="Class to use for noise points (default: 7, low point)",
    )
    process_parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Number of worker threads (default: 1)",
    )
    process_parser.add_argument(
        "--no-compress",
        action="store_true",
        help="Write LAS instead of LAZ",
    )
    process_parser.add_argument(
        "--no-report",
        action="store_true",
        help="Skip JSON report generation",
    )
    process_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    # Info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show LAS header information and classification counts",
    )
    info_parser.add_argument(
        "input",
        type=Path,
        help="LAS/LAZ file",
    )

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if getattr(parsed, "verbose", False) else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        if parsed.command == "process":
            return run_process(parsed)
        elif parsed.command == "info":
            return run_info(parsed)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def build_config(args):
    """Load the configuration file (if any) and apply CLI overrides."""
    from dataclasses import replace

    from pc_outlier.config import OutlierConfig, load_config

    config = load_config(args.config) if args.config else OutlierConfig()

    overrides = {
        "method": args.method,
        "radius": args.radius,
        "min_k": args.min_k,
        "mean_k": args.mean_k,
        "multiplier": args.multiplier,
        "label": args.label,
        "threads": args.threads,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if args.no_compress:
        overrides["compress_output"] = False
    if args.no_report:
        overrides["write_report"] = False

    return replace(config, output_dir=args.output, **overrides)


def run_process(args) -> int:
    """Run processing command."""
    from pc_outlier.classifier import OutlierFilter

    if args.config and not args.config.exists():
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1

    config = build_config(args)
    if args.verbose and args.config:
        print(f"Loaded config from {args.config}")

    outlier_filter = OutlierFilter(config)

    # Determine input files
    input_path = args.input
    if not input_path.exists():
        print(f"Error: Input path not found: {input_path}", file=sys.stderr)
        return 1

    if args.batch or input_path.is_dir():
        if not input_path.is_dir():
            print(f"Error: --batch requires a directory, got: {input_path}", file=sys.stderr)
            return 1
        input_files = list(input_path.glob("*.las")) + list(input_path.glob("*.laz"))
        input_files += list(input_path.glob("*.LAS")) + list(input_path.glob("*.LAZ"))
        input_files = sorted(set(input_files))
        if not input_files:
            print(f"Error: No LAS/LAZ files found in {input_path}", file=sys.stderr)
            return 1
        if args.verbose:
            print(f"Found {len(input_files)} files to process")
    else:
        input_files = [input_path]

    args.output.mkdir(parents=True, exist_ok=True)

    success_count = 0
    error_count = 0

    for i, filepath in enumerate(input_files):
        if len(input_files) > 1:
            print(f"\n[{i + 1}/{len(input_files)}] {filepath.name}")

        try:
            result = outlier_filter.process_file(
                filepath,
                args.output,
                show_progress=args.verbose,
            )
            _print_result_summary(result)
            success_count += 1

        except Exception as e:
            print(f"  Error: {e}", file=sys.stderr)
            error_count += 1

    print(f"\nCompleted: {success_count} succeeded, {error_count} failed")

    return 0 if error_count == 0 else 1


def run_info(args) -> int:
    """Run info command."""
    from pc_outlier.io.las_reader import get_las_info, load_point_cloud
    from pc_outlier.reporting.statistics import calculate_classification_stats

    input_path = args.input
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        return 1

    info = get_las_info(input_path)
    print(f"{info['filepath']}")
    print(f"  Points:       {info['point_count']:,}")
    print(f"  Version:      {info['version']}")
    print(f"  Point format: {info['point_format']}")
    for axis in ("x", "y", "z"):
        lo, hi = info["bounds"][axis]
        print(f"  {axis.upper()} range:      {lo:.3f} .. {hi:.3f}")

    cloud = load_point_cloud(input_path)
    _print_class_distribution(calculate_classification_stats(cloud.classification))

    return 0


def _print_result_summary(result) -> None:
    """Print a summary of processing results."""
    print(f"  Points:   {result.n_points:,}")
    print(f"  Method:   {result.method}")
    print(f"  Status:   {result.status.value}")
    print(f"  Outliers: {result.n_outliers:,} (class {result.label})")
    if result.threshold is not None:
        print(f"  Threshold: {result.threshold:.4f}")
    if result.output_file is not None:
        print(f"  Output:   {result.output_file}")
    print(f"  Total time: {result.timing.get('total', 0):.2f}s")


def _print_class_distribution(stats) -> None:
    """Print class distribution."""
    print("  Classification:")
    for code, entry in stats["by_class"].items():
        print(
            f"    {code:3d} {entry['name']:28s} "
            f"{entry['count']:10,} ({entry['percent']:5.1f}%)"
        )


if __name__ == "__main__":
    sys.exit(main())
