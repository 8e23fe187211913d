"""
Command-line interface for boundary extraction.

Usage:
    python -m boundary_tracer extract <image_path> [<image_path> ...] [--output json|visual]
    python -m boundary_tracer combine <image_path> [<image_path> ...] [--output json|visual]
    python -m boundary_tracer --help
"""

import argparse
import json
import logging
import sys


def setup_argparse() -> argparse.ArgumentParser:
    """Set up argument parser."""
    parser = argparse.ArgumentParser(
        prog="boundary-tracer",
        description="Extract the closed boundary outlined by purple/orange markers",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # extract command
    extract_parser = subparsers.add_parser(
        "extract",
        help="Draw each image's boundary onto a copy of that image",
    )
    extract_parser.add_argument(
        "image_paths",
        nargs="+",
        type=str,
        help="Path(s) to the input image(s)",
    )
    extract_parser.add_argument(
        "--output-path",
        type=str,
        help="Output file path for a single input (default: final_boundary.png)",
    )
    extract_parser.add_argument(
        "--output-dir",
        type=str,
        default=".",
        help="Output directory when several inputs are given (default: current directory)",
    )

    # combine command
    combine_parser = subparsers.add_parser(
        "combine",
        help="Overlay every image's boundary on one white canvas",
    )
    combine_parser.add_argument(
        "image_paths",
        nargs="+",
        type=str,
        help="Paths to the input images",
    )
    combine_parser.add_argument(
        "--output-path",
        type=str,
        help="Output file path (default: final_boundary_white_combined.png)",
    )
    combine_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads used for extraction (default: 1)",
    )

    for sub in (extract_parser, combine_parser):
        sub.add_argument(
            "--output",
            "-o",
            choices=["json", "visual"],
            default="visual",
            help="Output format (default: visual)",
        )
        sub.add_argument(
            "--config",
            type=str,
            help="YAML file with extraction settings",
        )
        sub.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Enable verbose logging",
        )

    return parser


def _load_config(args):
    """Load the extraction config from --config, or defaults."""
    from boundary_tracer.config.extraction_config import ExtractionConfig

    if args.config:
        return ExtractionConfig.from_yaml(args.config)
    return ExtractionConfig.default()


def _report_load_failures(batch) -> None:
    from boundary_tracer.extraction.models import ExtractionStatus

    for result in batch.results:
        if result.status == ExtractionStatus.LOAD_FAILURE:
            print(f"Error: Could not load image: {result.source}", file=sys.stderr)


def cmd_extract(args) -> int:
    """Handle extract command - per-image mode."""
    from boundary_tracer.processing.aggregator import MultiImageAggregator, DEFAULT_OUTPUT_PATH
    from boundary_tracer.processing.image_io import save_image

    aggregator = MultiImageAggregator(config=_load_config(args))
    batch = aggregator.run_per_image(args.image_paths)

    _report_load_failures(batch)
    if batch.total > 0 and batch.load_failures == batch.total:
        return 1

    if args.output == "json":
        print(json.dumps(batch.to_dict(), indent=2))
        return 0

    for result in batch.results:
        if not result.success and result.image is not None:
            print(f"No boundary found: {result.source}")

    if len(batch.results) == 1:
        result = batch.results[0]
        if not result.success:
            return 0
        output_path = args.output_path or DEFAULT_OUTPUT_PATH
        if not save_image(output_path, result.image):
            print(f"Error: Could not write output: {output_path}", file=sys.stderr)
            return 1
        print(f"Boundary drawn successfully. Output: {output_path}")
        return 0

    written = aggregator.save_per_image(batch, args.output_dir)
    exit_code = 0
    for output_path, ok in written.items():
        if ok:
            print(f"Boundary drawn successfully. Output: {output_path}")
        else:
            print(f"Error: Could not write output: {output_path}", file=sys.stderr)
            exit_code = 1
    return exit_code


def cmd_combine(args) -> int:
    """Handle combine command - combined overlay mode."""
    from boundary_tracer.processing.aggregator import (
        MultiImageAggregator,
        DEFAULT_COMBINED_OUTPUT_PATH,
    )

    aggregator = MultiImageAggregator(
        config=_load_config(args),
        parallel_workers=args.workers,
    )
    batch = aggregator.run_combined(args.image_paths)

    _report_load_failures(batch)
    if batch.canvas is None:
        return 1

    if args.output == "json":
        print(json.dumps(batch.to_dict(), indent=2))
        return 0

    output_path = args.output_path or DEFAULT_COMBINED_OUTPUT_PATH
    if not aggregator.save_combined(batch, output_path):
        print(f"Error: Could not write output: {output_path}", file=sys.stderr)
        return 1

    print(
        f"Combined {batch.drawn_count}/{batch.total} boundaries. "
        f"Output: {output_path}"
    )
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    parser = setup_argparse()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "extract":
        return cmd_extract(args)

    if args.command == "combine":
        if args.workers < 1:
            print("Error: --workers must be >= 1", file=sys.stderr)
            return 1
        return cmd_combine(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
