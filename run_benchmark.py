"""This module provides the entry point for the demo and the benchmark."""

import argparse
import sys
from pathlib import Path

from src.benchmark.config import load_config_file
from src.benchmark.demo import run_demo
from src.benchmark.logger import setup_logging, shutdown_logging
from src.benchmark.runner import OUTPUT_DIR, load_algorithms, run_benchmark

CONFIG_PATH = Path(__file__).parent / "config.txt"
ALGORITHMS = Path(__file__).parent / "algorithms.json"


def main(argv: list[str] | None = None) -> int:
    """Run the demo or the benchmark.

    Args:
        argv (list[str] | None): The command line arguments,
        defaults to sys.argv.

    Returns:
        int: The exit status of the program.

    """
    algorithms = load_algorithms(ALGORITHMS)

    parser = argparse.ArgumentParser(
        description="Run the radix tree demo or benchmark.",
    )
    parser.add_argument(
        "--mode",
        default="benchmark",
        choices=["demo", "benchmark"],
        help="Run mode: 'demo' or 'benchmark' (default: benchmark)",
    )
    parser.add_argument(
        "--config_path",
        type=str,
        default=str(CONFIG_PATH),
        help="Optional path to the config file.",
        required=False,
    )
    parser.add_argument(
        "--algorithm",
        type=str,
        default=None,
        choices=list(algorithms),
        help="Only benchmark this structure (default: all of them).",
        required=False,
    )
    parser.add_argument(
        "--output_dir",
        type=str,
        default=str(OUTPUT_DIR),
        help="Where to save the results and charts.",
        required=False,
    )
    args = parser.parse_args(argv)

    setup_logging()
    try:
        if args.mode == "demo":
            run_demo()
            return 0

        config = load_config_file(Path(args.config_path))
        print(config)
        run_benchmark(
            config,
            algorithms,
            output_dir=Path(args.output_dir),
            algorithm=args.algorithm,
        )
        return 0
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
