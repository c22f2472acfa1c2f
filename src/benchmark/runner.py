"""Benchmark the radix tree against the other key-value structures."""

import gc
import json
import random
import string
import tracemalloc
from pathlib import Path
from typing import Any, Callable, Optional

import matplotlib.pyplot as plt
import psutil

from src.benchmark import structures
from src.benchmark.config import BenchmarkConfig
from src.benchmark.logger import log

WorkloadFunction = Callable[
    [list[str], list[str], list[str]],
    structures.WorkloadResult,
]

ROOT_DIR = Path(__file__).parent.parent.parent
ALGORITHMS_CONFIG_FILE = ROOT_DIR / "algorithms.json"
OUTPUT_DIR = ROOT_DIR / "static" / "benchmarks"
MEASURED_OPERATIONS = {
    "insert_ms": "Insertion",
    "get_ms": "Exact Lookup",
    "prefix_ms": "Prefix Search",
}


def generate_keys(
    count: int,
    max_length: int,
    rng: random.Random,
    alphabet: str = string.ascii_lowercase,
) -> list[str]:
    """Generate random non-empty keys.

    Args:
        count (int): The number of keys to generate.
        max_length (int): The maximum length of a key.
        rng (random.Random): The random generator to draw from.
        alphabet (str): The characters the keys are made of.

    Returns:
        list[str]: The generated keys, duplicates included.

    """
    return [
        "".join(rng.choices(alphabet, k=rng.randint(1, max_length)))
        for _ in range(count)
    ]


def load_keys(keys_path: Path) -> list[str]:
    """Read the keys of a file, one per line, skipping blank lines.

    Args:
        keys_path (Path): The path of the keys file.

    Raises:
        FileNotFoundError: If the file does not exist.

    Returns:
        list[str]: The keys in file order.

    """
    try:
        with keys_path.open("r", encoding="utf-8") as file:
            return [line.strip() for line in file if line.strip()]
    except FileNotFoundError as e:
        raise FileNotFoundError(f"File not found: {keys_path}") from e


def build_queries(
    keys: list[str],
    config: BenchmarkConfig,
    rng: random.Random,
) -> tuple[list[str], list[str]]:
    """Build the exact lookups and the prefix queries of a benchmark.

    Half of the lookups target stored keys and half are random strings,
    which mostly miss. Prefixes are cut from stored keys.

    Args:
        keys (list[str]): The stored keys.
        config (BenchmarkConfig): The benchmark settings.
        rng (random.Random): The random generator to draw from.

    Returns:
        tuple[list[str], list[str]]: The lookups and the prefixes.

    """
    hits = config.query_count // 2
    queries = [rng.choice(keys) for _ in range(hits)]
    queries += generate_keys(
        config.query_count - hits,
        config.key_length,
        rng,
    )
    rng.shuffle(queries)

    prefixes = [
        rng.choice(keys)[: config.prefix_length]
        for _ in range(config.query_count)
    ]
    return queries, prefixes


def load_algorithms(
    algorithms_path: Path = ALGORITHMS_CONFIG_FILE,
) -> dict[str, WorkloadFunction]:
    """Load the benchmarked structures listed in the algorithms file.

    Args:
        algorithms_path (Path): A JSON file mapping display names to
        workload function names of the structures module.

    Raises:
        FileNotFoundError: If the algorithms file does not exist.

    Returns:
        dict[str, WorkloadFunction]: The workload function of every valid
        entry, keyed by display name.

    """
    if not algorithms_path.exists():
        raise FileNotFoundError(
            f"Configuration file '{algorithms_path}' not found.",
        )

    with algorithms_path.open("r", encoding="utf-8") as f:
        algorithms_config = json.load(f)

    benchmarked_algorithms: dict[str, WorkloadFunction] = {}
    for display_name, func_name_str in algorithms_config.items():
        func_obj = getattr(structures, func_name_str, None)
        if callable(func_obj):
            benchmarked_algorithms[display_name] = func_obj
        else:
            print(
                f"Warning: Function '{func_name_str}' not found in "
                "the structures module. Skipping.",
            )
    return benchmarked_algorithms


def run_workload(
    display_name: str,
    workload: WorkloadFunction,
    keys: list[str],
    queries: list[str],
    prefixes: list[str],
) -> dict[str, Any]:
    """Run one workload and measure its timings and memory usage.

    Args:
        display_name (str): The name of the benchmarked structure.
        workload (WorkloadFunction): The workload to run.
        keys (list[str]): The keys to insert.
        queries (list[str]): The keys to look up.
        prefixes (list[str]): The prefixes to search for.

    Returns:
        dict[str, Any]: The workload result extended with the peak traced
        memory and the resident set size growth, both in bytes.

    """
    gc.collect()
    process = psutil.Process()
    rss_before = process.memory_info().rss

    tracemalloc.start()
    try:
        result: dict[str, Any] = dict(workload(keys, queries, prefixes))
        _current, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()

    result["peak_memory"] = peak
    result["rss_growth"] = max(process.memory_info().rss - rss_before, 0)

    log(display_name, "insert", len(keys), result["insert_ms"])
    log(display_name, "get", len(queries), result["get_ms"])
    log(display_name, "prefix", len(prefixes), result["prefix_ms"])

    return result


def save_plots(results: dict[str, dict[str, Any]], output_dir: Path) -> None:
    """Save one bar chart per measured operation.

    Args:
        results (dict[str, dict[str, Any]]): The results per structure.
        output_dir (Path): The directory the charts are written to.

    """
    output_dir.mkdir(parents=True, exist_ok=True)
    names = list(results)
    try:
        for metric, title in MEASURED_OPERATIONS.items():
            y_values = [results[name][metric] for name in names]

            plt.figure(figsize=(8, 5))
            x = range(len(names))
            plt.bar(x, y_values, color="steelblue")
            plt.xticks(x, names)
            plt.xlabel("Structure")
            plt.ylabel("Execution Time (ms)")
            plt.title(f"{title} Time per Structure")

            for i, v in enumerate(y_values):
                plt.text(i, v + 0.01, f"{v:.2f}", ha="center", va="bottom")

            plt.tight_layout()
            graph_name = title.lower().replace(" ", "_")
            plt.savefig(output_dir / f"benchmark_{graph_name}.png")
            plt.close()
    finally:
        plt.close("all")


def save_results(
    config: BenchmarkConfig,
    results: dict[str, dict[str, Any]],
    output_dir: Path,
) -> Path:
    """Write the results of a benchmark run as JSON.

    Args:
        config (BenchmarkConfig): The settings of the run.
        results (dict[str, dict[str, Any]]): The results per structure.
        output_dir (Path): The directory of the results file.

    Returns:
        Path: The path of the written results file.

    """
    output_dir.mkdir(parents=True, exist_ok=True)
    results_json_path = output_dir / "results.json"

    with results_json_path.open("w", encoding="utf-8") as f:
        json.dump(
            {
                "data_size": config.data_size,
                "query_count": config.query_count,
                "results": results,
            },
            f,
            indent=4,
        )
    return results_json_path


def run_benchmark(
    config: BenchmarkConfig,
    algorithms: dict[str, WorkloadFunction],
    output_dir: Path = OUTPUT_DIR,
    algorithm: Optional[str] = None,
) -> dict[str, dict[str, Any]]:
    """Run the configured benchmark over the given structures.

    Args:
        config (BenchmarkConfig): The benchmark settings.
        algorithms (dict[str, WorkloadFunction]): The structures to compare.
        output_dir (Path): Where the results and charts are saved.
        algorithm (Optional[str]): Only run the structure with this
        display name.

    Raises:
        KeyError: If `algorithm` is not one of the given structures.
        ValueError: If there are no keys to insert.

    Returns:
        dict[str, dict[str, Any]]: The results per structure.

    """
    if algorithm is not None:
        if algorithm not in algorithms:
            raise KeyError(f"Unknown algorithm: '{algorithm}'.")
        algorithms = {algorithm: algorithms[algorithm]}

    rng = random.Random(config.seed)
    if config.keys_path is not None:
        keys = load_keys(config.keys_path)[: config.data_size]
    else:
        keys = generate_keys(config.data_size, config.key_length, rng)

    if not keys:
        raise ValueError("There are no keys to benchmark.")

    queries, prefixes = build_queries(keys, config, rng)

    results: dict[str, dict[str, Any]] = {}
    for display_name, workload in algorithms.items():
        print(f"\n--- Benchmarking {display_name} ---")
        result = run_workload(display_name, workload, keys, queries, prefixes)
        results[display_name] = result

        for metric, title in MEASURED_OPERATIONS.items():
            print(f"{title}: {result[metric]:.2f} ms")
        print(f"Peak memory: {result['peak_memory'] / 1024:.1f} KiB")

    if config.save_plots:
        save_plots(results, output_dir)

    results_json_path = save_results(config, results, output_dir)
    print(f"\nResults saved to {results_json_path}")

    return results
