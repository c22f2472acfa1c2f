"""Flask web application for displaying the benchmark report.

This app processes the benchmark results, generates summary statistics,
and renders an HTML report comparing the radix tree to the other
structures.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from flask import Flask, current_app, jsonify, render_template

app = Flask(__name__)
app.config["RESULTS_DIR"] = Path(__file__).parent / "static" / "benchmarks"


def process_results(results: dict[str, Any]) -> dict[str, dict[str, float]]:
    """Compute the summary metrics of each benchmarked structure.

    Args:
        results (dict): Raw results loaded from the JSON file.

    Returns:
        dict[str, dict[str, float]]: The timings of each operation,
        their total and the peak memory in MiB per structure.

    """
    processed_results: dict[str, dict[str, float]] = {}
    for structure, result in results["results"].items():
        processed_results[structure] = {
            "insert_ms": result["insert_ms"],
            "get_ms": result["get_ms"],
            "prefix_ms": result["prefix_ms"],
            "total_ms": result["insert_ms"]
            + result["get_ms"]
            + result["prefix_ms"],
            "memory_usage": result["peak_memory"] / 1024 / 1024,
        }
    return processed_results


def sort_by_total_time(
    dictionary: dict[str, dict[str, float]],
) -> dict[str, dict[str, float]]:
    """Sort structures by their total execution time (ascending).

    Args:
        dictionary (dict[str, dict[str, float]]):
        Processed results per structure.

    Returns:
        dict[str, dict[str, float]]: Sorted dictionary by total_ms.

    """
    return dict(
        sorted(
            dictionary.items(),
            key=lambda item: item[1]["total_ms"],
        ),
    )


def load_results() -> dict[str, Any] | None:
    """Load the raw results of the last benchmark run, if any."""
    results_path = Path(current_app.config["RESULTS_DIR"]) / "results.json"
    if not results_path.exists():
        return None
    with results_path.open("r", encoding="utf-8") as f:
        return dict(json.load(f))


@app.route("/")
def show_report() -> Any:
    """Render the benchmark report.

    Returns:
        Any: Rendered HTML for the report page, or a 404 response if
        the benchmark was never run.

    """
    raw_results = load_results()
    if raw_results is None:
        return "No benchmark results found, run the benchmark first.", 404

    structures = sort_by_total_time(process_results(raw_results))
    for index, structure in enumerate(structures.keys()):
        structures[structure]["index"] = index + 1

    graphs = sorted(
        path.name
        for path in Path(current_app.config["RESULTS_DIR"]).glob("*.png")
    )

    return render_template(
        "report.html",
        report_date=datetime.now().strftime("%B %d, %Y"),
        data_size=raw_results["data_size"],
        query_count=raw_results["query_count"],
        structures=structures,
        graphs=graphs,
    )


@app.route("/results")
def show_results() -> Any:
    """Return the raw results of the last benchmark run as JSON."""
    raw_results = load_results()
    if raw_results is None:
        return jsonify({"error": "No benchmark results found."}), 404
    return jsonify(raw_results)


if __name__ == "__main__":
    """Run the Flask application."""
    app.run(debug=True)
