"""Different key-value structures to be compared by the benchmark.

Every workload function receives the same keys and queries, builds its
structure, and measures the three operations the radix tree is designed
for: insertion, exact lookup and prefix search.
"""

import bisect
import time

from src.custom_data_structures.RadixTree.RadixTree import RadixTree

WorkloadResult = dict[str, float | int]


class WorkloadError(Exception):
    """Raised when a workload fails while running its operations."""


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def radix_tree_search(
    keys: list[str],
    queries: list[str],
    prefixes: list[str],
) -> WorkloadResult:
    """Insert all the keys into a radix tree and query it.

    Prefix queries walk down to the matching subtree only, so their cost
    depends on the number of matches rather than on the number of keys.

    Args:
        keys (list[str]): The keys to insert, they must not be empty.
        queries (list[str]): The keys to look up.
        prefixes (list[str]): The prefixes to search for.

    Raises:
        WorkloadError: If an error occurs while running the workload.

    Returns:
        WorkloadResult: The timings of each operation in milliseconds,
        the number of lookup hits and the number of prefix matches.

    """
    tree: RadixTree[str] = RadixTree()
    try:
        start = time.perf_counter()
        for key in keys:
            tree.insert(key, key + "_")
        insert_ms = _elapsed_ms(start)

        start = time.perf_counter()
        hits = sum(1 for query in queries if tree.get(query) is not None)
        get_ms = _elapsed_ms(start)

        start = time.perf_counter()
        matches = sum(len(tree.get_by_prefix(prefix)) for prefix in prefixes)
        prefix_ms = _elapsed_ms(start)

    except Exception as e:
        raise WorkloadError(f"An error occurred: {e!s}") from e

    return {
        "insert_ms": insert_ms,
        "get_ms": get_ms,
        "prefix_ms": prefix_ms,
        "hits": hits,
        "prefix_matches": matches,
        "entries": len(tree),
    }


def hash_table_search(
    keys: list[str],
    queries: list[str],
    prefixes: list[str],
) -> WorkloadResult:
    """Map all the keys to a hash table (dict) and query it.

    Exact lookups are constant time, but a hash table keeps no order, so
    every prefix query has to scan all of its keys.

    Args:
        keys (list[str]): The keys to insert.
        queries (list[str]): The keys to look up.
        prefixes (list[str]): The prefixes to search for.

    Raises:
        WorkloadError: If an error occurs while running the workload.

    Returns:
        WorkloadResult: The timings of each operation in milliseconds,
        the number of lookup hits and the number of prefix matches.

    """
    table: dict[str, str] = {}
    try:
        start = time.perf_counter()
        for key in keys:
            table[key] = key + "_"
        insert_ms = _elapsed_ms(start)

        start = time.perf_counter()
        hits = sum(1 for query in queries if table.get(query) is not None)
        get_ms = _elapsed_ms(start)

        start = time.perf_counter()
        matches = 0
        for prefix in prefixes:
            matches += sum(1 for key in table if key.startswith(prefix))
        prefix_ms = _elapsed_ms(start)

    except Exception as e:
        raise WorkloadError(f"An error occurred: {e!s}") from e

    return {
        "insert_ms": insert_ms,
        "get_ms": get_ms,
        "prefix_ms": prefix_ms,
        "hits": hits,
        "prefix_matches": matches,
        "entries": len(table),
    }


def sorted_list_search(
    keys: list[str],
    queries: list[str],
    prefixes: list[str],
) -> WorkloadResult:
    """Keep the keys in a sorted list and query it with binary search.

    Args:
        keys (list[str]): The keys to insert.
        queries (list[str]): The keys to look up.
        prefixes (list[str]): The prefixes to search for.

    Raises:
        WorkloadError: If an error occurs while running the workload.

    Returns:
        WorkloadResult: The timings of each operation in milliseconds,
        the number of lookup hits and the number of prefix matches.

    """
    try:
        start = time.perf_counter()
        # Duplicated keys are stored once, as in the other structures
        sorted_keys = sorted(set(keys))
        insert_ms = _elapsed_ms(start)

        start = time.perf_counter()
        hits = 0
        for query in queries:
            index = bisect.bisect_left(sorted_keys, query)
            if index < len(sorted_keys) and sorted_keys[index] == query:
                hits += 1
        get_ms = _elapsed_ms(start)

        start = time.perf_counter()
        matches = 0
        for prefix in prefixes:
            index = bisect.bisect_left(sorted_keys, prefix)
            while index < len(sorted_keys) and sorted_keys[index].startswith(
                prefix,
            ):
                matches += 1
                index += 1
        prefix_ms = _elapsed_ms(start)

    except Exception as e:
        raise WorkloadError(f"An error occurred: {e!s}") from e

    return {
        "insert_ms": insert_ms,
        "get_ms": get_ms,
        "prefix_ms": prefix_ms,
        "hits": hits,
        "prefix_matches": matches,
        "entries": len(sorted_keys),
    }
