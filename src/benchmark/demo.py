"""A short walkthrough of the radix tree public operations."""

import logging

from src.custom_data_structures.RadixTree.RadixTree import RadixTree

DEMO_KEYS = ["c", "c", "a", "b", "abba", "ab", "abc", "abd"]


def run_demo() -> RadixTree[str]:
    """Fill a radix tree with the demo keys and print what it answers.

    Returns:
        RadixTree[str]: The filled tree, each key mapped to key + "_".

    """
    tree: RadixTree[str] = RadixTree()
    for key in DEMO_KEYS:
        previous = tree.insert(key, key + "_")
        if previous is not None:
            logging.info("Key '%s' overwritten, was '%s'", key, previous)

    print(f"get('abba') -> {tree.get('abba')}")
    print(f"get('abbaaa') -> {tree.get('abbaaa')}")
    print(f"All keys: {tree.all_keys()}")
    print(f"All entries: {tree.all_entries()}")
    print(f"Keys under 'ab': {tree.get_by_prefix('ab').all_entries()}")

    return tree
