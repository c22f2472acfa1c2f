import random

import pytest

from src.custom_data_structures.RadixTree.RadixTree import RadixTree

# Keys of the demo scenario, in insertion order
DEMO_KEYS = ["a", "b", "abba", "ab", "abc", "abd"]


@pytest.fixture
def demo_tree() -> RadixTree[str]:
    """A tree holding the demo keys, each mapped to key + "_"."""
    tree: RadixTree[str] = RadixTree()
    for key in DEMO_KEYS:
        tree.insert(key, key + "_")
    return tree


@pytest.fixture
def random_keys() -> list[str]:
    """Random short keys over a small alphabet, so that many of them
    share prefixes and some of them repeat.
    """
    rng = random.Random(1234)
    return [
        "".join(rng.choices("abc", k=rng.randint(1, 6))) for _ in range(500)
    ]
