import pytest

from src.custom_data_structures.RadixTree.RadixTree import (
    EmptyKeyError,
    InvalidArgumentError,
    InvalidKeyError,
    MissingValueError,
    RadixTree,
    RadixTreeNode,
)


def check_structure(node, is_root=True):
    """Assert the structural invariants of a subtree."""
    if not is_root:
        assert node.label != ""
        # Nodes without a value only exist to host a shared prefix
        if node.value is None:
            assert len(node.children) >= 2

    labels = [child.label for child in node.children]
    assert labels == sorted(labels)
    first_chars = [label[0] for label in labels]
    assert len(first_chars) == len(set(first_chars))

    for child in node.children:
        check_structure(child, is_root=False)


# Test overwriting an existing key
def test_insert_same_key_twice():
    tree = RadixTree()
    assert tree.insert("c", "c_") is None
    assert tree.insert("c", "c2") == "c_"

    assert tree.get("c") == "c2"
    assert tree.all_entries() == {"c": "c2"}
    assert len(tree) == 1


def test_demo_scenario(demo_tree):
    assert demo_tree.get("abba") == "abba_"
    assert demo_tree.get("abbaaa") is None
    assert demo_tree.all_keys() == ["a", "ab", "abba", "abc", "abd", "b"]
    check_structure(demo_tree.root)


def test_demo_tree_shape(demo_tree):
    # root -> a -> b -> (ba, c, d), root -> b
    a_node, b_node = demo_tree.root.children
    assert (a_node.label, a_node.value) == ("a", "a_")
    assert (b_node.label, b_node.value) == ("b", "b_")

    (ab_node,) = a_node.children
    assert (ab_node.label, ab_node.value) == ("b", "ab_")
    assert [child.label for child in ab_node.children] == ["ba", "c", "d"]
    assert demo_tree.root.count_nodes() == 7


# Test inserting a key that ends inside an existing edge
def test_insert_prefix_of_existing_key_splits_node():
    tree = RadixTree()
    tree.insert("abba", "abba_")
    tree.insert("ab", "ab_")

    (ab_node,) = tree.root.children
    assert ab_node.label == "ab"
    assert ab_node.value == "ab_"
    (ba_node,) = ab_node.children
    assert ba_node.label == "ba"
    assert ba_node.value == "abba_"

    assert tree.get("ab") == "ab_"
    assert tree.get("abba") == "abba_"


# Test inserting a key that diverges from an existing edge
def test_insert_divergent_key_creates_branch_node():
    tree = RadixTree()
    tree.insert("abd", "abd_")
    tree.insert("abc", "abc_")

    (branch,) = tree.root.children
    assert branch.label == "ab"
    assert branch.value is None
    assert [child.label for child in branch.children] == ["c", "d"]

    assert tree.get("ab") is None
    assert tree.get("abc") == "abc_"
    assert tree.get("abd") == "abd_"
    assert tree.all_keys() == ["abc", "abd"]


def test_insert_extension_of_existing_key_adds_child():
    tree = RadixTree()
    tree.insert("ab", "ab_")
    tree.insert("abba", "abba_")

    (ab_node,) = tree.root.children
    assert [child.label for child in ab_node.children] == ["ba"]
    assert tree.get("abba") == "abba_"


def test_overwrite_keeps_children():
    tree = RadixTree()
    for key in ["ab", "abc", "abd"]:
        tree.insert(key, key + "_")

    assert tree.insert("ab", "new") == "ab_"
    assert tree.all_entries() == {"ab": "new", "abc": "abc_", "abd": "abd_"}


def test_overwrite_branch_node_value():
    tree = RadixTree()
    tree.insert("abc", "abc_")
    tree.insert("abd", "abd_")

    # "ab" is a branch node with no value yet
    assert tree.insert("ab", "ab_") is None
    assert tree.get("ab") == "ab_"
    assert len(tree) == 3


# Test keys that are strict prefixes or extensions of stored keys
@pytest.mark.parametrize(
    "query",
    ["a", "ab", "abb", "abbaa", "abbab", "x", ""],
)
def test_get_without_exact_match(query):
    tree = RadixTree()
    tree.insert("abba", "abba_")
    assert tree.get(query) is None
    assert query not in tree


def test_falsy_values_are_stored():
    tree = RadixTree()
    tree.insert("zero", 0)
    tree.insert("empty", "")

    assert tree.get("zero") == 0
    assert tree.get("empty") == ""
    assert "zero" in tree
    assert tree.all_entries() == {"empty": "", "zero": 0}


def test_ordinal_ordering():
    tree = RadixTree()
    for key in ["b", "a", "Z", "B", "aa", "A", "é"]:
        tree.insert(key, key)
    assert tree.all_keys() == ["A", "B", "Z", "a", "aa", "b", "é"]


def test_random_insertions(random_keys):
    tree = RadixTree()
    expected = {}
    for index, key in enumerate(random_keys):
        previous = tree.insert(key, index)
        assert previous == expected.get(key)
        expected[key] = index

    check_structure(tree.root)
    assert tree.all_keys() == sorted(expected)
    assert tree.all_entries() == expected
    assert list(tree) == sorted(expected)
    assert len(tree) == len(expected)
    for key, value in expected.items():
        assert tree.get(key) == value


def test_insertion_order_does_not_matter(random_keys):
    forward = RadixTree()
    backward = RadixTree()
    for key in random_keys:
        forward.insert(key, key)
    for key in reversed(random_keys):
        backward.insert(key, key)

    assert list(forward.all_entries().items()) == list(
        backward.all_entries().items(),
    )


def test_deep_tree():
    tree = RadixTree()
    keys = ["a" * length for length in range(1, 1201)]
    for key in keys:
        tree.insert(key, len(key))

    assert len(tree.all_keys()) == 1200
    assert tree.get("a" * 1200) == 1200
    assert len(tree.get_by_prefix("a" * 600)) == 601


# Test the subtree of keys starting with a prefix
def test_get_by_prefix_on_node_boundary():
    tree = RadixTree()
    for key in ["ab", "abba", "abla", "abc", "abd", "abe"]:
        tree.insert(key, key + "_")

    assert tree.get_by_prefix("abc").all_entries() == {"": "abc_"}

    tree.insert("abc123", "abc123_")
    assert tree.get_by_prefix("abc").all_entries() == {
        "": "abc_",
        "123": "abc123_",
    }
    assert tree.get_by_prefix("ab").all_keys() == [
        "",
        "ba",
        "c",
        "c123",
        "d",
        "e",
        "la",
    ]


def test_get_by_prefix_inside_an_edge():
    tree = RadixTree()
    tree.insert("abba", "abba_")
    tree.insert("abbey", "abbey_")

    subtree = tree.get_by_prefix("ab")
    assert subtree.all_entries() == {"ba": "abba_", "bey": "abbey_"}
    assert subtree.get("ba") == "abba_"

    subtree = tree.get_by_prefix("abbe")
    assert subtree.all_entries() == {"y": "abbey_"}
    check_structure(subtree.root)


def test_get_by_prefix_without_match(demo_tree):
    subtree = demo_tree.get_by_prefix("abz")
    assert subtree.all_entries() == {}
    assert len(subtree) == 0

    assert demo_tree.get_by_prefix("abbaa").all_entries() == {}


def test_get_by_prefix_empty_prefix(demo_tree):
    subtree = demo_tree.get_by_prefix("")
    assert subtree.all_entries() == demo_tree.all_entries()


def test_get_by_prefix_returns_a_copy(demo_tree):
    subtree = demo_tree.get_by_prefix("ab")
    subtree.insert("zz", "zz_")
    demo_tree.insert("abyy", "abyy_")

    assert subtree.get("zz") == "zz_"
    assert subtree.get("yy") is None
    assert demo_tree.get("abzz") is None
    assert demo_tree.get("abyy") == "abyy_"
    assert len(subtree) == 5
    assert len(demo_tree) == 7


@pytest.mark.parametrize("prefix", ["", "a", "ab", "abc", "b", "ca", "cab"])
def test_get_by_prefix_matches_filtering(random_keys, prefix):
    tree = RadixTree()
    for key in random_keys:
        tree.insert(key, key + "_")

    expected = {
        key[len(prefix) :]: key + "_"
        for key in sorted(set(random_keys))
        if key.startswith(prefix)
    }
    subtree = tree.get_by_prefix(prefix)
    assert list(subtree.all_entries().items()) == list(expected.items())
    assert len(subtree) == len(expected)


# Test invalid arguments
def test_insert_empty_key():
    tree = RadixTree()
    with pytest.raises(EmptyKeyError):
        tree.insert("", "value")
    assert tree.all_entries() == {}


def test_insert_none_value():
    tree = RadixTree()
    with pytest.raises(MissingValueError) as excinfo:
        tree.insert("x", None)
    assert "'x'" in str(excinfo.value)
    assert tree.get("x") is None


@pytest.mark.parametrize("key", [None, 42, b"bytes"])
def test_invalid_keys(key):
    tree = RadixTree()
    with pytest.raises(InvalidKeyError):
        tree.insert(key, "value")
    with pytest.raises(InvalidKeyError):
        tree.get(key)
    with pytest.raises(InvalidKeyError):
        tree.get_by_prefix(key)
    assert key not in tree


def test_errors_are_value_errors():
    for error in (EmptyKeyError, InvalidKeyError, MissingValueError):
        assert issubclass(error, InvalidArgumentError)
        assert issubclass(error, ValueError)


# Test the node helpers
def test_find_prefix():
    tree = RadixTree()
    tree.insert("abba", "abba_")
    tree.insert("abc", "abc_")

    node, pending = tree.root.find_prefix("abb")
    assert node.label == "ba"
    assert pending == "a"

    node, pending = tree.root.find_prefix("abc")
    assert node.value == "abc_"
    assert pending == ""

    assert tree.root.find_prefix("") == (tree.root, "")
    assert tree.root.find_prefix("abd") is None
    assert tree.root.find_prefix("abcd") is None


def test_collect_with_prefix(demo_tree):
    (a_node, _b_node) = demo_tree.root.children
    assert list(a_node.collect("x")) == [
        ("xa", "a_"),
        ("xab", "ab_"),
        ("xabba", "abba_"),
        ("xabc", "abc_"),
        ("xabd", "abd_"),
    ]


def test_node_repr():
    node = RadixTreeNode("ab", "ab_")
    node.children = [RadixTreeNode("c", "abc_")]
    assert repr(node) == "{ab: ab_ [1 children]}"
    assert repr(RadixTreeNode("ab")) == "{ab}"


def test_tree_repr(demo_tree):
    assert repr(RadixTree()) == "RadixTree({})"
    assert repr(demo_tree).startswith("RadixTree({'a': 'a_', 'ab': 'ab_'")
