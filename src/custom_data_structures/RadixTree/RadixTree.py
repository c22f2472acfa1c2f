"""This module represents the implementation of a radix tree (compressed
trie) that maps string keys to values and supports fast exact lookups,
prefix searches and ordered enumeration of its entries.
"""

import bisect
from collections.abc import Iterator
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class InvalidArgumentError(ValueError):
    """Raised when a caller passes an argument the tree cannot accept."""


class EmptyKeyError(InvalidArgumentError):
    """Raised when trying to insert an empty key."""


class InvalidKeyError(InvalidArgumentError):
    """Raised when the given key is missing or is not a string."""


class MissingValueError(InvalidArgumentError):
    """Raised when trying to insert a key without a value."""


def _first_char(node: "RadixTreeNode[Any]") -> str:
    return node.label[0]


def _label(node: "RadixTreeNode[Any]") -> str:
    return node.label


def _common_prefix_length(first: str, second: str) -> int:
    """Return the length of the longest common prefix of two strings."""
    length = 0
    limit = min(len(first), len(second))
    while length < limit and first[length] == second[length]:
        length += 1
    return length


class RadixTreeNode(Generic[T]):
    """Represent a node in the radix tree structure."""

    __slots__ = ("label", "value", "children")

    def __init__(self, label: str = "", value: Optional[T] = None) -> None:
        """Initialize a new radix tree node.

        Attributes:
            label (str): The part of the key consumed between the parent
            and this node. The absolute key of a node is the concatenation
            of the labels from the root down to it.
            value (Optional[T]): The value stored for the absolute key of
            this node, or None if the node only hosts a shared prefix.
            children (list[RadixTreeNode]): The child nodes, sorted by
            label. No two children start with the same character.

        """
        self.label = label
        self.value = value
        self.children: list[RadixTreeNode[T]] = []

    def _child_index(self, char: str) -> int:
        """Return the position of the child starting with `char`,
        or -1 if there is none.
        """
        index = bisect.bisect_left(self.children, char, key=_first_char)
        if (
            index < len(self.children)
            and self.children[index].label[0] == char
        ):
            return index
        return -1

    def find_prefix(
        self,
        search: str,
    ) -> Optional[tuple["RadixTreeNode[T]", str]]:
        """Locate the node reached by descending along `search`.

        Args:
            search (str): The string to locate, relative to the end of
            this node's label.

        Returns:
            Optional[tuple[RadixTreeNode, str]]: The reached node together
            with the part of its label left over once `search` is
            exhausted ("" when `search` ends exactly on the node), or
            None if `search` diverges from every path of the subtree.

        """
        node = self
        while search:
            index = node._child_index(search[0])
            if index < 0:
                return None

            child = node.children[index]
            matched = _common_prefix_length(child.label, search)

            if matched == len(search):
                # The search ends on this edge
                return child, child.label[matched:]
            if matched < len(child.label):
                return None

            search = search[matched:]
            node = child

        return node, ""

    def insert(self, key: str, value: T) -> Optional[T]:
        """Insert a key with its value into the subtree of this node.

        Args:
            key (str): The key to insert, relative to the end of this
            node's label.
            value (T): The value to associate with the key.

        Returns:
            Optional[T]: The value previously stored for the key,
            or None if the key was not present.

        """
        node = self
        while key:
            index = node._child_index(key[0])

            # No child shares the first character: add a new leaf
            if index < 0:
                leaf = RadixTreeNode(key, value)
                bisect.insort(node.children, leaf, key=_label)
                return None

            child = node.children[index]
            matched = _common_prefix_length(child.label, key)

            # The whole edge matches, keep descending
            if matched == len(child.label):
                key = key[matched:]
                node = child
                continue

            # The key ends inside the edge: split it
            if matched == len(key):
                replacement = RadixTreeNode(key, value)
                child.label = child.label[matched:]
                replacement.children = [child]
                node.children[index] = replacement
                return None

            # The key and the edge diverge after a common prefix
            branch: RadixTreeNode[T] = RadixTreeNode(key[:matched])
            child.label = child.label[matched:]
            leaf = RadixTreeNode(key[matched:], value)
            if child.label < leaf.label:
                branch.children = [child, leaf]
            else:
                branch.children = [leaf, child]
            node.children[index] = branch
            return None

        previous = node.value
        node.value = value
        return previous

    def collect(self, prefix: str = "") -> Iterator[tuple[str, T]]:
        """Enumerate the entries of the subtree in ascending key order.

        Args:
            prefix (str): The absolute key of this node's parent.

        Yields:
            tuple[str, T]: The absolute key and the value of every node
            of the subtree (this one included) that holds a value.

        """
        stack = [(prefix, self)]
        while stack:
            parent_key, node = stack.pop()
            absolute_key = parent_key + node.label
            if node.value is not None:
                yield absolute_key, node.value
            # Reversed so that the smallest child is popped first
            for child in reversed(node.children):
                stack.append((absolute_key, child))

    def copy(self, label: Optional[str] = None) -> "RadixTreeNode[T]":
        """Return a structural copy of the subtree rooted at this node.

        Args:
            label (Optional[str]): The label of the copied root,
            defaults to the label of this node.

        Returns:
            RadixTreeNode: The copied root. Values are shared with the
            original subtree, nodes are not.

        """
        root = RadixTreeNode(
            self.label if label is None else label,
            self.value,
        )
        stack = [(self, root)]
        while stack:
            source, target = stack.pop()
            for child in source.children:
                child_copy = RadixTreeNode(child.label, child.value)
                target.children.append(child_copy)
                stack.append((child, child_copy))
        return root

    def count_nodes(self) -> int:
        """Return the number of nodes in the subtree, this one included."""
        total = 0
        stack = [self]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.children)
        return total

    def __repr__(self) -> str:
        value = f": {self.value}" if self.value is not None else ""
        children = (
            f" [{len(self.children)} children]" if self.children else ""
        )
        return "{" + self.label + value + children + "}"


class RadixTree(Generic[T]):
    """Represents the radix tree data structure."""

    def __init__(self) -> None:
        """Initialize the empty root node of the radix tree."""
        self.root: RadixTreeNode[T] = RadixTreeNode()
        self._size = 0

    @classmethod
    def _from_root(cls, root: RadixTreeNode[T]) -> "RadixTree[T]":
        tree: RadixTree[T] = cls()
        tree.root = root
        tree._size = sum(1 for _ in root.collect())
        return tree

    def insert(self, key: str, value: T) -> Optional[T]:
        """Insert a new key into the radix tree, or overwrite its value.

        Args:
            key (str): The key to insert, it must be a non-empty string.
            value (T): The value associated with the key,
            it cannot be None.

        Raises:
            InvalidKeyError: If the key is not a string.
            EmptyKeyError: If the key is empty.
            MissingValueError: If the value is None.

        Returns:
            Optional[T]: The value previously stored for the same key,
            or None if the key was not present.

        """
        if not isinstance(key, str):
            raise InvalidKeyError(
                f"The key must be a string, got {type(key).__name__}.",
            )
        if not key:
            raise EmptyKeyError("The key cannot be empty.")
        if value is None:
            raise MissingValueError(
                f"The value for the key '{key}' cannot be None.",
            )

        previous = self.root.insert(key, value)
        if previous is None:
            self._size += 1
        return previous

    def get(self, key: str) -> Optional[T]:
        """Return the value stored for the exact given key.

        Args:
            key (str): The key to look for.

        Raises:
            InvalidKeyError: If the key is not a string.

        Returns:
            Optional[T]: The value stored for the key, or None if the key
            was never inserted (even when it is the prefix of another key).

        """
        if not isinstance(key, str):
            raise InvalidKeyError(
                f"The key must be a string, got {type(key).__name__}.",
            )

        found = self.root.find_prefix(key)
        if found is None:
            return None

        node, pending = found
        # A pending label means the key stops in the middle of an edge
        if pending:
            return None
        return node.value

    def all_keys(self) -> list[str]:
        """Return all the stored keys, in ascending order."""
        return [key for key, _ in self.root.collect()]

    def all_entries(self) -> dict[str, T]:
        """Return all the stored entries, ordered by ascending key.

        Returns:
            dict[str, T]: A mapping of every stored key to its value,
            whose iteration order is the ascending order of the keys.

        """
        return dict(self.root.collect())

    def get_by_prefix(self, prefix: str) -> "RadixTree[T]":
        """Return the subtree of all the keys starting with a prefix.

        The returned tree is a copy re-keyed relative to the prefix: its
        entries are the suffixes that follow `prefix` in the stored keys,
        the key equal to `prefix` itself (if stored) becoming "".

        Args:
            prefix (str): The prefix to search for.

        Raises:
            InvalidKeyError: If the prefix is not a string.

        Returns:
            RadixTree[T]: A new tree with the matching suffixes,
            empty if no key starts with `prefix`.

        """
        if not isinstance(prefix, str):
            raise InvalidKeyError(
                f"The prefix must be a string, got {type(prefix).__name__}.",
            )

        found = self.root.find_prefix(prefix)
        if found is None:
            return type(self)()

        node, pending = found
        if not pending:
            return self._from_root(node.copy(label=""))

        # The prefix stops inside an edge, the rest of it leads the suffixes
        root: RadixTreeNode[T] = RadixTreeNode()
        root.children = [node.copy(label=pending)]
        return self._from_root(root)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self.root.collect())

    def __repr__(self) -> str:
        return f"RadixTree({self.all_entries()!r})"
