import weakref
from typing import Callable, Generic, Iterator, List, Optional

from avl_itree.interval import D, Record


def height(node: Optional["Node[D]"]) -> int:
    if node is None:
        return -1
    return node.height


class RootHolder(Generic[D]):
    """Owns the link to the root node.

    A node without a parent is relinked through its holder, so that deleting
    or rotating the root goes through the same path as any other node.
    """

    __slots__ = ("root",)

    def __init__(self):
        self.root: Optional[Node[D]] = None


class Node(Generic[D]):
    """AVL tree node holding every record whose interval starts at ``key``.

    ``max`` is the highest ``high`` endpoint found in the subtree rooted at
    this node. ``parent`` is a weak back-reference: a node is owned by its
    parent's ``left``/``right`` or by the ``RootHolder``.
    """

    __slots__ = (
        "key",
        "max",
        "records",
        "height",
        "left",
        "right",
        "_parent",
        "__weakref__",
    )

    def __init__(self, record: Record[D]):
        self.key = record.low
        self.max = record.high
        self.records: List[Record[D]] = [record]
        self.height = 0
        self.left: Optional[Node[D]] = None
        self.right: Optional[Node[D]] = None
        self._parent: Optional[weakref.ref] = None

    def __repr__(self) -> str:
        return (
            f"Node(key={self.key!r}, max={self.max!r}, "
            f"records={len(self.records)}, height={self.height})"
        )

    @property
    def parent(self) -> Optional["Node[D]"]:
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, node: Optional["Node[D]"]) -> None:
        if node is None:
            self._parent = None
        else:
            self._parent = weakref.ref(node)

    # --- Aggregates ---

    def node_high(self) -> float:
        """Highest ``high`` among this node's own records."""
        return max(record.high for record in self.records)

    def update_height(self) -> None:
        self.height = max(height(self.left), height(self.right)) + 1

    def update_max(self) -> None:
        m = self.node_high()
        if self.left is not None and self.left.max > m:
            m = self.left.max
        if self.right is not None and self.right.max > m:
            m = self.right.max
        self.max = m

    def update_max_of_parents(self) -> None:
        """Recompute ``max`` here and on every ancestor up to the root."""
        node: Optional[Node[D]] = self
        while node is not None:
            node.update_max()
            node = node.parent

    # --- Rotations ---

    def _replace_with(
        self, node: Optional["Node[D]"], holder: RootHolder[D]
    ) -> None:
        parent = self.parent
        if node is not None:
            node.parent = parent
        if parent is None:
            holder.root = node
        elif parent.left is self:
            parent.left = node
        else:
            parent.right = node

    def _rotate_left(self, holder: RootHolder[D]) -> None:
        #   z                y
        #  / \              / \
        # T1  y     ->     z   x
        #    / \          / \
        #   T2  x        T1 T2
        pivot = self.right
        self._replace_with(pivot, holder)
        self.right = pivot.left
        if self.right is not None:
            self.right.parent = self
        pivot.left = self
        self.parent = pivot
        self.update_height()
        pivot.update_height()

    def _rotate_right(self, holder: RootHolder[D]) -> None:
        #     z            y
        #    / \          / \
        #   y  T4   ->   x   z
        #  / \              / \
        # x  T3            T3 T4
        pivot = self.left
        self._replace_with(pivot, holder)
        self.left = pivot.right
        if self.left is not None:
            self.left.parent = self
        pivot.right = self
        self.parent = pivot
        self.update_height()
        pivot.update_height()

    def _update_max_after_rotate(self) -> None:
        # Children first: the sibling, then self, then the new parent.
        parent = self.parent
        if parent.right is self:
            sibling = parent.left
        else:
            sibling = parent.right
        if sibling is not None:
            sibling.update_max()
        self.update_max()
        parent.update_max()

    def rebalance(self, holder: RootHolder[D]) -> None:
        if height(self.left) >= height(self.right) + 2:
            left = self.left
            if height(left.left) < height(left.right):
                # Left-Right
                left._rotate_left(holder)
            self._rotate_right(holder)
            self._update_max_after_rotate()
        elif height(self.right) >= height(self.left) + 2:
            right = self.right
            if height(right.right) < height(right.left):
                # Right-Left
                right._rotate_right(holder)
            self._rotate_left(holder)
            self._update_max_after_rotate()

    def retrace(self, holder: RootHolder[D]) -> None:
        """Repair ``max``, height and balance from here up to the root."""
        node: Optional[Node[D]] = self
        while node is not None:
            node.update_max()
            node.update_height()
            parent = node.parent
            node.rebalance(holder)
            node = parent

    # --- Insertion ---

    def insert(self, record: Record[D], holder: RootHolder[D]) -> None:
        """Insert ``record`` as a new leaf below this node.

        The caller guarantees that no node with ``record.low`` exists yet.
        """
        if record.low < self.key:
            if self.left is None:
                self.left = Node(record)
                self.left.parent = self
            else:
                self.left.insert(record, holder)
        else:
            if self.right is None:
                self.right = Node(record)
                self.right.parent = self
            else:
                self.right.insert(record, holder)
        if self.max < record.high:
            self.max = record.high
        self.update_height()
        self.rebalance(holder)

    # --- Lookup ---

    def search_existing(self, key: float) -> Optional["Node[D]"]:
        node: Optional[Node[D]] = self
        while node is not None:
            if key == node.key:
                return node
            if key < node.key:
                node = node.left
            else:
                node = node.right
        return None

    def find_record(
        self, high: float, data: D, eq: Callable[[D, D], bool]
    ) -> Optional[int]:
        for i, record in enumerate(self.records):
            if record.high == high and eq(record.data, data):
                return i
        return None

    def min_node(self) -> "Node[D]":
        node = self
        while node.left is not None:
            node = node.left
        return node

    def search(self, low: float, high: float, results: List[D]) -> None:
        """Append the payloads of records overlapping [low, high]."""
        if low > self.max:
            return
        if self.left is not None and self.left.max >= low:
            self.left.search(low, high, results)
        if self.key <= high and low <= self.node_high():
            # Every record here starts at key <= high.
            for record in self.records:
                if record.interval.overlaps(low, high):
                    results.append(record.data)
        if high < self.key:
            return
        if self.right is not None:
            self.right.search(low, high, results)

    # --- Deletion ---

    def delete(self, holder: RootHolder[D]) -> None:
        """Unlink this node from the tree and rebalance."""
        if self.left is not None and self.right is not None:
            successor = self.right.min_node()
            self.key = successor.key
            self.records = successor.records
            successor.delete(holder)
            return
        parent = self.parent
        if self.left is not None:
            child = self.left
        else:
            child = self.right
        self._replace_with(child, holder)
        self.left = None
        self.right = None
        self.parent = None
        if parent is not None:
            parent.retrace(holder)

    # --- Traversal ---

    def pre_order(self) -> Iterator[D]:
        for record in self.records:
            yield record.data
        if self.left is not None:
            yield from self.left.pre_order()
        if self.right is not None:
            yield from self.right.pre_order()

    def in_order(self) -> Iterator[D]:
        if self.left is not None:
            yield from self.left.in_order()
        for record in self.records:
            yield record.data
        if self.right is not None:
            yield from self.right.in_order()
