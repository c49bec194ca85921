import operator
from typing import Callable, Generic, Iterator, List, Optional, Tuple

from avl_itree.interval import D, Interval, Record
from avl_itree.node import height, Node, RootHolder


class IntervalTree(Generic[D]):
    """Augmented AVL tree of ``[low, high]`` intervals carrying payloads.

    The same interval may be stored several times as long as the payloads
    differ according to ``eq``. Insertion and deletion take O(log n) time,
    searching takes O(k log n) time, where ``k`` is the number of matches.
    """

    def __init__(self, eq: Callable[[D, D], bool] = operator.eq):
        self.holder: RootHolder[D] = RootHolder()
        self.eq = eq
        self._count = 0

    @property
    def root(self) -> Optional[Node[D]]:
        return self.holder.root

    @property
    def count(self) -> int:
        """Number of records (not nodes) in the tree."""
        return self._count

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[D]:
        return self.in_order()

    def insert(self, low: float, high: float, data: D) -> bool:
        """Add a record; returns False if an identical one is present."""
        record = Record(Interval(low, high), data)
        root = self.holder.root
        if root is None:
            self.holder.root = Node(record)
            self._count += 1
            return True
        node = root.search_existing(low)
        if node is None:
            root.insert(record, self.holder)
        else:
            if node.find_record(high, data, self.eq) is not None:
                return False
            node.records.append(record)
            if high > node.max:
                node.update_max_of_parents()
        self._count += 1
        return True

    def search(self, low: float, high: Optional[float] = None) -> List[D]:
        """Return the payloads of all records overlapping [low, high].

        With ``high`` omitted, returns the records containing the point
        ``low``. Results are ordered by ``low``, ties by insertion order.
        """
        if high is None:
            high = low
        results: List[D] = []
        if self.holder.root is None or low > high:
            return results
        self.holder.root.search(low, high, results)
        return results

    def remove(self, low: float, high: float, data: D) -> bool:
        """Remove a record; returns False if there is no such record."""
        root = self.holder.root
        if root is None:
            return False
        node = root.search_existing(low)
        if node is None:
            return False
        i = node.find_record(high, data, self.eq)
        if i is None:
            return False
        if len(node.records) > 1:
            removed = node.records.pop(i)
            if removed.high == node.max:
                node.update_max_of_parents()
        else:
            node.delete(self.holder)
        self._count -= 1
        return True

    def pre_order(self) -> Iterator[D]:
        if self.holder.root is not None:
            yield from self.holder.root.pre_order()

    def in_order(self) -> Iterator[D]:
        if self.holder.root is not None:
            yield from self.holder.root.in_order()

    # --- Debug Tool ---

    def verify(self) -> None:
        """Raise RuntimeError if any tree invariant is violated."""

        def _walk(
            node: Node[D], lower: Optional[float], upper: Optional[float]
        ) -> Tuple[int, float, int]:
            if not node.records:
                raise RuntimeError(f"Empty node at {node.key}")
            for record in node.records:
                if record.low != node.key:
                    raise RuntimeError(f"Record {record} misplaced at {node.key}")
            if (lower is not None and node.key <= lower) or (
                upper is not None and node.key >= upper
            ):
                raise RuntimeError(f"BST violation at {node.key}")
            expected_height = 0
            expected_max = node.node_high()
            n = len(node.records)
            for child, child_lower, child_upper in (
                (node.left, lower, node.key),
                (node.right, node.key, upper),
            ):
                if child is None:
                    continue
                if child.parent is not node:
                    raise RuntimeError(f"Parent link violation at {child.key}")
                child_height, child_max, child_n = _walk(
                    child, child_lower, child_upper
                )
                expected_height = max(expected_height, child_height + 1)
                expected_max = max(expected_max, child_max)
                n += child_n
            if abs(height(node.left) - height(node.right)) > 1:
                raise RuntimeError(f"AVL violation at {node.key}")
            if node.height != expected_height:
                raise RuntimeError(f"Height violation at {node.key}")
            if node.max != expected_max:
                raise RuntimeError(f"Max violation at {node.key}")
            return expected_height, expected_max, n

        root = self.holder.root
        if root is None:
            n = 0
        else:
            if root.parent is not None:
                raise RuntimeError(f"Root {root.key} has a parent")
            _, _, n = _walk(root, None, None)
        if n != self._count:
            raise RuntimeError(f"Count violation: {self._count} != {n}")
