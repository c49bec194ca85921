from dataclasses import dataclass
from typing import List, Optional

from avl_itree.interval_tree import IntervalTree
from avl_itree.node import Node


@dataclass
class TreeStats:
    records: int
    nodes: int
    height: int
    max: Optional[float]


def gather(tree: IntervalTree) -> TreeStats:
    root = tree.root
    if root is None:
        return TreeStats(records=0, nodes=0, height=-1, max=None)
    nodes = 0
    stack: List[Node] = [root]
    while len(stack) > 0:
        node = stack.pop()
        nodes += 1
        if node.left is not None:
            stack.append(node.left)
        if node.right is not None:
            stack.append(node.right)
    return TreeStats(
        records=tree.count,
        nodes=nodes,
        height=root.height,
        max=root.max,
    )


def pp(stats: TreeStats, fp) -> None:
    fp.write(f"records={stats.records}\n")
    fp.write(f"nodes={stats.nodes}\n")
    fp.write(f"height={stats.height}\n")
    if stats.max is not None:
        fp.write(f"max={stats.max}\n")
