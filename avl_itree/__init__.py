from avl_itree.interval import Interval, InvalidInterval, Record
from avl_itree.interval_tree import IntervalTree
from avl_itree.node import Node

__version__ = "0.1.0"

__all__ = [
    "Interval",
    "IntervalTree",
    "InvalidInterval",
    "Node",
    "Record",
]
