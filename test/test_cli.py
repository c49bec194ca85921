#!/usr/bin/env python3
import os
import tempfile
import unittest

import avl_itree.cli
from avl_itree.interval_tree import IntervalTree
import avl_itree.stats


class DemoTest(unittest.TestCase):
    def setUp(self) -> None:
        self.workdir = tempfile.TemporaryDirectory()
        self.output = os.path.join(self.workdir.name, "demo.txt")

    def tearDown(self) -> None:
        self.workdir.cleanup()

    def demo(self, *args) -> int:
        with self.assertRaises(SystemExit) as system_exit:
            avl_itree.cli.main(["demo", f"--output={self.output}", *args])
        return system_exit.exception.code

    def read_output(self):
        with open(self.output) as fp:
            return fp.read().splitlines()

    def test_demo(self) -> None:
        self.assertEqual(0, self.demo("--seed=1", "--check"))
        lines = self.read_output()
        self.assertEqual("Number of the records in the tree: 100", lines[0])
        if lines[1] == "No overlapping intervals":
            self.assertEqual(2, len(lines))
        else:
            n = int(lines[1].split()[1])
            self.assertEqual(f"Found {n} overlapping intervals", lines[1])
            self.assertEqual(n + 2, len(lines))

    def test_reproducible(self) -> None:
        self.assertEqual(0, self.demo("--seed=42", "--query=0:100"))
        first = self.read_output()
        self.assertEqual(0, self.demo("--seed=42", "--query=0:100"))
        self.assertEqual(first, self.read_output())
        # Every interval lies within the default range, so all of them match
        self.assertEqual("Found 100 overlapping intervals", first[1])
        self.assertEqual(102, len(first))

    def test_no_overlap(self) -> None:
        self.assertEqual(
            0, self.demo("--seed=3", "--range=0:10", "--query=20:30")
        )
        self.assertEqual(
            [
                "Number of the records in the tree: 100",
                "No overlapping intervals",
            ],
            self.read_output(),
        )

    def test_stats(self) -> None:
        self.assertEqual(0, self.demo("--count=0", "--stats"))
        self.assertEqual(
            [
                "Number of the records in the tree: 0",
                "records=0",
                "nodes=0",
                "height=-1",
                "No overlapping intervals",
            ],
            self.read_output(),
        )

    def test_invalid_query(self) -> None:
        self.assertEqual(2, self.demo("--query=15:10"))
        self.assertEqual(2, self.demo("--query=abc"))


class StatsTest(unittest.TestCase):
    def test_gather(self) -> None:
        tree = IntervalTree()
        for low, high in ((100, 150), (75, 100), (50, 75), (50, 60)):
            tree.insert(low, high, (low, high))
        stats = avl_itree.stats.gather(tree)
        self.assertEqual(4, stats.records)
        self.assertEqual(3, stats.nodes)
        self.assertEqual(1, stats.height)
        self.assertEqual(150, stats.max)


if __name__ == "__main__":
    unittest.main()
