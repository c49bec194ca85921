#!/usr/bin/env python3
import random
import uuid

import click

import avl_itree
from avl_itree.interval import Interval, InvalidInterval
from avl_itree.interval_tree import IntervalTree
import avl_itree.stats


@click.group(help="avl-itree version " + avl_itree.__version__)
def main():
    pass


class IntervalParamType(click.ParamType):
    name = "interval"

    def convert(self, value, param, ctx):
        if isinstance(value, Interval):
            return value
        try:
            low, high = value.split(":")
            low, high = int(low, 0), int(high, 0)
        except ValueError:
            self.fail(f"{value!r} is not a LOW:HIGH interval", param, ctx)
        try:
            return Interval(low, high)
        except InvalidInterval as exc:
            self.fail(str(exc), param, ctx)


def output_option(function):
    return click.option(
        "-o",
        "--output",
        default="/dev/stdout",
        help="Output file name",
    )(function)


@main.command(help="Insert random intervals and search for overlaps")
@output_option
@click.option(
    "--count",
    type=click.IntRange(min=0),
    default=100,
    help="Number of random intervals to insert",
)
@click.option(
    "--range",
    "bounds",
    type=IntervalParamType(),
    default="0:100",
    help="Bounds of the random interval endpoints",
)
@click.option(
    "--query",
    type=IntervalParamType(),
    default="10:15",
    help="Interval to search for",
)
@click.option("--seed", type=int, help="Random seed")
@click.option(
    "--stats",
    "show_stats",
    help="Show tree shape statistics",
    is_flag=True,
)
@click.option(
    "--check",
    help="Verify tree invariants after every insertion",
    is_flag=True,
)
def demo(output, count, bounds, query, seed, show_stats: bool, check: bool):
    rng = random.Random(seed)
    tree = IntervalTree()
    for _ in range(count):
        low = rng.randint(bounds.low, bounds.high)
        high = rng.randint(bounds.low, bounds.high)
        if high < low:
            low, high = high, low
        data = str(uuid.UUID(int=rng.getrandbits(128), version=4))
        tree.insert(low, high, data)
        if check:
            tree.verify()
    with open(output, "w") as fp:
        fp.write(f"Number of the records in the tree: {tree.count}\n")
        if show_stats:
            avl_itree.stats.pp(avl_itree.stats.gather(tree), fp)
        results = tree.search(query.low, query.high)
        if len(results) == 0:
            fp.write("No overlapping intervals\n")
        else:
            fp.write(f"Found {len(results)} overlapping intervals\n")
            for data in results:
                fp.write(f"{data}\n")


if __name__ == "__main__":
    main()
