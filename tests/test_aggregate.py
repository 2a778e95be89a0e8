import random

import pytest

from orbit_map.core.orbits import aggregate, ingest, transform
from orbit_map.core.schemas import TreeNode


def total_for(lines, **kwargs):
    tree = transform.build_tree(ingest.parse_lines(lines))
    return aggregate.count_total_orbits(tree, **kwargs)


def ancestor_count_total(lines):
    """Brute force: walk every body up to the root"""
    parents = {child: parent for parent, child in (line.split(")") for line in lines)}
    total = 0
    for body in parents:
        while body in parents:
            body = parents[body]
            total += 1
    return total


def test_empty_tree():
    assert aggregate.count_total_orbits([]) == 0


def test_single_body():
    assert total_for(["COM)A"]) == 1


def test_reference_map(reference_lines):
    assert total_for(reference_lines) == 42


def test_reference_map_with_you_and_san(reference_lines):
    """YOU orbits K (depth 7), SAN orbits I (depth 5)"""
    assert total_for(reference_lines + ["K)YOU", "I)SAN"]) == 42 + 7 + 5


def test_chain(chain_lines):
    assert total_for(chain_lines) == sum(range(1, 12))


def test_chain_with_you_and_san(chain_lines):
    """YOU orbits K (depth 11), SAN orbits I (depth 9)"""
    assert total_for(chain_lines + ["K)YOU", "I)SAN"]) == 66 + 11 + 9


def test_total_matches_ancestor_count(reference_lines):
    lines = reference_lines + ["K)YOU", "I)SAN", "COM)X", "X)Y"]
    assert total_for(lines) == ancestor_count_total(lines)


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_total_ignores_line_order(reference_lines, seed):
    lines = list(reference_lines)
    random.Random(seed).shuffle(lines)
    assert total_for(lines) == 42


def test_count_orbits_to_root_depth():
    node = TreeNode(name="B", children=(TreeNode(name="C", children=(TreeNode(name="D"),)),))
    assert aggregate.count_orbits_to_root(node) == 1 + 2 + 3
    assert aggregate.count_orbits_to_root(node, depth=0) == 0 + 1 + 2


def test_starting_depth(reference_lines):
    # 11 bodies, each one level shallower
    assert total_for(reference_lines, starting_depth=0) == 42 - 11


def test_count_bodies_and_max_depth(reference_lines):
    tree = transform.build_tree(ingest.parse_lines(reference_lines))
    assert aggregate.count_bodies(tree) == 11
    assert aggregate.max_depth(tree) == 7
    assert aggregate.max_depth([]) == 0


def test_flatten_tree_order_and_depth(reference_lines):
    tree = transform.build_tree(ingest.parse_lines(reference_lines))
    rows = aggregate.flatten_tree(tree, "COM")

    assert [row["name"] for row in rows] == ["B", "C", "D", "E", "F", "J", "K", "L", "I", "G", "H"]
    assert rows[0] == {"name": "B", "parent": "COM", "depth": 1}
    assert sum(row["depth"] for row in rows) == 42


def test_flatten_tree_starting_depth():
    rows = aggregate.flatten_tree([TreeNode(name="EARTH")], "SUN", starting_depth=0)
    assert rows == [{"name": "EARTH", "parent": "SUN", "depth": 0}]


def test_flatten_empty_tree():
    assert aggregate.flatten_tree([], "COM") == []
