from typing import Any, Dict, List, Tuple

from orbit_map.core.schemas import TreeNode


# -----------------------------------------------------------------------------
# AGGREGATE MODULE
# Purpose: turn the built tree into orbit counts.
# Every body at depth d has one direct orbit and d - 1 indirect ones, so the
# total is the sum of all depths.
# -----------------------------------------------------------------------------


def count_orbits_to_root(node: TreeNode, depth: int = 1) -> int:
    """
    Sum the depths of every body in the subtree of node.

    node itself sits at depth (1 = orbits the root directly); each level
    below adds one.

    Example:
        B → C → D with depth=1 → 1 + 2 + 3 = 6
    """
    total = 0
    stack: List[Tuple[TreeNode, int]] = [(node, depth)]
    while stack:
        current, current_depth = stack.pop()
        total += current_depth
        for child in current.children:
            stack.append((child, current_depth + 1))
    return total


def count_total_orbits(tree: List[TreeNode], starting_depth: int = 1) -> int:
    """Total number of direct and indirect orbits in the map."""
    return sum(count_orbits_to_root(root, starting_depth) for root in tree)


def count_bodies(tree: List[TreeNode]) -> int:
    """Number of bodies in the tree (the root sentinel is not a body)."""
    total = 0
    stack = list(tree)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.children)
    return total


def max_depth(tree: List[TreeNode], starting_depth: int = 1) -> int:
    """Depth of the deepest body, 0 for an empty tree."""
    deepest = 0
    stack: List[Tuple[TreeNode, int]] = [(root, starting_depth) for root in tree]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        for child in node.children:
            stack.append((child, depth + 1))
    return deepest


def flatten_tree(
    tree: List[TreeNode], root_identifier: str, starting_depth: int = 1
) -> List[Dict[str, Any]]:
    """
    One row per body, parents before children, siblings in tree order.

    Rows never nest, so arbitrarily deep maps serialize without recursion.

    Example:
        COM → B → C  →  [{"name": "B", "parent": "COM", "depth": 1},
                         {"name": "C", "parent": "B", "depth": 2}]
    """
    rows: List[Dict[str, Any]] = []
    stack: List[Tuple[TreeNode, str, int]] = [
        (root, root_identifier, starting_depth) for root in reversed(tree)
    ]
    while stack:
        node, parent, depth = stack.pop()
        rows.append({"name": node.name, "parent": parent, "depth": depth})
        for child in reversed(node.children):
            stack.append((child, node.name, depth + 1))
    return rows
