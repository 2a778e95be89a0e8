# orbit_map/core/orbits/transform.py
"""
TRANSFORM MODULE - Turn a flat relationship list into a rooted tree

Purpose:
    1. Index relationships by parent (one linear pass)
    2. Materialize fresh, immutable TreeNodes from the root down
    3. Catch cycles and bodies that never connect to the root

Data Flow:
    relationships → index_by_parent() → build_tree() → tree (children of root)
                                              ↓
                                        find_orphans()

The root identifier ("COM") is a sentinel: it never becomes a TreeNode itself,
the tree is the list of bodies that orbit it directly.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Set, Tuple

from orbit_map.core.errors import CycleError, MultipleRootsOrOrphanError
from orbit_map.core.schemas import Relationship, TreeNode

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "COM"


# ============================================================================
# STEP 1: INDEX RELATIONSHIPS BY PARENT
# ============================================================================


def index_by_parent(relationships: Iterable[Relationship]) -> Dict[str, List[str]]:
    """
    Map each parent to its children, in input order.

    Example:
        [COM)B, B)C, B)D] → {"COM": ["B"], "B": ["C", "D"]}
    """
    index: Dict[str, List[str]] = {}
    for relationship in relationships:
        index.setdefault(relationship.parent, []).append(relationship.name)
    return index


# ============================================================================
# STEP 2: BUILD THE TREE
# ============================================================================


def _materialize(root_identifier: str, index: Dict[str, List[str]]) -> Tuple[TreeNode, Set[str]]:
    """
    Build the node for root_identifier with an explicit work-list.

    Each stack frame is (name, position in its child list, finished children).
    A node is created only once all of its children are, so nodes never need
    to be mutated after construction.
    """
    stack: List[Tuple[str, int, List[TreeNode]]] = [(root_identifier, 0, [])]
    path: List[str] = [root_identifier]
    on_path: Set[str] = {root_identifier}
    reached: Set[str] = set()

    while True:
        name, position, built = stack[-1]
        children = index.get(name, [])

        if position < len(children):
            stack[-1] = (name, position + 1, built)
            child = children[position]
            if child in on_path:
                start = path.index(child)
                raise CycleError(path[start:] + [child])

            reached.add(child)
            path.append(child)
            on_path.add(child)
            stack.append((child, 0, []))
            continue

        stack.pop()
        path.pop()
        on_path.discard(name)
        node = TreeNode(name=name, children=tuple(built))
        if not stack:
            return node, reached
        stack[-1][2].append(node)


def find_orphans(
    relationships: Iterable[Relationship], reached: Set[str], root_identifier: str
) -> Tuple[List[str], List[str]]:
    """
    Find bodies the tree never reached.

    Returns:
        (orphans, roots): orphan bodies in input order, and the parents that are
        neither the root nor anybody's child (the "other" roots).
    """
    relationships = list(relationships)
    children = {r.name for r in relationships}

    # dicts keep first-seen order
    orphans: Dict[str, None] = {}
    roots: Dict[str, None] = {}
    for relationship in relationships:
        if relationship.name not in reached:
            orphans[relationship.name] = None
        parent = relationship.parent
        if parent != root_identifier and parent not in children:
            roots[parent] = None

    return list(orphans), list(roots)


def build_tree_with_orphans(
    relationships: List[Relationship],
    root_identifier: str = DEFAULT_ROOT,
    allow_orphans: bool = False,
) -> Tuple[List[TreeNode], List[str]]:
    """
    Assemble the relationships into the tree hanging off root_identifier.

    Children keep the order their relationships had in the input. The input
    list is not modified; every call returns new nodes.

    Args:
        relationships: parsed map
        root_identifier: sentinel parent of the top-level bodies
        allow_orphans: drop unreachable bodies with a warning instead of failing

    Returns:
        (tree, orphans): the bodies that directly orbit the root, each with its
        subtree, and the bodies dropped because they never connect to it

    Raises:
        CycleError: a body orbits one of its own descendants
        MultipleRootsOrOrphanError: bodies are not connected to the root
    """
    duplicates = [
        name for name, count in Counter(r.name for r in relationships).items() if count > 1
    ]
    if duplicates:
        logger.warning(f"Bodies with more than one parent: {', '.join(duplicates)}")

    index = index_by_parent(relationships)
    root, reached = _materialize(root_identifier, index)

    orphans, roots = find_orphans(relationships, reached, root_identifier)
    if orphans:
        if not allow_orphans:
            raise MultipleRootsOrOrphanError(orphans, roots)
        logger.warning(f"Dropping {len(orphans)} bodies not connected to {root_identifier}")

    logger.debug(f"Built tree with {len(reached)} bodies under {root_identifier}")
    return list(root.children), orphans


def build_tree(
    relationships: List[Relationship],
    root_identifier: str = DEFAULT_ROOT,
    allow_orphans: bool = False,
) -> List[TreeNode]:
    """Same as build_tree_with_orphans, returning only the tree."""
    tree, _ = build_tree_with_orphans(relationships, root_identifier, allow_orphans)
    return tree
