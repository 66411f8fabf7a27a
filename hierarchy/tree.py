"""
Group tree building — flat group snapshot to an ordered forest.

Pure functions. Every call builds fresh GroupTreeNode objects from the
flat `parent_id` fields; nothing is cached and the input is never touched.

Rules:
- One node per group id (first occurrence wins on duplicate ids)
- A parent_id that is missing or not in the snapshot makes the node a root
- Siblings are ordered by a locale-style collation key on name
- Depth and ancestor names are assigned top-down after linking, so the
  result does not depend on input order
- A cycle (no root reachable) is broken by promoting its smallest id
"""

import unicodedata
from typing import Iterable

from models import Group, GroupTreeNode


def collation_key(name: str) -> tuple[str, str, str]:
    """
    Sort key approximating locale-aware name ordering.

    Primary: accent- and case-insensitive. Secondary: accents.
    Tertiary: lowercase before uppercase ("apple" < "Apple").
    """
    folded = name.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base, decomposed, name.swapcase())


def _sort_siblings(nodes: list[GroupTreeNode]) -> list[GroupTreeNode]:
    # sorted() is stable: exact duplicate names keep input order
    return sorted(nodes, key=lambda node: collation_key(node.name))


def _reachable(roots: Iterable[GroupTreeNode]) -> set[str]:
    seen: set[str] = set()
    stack = list(roots)
    while stack:
        node = stack.pop()
        if node.id in seen:
            continue
        seen.add(node.id)
        stack.extend(node.children)
    return seen


def _cycle_breaker(start: GroupTreeNode, nodes: dict[str, GroupTreeNode]) -> GroupTreeNode:
    """Follow parent links from a stranded node; return the smallest id on the cycle."""
    path: list[str] = []
    position: dict[str, int] = {}
    current = start
    while current.id not in position:
        position[current.id] = len(path)
        path.append(current.id)
        # Stranded nodes always have a resolvable parent
        current = nodes[current.parent_id]  # type: ignore[index]
    cycle = path[position[current.id]:]
    return nodes[min(cycle)]


def _assign_levels(roots: list[GroupTreeNode]) -> None:
    """Set depth, ancestor names and sibling order, top-down."""
    stack: list[tuple[GroupTreeNode, int, list[str]]] = [(root, 0, []) for root in roots]
    while stack:
        node, depth, ancestors = stack.pop()
        node.depth = depth
        node.ancestor_names = ancestors
        node.children = _sort_siblings(node.children)
        for child in node.children:
            stack.append((child, depth + 1, ancestors + [node.name]))


def build_group_tree(groups: Iterable[Group]) -> list[GroupTreeNode]:
    """
    Build an ordered forest from a flat list of groups.

    Args:
        groups: Groups from one workspace, in any order

    Returns:
        Root nodes sorted by name; children sorted recursively.
    """
    nodes: dict[str, GroupTreeNode] = {}
    for group in groups:
        if group.id not in nodes:
            nodes[group.id] = GroupTreeNode.from_group(group)

    roots: list[GroupTreeNode] = []
    for node in nodes.values():
        parent = nodes.get(node.parent_id) if node.parent_id else None
        if parent is None:
            roots.append(node)
        else:
            parent.children.append(node)

    reached = _reachable(roots)
    if len(reached) < len(nodes):
        for group_id in sorted(nodes):
            if group_id in reached:
                continue
            promoted = _cycle_breaker(nodes[group_id], nodes)
            parent = nodes[promoted.parent_id]  # type: ignore[index]
            parent.children = [child for child in parent.children if child.id != promoted.id]
            roots.append(promoted)
            reached |= _reachable([promoted])

    roots = _sort_siblings(roots)
    _assign_levels(roots)
    return roots


def group_path(group_id: str, groups: Iterable[Group]) -> list[str]:
    """
    Names from the root down to the group itself.

    Walks parent_id through the flat list, not a built tree. Stops at an
    unresolvable parent or a revisited id.

    Returns:
        Root-first names ending with the group's own name; [] if group_id is unknown.
    """
    lookup: dict[str, Group] = {}
    for group in groups:
        lookup.setdefault(group.id, group)

    current = lookup.get(group_id)
    names: list[str] = []
    visited: set[str] = set()
    while current is not None and current.id not in visited:
        visited.add(current.id)
        names.append(current.name)
        current = lookup.get(current.parent_id) if current.parent_id else None

    names.reverse()
    return names


def iter_tree(roots: Iterable[GroupTreeNode]) -> Iterable[GroupTreeNode]:
    """Yield every node depth-first, pre-order, in sibling order."""
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def render_outline(roots: Iterable[GroupTreeNode], indent: str = "  ") -> str:
    """Indented text outline of a forest, one group per line."""
    return "\n".join(f"{indent * node.depth}- {node.name}" for node in iter_tree(roots))
