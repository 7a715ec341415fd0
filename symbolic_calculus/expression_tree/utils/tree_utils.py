"""
Tree Utility Functions

Traversal and inspection helpers for expression DAGs. Nodes may be shared by
several parents, so helpers that must visit each object once track identities.
"""

from collections import deque
from typing import List, Optional, Set

from ..core.node import Node, ErrorNode, VariableNode, fold_post_order
from ..core.operators import NodeType


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes reachable from the root, shared nodes once per reference.

    Args:
        node: Root node of the expression
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of nodes in traversal order
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    nodes_to_visit = deque([node])
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.popleft()
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop()
        all_nodes.append(current_node)
        nodes_to_visit.extend(reversed(current_node.children()))

    return all_nodes


def calculate_tree_depth(node: Node) -> int:
    """Maximum depth of the expression (leaf nodes have depth 1)"""
    return fold_post_order(node, lambda _, depths: 1 + max(depths, default=0))


def count_nodes(node: Node) -> int:
    """Node count of the expression viewed as a tree"""
    return fold_post_order(node, lambda _, counts: 1 + sum(counts))


def count_unique_nodes(node: Node) -> int:
    """Number of distinct node objects, i.e. the size of the underlying DAG"""
    seen: Set[int] = set()
    stack = [node]
    while stack:
        current_node = stack.pop()
        if id(current_node) in seen:
            continue
        seen.add(id(current_node))
        stack.extend(current_node.children())
    return len(seen)


def find_first_error(node: Node) -> Optional[ErrorNode]:
    """First ErrorNode in left-to-right pre-order, or None"""
    seen: Set[int] = set()
    stack = [node]
    while stack:
        current_node = stack.pop()
        if isinstance(current_node, ErrorNode):
            return current_node
        if id(current_node) in seen:
            continue
        seen.add(id(current_node))
        stack.extend(reversed(current_node.children()))
    return None


def find_nodes_by_type(node: Node, node_type: NodeType) -> List[Node]:
    return [n for n in get_all_nodes(node, 'depth_first') if n.node_type == node_type]


def get_variables(node: Node) -> List[str]:
    """Sorted names of the free variables used in the expression"""
    names = {n.name for n in get_all_nodes(node) if isinstance(n, VariableNode)}
    return sorted(names)
