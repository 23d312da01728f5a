import logging

from .node import Node

logger = logging.getLogger(__name__)


def _check_root(root):
    if root is None:
        raise ValueError("Cannot traverse from a null node.")
    if not isinstance(root, Node):
        raise TypeError(f"Expected a Node, got {type(root).__name__}.")
    if root.detached:
        raise ValueError("Cannot traverse from a detached node: its graph is closed.")


def topological_order(root):
    """
    Returns every node reachable from `root` through its operands, each
    exactly once and after all of its own operands. `root` comes last.

    Depth-first post-order on an explicit stack, so the depth of the graph
    is not bounded by the interpreter recursion limit. Nodes are marked
    visited by id, never by value.
    """
    _check_root(root)
    order = []
    visited = {root.id}
    stack = [(root, iter(root.operands))]
    while stack:
        node, pending = stack[-1]
        for operand in pending:
            if operand.id not in visited:
                visited.add(operand.id)
                stack.append((operand, iter(operand.operands)))
                break
        else:
            stack.pop()
            order.append(node)
    return order


def backward(root):
    """
    Accumulates d(root)/d(node) into `node.grad` for every node reachable
    from `root`.

    Gradients are not reset first: running it twice without `zero_grad`
    adds the contributions of both passes (the root is set back to 1).
    """
    nodes_to_process = topological_order(root)
    logger.info("Size: %d", len(nodes_to_process))

    root.grad = 1.0
    for node in reversed(nodes_to_process):
        logger.debug("Processing %r", node)
        if node._backward is not None:
            node._backward()


def zero_grad(root):
    """Resets the gradient of `root` and of every node it was derived from."""
    for node in topological_order(root):
        node.grad = 0.0


def value(node):
    if not isinstance(node, Node):
        raise TypeError(f"Expected a Node, got {type(node).__name__}.")
    return node.value


def gradient(node):
    if not isinstance(node, Node):
        raise TypeError(f"Expected a Node, got {type(node).__name__}.")
    return node.grad
