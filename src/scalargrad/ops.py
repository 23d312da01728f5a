import numbers
import operator
import weakref
from functools import reduce

from .autograd_graph import get_default_graph
from .node import Node, Op


def leaf(value, *, graph=None, label=None):
    """Creates an input node. It has no operands and no backward rule."""
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        raise TypeError(f"Leaf value must be a real number, got {type(value).__name__}.")
    if graph is None:
        graph = get_default_graph()
    return Node(value, graph=graph, label=label)


def _check_operands(operands, name):
    # validation runs before anything is recorded on the graph
    if isinstance(operands, Node):
        operands = (operands,)
    try:
        operands = tuple(operands)
    except TypeError:
        raise TypeError(f"{name} expects a sequence of nodes, got {type(operands).__name__}.") from None
    if not operands:
        raise ValueError(f"{name} requires at least one operand.")
    for operand in operands:
        if not isinstance(operand, Node):
            raise TypeError(f"{name} operands must be Node instances, got {type(operand).__name__}.")
    graph = operands[0].graph
    if any(operand.graph is not graph for operand in operands[1:]):
        raise ValueError(f"{name} operands belong to different graphs.")
    if graph.closed:
        raise ValueError(f"{name} operands are detached: their graph is closed.")
    return operands, graph


def add(operands, *, label=None):
    operands, graph = _check_operands(operands, "add")
    result = Node(sum(o.value for o in operands), operands, Op.ADD, graph=graph, label=label)
    operand_refs = [weakref.proxy(o) for o in operands]
    result_ref = weakref.proxy(result)
    def _backward():
        for operand in operand_refs:
            operand.grad += result_ref.grad
    result._backward = _backward
    return result


def subtract(operands, *, label=None):
    """operands[0] - operands[1] - ... - operands[-1]"""
    operands, graph = _check_operands(operands, "subtract")
    value = reduce(operator.sub, (o.value for o in operands))
    result = Node(value, operands, Op.SUBTRACT, graph=graph, label=label)
    first_ref = weakref.proxy(operands[0])
    rest_refs = [weakref.proxy(o) for o in operands[1:]]
    result_ref = weakref.proxy(result)
    def _backward():
        first_ref.grad += result_ref.grad
        for operand in rest_refs:
            operand.grad -= result_ref.grad
    result._backward = _backward
    return result


def _products_of_others(values):
    # prefix/suffix products, so a zero operand needs no special case
    partials = [1.0] * len(values)
    running = 1.0
    for i, v in enumerate(values):
        partials[i] = running
        running *= v
    running = 1.0
    for i in range(len(values) - 1, -1, -1):
        partials[i] *= running
        running *= values[i]
    return partials


def multiply(operands, *, label=None):
    operands, graph = _check_operands(operands, "multiply")
    values = [o.value for o in operands]
    result = Node(reduce(operator.mul, values), operands, Op.MULTIPLY, graph=graph, label=label)
    # local derivative of each operand: product of all the other operands
    partials = _products_of_others(values)
    operand_refs = [weakref.proxy(o) for o in operands]
    result_ref = weakref.proxy(result)
    def _backward():
        grad = result_ref.grad
        for operand, partial in zip(operand_refs, partials):
            operand.grad += grad * partial
    result._backward = _backward
    return result


def relu(operand, *, label=None):
    (operand,), graph = _check_operands((operand,), "relu")
    result = Node(max(0.0, operand.value), (operand,), Op.RELU, graph=graph, label=label)
    operand_ref = weakref.proxy(operand)
    result_ref = weakref.proxy(result)
    def _backward():
        # derivative taken as 0 at the kink
        operand_ref.grad += (1.0 if result_ref.value > 0 else 0.0) * result_ref.grad
    result._backward = _backward
    return result
