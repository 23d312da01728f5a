import enum
import numbers


class Op(enum.Enum):
    """Closed set of operations a node can be produced by."""
    LEAF = ""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    RELU = "relu"

    @property
    def symbol(self):
        return self.value


class Node:
    """
    A scalar in the computation graph: its value, its accumulated gradient
    and how it was produced.
    A node owns its operands. Its backward rule only holds weak proxies to the
    operands and to the node itself, so no reference cycle is created.
    """
    __slots__ = ('_value', 'grad', '_op', '_operands', '_backward', 'graph', 'id', '_node_index', 'label', '__weakref__')

    def __init__(self, value, operands=(), op=Op.LEAF, *, graph, label=None):
        self._value = float(value)
        self.grad = 0.0
        self._op = op
        self._operands = tuple(operands)
        self._backward = None
        self.graph = graph
        self.label = label
        self._node_index = graph.add_node(self)
        self.id = graph.next_id()
        for operand in self._operands:
            graph.add_edge(operand._node_index, self._node_index)

    @property
    def value(self):
        return self._value

    @property
    def op(self):
        return self._op

    @property
    def operands(self):
        return self._operands

    @property
    def is_leaf(self):
        return self._backward is None

    @property
    def detached(self):
        return self.graph.closed

    def _wrap(self, other):
        if isinstance(other, Node):
            return other
        if isinstance(other, numbers.Real) and not isinstance(other, bool):
            from .ops import leaf
            return leaf(other, graph=self.graph)
        return None

    def __add__(self, other):
        other = self._wrap(other)
        if other is None:
            return NotImplemented
        from .ops import add
        return add([self, other])

    def __radd__(self, other):
        other = self._wrap(other)
        if other is None:
            return NotImplemented
        from .ops import add
        return add([other, self])

    def __sub__(self, other):
        other = self._wrap(other)
        if other is None:
            return NotImplemented
        from .ops import subtract
        return subtract([self, other])

    def __rsub__(self, other):
        other = self._wrap(other)
        if other is None:
            return NotImplemented
        from .ops import subtract
        return subtract([other, self])

    def __mul__(self, other):
        other = self._wrap(other)
        if other is None:
            return NotImplemented
        from .ops import multiply
        return multiply([self, other])

    def __rmul__(self, other):
        other = self._wrap(other)
        if other is None:
            return NotImplemented
        from .ops import multiply
        return multiply([other, self])

    def __neg__(self):
        return self * -1.0

    def relu(self):
        from .ops import relu
        return relu(self)

    def backward(self):
        from .engine import backward
        backward(self)

    def zero_grad(self):
        from .engine import zero_grad
        zero_grad(self)

    def __repr__(self):
        name = f", label={self.label!r}" if self.label is not None else ""
        return f"Node(value={self._value}, grad={self.grad}, op={self._op.symbol!r}{name})"
