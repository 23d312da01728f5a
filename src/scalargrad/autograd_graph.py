import itertools
import logging
import weakref
from collections import Counter
from contextlib import contextmanager

import rustworkx as rx

from . import config

logger = logging.getLogger(__name__)

_default_graph = None


class AutogradGraph:
    """
    Owns the identity counter of the nodes built on it and mirrors their
    operand edges in a directed acyclic graph.
    Vertices only hold weak references, so the mirror never keeps a node alive;
    a node's vertex is removed when the node is collected.
    """
    __slots__ = ('graph', '_counter', '_check_cycles', '_auto_cleanup', '_closed', '_previous', '__weakref__')

    def __init__(self, check_for_cycles=None, auto_cleanup=None):
        self.graph = rx.PyDiGraph()
        self._counter = itertools.count()
        self._check_cycles = config.CHECK_CYCLES if check_for_cycles is None else check_for_cycles
        self._auto_cleanup = config.AUTO_CLEANUP if auto_cleanup is None else auto_cleanup
        self._closed = False
        self._previous = []

    def __enter__(self):
        self._previous.append(_swap_default_graph(self))
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        _swap_default_graph(self._previous.pop())
        if self._check_cycles and self.check_cycle():
            raise RuntimeError("Cycle detected in autograd graph on context exit.")
        if self._auto_cleanup:
            self.close()

    @property
    def closed(self):
        return self._closed

    def next_id(self):
        return next(self._counter)

    def add_node(self, node):
        if self._closed:
            raise ValueError("Cannot add nodes to a closed graph.")
        node_index = self.graph.add_node(weakref.ref(node))
        finalizer = weakref.finalize(node, self.delete_node, node_index)
        finalizer.atexit = False
        return node_index

    def add_edge(self, node_from, node_to, weight=None):
        if not all(isinstance(n, int) for n in (node_from, node_to)):
            raise TypeError("Node indices must be integers.")
        if not self.graph.has_node(node_from) or not self.graph.has_node(node_to):
            raise ValueError("Nodes must exist before adding edge.")
        self.graph.add_edge(node_from, node_to, weight)

    def delete_node(self, node_index):
        if not isinstance(node_index, int):
            raise TypeError("Node index must be an integer.")
        if self.graph.has_node(node_index):
            self.graph.remove_node(node_index)

    def check_cycle(self):
        return not rx.is_directed_acyclic_graph(self.graph)

    def ancestors(self, node):
        """Live nodes that `node` was derived from, directly or transitively."""
        if node.graph is not self:
            raise ValueError("Node does not belong to this graph.")
        if not self.graph.has_node(node._node_index):
            return []
        found = (self.graph[i]() for i in rx.ancestors(self.graph, node._node_index))
        return sorted((n for n in found if n is not None), key=lambda n: n.id)

    def nodes(self):
        found = (ref() for ref in self.graph.nodes())
        return sorted((n for n in found if n is not None), key=lambda n: n.id)

    @property
    def num_nodes(self):
        return self.graph.num_nodes()

    @property
    def num_edges(self):
        return self.graph.num_edges()

    def zero_grad(self):
        for node in self.nodes():
            node.grad = 0.0

    def stats(self):
        graph = self.graph
        indices = graph.node_indices()
        if not indices:
            return {
                'nodes': 0,
                'edges': 0,
                'max_fan_in': 0,
                'avg_fan_in': 0.0,
                'max_fan_out': 0,
                'avg_fan_out': 0.0,
                'operations': {},
            }
        fan_ins = [graph.in_degree(i) for i in indices]
        fan_outs = [graph.out_degree(i) for i in indices]
        ops = Counter(n.op.symbol or "leaf" for n in self.nodes())
        return {
            'nodes': len(indices),
            'edges': graph.num_edges(),
            'max_fan_in': max(fan_ins),
            'avg_fan_in': sum(fan_ins) / len(fan_ins),
            'max_fan_out': max(fan_outs),
            'avg_fan_out': sum(fan_outs) / len(fan_outs),
            'operations': dict(ops),
        }

    def close(self):
        # nodes built on a closed graph are detached
        logger.debug("Closing %r", self)
        self.graph.clear()
        self._closed = True

    def __repr__(self):
        return f"AutogradGraph(nodes={self.graph.num_nodes()}, edges={self.graph.num_edges()}, closed={self._closed})"


def _swap_default_graph(graph):
    global _default_graph
    previous = _default_graph
    _default_graph = graph
    return previous


def get_default_graph():
    """Graph that leaves are created on when no graph is given."""
    global _default_graph
    if _default_graph is None:
        _default_graph = AutogradGraph(auto_cleanup=False)
    return _default_graph


@contextmanager
def use_graph(graph=None):
    """
    Context manager to temporarily build on another graph:
        with use_graph() as graph:
            ... build computation ...
            backward(y)
    The graph is not closed on exit.
    """
    previous = _swap_default_graph(graph if graph is not None else AutogradGraph())
    try:
        yield get_default_graph()
    finally:
        _swap_default_graph(previous)
