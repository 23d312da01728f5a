_submodules = [
    "autograd_graph",
    "config",
    "engine",
    "node",
    "ops",
]

_exports = {
    "Node": "node",
    "Op": "node",
    "leaf": "ops",
    "add": "ops",
    "subtract": "ops",
    "multiply": "ops",
    "relu": "ops",
    "backward": "engine",
    "zero_grad": "engine",
    "topological_order": "engine",
    "value": "engine",
    "gradient": "engine",
    "AutogradGraph": "autograd_graph",
    "get_default_graph": "autograd_graph",
    "use_graph": "autograd_graph",
    "configure_logging": "config",
}

__all__ = _submodules + list(_exports) + ["__version__"]

def __getattr__(name):
    if name in _submodules:
        import importlib
        mod = importlib.import_module(f".{name}", __name__)
        globals()[name] = mod  # cache so future lookups are fast
        return mod
    if name in _exports:
        import importlib
        attr = getattr(importlib.import_module(f".{_exports[name]}", __name__), name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__():
    return sorted(list(globals().keys()) + __all__)

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from . import (
        autograd_graph,
        config,
        engine,
        node,
        ops
    )
    from .autograd_graph import AutogradGraph, get_default_graph, use_graph
    from .config import configure_logging
    from .engine import backward, gradient, topological_order, value, zero_grad
    from .node import Node, Op
    from .ops import add, leaf, multiply, relu, subtract
__version__ = "0.1.0"
