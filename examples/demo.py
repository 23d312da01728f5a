import logging

from scalargrad import AutogradGraph, leaf, add, multiply, relu, backward, configure_logging

logger = logging.getLogger("scalargrad.demo")


def report(root, **inputs):
    for name, node in inputs.items():
        print(f"The gradient of {root} with respect to {name} is : {node.grad}")


def first_demo():
    # L = (a + b) * d
    with AutogradGraph() as graph:
        a = leaf(1.0, label="a")
        b = leaf(2.0, label="b")
        c = add([a, b], label="c")
        d = leaf(4.0, label="d")
        L = multiply([c, d], label="L")
        backward(L)
        logger.info("%r", graph)
        report("L", a=a, b=b, c=c, d=d, L=L)


def second_demo():
    # L = relu((a + b + c) * e * f)
    with AutogradGraph() as graph:
        a, b, c = leaf(3.0, label="a"), leaf(7.0, label="b"), leaf(10.0, label="c")
        d = add([a, b, c], label="d")
        e, f = leaf(5.0, label="e"), leaf(1.0, label="f")
        g = multiply([d, e, f], label="g")
        L = relu(g)
        backward(L)
        logger.info("graph stats: %s", graph.stats())
        report("L", a=a, b=b, c=c, d=d, e=e, f=f, g=g)


if __name__ == "__main__":
    configure_logging(level="DEBUG")
    first_demo()
    second_demo()
