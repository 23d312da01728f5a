import random

import numpy as np
import pytest
import torch

from scalargrad.ops import leaf, add, subtract, multiply, relu
from scalargrad.engine import backward

TOLERANCE = 1e-6


def assert_grads_close(nodes, tensors, test_name):
    np.testing.assert_allclose(
        [n.grad for n in nodes],
        [t.grad.item() if t.grad is not None else 0.0 for t in tensors],
        rtol=TOLERANCE,
        atol=TOLERANCE,
        err_msg=f"Mismatch in gradients for {test_name}"
    )


def torch_leaf(x):
    return torch.tensor(x, dtype=torch.float64, requires_grad=True)


def torch_subtract(ts):
    out = ts[0]
    for t in ts[1:]:
        out = out - t
    return out


def torch_multiply(ts):
    out = ts[0]
    for t in ts[1:]:
        out = out * t
    return out


def build_random_expression(rng, n_inputs, n_ops):
    """Builds the same random expression with scalargrad and torch."""
    values = [rng.uniform(-3.0, 3.0) for _ in range(n_inputs)]
    inputs = [leaf(v) for v in values]
    tensors = [torch_leaf(v) for v in values]
    pool = list(zip(inputs, tensors))
    for _ in range(n_ops):
        kind = rng.choice(["add", "subtract", "multiply", "relu"])
        if kind == "relu":
            node, tensor = rng.choice(pool)
            pool.append((relu(node), torch.relu(tensor)))
            continue
        picked = rng.sample(pool, rng.randint(2, min(4, len(pool))))
        nodes = [p[0] for p in picked]
        ts = [p[1] for p in picked]
        if kind == "add":
            pool.append((add(nodes), sum(ts[1:], ts[0])))
        elif kind == "subtract":
            pool.append((subtract(nodes), torch_subtract(ts)))
        else:
            pool.append((multiply(nodes), torch_multiply(ts)))
    # sum everything so every node contributes to the root
    root = add([p[0] for p in pool])
    root_tensor = sum((p[1] for p in pool[1:]), pool[0][1])
    return inputs, tensors, root, root_tensor


class TestAgainstTorch:
    def test_first_demo(self, graph):
        a, b, d = leaf(1.0), leaf(2.0), leaf(4.0)
        L = multiply([add([a, b]), d])
        backward(L)

        ta, tb, td = torch_leaf(1.0), torch_leaf(2.0), torch_leaf(4.0)
        tL = (ta + tb) * td
        tL.backward()

        assert L.value == pytest.approx(tL.item())
        assert_grads_close([a, b, d], [ta, tb, td], "first demo")

    def test_multi_operand_subtract(self, graph):
        xs = [leaf(v) for v in (9.0, 2.0, 3.0, 1.5)]
        r = subtract(xs)
        backward(r)

        ts = [torch_leaf(v) for v in (9.0, 2.0, 3.0, 1.5)]
        torch_subtract(ts).backward()

        assert_grads_close(xs, ts, "multi operand subtract")

    def test_multiply_with_zero(self, graph):
        xs = [leaf(v) for v in (0.0, 5.0, -2.0)]
        backward(multiply(xs))

        ts = [torch_leaf(v) for v in (0.0, 5.0, -2.0)]
        torch_multiply(ts).backward()

        assert_grads_close(xs, ts, "multiply with zero")

    @pytest.mark.parametrize("seed", range(10))
    def test_random_expressions(self, graph, seed):
        rng = random.Random(seed)
        inputs, tensors, root, root_tensor = build_random_expression(rng, n_inputs=4, n_ops=12)
        backward(root)
        root_tensor.backward()

        np.testing.assert_allclose(root.value, root_tensor.item(), rtol=TOLERANCE, atol=TOLERANCE)
        assert_grads_close(inputs, tensors, f"random expression (seed={seed})")
