"""
Finite-difference (bumping) checks for reverse-mode gradients.

    Delta_i = [f(x + eps e_i) - f(x - eps e_i)] / (2 eps)

`f` must work on plain numbers and on ADVar handles alike, e.g. when it is
written with the operators and the functions of tapead.ops.
"""
from typing import Callable, Sequence

import numpy as np
from numpy.testing import assert_allclose

from .core.seeds import grads_list
from .core.var import value


def bump_gradient(f: Callable, x0: Sequence[float], eps: float = 1e-6) -> np.ndarray:
    """Central-difference gradient of f(xs) at x0."""
    x0 = [float(v) for v in x0]
    out = np.zeros(len(x0), dtype=float)
    for i in range(len(x0)):
        up = list(x0)
        dn = list(x0)
        up[i] += eps
        dn[i] -= eps
        out[i] = (value(f(up)) - value(f(dn))) / (2.0 * eps)
    return out


def check_gradient(f: Callable, x0: Sequence[float], eps: float = 1e-6,
                   rtol: float = 1e-5, atol: float = 1e-8) -> np.ndarray:
    """
    Assert that the reverse-mode gradient of f at x0 matches bumping.
    Returns the reverse-mode gradient.
    """
    g = grads_list(f, x0)
    assert_allclose(g, bump_gradient(f, x0, eps), rtol=rtol, atol=atol)
    return g
