# tapead/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the tape. Each helper runs in its own episode and returns
# plain numbers, so nothing it returns can go stale.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Callable, Dict, Iterable, List
import numpy as np

from .var import ADVar
from .tape import episode
from .engine import chain


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[ADVar], ADVar], x0: float) -> float:
    """
    Derivative of a scalar function y=f(x) at x0.
    """
    with episode() as tape:
        x = ADVar(x0, tape=tape, name="x")
        y = f(x)
        if not isinstance(y, ADVar):
            return 0.0  # f ignored its input
        return chain(y)[x]


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, ADVar]], ADVar],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y=f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE reverse pass to obtain all ∂y/∂var simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: ADVar} and returning an ADVar
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    with episode() as tape:
        vars_ad: Dict[str, ADVar] = {
            k: ADVar(v, tape=tape, name=k) for k, v in inputs.items()
        }
        y = f(vars_ad)
        if not isinstance(y, ADVar):
            return {k: 0.0 for k in inputs}
        adj = chain(y)
        return {k: adj[vars_ad[k]] for k in inputs}


def grads_list(f: Callable[[List[ADVar]], ADVar],
               x0_list: Iterable[float]) -> np.ndarray:
    """
    Same as grads(), but the inputs are provided as a list and the result is an
    array of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> array([4., 3.])
    """
    with episode() as tape:
        xs: List[ADVar] = [
            ADVar(v, tape=tape, name=f"x{i}") for i, v in enumerate(x0_list)
        ]
        y = f(xs)
        if not isinstance(y, ADVar):
            return np.zeros(len(xs), dtype=float)
        return chain(y).gradient(xs)
