# tapead/ops/special.py
import numpy as np
from scipy.special import ndtr
from .registry import apply, register

SQRT_TWO_PI = np.sqrt(2.0 * np.pi)

def _phi(x):
    return np.exp(-0.5 * x * x) / SQRT_TWO_PI

register("norm_pdf", 1, forward=_phi, partials=lambda out, a: (-a * out,))
register("norm_cdf", 1, forward=ndtr, partials=lambda out, a: (_phi(a),))

def norm_pdf(x):
    """
    Standard normal density phi(x); records dphi/dx = -x * phi(x).
    """
    return apply("norm_pdf", x)

def norm_cdf(x):
    """
    Standard normal CDF N(x); records the local partial dN/dx = phi(x).
    """
    return apply("norm_cdf", x)
