# tapead/ops/transcendental.py
import numpy as np
from scipy.special import erf as scipy_erf
from .registry import apply, register

TWO_OVER_SQRT_PI = 2.0 / np.sqrt(np.pi)

# exp: the local partial is the result itself
register("exp", 1, forward=np.exp, partials=lambda out, a: (out,))
register("log", 1, forward=np.log, partials=lambda out, a: (1.0 / a,),
         domain=lambda a: a > 0, domain_message="log of a non-positive value")
register("sqrt", 1, forward=np.sqrt, partials=lambda out, a: (0.5 / out,),
         domain=lambda a: a >= 0, domain_message="sqrt of a negative value")
register("sin", 1, forward=np.sin, partials=lambda out, a: (np.cos(a),))
register("cos", 1, forward=np.cos, partials=lambda out, a: (-np.sin(a),))
register("tanh", 1, forward=np.tanh, partials=lambda out, a: (1.0 - out * out,))
register("erf", 1, forward=scipy_erf,
         partials=lambda out, a: (TWO_OVER_SQRT_PI * np.exp(-a * a),))

def exp(x):
    return apply("exp", x)

def log(x):
    return apply("log", x)

def sqrt(x):
    return apply("sqrt", x)

def sin(x):
    return apply("sin", x)

def cos(x):
    return apply("cos", x)

def tanh(x):
    return apply("tanh", x)

def erf(x):
    """
    Error function: erf(x) = (2/√π) ∫₀ˣ e^(-t²) dt

    Derivative: d/dx erf(x) = (2/√π) * e^(-x²)
    """
    return apply("erf", x)
