# tapead/ops/__init__.py

# Importing the modules registers their primitives
from . import arithmetic
from . import transcendental
from . import special

# Convenience re-exports so users can do: from tapead.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, neg, pow, absolute
from .transcendental import exp, log, sqrt, sin, cos, tanh, erf
from .special import norm_cdf, norm_pdf
from .registry import Primitive, register, get_primitive, primitives, apply

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow", "absolute",
    "exp", "log", "sqrt", "sin", "cos", "tanh", "erf",
    "norm_cdf", "norm_pdf",
    "Primitive", "register", "get_primitive", "primitives", "apply",
]
