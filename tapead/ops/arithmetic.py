# tapead/ops/arithmetic.py
import numpy as np
from .registry import apply, register

def _is_integer(b):
    return float(b).is_integer()

def _pow_domain(a, b):
    # negative base needs an integral exponent; 0 ** negative diverges
    if a < 0:
        return _is_integer(b)
    if a == 0:
        return b >= 0
    return True

def _pow_partials(out, a, b):
    # ∂/∂a = b * a^(b-1);  ∂/∂b = a^b * log(a), taken as 0 where log(a) is undefined
    da = b * np.power(a, b - 1.0) if b != 0 else 0.0
    db = out * np.log(a) if a > 0 else 0.0
    return (da, db)

register("add", 2, forward=lambda a, b: a + b,
         partials=lambda out, a, b: (1.0, 1.0))
register("sub", 2, forward=lambda a, b: a - b,
         partials=lambda out, a, b: (1.0, -1.0))
register("mul", 2, forward=lambda a, b: a * b,
         partials=lambda out, a, b: (b, a))
register("div", 2, forward=lambda a, b: a / b,
         partials=lambda out, a, b: (1.0 / b, -a / np.square(b)),
         domain=lambda a, b: b != 0, domain_message="division by zero")
register("neg", 1, forward=lambda a: -a,
         partials=lambda out, a: (-1.0,))
register("pow", 2, forward=lambda a, b: np.power(a, b),
         partials=_pow_partials,
         domain=_pow_domain,
         domain_message="negative base with non-integer exponent, or zero to a negative power")
register("absolute", 1, forward=lambda a: np.abs(a),
         partials=lambda out, a: (np.sign(a),))

def add(x, y): return apply("add", x, y)
def sub(x, y): return apply("sub", x, y)
def mul(x, y): return apply("mul", x, y)
def div(x, y): return apply("div", x, y)

def neg(x):
    """Unary negation: out = -x, ∂out/∂x = -1."""
    return apply("neg", x)

def pow(x, y):
    """
    Power:
      out = x ** y

    Local partials:
      ∂out/∂x = y * x^(y-1)
      ∂out/∂y = x^y * log(x)        (0 where x <= 0)
    """
    return apply("pow", x, y)

def absolute(x):
    """|x|; the derivative at 0 is taken as 0."""
    return apply("absolute", x)
