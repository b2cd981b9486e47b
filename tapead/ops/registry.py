# tapead/ops/registry.py
"""
Primitive registry.

A primitive is the pair (forward rule, local-derivative rule). Adding a new
differentiable function means registering one Primitive; the reverse sweep
replays records through `get_primitive(record.op_tag).partials`.

    register("square", 1,
             forward=lambda a: a * a,
             partials=lambda out, a: (2.0 * a,))
    y = apply("square", x)
"""
from __future__ import annotations
import numbers
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import numpy as np

from ..core.record import Record
from ..core.var import ADVar
from ..config import get_settings
from ..errors import DomainError, TapeMismatchError, UnknownPrimitiveError

@dataclass(frozen=True)
class Primitive:
    """
    Attributes
    ----------
    name     : str
        Tag written into each Record.
    arity    : int
        Number of operands.
    forward  : Callable[..., float]
        Forward value from the operand values.
    partials : Callable[..., tuple]
        partials(result, *args) -> one local partial derivative per operand.
    domain   : Optional[Callable[..., bool]]
        Returns False for operand values outside the domain.
    domain_message : str
        Text of the DomainError raised under the "raise" policy.
    """
    name: str
    arity: int
    forward: Callable[..., float]
    partials: Callable[..., tuple]
    domain: Optional[Callable[..., bool]] = None
    domain_message: str = ""

    def evaluate(self, args, policy: str) -> float:
        if self.domain is not None and not self.domain(*args):
            if policy == "raise":
                msg = self.domain_message or "argument outside of domain"
                raise DomainError(f"{self.name}{tuple(args)}: {msg}")
        with np.errstate(all="ignore"):
            return float(self.forward(*(np.float64(a) for a in args)))


_REGISTRY: Dict[str, Primitive] = {}

def register(name: str, arity: int, forward, partials, *, domain=None,
             domain_message: str = "", replace: bool = False) -> Primitive:
    """Register a primitive under `name` and return it."""
    if name in _REGISTRY and not replace:
        raise ValueError(f"primitive {name!r} is already registered")
    prim = Primitive(name=name, arity=arity, forward=forward, partials=partials,
                     domain=domain, domain_message=domain_message)
    _REGISTRY[name] = prim
    return prim

def get_primitive(name: str) -> Primitive:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise UnknownPrimitiveError(name) from None

def primitives() -> List[str]:
    return sorted(_REGISTRY)

def _check_operand(x):
    if isinstance(x, ADVar):
        return
    if isinstance(x, (bool, np.bool_)) or not isinstance(x, numbers.Real):
        raise TypeError(f"operands must be ADVar or real numbers, but got {type(x)}")

def apply(name: str, *operands):
    """
    Evaluate primitive `name` on handles and/or real literals.

      - computes the forward value from the operand values
      - allocates a result slot on the operands' tape
      - records the operand slots (None for literals) and values

    With literal operands only, the forward value is returned as a float and
    nothing is recorded.
    """
    prim = get_primitive(name)
    if len(operands) != prim.arity:
        raise TypeError(f"{name} takes {prim.arity} operand(s), got {len(operands)}")

    tape = None
    for x in operands:
        _check_operand(x)
        if not isinstance(x, ADVar):
            continue
        if tape is None:
            tape = x.tape
        elif x.tape is not tape:
            raise TapeMismatchError(f"{name}: operands were recorded on different tapes")
        tape.check(x)

    args = tuple(x.value if isinstance(x, ADVar) else float(x) for x in operands)
    policy = (tape.settings if tape is not None else get_settings()).domain_errors
    out_val = prim.evaluate(args, policy)
    if tape is None:
        return out_val

    index = tape.allocate_index()
    slots = tuple(x.index if isinstance(x, ADVar) else None for x in operands)
    tape.record(Record(op_tag=name, index=index, value=out_val, operands=slots, args=args))
    return ADVar._from_op(out_val, index, tape)
