# tapead/core/var.py
from __future__ import annotations
import numbers
import numpy as np
from typing import Any, Optional

from .tape import Tape, current_tape

class ADVar:
    """
    Active variable for reverse-mode Automatic Differentiation (AD).

    A handle is an immutable (value, index) pair naming one slot of a Tape.
    Adjoints are not stored on the handle; `chain()` returns them in a
    separate vector indexed by `index`.

    Attributes
    ----------
    value : float
        Forward (primal) value.
    index : int
        Tape slot, unique within one generation of the tape.
    tape : Tape
        The tape the slot was allocated on.
    generation : int
        Tape generation at creation; a later reset makes the handle stale.
    name : Optional[str]
        Optional debug/pretty-print name.
    """

    __slots__ = ("_value", "_index", "_tape", "_generation", "_name")
    __array_priority__ = 1000  # numpy scalars defer to ADVar's reflected operators

    def __init__(self, value: Any, *, tape: Optional[Tape] = None, name: Optional[str] = None):
        # Only real scalars; bool is an int subclass but never a meaningful input
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
            raise TypeError(
                f"ADVar only accepts real numbers (int, float, numpy real scalar), "
                f"but got {type(value)}"
            )
        if tape is None:
            tape = current_tape()
        self._set(float(value), tape.allocate_index(), tape, name)

    @classmethod
    def _from_op(cls, value: float, index: int, tape: Tape) -> "ADVar":
        # Used by the primitives once the slot is allocated and recorded.
        out = cls.__new__(cls)
        out._set(value, index, tape, None)
        return out

    def _set(self, value, index, tape, name):
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_index", index)
        object.__setattr__(self, "_tape", tape)
        object.__setattr__(self, "_generation", tape.generation)
        object.__setattr__(self, "_name", name)

    def __setattr__(self, key, val):
        raise AttributeError(f"ADVar is immutable; cannot set {key!r}")

    def __delattr__(self, key):
        raise AttributeError(f"ADVar is immutable; cannot delete {key!r}")

    @property
    def value(self) -> float:
        return self._value

    @property
    def index(self) -> int:
        return self._index

    @property
    def tape(self) -> Tape:
        return self._tape

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def name(self) -> Optional[str]:
        return self._name

    def is_live(self) -> bool:
        """True while the tape has not been reset since this handle was made."""
        return self._generation == self._tape.generation

    def __repr__(self):
        state = "" if self.is_live() else ", stale"
        return f"ADVar({self._value!r}, index={self._index}, name={self._name!r}{state})"

    # Ordering compares forward values so client code can branch on them.
    # Equality stays identity based: handles are used as dict keys.
    def __lt__(self, other):
        return self._value < value(other)

    def __le__(self, other):
        return self._value <= value(other)

    def __gt__(self, other):
        return self._value > value(other)

    def __ge__(self, other):
        return self._value >= value(other)

    __hash__ = object.__hash__

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pos__(self):
        return self

    def __abs__(self):
        from ..ops.arithmetic import absolute
        return absolute(self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self)


def value(x: Any) -> Any:
    """Return the numeric value of an ADVar; pass through plain numbers unchanged."""
    return x._value if isinstance(x, ADVar) else x

def as_variable(x: Any, *, tape: Optional[Tape] = None, name: Optional[str] = None) -> ADVar:
    """Explicit literal-to-handle conversion; handles are returned unchanged."""
    return x if isinstance(x, ADVar) else ADVar(x, tape=tape, name=name)
