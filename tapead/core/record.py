# tapead/core/record.py
from dataclasses import dataclass
from typing import Optional, Tuple

@dataclass(frozen=True)
class Record:
    """
    One entry on the tape produced by a primitive operation.

    The record holds plain numbers only; the reverse sweep looks the
    primitive up by `op_tag` and asks it for the local partials.

    Attributes
    ----------
    op_tag   : str
        Name of the registered primitive (e.g., "add", "mul").
    index    : int
        Tape slot of the result.
    value    : float
        Forward value of the result.
    operands : Tuple[Optional[int], ...]
        Tape slot of each operand, in call order. None marks a literal
        operand, which receives no adjoint.
    args     : Tuple[float, ...]
        Forward value of each operand, aligned with `operands`.
    """
    op_tag: str                              # primitive name
    index: int                               # result slot
    value: float                             # result value
    operands: Tuple[Optional[int], ...]      # operand slots (None = literal)
    args: Tuple[float, ...]                  # operand values

    def __repr__(self):
        slots = ", ".join("const" if s is None else f"%{s}" for s in self.operands)
        return f"Record(%{self.index} = {self.op_tag}({slots}) -> {self.value!r})"
