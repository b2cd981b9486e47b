# tapead/core/__init__.py

"""
Core public API of tapead.

Exports:
    Tape          : Append-only log of records plus the slot counter.
    Record        : One recorded primitive application.
    episode       : Context manager owning one tape for a differentiation episode.
    begin_episode / end_episode / current_tape : the same, unscoped.
    ADVar         : Immutable (value, index) handle to a tape slot.
    as_variable   : Explicit literal-to-handle conversion.
    value         : Primal value of a handle; numbers pass through.
    chain         : Reverse sweep from one output; returns an Adjoints vector.
    gradient      : chain(y) read out for several handles.
    grad / grads / grads_list : one-call gradients in a private episode.
"""

from .record import Record
from .tape import Tape, episode, begin_episode, end_episode, current_tape
from .var import ADVar, as_variable, value
from .engine import Adjoints, chain, gradient, backprop
from .seeds import grad, grads, grads_list

__all__ = [
    "Record",
    "Tape", "episode", "begin_episode", "end_episode", "current_tape",
    "ADVar", "as_variable", "value",
    "Adjoints", "chain", "gradient", "backprop",
    "grad", "grads", "grads_list",
]
