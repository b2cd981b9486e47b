# tapead/core/engine.py
from __future__ import annotations
import numpy as np
from typing import Iterable, Union

from ..config import logger
from ..errors import StaleReferenceError
from ..ops.registry import get_primitive
from .record import Record
from .tape import Tape
from .var import ADVar

class Adjoints:
    """
    Dense adjoint vector produced by one reverse sweep.

    Index it with the handles of interest:
        adj = chain(y)
        adj[x1], adj[x2]
    Reads are checked against the tape: once the tape has been reset the
    vector refers to slots that no longer exist and every read fails.
    """
    def __init__(self, values: np.ndarray, tape: Tape, generation: int):
        self._values = values
        self._tape = tape
        self._generation = generation

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"Adjoints({self._values!r})"

    def _check_live(self):
        if self._tape.generation != self._generation:
            raise StaleReferenceError("adjoint vector belongs to a tape that has been reset")

    def __getitem__(self, key: Union[ADVar, int]) -> float:
        self._check_live()
        if isinstance(key, ADVar):
            self._tape.check(key)
            key = key.index
            if key >= len(self._values):
                # created after the output, so it cannot have contributed
                return 0.0
        elif key < 0 or key >= len(self._values):
            raise IndexError(f"slot {key} is outside the adjoint vector (0..{len(self._values) - 1})")
        return float(self._values[key])

    def gradient(self, wrt: Iterable[ADVar]) -> np.ndarray:
        """Adjoints of several handles as an array, in the given order."""
        return np.array([self[v] for v in wrt], dtype=float)

    def to_numpy(self) -> np.ndarray:
        self._check_live()
        return self._values.copy()

def backprop(record: Record, adjoint: np.ndarray):
    """
    Replay one record: for each operand slot,
        adjoint[operand] += ∂out/∂operand * adjoint[out]
    Literal operands (slot None) are skipped.
    """
    bar = adjoint[record.index]
    if bar == 0.0:
        return  # nothing to propagate
    prim = get_primitive(record.op_tag)
    args = tuple(np.float64(a) for a in record.args)
    partials = prim.partials(np.float64(record.value), *args)
    for slot, local_partial in zip(record.operands, partials):
        if slot is None:
            continue
        adjoint[slot] += local_partial * bar

def chain(y: ADVar, seed: float = 1.0) -> Adjoints:
    """
    Run a single reverse pass from the output `y`.

    Seeds adjoint[y.index] = seed (dy/dy = 1 by default) and walks the tape
    last-recorded first. Every record that can add to a slot was recorded
    after it, so each result adjoint is final by the time its own record is
    replayed; one pass is enough.
    """
    if not isinstance(y, ADVar):
        raise TypeError(f"chain() expects an ADVar output, but got {type(y)}")
    tape = y.tape
    tape.check(y)

    adjoint = np.zeros(y.index + 1, dtype=float)
    adjoint[y.index] = float(seed)

    # Backward sweep
    with np.errstate(all="ignore"):
        for record in reversed(tape.records):
            if record.index > y.index:
                continue  # recorded after y; cannot reach it
            backprop(record, adjoint)

    logger.debug("reverse sweep from slot %d over %d records", y.index, len(tape.records))
    return Adjoints(adjoint, tape, tape.generation)

def gradient(y: ADVar, wrt: Iterable[ADVar]) -> np.ndarray:
    """Gradient of `y` with respect to the handles in `wrt`."""
    return chain(y).gradient(wrt)
