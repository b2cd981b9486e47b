# tapead/core/tape.py
from __future__ import annotations
import threading
from typing import List, Optional
from contextlib import contextmanager

from ..config import Settings, get_settings, logger
from ..errors import (
    EpisodeError,
    NoActiveEpisodeError,
    StaleReferenceError,
    TapeExhaustedError,
)
from .record import Record

class Tape:
    """
    Append-only log of Records plus the index counter that numbers tape slots.

    Every handle created on a tape remembers the tape's `generation`. `reset()`
    bumps the generation, so handles and adjoint vectors from before the reset
    are detected as stale instead of silently aliasing new slots.
    """
    def __init__(self, settings: Optional[Settings] = None):
        self.settings: Settings = settings if settings is not None else get_settings()
        self.records: List[Record] = []
        self.generation: int = 0
        self._next_index: int = 0

    def __len__(self):
        return len(self.records)

    def __repr__(self):
        return (f"Tape(records={len(self.records)}, slots={self._next_index}, "
                f"generation={self.generation})")

    @property
    def size(self) -> int:
        """Number of slots allocated so far."""
        return self._next_index

    def allocate_index(self) -> int:
        """Return the next unused slot and advance the counter."""
        limit = self.settings.max_slots
        if limit is not None and self._next_index >= limit:
            raise TapeExhaustedError(f"tape is full ({limit} slots)")
        index = self._next_index
        self._next_index += 1
        return index

    def record(self, record: Record) -> int:
        """
        Append a Record. Its result slot must be newer than every operand
        slot and than the previous record.
        """
        if record.index >= self._next_index:
            raise ValueError(f"slot {record.index} was not allocated on this tape")
        if self.records and record.index <= self.records[-1].index:
            raise ValueError(
                f"record for slot {record.index} is older than the last record "
                f"(slot {self.records[-1].index})"
            )
        for slot in record.operands:
            if slot is not None and slot >= record.index:
                raise ValueError(
                    f"operand slot {slot} is not older than result slot {record.index}"
                )
        self.records.append(record)
        return len(self.records) - 1

    def reset(self):
        """Forget all records and restart numbering; existing handles go stale."""
        logger.debug("reset %r", self)
        self.records.clear()
        self._next_index = 0
        self.generation += 1

    def check(self, var):
        """Raise StaleReferenceError unless `var` is a live handle of this tape."""
        if var.tape is not self:
            raise StaleReferenceError(f"{var!r} belongs to a different tape")
        if var.generation != self.generation:
            raise StaleReferenceError(
                f"{var!r} was created before the tape was reset "
                f"(generation {var.generation}, tape is at {self.generation})"
            )


# Episodes are tracked per thread; the innermost one supplies the tape for
# literals promoted to handles.
_local = threading.local()

def _episodes() -> List[Tape]:
    stack = getattr(_local, "stack", None)
    if stack is None:
        stack = _local.stack = []
    return stack

def current_tape() -> Tape:
    """Return the tape of the innermost open episode in this thread."""
    stack = _episodes()
    if not stack:
        raise NoActiveEpisodeError(
            "no episode is open; use `with episode():` or pass tape= explicitly"
        )
    return stack[-1]

def begin_episode(tape: Optional[Tape] = None, settings: Optional[Settings] = None) -> Tape:
    """
    Open an episode on a fresh tape (or on `tape`) and return the tape.
    A used tape is reset first, so handles from before the episode go stale.
    """
    if tape is None:
        tape = Tape(settings)
    else:
        if settings is not None:
            raise ValueError("pass either tape or settings, not both")
        if any(t is tape for t in _episodes()):
            raise EpisodeError(f"{tape!r} already belongs to an open episode")
        if tape.size or tape.records:
            tape.reset()
    _episodes().append(tape)
    logger.debug("begin episode %d on %r", len(_episodes()), tape)
    return tape

def end_episode(tape: Optional[Tape] = None):
    """
    Close the innermost episode and reset its tape. If `tape` is given it must
    be the innermost episode's tape.
    """
    stack = _episodes()
    if not stack:
        raise EpisodeError("no episode to end")
    if tape is not None and stack[-1] is not tape:
        raise EpisodeError("episodes must be ended innermost first")
    top = stack.pop()
    logger.debug("end episode %d on %r", len(stack) + 1, top)
    top.reset()

@contextmanager
def episode(tape: Optional[Tape] = None, settings: Optional[Settings] = None):
    """
    Scoped episode:
        with episode() as tape:
            ... build computation ...
            adj = chain(y)
    The tape is reset on exit, so read derivatives inside the block.
    """
    t = begin_episode(tape, settings)
    try:
        yield t
    finally:
        end_episode(t)
