# tapead/config.py
"""
Process-wide defaults for new tapes.

A Tape captures a Settings instance when it is created; changing the defaults
with `configure()` only affects tapes created afterwards.

    configure(domain_errors="nan")   # log(-1) -> nan instead of DomainError
"""
from __future__ import annotations
import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError

logger = logging.getLogger("tapead")
_logging_handler = logging.StreamHandler()
logger.addHandler(_logging_handler)

DOMAIN_POLICIES = ("raise", "nan")


@dataclass(frozen=True)
class Settings:
    """
    Attributes
    ----------
    domain_errors : str
        "raise": a primitive evaluated outside its domain raises DomainError.
        "nan"  : the value follows IEEE semantics (nan / inf) instead.
    max_slots : Optional[int]
        Upper bound on the number of indices one tape may allocate.
        None means unbounded.
    """
    domain_errors: str = "raise"
    max_slots: Optional[int] = None

    def __post_init__(self):
        if self.domain_errors not in DOMAIN_POLICIES:
            raise ConfigError(
                f"domain_errors must be one of {DOMAIN_POLICIES}, "
                f"but got {self.domain_errors!r}"
            )
        if self.max_slots is not None:
            if isinstance(self.max_slots, bool) or not isinstance(self.max_slots, int):
                raise ConfigError(f"max_slots must be an int or None, but got {type(self.max_slots)}")
            if self.max_slots <= 0:
                raise ConfigError(f"max_slots must be positive, but got {self.max_slots}")

    def replace(self, **changes) -> "Settings":
        return dataclasses.replace(self, **changes)


_defaults = Settings()


def get_settings() -> Settings:
    """Return the defaults used by newly created tapes."""
    return _defaults


def configure(**changes) -> Settings:
    """Update the process defaults and return the new Settings."""
    global _defaults
    _defaults = _defaults.replace(**changes)
    logger.debug("settings updated: %s", _defaults)
    return _defaults
